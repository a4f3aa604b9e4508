"""
Instrumentation of event-callback HTTP clients, where the request is started
at one call site and its response is delivered later through a callback.

``on_request_start`` must be called before the transport is invoked and one of
``on_response_received`` / ``on_request_failed`` once the outcome is known::

    instrumentation = CallbackInstrumentation(pin)

    def send(request):
        instrumentation.on_request_start(request)
        request.on("response", lambda response: instrumentation.on_response_received(request, response))
        ...

The in-flight state is stored on a per-request ``scope`` object (the request
itself by default), never on the connection, so concurrent requests sharing a
connection cannot see each other's span.
"""

from typing import Any
from typing import Optional

import attr

from tracebridge._trace.observer import RequestObserver
from tracebridge._trace.request import RequestInfo
from tracebridge._trace.request import ResponseOutcome
from tracebridge._trace.span_manager import RequestSpan
from tracebridge.internal.logger import get_logger
from tracebridge.pin import Pin


log = get_logger(__name__)

_STATE_ATTR = "_tracebridge_in_flight"
_SUPERSEDED = "request superseded before completion"


@attr.s(slots=True)
class InFlightRequest(object):
    request = attr.ib(type=RequestInfo)
    request_span = attr.ib(type=Optional[RequestSpan], default=None)


class CallbackInstrumentation(object):
    def __init__(self, pin=None):
        # type: (Optional[Pin]) -> None
        self._observer = RequestObserver(pin or Pin())

    @property
    def pin(self):
        # type: () -> Pin
        return self._observer.pin

    def _to_request_info(self, request):
        # type: (Any) -> RequestInfo
        return RequestInfo.from_request(request)

    def _to_outcome(self, response):
        # type: (Any) -> ResponseOutcome
        return ResponseOutcome.from_response(response)

    def on_request_start(self, request, scope=None):
        # type: (Any, Optional[Any]) -> Optional[RequestSpan]
        if not self.pin.config.enabled:
            return None
        try:
            info = self._to_request_info(request)
        except Exception:
            log.debug("error describing request %r", request, exc_info=True)
            return None

        carrier = request if scope is None else scope
        # a request still in flight on this scope will never be completed, close it first
        superseded = self._pop(carrier)
        if superseded is not None:
            self._observer.on_complete(superseded.request, ResponseOutcome(error=_SUPERSEDED), superseded.request_span)

        request_span = self._observer.on_start(info)
        try:
            setattr(carrier, _STATE_ATTR, InFlightRequest(info, request_span))
        except AttributeError:
            log.debug("can't keep request state on %r", carrier, exc_info=True)
        return request_span

    def on_response_received(self, request, response, scope=None):
        # type: (Any, Any, Optional[Any]) -> None
        in_flight = self._pop(request if scope is None else scope)
        if in_flight is None:
            return
        try:
            outcome = self._to_outcome(response)
        except Exception:
            log.debug("error describing response %r", response, exc_info=True)
            outcome = ResponseOutcome()
        self._observer.on_complete(in_flight.request, outcome, in_flight.request_span)

    def on_request_failed(self, request, error, scope=None):
        # type: (Any, Any, Optional[Any]) -> None
        in_flight = self._pop(request if scope is None else scope)
        if in_flight is None:
            return
        self._observer.on_complete(in_flight.request, ResponseOutcome(error=error), in_flight.request_span)

    def _pop(self, carrier):
        # type: (Any) -> Optional[InFlightRequest]
        in_flight = getattr(carrier, _STATE_ATTR, None)
        if in_flight is not None:
            try:
                delattr(carrier, _STATE_ATTR)
            except AttributeError:
                log.debug("can't clear request state on %r", carrier, exc_info=True)
        return in_flight
