"""
Instrumentation of call-wrapping HTTP clients (the request is sent and the
response returned by a single call).

Any transport exposing ``send(request, ...) -> response`` can be wrapped::

    from tracebridge import Pin
    from tracebridge.contrib.transport import InstrumentedTransport

    transport = InstrumentedTransport(real_transport, Pin(tracer=tracing_client))
    response = transport.send(request)

The proxy forwards every other attribute to the wrapped transport. Responses
and exceptions are handed back to the caller untouched.
"""

import inspect
from typing import Any
from typing import Callable
from typing import Dict
from typing import Optional
from typing import Sequence
from typing import Tuple

import wrapt

from tracebridge._trace.observer import RequestObserver
from tracebridge._trace.request import RequestInfo
from tracebridge._trace.request import ResponseOutcome
from tracebridge.internal.logger import get_logger
from tracebridge.internal.utils import ArgumentError
from tracebridge.internal.utils import get_argument_value
from tracebridge.pin import Pin


log = get_logger(__name__)


def _prepare(pin, request, to_request):
    # type: (Optional[Pin], Any, Callable[[Any], RequestInfo]) -> Tuple[Optional[RequestObserver], Optional[RequestInfo]]
    if pin is None or not pin.config.enabled:
        return None, None
    try:
        return RequestObserver(pin), to_request(request)
    except Exception:
        log.debug("error describing request %r", request, exc_info=True)
        return None, None


def _safe_outcome(to_outcome, response):
    # type: (Callable[[Any], ResponseOutcome], Any) -> ResponseOutcome
    try:
        return to_outcome(response)
    except Exception:
        log.debug("error describing response %r", response, exc_info=True)
        return ResponseOutcome()


def trace_send(
    pin,  # type: Optional[Pin]
    request,  # type: Any
    send,  # type: Callable[..., Any]
    args,  # type: Sequence[Any]
    kwargs,  # type: Dict[str, Any]
    to_request=RequestInfo.from_request,  # type: Callable[[Any], RequestInfo]
    to_outcome=ResponseOutcome.from_response,  # type: Callable[[Any], ResponseOutcome]
):
    # type: (...) -> Any
    """Call ``send(*args, **kwargs)`` for ``request`` under instrumentation."""
    observer, info = _prepare(pin, request, to_request)
    if observer is None:
        return send(*args, **kwargs)

    request_span = observer.on_start(info)
    try:
        response = send(*args, **kwargs)
    except BaseException as e:
        observer.on_complete(info, ResponseOutcome(error=e), request_span)
        raise
    observer.on_complete(info, _safe_outcome(to_outcome, response), request_span)
    return response


async def trace_send_async(
    pin,  # type: Optional[Pin]
    request,  # type: Any
    send,  # type: Callable[..., Any]
    args,  # type: Sequence[Any]
    kwargs,  # type: Dict[str, Any]
    to_request=RequestInfo.from_request,  # type: Callable[[Any], RequestInfo]
    to_outcome=ResponseOutcome.from_response,  # type: Callable[[Any], Any]
):
    # type: (...) -> Any
    """Awaitable counterpart of :func:`trace_send`; ``to_outcome`` may be a coroutine function."""
    observer, info = _prepare(pin, request, to_request)
    if observer is None:
        return await send(*args, **kwargs)

    request_span = observer.on_start(info)
    try:
        response = await send(*args, **kwargs)
    except BaseException as e:
        # cancellations and timeouts end up here as well
        observer.on_complete(info, ResponseOutcome(error=e), request_span)
        raise

    try:
        outcome = to_outcome(response)
        if inspect.isawaitable(outcome):
            outcome = await outcome
    except Exception:
        log.debug("error describing response %r", response, exc_info=True)
        outcome = ResponseOutcome()
    observer.on_complete(info, outcome, request_span)
    return response


class InstrumentedTransport(wrapt.ObjectProxy):
    """Proxy adding instrumentation to the ``send`` method of any transport."""

    def __init__(self, wrapped, pin=None):
        # type: (Any, Optional[Pin]) -> None
        super(InstrumentedTransport, self).__init__(wrapped)
        (pin or Pin()).onto(self)

    def _request_info(self, request):
        # type: (Any) -> RequestInfo
        return RequestInfo.from_request(request)

    def _response_outcome(self, response):
        # type: (Any) -> ResponseOutcome
        return ResponseOutcome.from_response(response)

    def send(self, *args, **kwargs):
        try:
            request = get_argument_value(args, kwargs, 0, "request")
        except ArgumentError:
            return self.__wrapped__.send(*args, **kwargs)

        return trace_send(
            Pin.get_from(self),
            request,
            self.__wrapped__.send,
            args,
            kwargs,
            to_request=self._request_info,
            to_outcome=self._response_outcome,
        )

    def __repr__(self):
        return "<%s wrapping %r>" % (type(self).__name__, self.__wrapped__)
