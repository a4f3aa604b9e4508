from enum import Enum
from typing import TYPE_CHECKING  # noqa:F401
from typing import Optional  # noqa:F401

from tracebridge._trace.filters import redact_url
from tracebridge._trace.guard import is_self_traffic
from tracebridge.ext import SpanOps
from tracebridge.ext import http
from tracebridge.internal.logger import get_logger


if TYPE_CHECKING:  # pragma: no cover
    from tracebridge._trace.interfaces import Span  # noqa:F401
    from tracebridge._trace.request import RequestInfo  # noqa:F401
    from tracebridge._trace.request import ResponseOutcome  # noqa:F401
    from tracebridge.pin import Pin  # noqa:F401


log = get_logger(__name__)


class SpanState(Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    FINISHED = "finished"


class RequestSpan(object):
    """Request-local handle on the child span opened for one outgoing request."""

    __slots__ = ("span", "state")

    def __init__(self, span):
        # type: (Span) -> None
        self.span = span
        self.state = SpanState.STARTED

    @property
    def started(self):
        # type: () -> bool
        return self.state is SpanState.STARTED

    @property
    def finished(self):
        # type: () -> bool
        return self.state is SpanState.FINISHED

    def __repr__(self):
        return "RequestSpan(span=%r, state=%s)" % (self.span, self.state.value)


class SpanLifecycle(object):
    """Opens and closes the ``http.client`` child span of outgoing requests."""

    __slots__ = ("_pin",)

    def __init__(self, pin):
        # type: (Pin) -> None
        self._pin = pin

    def start(self, request):
        # type: (RequestInfo) -> Optional[RequestSpan]
        pin = self._pin
        if not pin.initialized:
            return None

        tracer = pin.tracer
        transaction = tracer.current_transaction()
        if transaction is None or not tracer.is_sampled(transaction):
            return None
        if is_self_traffic(request.host, pin.config):
            return None

        span = tracer.start_child_span(transaction, SpanOps.HTTP_CLIENT.value, pin.clock())
        return RequestSpan(span)

    def finish(self, request_span, request, outcome):
        # type: (Optional[RequestSpan], RequestInfo, ResponseOutcome) -> None
        if request_span is None or not request_span.started:
            return

        span = request_span.span
        pin = self._pin
        try:
            span.set_description("%s %s" % (request.method, redact_url(request.url, pin.config)))
            if outcome.failed:
                span.set_data(http.ERROR, outcome.error_message)
            else:
                span.set_data(http.STATUS, outcome.status)
        except Exception:
            log.debug("error annotating span %r", span, exc_info=True)
        finally:
            request_span.state = SpanState.FINISHED
            span.set_timestamp(pin.clock())
