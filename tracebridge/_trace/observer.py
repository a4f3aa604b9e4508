from typing import TYPE_CHECKING  # noqa:F401
from typing import Optional  # noqa:F401

from tracebridge._trace.recorder import BreadcrumbRecorder
from tracebridge._trace.span_manager import SpanLifecycle
from tracebridge.internal.logger import get_logger
from tracebridge.propagation.http import HTTPPropagator


if TYPE_CHECKING:  # pragma: no cover
    from tracebridge._trace.request import RequestInfo  # noqa:F401
    from tracebridge._trace.request import ResponseOutcome  # noqa:F401
    from tracebridge._trace.span_manager import RequestSpan  # noqa:F401
    from tracebridge.pin import Pin  # noqa:F401


log = get_logger(__name__)


class RequestObserver(object):
    """
    Drives the instrumentation of one outgoing request through its two hooks.

    ``on_start`` runs before the transport is invoked: it opens the span and
    then injects the trace header, so the header always reflects that span.
    ``on_complete`` runs once the response or the transport error is known: it
    records the breadcrumb and then finishes the span.

    Every step applies its own policy (span and breadcrumb enablement are
    independent) and swallows its own failures: instrumentation problems are
    logged and never reach the request.
    """

    __slots__ = ("_pin", "_spans", "_breadcrumbs")

    def __init__(self, pin):
        # type: (Pin) -> None
        self._pin = pin
        self._spans = SpanLifecycle(pin)
        self._breadcrumbs = BreadcrumbRecorder(pin)

    @property
    def pin(self):
        # type: () -> Pin
        return self._pin

    def on_start(self, request):
        # type: (RequestInfo) -> Optional[RequestSpan]
        try:
            request_span = self._spans.start(request)
        except Exception:
            log.debug("error starting span for %s %s", request.method, request.host, exc_info=True)
            return None

        try:
            HTTPPropagator.inject(request_span, request.headers, self._pin)
        except Exception:
            log.debug("error injecting trace header", exc_info=True)
        return request_span

    def on_complete(self, request, outcome, request_span):
        # type: (RequestInfo, ResponseOutcome, Optional[RequestSpan]) -> None
        try:
            self._breadcrumbs.record(request, outcome)
        except Exception:
            log.debug("error recording breadcrumb for %s %s", request.method, request.host, exc_info=True)

        try:
            self._spans.finish(request_span, request, outcome)
        except Exception:
            log.debug("error finishing span %r", request_span, exc_info=True)
