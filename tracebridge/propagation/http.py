from typing import TYPE_CHECKING  # noqa:F401
from typing import MutableMapping  # noqa:F401
from typing import Optional  # noqa:F401

from tracebridge.ext.http import TRACE_HEADER_NAME
from tracebridge.internal.logger import get_logger


if TYPE_CHECKING:  # pragma: no cover
    from tracebridge._trace.span_manager import RequestSpan  # noqa:F401
    from tracebridge.pin import Pin  # noqa:F401


log = get_logger(__name__)


class HTTPPropagator(object):
    """A HTTP Propagator using HTTP headers as carrier."""

    @staticmethod
    def inject(request_span, headers, pin):
        # type: (Optional[RequestSpan], Optional[MutableMapping[str, str]], Pin) -> None
        """Inject the trace context of ``request_span`` as the ``sentry-trace`` header.

        Here is an example with a plain header dict::

            request_span = SpanLifecycle(pin).start(request)
            HTTPPropagator.inject(request_span, request.headers, pin)

        The value format is owned by the tracing client; when it has nothing
        to serialize no header is set.

        :param RequestSpan request_span: Span opened for the outgoing request, if any.
        :param dict headers: HTTP headers to extend with the trace header.
        :param Pin pin: Bundle holding the tracing client.
        """
        if request_span is None or not request_span.started or headers is None:
            return
        if not pin.config.propagate_traces or pin.tracer is None:
            return

        try:
            trace = pin.tracer.serialize_trace_context(request_span.span)
        except Exception:
            log.debug("error serializing trace context of %r", request_span.span, exc_info=True)
            return

        if trace:
            headers[TRACE_HEADER_NAME] = trace
