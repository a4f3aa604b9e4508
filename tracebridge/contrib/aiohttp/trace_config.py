from typing import Optional

from aiohttp import TraceConfig

from tracebridge._trace.request import RequestInfo
from tracebridge._trace.request import ResponseOutcome
from tracebridge.contrib.callbacks import CallbackInstrumentation
from tracebridge.internal.logger import get_logger
from tracebridge.pin import Pin


log = get_logger(__name__)


class TracedTraceConfig(TraceConfig):
    """``aiohttp`` trace config instrumenting every request of the sessions it is given to.

    aiohttp creates a fresh ``trace_config_ctx`` for each request, it holds the
    request's span between the start and end signals.
    """

    def __init__(self, pin=None):
        # type: (Optional[Pin]) -> None
        super().__init__()
        self._instrumentation = CallbackInstrumentation(pin)

        self.on_request_start.append(self._trace_request_start)
        self.on_request_end.append(self._trace_request_end)
        self.on_request_exception.append(self._trace_request_exception)

    @property
    def pin(self):
        # type: () -> Pin
        return self._instrumentation.pin

    async def _trace_request_start(self, session, trace_config_ctx, params):
        request = RequestInfo(method=params.method, url=str(params.url), headers=params.headers, host=params.url.host)
        self._instrumentation.on_request_start(request, scope=trace_config_ctx)

    async def _trace_request_end(self, session, trace_config_ctx, params):
        response = params.response
        outcome = ResponseOutcome(status=response.status)
        if self.pin.config.send_default_pii:
            try:
                # the payload is cached on the response, the caller can still read it
                content = await response.read()
                outcome = ResponseOutcome(status=response.status, body=lambda: content)
            except Exception:
                log.debug("error reading response body", exc_info=True)
        self._instrumentation.on_response_received(params, outcome, scope=trace_config_ctx)

    async def _trace_request_exception(self, session, trace_config_ctx, params):
        self._instrumentation.on_request_failed(params, params.exception, scope=trace_config_ctx)
