import typing

import httpx

from tracebridge._trace.request import RequestInfo
from tracebridge._trace.request import ResponseOutcome
from tracebridge.contrib.transport import trace_send
from tracebridge.contrib.transport import trace_send_async
from tracebridge.internal.logger import get_logger
from tracebridge.pin import Pin


log = get_logger(__name__)


def _request_info(request):
    # type: (httpx.Request) -> RequestInfo
    return RequestInfo(
        method=request.method,
        url=str(request.url),
        headers=request.headers,
        host=request.url.host or None,
    )


class TracedTransport(httpx.BaseTransport):
    """Instrumented wrapper around a synchronous ``httpx`` transport."""

    def __init__(self, transport=None, pin=None):
        # type: (typing.Optional[httpx.BaseTransport], typing.Optional[Pin]) -> None
        self._transport = transport if transport is not None else httpx.HTTPTransport()
        self._pin = pin or Pin()

    @property
    def pin(self):
        # type: () -> Pin
        return self._pin

    def _response_outcome(self, response):
        # type: (httpx.Response) -> ResponseOutcome
        def body():
            # httpx keeps the content, the client reading it again gets the same bytes
            return response.read()

        return ResponseOutcome(status=response.status_code, body=body)

    def handle_request(self, request):
        # type: (httpx.Request) -> httpx.Response
        return trace_send(
            self._pin,
            request,
            self._transport.handle_request,
            (request,),
            {},
            to_request=_request_info,
            to_outcome=self._response_outcome,
        )

    def close(self):
        # type: () -> None
        self._transport.close()


class AsyncTracedTransport(httpx.AsyncBaseTransport):
    """Instrumented wrapper around an asynchronous ``httpx`` transport."""

    def __init__(self, transport=None, pin=None):
        # type: (typing.Optional[httpx.AsyncBaseTransport], typing.Optional[Pin]) -> None
        self._transport = transport if transport is not None else httpx.AsyncHTTPTransport()
        self._pin = pin or Pin()

    @property
    def pin(self):
        # type: () -> Pin
        return self._pin

    async def _response_outcome(self, response):
        # type: (httpx.Response) -> ResponseOutcome
        if not self._pin.config.send_default_pii:
            return ResponseOutcome(status=response.status_code)
        try:
            content = await response.aread()
        except Exception:
            log.debug("error reading response body", exc_info=True)
            return ResponseOutcome(status=response.status_code)
        return ResponseOutcome(status=response.status_code, body=lambda: content)

    async def handle_async_request(self, request):
        # type: (httpx.Request) -> httpx.Response
        return await trace_send_async(
            self._pin,
            request,
            self._transport.handle_async_request,
            (request,),
            {},
            to_request=_request_info,
            to_outcome=self._response_outcome,
        )

    async def aclose(self):
        # type: () -> None
        await self._transport.aclose()
