from typing import Optional

import requests

from tracebridge._trace.request import RequestInfo
from tracebridge._trace.request import ResponseOutcome
from tracebridge.contrib.transport import InstrumentedTransport
from tracebridge.pin import Pin


class TracedAdapter(InstrumentedTransport):
    """Instrumented ``requests`` transport adapter.

    Wraps any :class:`requests.adapters.BaseAdapter`; ``close()`` and the
    adapter's other attributes are forwarded untouched.
    """

    def _request_info(self, request):
        # type: (requests.PreparedRequest) -> RequestInfo
        return RequestInfo(method=request.method or "GET", url=request.url or "", headers=request.headers)

    def _response_outcome(self, response):
        # type: (requests.Response) -> ResponseOutcome
        # `Response.content` caches the payload, so streamed responses can still be iterated afterwards
        return ResponseOutcome(status=response.status_code, body=lambda: response.content)


def instrument_session(session, pin=None):
    # type: (requests.Session, Optional[Pin]) -> requests.Session
    """Wrap every adapter mounted on ``session`` with a :class:`TracedAdapter`.

    Each adapter gets its own copy of ``pin``. Adapters already instrumented are
    left alone, so calling this twice is safe::

        session = instrument_session(requests.Session(), Pin(tracer=tracing_client))
    """
    pin = pin or Pin()
    for prefix, adapter in list(session.adapters.items()):
        if isinstance(adapter, TracedAdapter):
            continue
        session.mount(prefix, TracedAdapter(adapter, pin.clone()))
    return session


def uninstrument_session(session):
    # type: (requests.Session) -> requests.Session
    """Put back the adapters :func:`instrument_session` wrapped."""
    for prefix, adapter in list(session.adapters.items()):
        if isinstance(adapter, TracedAdapter):
            session.mount(prefix, adapter.__wrapped__)
    return session

