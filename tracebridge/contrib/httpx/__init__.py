"""
The httpx__ integration instruments HTTP requests made with the ``httpx``
library, for both the synchronous and the asynchronous clients.

Enabling
~~~~~~~~

Hand the client an instrumented transport wrapping the one it would use::

    import httpx

    from tracebridge import Pin
    from tracebridge.contrib.httpx import AsyncTracedTransport
    from tracebridge.contrib.httpx import TracedTransport

    pin = Pin(tracer=tracing_client)
    client = httpx.Client(transport=TracedTransport(httpx.HTTPTransport(retries=1), pin))
    async_client = httpx.AsyncClient(transport=AsyncTracedTransport(pin=pin))

Requests are observed at the transport level: a redirect followed by the
client is reported as one span and one breadcrumb per hop.

.. __: https://www.python-httpx.org/
"""

from tracebridge.contrib.httpx.transport import AsyncTracedTransport
from tracebridge.contrib.httpx.transport import TracedTransport


__all__ = ["AsyncTracedTransport", "TracedTransport"]
