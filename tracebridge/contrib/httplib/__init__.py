"""
Instrument the standard library ``http.client`` connections.

Enabling
~~~~~~~~

Wrap the connections to instrument::

    import http.client

    from tracebridge import Pin
    from tracebridge.contrib.httplib import TracedHTTPConnection

    conn = TracedHTTPConnection(http.client.HTTPSConnection("api.example.com"), Pin(tracer=tracing_client))
    conn.request("GET", "/users?page=2")
    response = conn.getresponse()

The recorded URL is rebuilt from the connection (``scheme://host[:port]path``,
default ports omitted). Response bodies are not recorded for this
integration, even with ``send_default_pii`` enabled.
"""

from tracebridge.contrib.httplib.connection import TracedHTTPConnection


__all__ = ["TracedHTTPConnection"]
