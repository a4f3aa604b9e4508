"""
Integrations for HTTP client libraries.

Each integration is applied by explicit composition: wrap the transport (or
register the trace config) of the client you want instrumented and hand it a
:class:`tracebridge.pin.Pin`. Nothing is patched globally.

* ``tracebridge.contrib.transport``: any object with a ``send(request)`` method
* ``tracebridge.contrib.callbacks``: clients reporting responses through callbacks
* ``tracebridge.contrib.requests``: ``requests`` transport adapters
* ``tracebridge.contrib.httpx``: ``httpx`` sync and async transports
* ``tracebridge.contrib.aiohttp``: ``aiohttp`` client sessions
* ``tracebridge.contrib.httplib``: ``http.client`` connections
"""
