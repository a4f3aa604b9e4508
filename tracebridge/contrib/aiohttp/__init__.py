"""
The ``aiohttp`` integration instruments requests made with
``aiohttp.ClientSession``.

Enabling
~~~~~~~~

Register the trace config on the sessions to instrument::

    import aiohttp

    from tracebridge import Pin
    from tracebridge.contrib.aiohttp import TracedTraceConfig

    async with aiohttp.ClientSession(trace_configs=[TracedTraceConfig(Pin(tracer=tracing_client))]) as session:
        async with session.get("https://api.example.com/users") as response:
            ...

The span is opened on ``on_request_start`` and finished on
``on_request_end`` or ``on_request_exception``. Connection errors and
timeouts are recorded with their message and still raised to the caller.
"""

from tracebridge.contrib.aiohttp.trace_config import TracedTraceConfig


__all__ = ["TracedTraceConfig"]
