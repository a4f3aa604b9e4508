"""
The ``requests`` integration instruments HTTP requests made with the
``requests`` library.

Enabling
~~~~~~~~

Instrument a session explicitly; every adapter mounted on it is wrapped::

    import requests

    from tracebridge import Pin
    from tracebridge.contrib.requests import instrument_session

    session = instrument_session(requests.Session(), Pin(tracer=tracing_client))

    # use the session like usual

A single adapter can be wrapped and mounted by hand as well::

    from requests.adapters import HTTPAdapter

    from tracebridge.contrib.requests import TracedAdapter

    session.mount("https://", TracedAdapter(HTTPAdapter(max_retries=3), pin))


Configuration
~~~~~~~~~~~~~

The integration reads :data:`tracebridge.config` (or the ``config`` of the
pin it is given). With ``send_default_pii`` enabled the response body is
read to be recorded on the breadcrumb; ``requests`` caches it, so streamed
responses can still be consumed afterwards.
"""

from tracebridge.contrib.requests.adapter import TracedAdapter
from tracebridge.contrib.requests.adapter import instrument_session
from tracebridge.contrib.requests.adapter import uninstrument_session


__all__ = ["TracedAdapter", "instrument_session", "uninstrument_session"]
