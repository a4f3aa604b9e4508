import http.client as httplib
from typing import Any
from typing import MutableMapping
from typing import Optional

import wrapt

from tracebridge._trace.request import RequestInfo
from tracebridge._trace.request import ResponseOutcome
from tracebridge.contrib.callbacks import CallbackInstrumentation
from tracebridge.internal.logger import get_logger
from tracebridge.internal.utils import ArgumentError
from tracebridge.internal.utils import get_argument_value
from tracebridge.pin import Pin


log = get_logger(__name__)


def _build_url(connection, path):
    # type: (httplib.HTTPConnection, str) -> str
    if "://" in path:
        # absolute-form, as sent to a forward proxy
        return path

    scheme = "https" if isinstance(connection, httplib.HTTPSConnection) else "http"
    # through a CONNECT tunnel the destination is the tunnelled host, not the proxy
    host = getattr(connection, "_tunnel_host", None) or connection.host
    port = getattr(connection, "_tunnel_port", None) if getattr(connection, "_tunnel_host", None) else connection.port

    if ":" in host:
        host = "[%s]" % host
    if port is None or (scheme == "http" and port == 80) or (scheme == "https" and port == 443):
        port_str = ""
    else:
        port_str = ":%d" % port
    return "%s://%s%s%s" % (scheme, host, port_str, path)


class TracedHTTPConnection(wrapt.ObjectProxy):
    """Instrumented proxy of a :class:`http.client.HTTPConnection`.

    The span is opened by ``request()`` and finished by ``getresponse()``; an
    ``http.client`` connection carries one request at a time, its state is kept
    on the connection between the two calls. Requests sent through the
    lower-level ``putrequest()``/``endheaders()`` API are not instrumented.

    The response body is never read: the caller owns the stream.
    """

    def __init__(self, connection, pin=None):
        # type: (httplib.HTTPConnection, Optional[Pin]) -> None
        super(TracedHTTPConnection, self).__init__(connection)
        (pin or Pin()).onto(self)

    def _instrumentation(self):
        # type: () -> CallbackInstrumentation
        return CallbackInstrumentation(Pin.get_from(self))

    def request(self, *args, **kwargs):
        try:
            method = get_argument_value(args, kwargs, 0, "method")
            url = get_argument_value(args, kwargs, 1, "url")
        except ArgumentError:
            return self.__wrapped__.request(*args, **kwargs)

        # the trace header goes into a copy: callers reuse their header dicts across requests
        headers = None  # type: Optional[MutableMapping[str, Any]]
        if "headers" in kwargs:
            if kwargs["headers"] is not None:
                headers = kwargs["headers"] = dict(kwargs["headers"])
        elif len(args) > 3:
            if args[3] is not None:
                headers = dict(args[3])
                args = args[:3] + (headers,) + args[4:]
        else:
            headers = kwargs["headers"] = {}

        instrumentation = self._instrumentation()
        conn = self.__wrapped__
        try:
            info = RequestInfo(method=method, url=_build_url(conn, url), headers=headers)
        except Exception:
            log.debug("error describing request %s %s", method, url, exc_info=True)
            return conn.request(*args, **kwargs)

        instrumentation.on_request_start(info, scope=conn)
        try:
            return conn.request(*args, **kwargs)
        except BaseException as e:
            instrumentation.on_request_failed(info, e, scope=conn)
            raise

    def getresponse(self, *args, **kwargs):
        instrumentation = self._instrumentation()
        conn = self.__wrapped__
        try:
            response = conn.getresponse(*args, **kwargs)
        except BaseException as e:
            instrumentation.on_request_failed(None, e, scope=conn)
            raise
        instrumentation.on_response_received(None, ResponseOutcome(status=response.status), scope=conn)
        return response
