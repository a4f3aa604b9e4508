from typing import Any
from typing import Callable
from typing import MutableMapping
from typing import Optional
from typing import Union

import attr

from tracebridge.internal.logger import get_logger
from tracebridge.internal.utils.http import extract_host
from tracebridge.internal.utils.http import url_to_str


log = get_logger(__name__)

_UNREAD = object()


@attr.s(slots=True)
class RequestInfo(object):
    """
    The view of an outgoing request the instrumentation works on.

    ``headers`` is the caller's own header mapping, by reference: the trace
    header is injected into it and nothing else is ever written.
    """

    method = attr.ib(type=str, converter=lambda m: url_to_str(m).upper())
    url = attr.ib(type=str, converter=url_to_str)
    headers = attr.ib(type=Optional[MutableMapping[str, str]], default=None)
    host = attr.ib(type=Optional[str], default=None)

    def __attrs_post_init__(self):
        if self.host is None:
            self.host = extract_host(self.url)
        else:
            self.host = self.host.lower()

    @classmethod
    def from_request(cls, request):
        # type: (Any) -> RequestInfo
        """Build from any request object exposing ``method``, ``url`` and ``headers``."""
        if isinstance(request, cls):
            return request
        return cls(method=request.method, url=request.url, headers=getattr(request, "headers", None))


@attr.s(slots=True)
class ResponseOutcome(object):
    """
    What the transport produced: a ``status`` on success, an ``error`` on
    transport failure. The body is only ever read through :meth:`read_body`,
    at most once.
    """

    status = attr.ib(type=Optional[int], default=None)
    error = attr.ib(type=Optional[Union[BaseException, str]], default=None)
    body = attr.ib(type=Optional[Callable[[], Any]], default=None, repr=False)
    _body_value = attr.ib(default=_UNREAD, init=False, repr=False)

    @property
    def failed(self):
        # type: () -> bool
        return self.error is not None

    @property
    def error_message(self):
        # type: () -> Optional[str]
        if self.error is None:
            return None
        if isinstance(self.error, str):
            return self.error
        return str(self.error) or type(self.error).__name__

    def read_body(self):
        # type: () -> Any
        if self._body_value is _UNREAD:
            self._body_value = self.body() if self.body is not None else None
        return self._body_value

    @classmethod
    def from_response(cls, response):
        # type: (Any) -> ResponseOutcome
        """Build from any response object exposing ``status_code`` (or ``status``),
        an optional ``error`` and an optional ``content`` body."""
        if isinstance(response, cls):
            return response

        error = getattr(response, "error", None)
        if error is not None and not callable(error):
            return cls(error=error)

        status = getattr(response, "status_code", None)
        if status is None:
            status = getattr(response, "status", None)
        try:
            status = int(status) if status is not None else None
        except (TypeError, ValueError):
            log.debug("non numeric status %r", status)

        body = None
        # DEV: never probe `content` on the instance, on most clients it is a property that reads the body
        if hasattr(type(response), "content") or "content" in getattr(response, "__dict__", ()):

            def body():
                return response.content

        return cls(status=status, body=body)
