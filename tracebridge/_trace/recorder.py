from typing import TYPE_CHECKING  # noqa:F401
from typing import Any  # noqa:F401
from typing import Dict  # noqa:F401

from tracebridge._trace.filters import redact_url
from tracebridge._trace.filters import response_body
from tracebridge._trace.guard import is_self_traffic
from tracebridge.breadcrumbs import Breadcrumb
from tracebridge.ext import BreadcrumbCategories
from tracebridge.ext import BreadcrumbLevels
from tracebridge.ext import http


if TYPE_CHECKING:  # pragma: no cover
    from tracebridge._trace.request import RequestInfo  # noqa:F401
    from tracebridge._trace.request import ResponseOutcome  # noqa:F401
    from tracebridge.pin import Pin  # noqa:F401


class BreadcrumbRecorder(object):
    """Appends one ``http`` breadcrumb per completed outgoing request."""

    __slots__ = ("_pin",)

    def __init__(self, pin):
        # type: (Pin) -> None
        self._pin = pin

    def enabled_for(self, request):
        # type: (RequestInfo) -> bool
        pin = self._pin
        if not pin.initialized or pin.breadcrumbs is None:
            return False
        if not pin.config.http_breadcrumbs_enabled:
            return False
        return not is_self_traffic(request.host, pin.config)

    def record(self, request, outcome):
        # type: (RequestInfo, ResponseOutcome) -> None
        if not self.enabled_for(request):
            return

        pin = self._pin
        data = {
            http.METHOD: request.method.upper(),
            http.URL: redact_url(request.url, pin.config),
        }  # type: Dict[str, Any]
        data.update(self._response_data(outcome))

        pin.breadcrumbs.append(
            Breadcrumb(
                category=BreadcrumbCategories.HTTP.value,
                level=BreadcrumbLevels.INFO.value,
                type="info",
                data=data,
                timestamp=pin.clock(),
            )
        )

    def _response_data(self, outcome):
        # type: (ResponseOutcome) -> Dict[str, Any]
        if outcome.failed:
            return {http.ERROR: outcome.error_message}
        data = {http.STATUS: outcome.status}  # type: Dict[str, Any]
        # some clients can't hand out the body without consuming the caller's stream
        if self._pin.config.send_default_pii and outcome.body is not None:
            body = response_body(outcome, self._pin.config)
            if body is not None:
                data[http.BODY] = body
        return data
