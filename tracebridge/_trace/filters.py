from typing import Any
from typing import Optional

from tracebridge.internal.logger import get_logger
from tracebridge.internal.utils.http import strip_query_string
from tracebridge.internal.utils.http import strip_userinfo


log = get_logger(__name__)


def redact_url(url, config):
    # type: (str, Any) -> str
    """Return ``url`` as it may be recorded: without its query string and
    credentials unless ``config.send_default_pii`` is set."""
    if config.send_default_pii:
        return url
    return strip_query_string(strip_userinfo(url))


def response_body(outcome, config):
    # type: (Any, Any) -> Optional[str]
    """Read the response body for recording, only when full PII is allowed.

    Reading may consume the response stream, so it is never attempted otherwise.
    """
    if not config.send_default_pii or outcome.failed:
        return None
    try:
        body = outcome.read_body()
    except Exception:
        log.debug("error reading response body", exc_info=True)
        return None
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8", errors="replace")
    return body
