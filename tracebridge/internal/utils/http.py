from typing import Any
from typing import Optional
from urllib import parse

from tracebridge.internal.logger import get_logger


log = get_logger(__name__)


def strip_query_string(url):
    # type: (str) -> str
    """
    Strips the query string from a URL, keeping any fragment.
    :param url: The URL to be stripped
    :return: The given URL without query strings
    """
    hqs, fs, f = url.partition("#")
    h, _, _ = hqs.partition("?")
    if not f:
        return h
    return h + fs + f


def strip_userinfo(url):
    # type: (str) -> str
    """Drops the ``user:password@`` part of the authority of a URL, if any."""
    start = url.find("://")
    if start == -1:
        return url
    start += 3
    end = len(url)
    for sep in "/?#":
        j = url.find(sep, start, end)
        if j != -1:
            end = j
    at = url.rfind("@", start, end)
    if at == -1:
        return url
    return url[:start] + url[at + 1 :]


def _extract_hostname(uri):
    # type: (str) -> str
    """Best-effort hostname scan used when ``urlparse`` cannot make sense of ``uri``."""
    end = len(uri)
    j = uri.rfind("#", 0, end)
    if j != -1:
        end = j
    j = uri.find("?", 0, end)
    if j != -1:
        end = j

    start = uri.find("://", 0, end) + 3
    if start == 2:
        start = 0
    i = uri.find("@", start, end) + 1
    if i != 0:
        start = i
    j = uri.find("/", start, end)
    if j != -1:
        end = j
    host = uri[start:end]
    if host.startswith("["):
        return host[1 : host.find("]")].lower() if "]" in host else host[1:].lower()
    return host.split(":", 1)[0].lower()


def url_to_str(url):
    # type: (Any) -> str
    """Render a client-specific URL object (``str``, ``bytes``, ``yarl.URL``, ``httpx.URL``...) as text."""
    if isinstance(url, str):
        return url
    if isinstance(url, bytes):
        return url.decode("utf-8", errors="backslashreplace")
    try:
        return str(url)
    except Exception:
        log.debug("cannot render url %r", url, exc_info=True)
        return repr(url)


def extract_host(url):
    # type: (str) -> Optional[str]
    """Return the lowercased destination host of ``url``, or ``None`` if it has none."""
    try:
        host = parse.urlsplit(url).hostname
    except ValueError:
        host = _extract_hostname(url)
    return host or None
