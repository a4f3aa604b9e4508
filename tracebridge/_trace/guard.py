from typing import Any
from typing import Optional


def is_self_traffic(host, config):
    # type: (Optional[str], Any) -> bool
    """Whether a request to ``host`` is the telemetry SDK talking to its own backend.

    Only hosts are compared, scheme and port are ignored. With no backend
    configured nothing matches.
    """
    backend_host = config.telemetry_backend_host
    if not backend_host or not host:
        return False
    return host.lower() == backend_host.lower()
