"""Configuration Protocol definition for type checking."""

from typing import Optional
from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class ConfigProtocol(Protocol):
    """Protocol defining the settings the instrumentation reads.

    The instrumentation only ever reads these attributes; any object exposing
    them can stand in for :class:`tracebridge.settings.config.BridgeConfig`.
    """

    enabled: bool
    send_default_pii: bool
    propagate_traces: bool
    telemetry_backend_host: Optional[str]

    @property
    def http_breadcrumbs_enabled(self) -> bool:
        ...
