from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator
from pydantic_settings import BaseSettings
from pydantic_settings import NoDecode
from pydantic_settings import SettingsConfigDict
from typing_extensions import Annotated

from tracebridge.ext.http import HTTP_LOGGER
from tracebridge.internal.utils.http import extract_host


def parse_loggers(value: Any) -> Any:
    if not isinstance(value, str):
        return value

    fragments = [s.strip() for s in value.split(",")]
    return [f for f in fragments if f != ""]


class BridgeConfig(BaseSettings):
    """Process-wide instrumentation settings, loaded from ``TRACEBRIDGE_*`` environment variables.

    Instances are frozen: the instrumentation reads them, it never writes them.
    Use ``config.model_copy(update={...})`` to derive a variant.
    """

    model_config = SettingsConfigDict(env_prefix="TRACEBRIDGE_", frozen=True, extra="ignore")

    enabled: bool = Field(True, description="Master switch; when off no span nor breadcrumb is ever produced.")
    dsn: Optional[str] = Field(None, description="Endpoint the telemetry SDK uploads to.")
    telemetry_backend_host: Optional[str] = Field(
        None,
        description="Host of the telemetry backend. Requests to this host are never instrumented. "
        "Defaults to the host of ``dsn``.",
    )
    send_default_pii: bool = Field(
        False, description="Keep query strings and response bodies in spans and breadcrumbs."
    )
    breadcrumbs_logger: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Comma separated breadcrumb sources; ``http_logger`` enables http breadcrumbs.",
    )
    propagate_traces: bool = Field(True, description="Inject the trace header into outgoing requests.")
    max_breadcrumbs: int = Field(100, ge=0, description="Retention cap of the bundled breadcrumb buffer.")

    @field_validator("breadcrumbs_logger", mode="before")
    @classmethod
    def _split_loggers(cls, value: Any) -> Any:
        return parse_loggers(value)

    @field_validator("telemetry_backend_host")
    @classmethod
    def _normalize_host(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value else None

    @model_validator(mode="before")
    @classmethod
    def _derive_backend_host(cls, data: Any) -> Any:
        # the dsn is parsed once, here, rather than on every request
        if isinstance(data, dict) and not data.get("telemetry_backend_host") and data.get("dsn"):
            data = dict(data)
            data["telemetry_backend_host"] = extract_host(data["dsn"])
        return data

    @property
    def http_breadcrumbs_enabled(self) -> bool:
        return HTTP_LOGGER in self.breadcrumbs_logger

    def __repr__(self) -> str:
        fields = ", ".join("%s=%r" % (k, v) for k, v in self._public_items().items())
        return "%s(%s)" % (type(self).__name__, fields)

    def _public_items(self) -> Dict[str, Any]:
        # the dsn may embed a secret key
        items = self.model_dump()
        if items.get("dsn"):
            items["dsn"] = "<redacted>"
        return items


config = BridgeConfig()
