import pydantic
import pytest

from tracebridge.settings import BridgeConfig
from tracebridge.settings import ConfigProtocol
from tracebridge.settings.config import parse_loggers

from ..utils import make_config
from ..utils import override_env


def test_defaults():
    config = make_config()

    assert config.enabled is True
    assert config.dsn is None
    assert config.telemetry_backend_host is None
    assert config.send_default_pii is False
    assert config.breadcrumbs_logger == []
    assert config.http_breadcrumbs_enabled is False
    assert config.propagate_traces is True
    assert config.max_breadcrumbs == 100


def test_config_satisfies_protocol():
    assert isinstance(make_config(), ConfigProtocol)


def test_from_environment():
    env = {
        "TRACEBRIDGE_SEND_DEFAULT_PII": "true",
        "TRACEBRIDGE_BREADCRUMBS_LOGGER": "http_logger, redis_logger,",
        "TRACEBRIDGE_DSN": "https://public@O123.Ingest.Example.com/42",
        "TRACEBRIDGE_PROPAGATE_TRACES": "false",
        "TRACEBRIDGE_MAX_BREADCRUMBS": "10",
    }
    with override_env(env, prefix="TRACEBRIDGE_"):
        config = BridgeConfig()

    assert config.send_default_pii is True
    assert config.breadcrumbs_logger == ["http_logger", "redis_logger"]
    assert config.http_breadcrumbs_enabled is True
    assert config.telemetry_backend_host == "o123.ingest.example.com"
    assert config.propagate_traces is False
    assert config.max_breadcrumbs == 10


def test_backend_host_derived_from_dsn():
    config = make_config(dsn="https://key@ingest.example.com:8443/1")
    assert config.telemetry_backend_host == "ingest.example.com"


def test_explicit_backend_host_wins_over_dsn():
    config = make_config(dsn="https://key@ingest.example.com/1", telemetry_backend_host="Relay.Internal")
    assert config.telemetry_backend_host == "relay.internal"


def test_http_breadcrumbs_need_http_logger():
    assert make_config(breadcrumbs_logger="redis_logger").http_breadcrumbs_enabled is False
    assert make_config(breadcrumbs_logger=["http_logger"]).http_breadcrumbs_enabled is True


def test_config_is_frozen():
    config = make_config()
    with pytest.raises(pydantic.ValidationError):
        config.send_default_pii = True


def test_model_copy_derives_variant():
    config = make_config()
    variant = config.model_copy(update={"send_default_pii": True})

    assert variant.send_default_pii is True
    assert config.send_default_pii is False


def test_negative_max_breadcrumbs_rejected():
    with pytest.raises(pydantic.ValidationError):
        make_config(max_breadcrumbs=-1)


def test_repr_hides_dsn():
    config = make_config(dsn="https://secret-key@ingest.example.com/1")
    assert "secret-key" not in repr(config)
    assert "ingest.example.com" in repr(config)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("", []),
        ("http_logger", ["http_logger"]),
        (" http_logger ,, sentry_logger ", ["http_logger", "sentry_logger"]),
        (["http_logger"], ["http_logger"]),
    ],
)
def test_parse_loggers(value, expected):
    assert parse_loggers(value) == expected
