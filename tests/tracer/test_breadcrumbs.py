import threading

import mock
import pytest

from tracebridge._trace.recorder import BreadcrumbRecorder
from tracebridge._trace.request import RequestInfo
from tracebridge._trace.request import ResponseOutcome
from tracebridge.breadcrumbs import Breadcrumb
from tracebridge.breadcrumbs import BreadcrumbBuffer
from tracebridge.pin import Pin
from tracebridge.settings import BridgeConfig

from ..utils import make_config
from ..utils import make_pin
from ..utils import override_env


@pytest.fixture
def request_info():
    return RequestInfo("get", "https://api.example.com/users?token=abc", headers={})


class TestBreadcrumbBuffer(object):
    def test_keeps_most_recent(self):
        buffer = BreadcrumbBuffer(maxlen=2)
        for i in range(3):
            buffer.append(Breadcrumb(category="http", data={"i": i}))

        assert [b.data["i"] for b in buffer] == [1, 2]
        assert len(buffer) == 2

    def test_default_maxlen_from_config(self):
        assert BreadcrumbBuffer().maxlen == 100

    def test_clear(self):
        buffer = BreadcrumbBuffer(maxlen=5)
        buffer.append(Breadcrumb(category="http"))
        buffer.clear()

        assert buffer.snapshot() == []

    def test_concurrent_appends(self):
        buffer = BreadcrumbBuffer(maxlen=1000)

        def append():
            for _ in range(100):
                buffer.append(Breadcrumb(category="http"))

        threads = [threading.Thread(target=append) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(buffer) == 800

    def test_to_dict(self):
        crumb = Breadcrumb(category="http", data={"status": 200}, timestamp=1.0)
        assert crumb.to_dict() == {
            "category": "http",
            "data": {"status": 200},
            "level": "info",
            "type": "info",
            "message": None,
            "timestamp": 1.0,
        }


def test_record_success(pin, breadcrumbs, request_info):
    BreadcrumbRecorder(pin).record(request_info, ResponseOutcome(status=200, body=lambda: b"never read"))

    (crumb,) = breadcrumbs.snapshot()
    assert crumb.category == "http"
    assert crumb.level == "info"
    assert crumb.type == "info"
    assert crumb.timestamp == 1700000000.0
    assert crumb.data == {"method": "GET", "url": "https://api.example.com/users", "status": 200}


def test_record_with_pii(pii_pin, breadcrumbs, request_info):
    BreadcrumbRecorder(pii_pin).record(request_info, ResponseOutcome(status=200, body=lambda: b'{"id": 1}'))

    (crumb,) = breadcrumbs.snapshot()
    assert crumb.data == {
        "method": "GET",
        "url": "https://api.example.com/users?token=abc",
        "status": 200,
        "body": '{"id": 1}',
    }


def test_record_with_pii_without_body_accessor(pii_pin, breadcrumbs, request_info):
    BreadcrumbRecorder(pii_pin).record(request_info, ResponseOutcome(status=200))

    (crumb,) = breadcrumbs.snapshot()
    assert "body" not in crumb.data


def test_record_failure(pii_pin, breadcrumbs, request_info):
    BreadcrumbRecorder(pii_pin).record(request_info, ResponseOutcome(error=TimeoutError("timeout")))

    (crumb,) = breadcrumbs.snapshot()
    assert crumb.data == {"method": "GET", "url": "https://api.example.com/users?token=abc", "error": "timeout"}


def test_http_logger_not_configured(tracer, breadcrumbs, request_info):
    pin = make_pin(tracer=tracer, breadcrumbs=breadcrumbs, breadcrumbs_logger=["redis_logger"])
    BreadcrumbRecorder(pin).record(request_info, ResponseOutcome(status=200))

    assert breadcrumbs.snapshot() == []


def test_breadcrumbs_logger_from_environment(tracer, breadcrumbs, request_info):
    with override_env({"TRACEBRIDGE_BREADCRUMBS_LOGGER": "sentry_logger,http_logger"}, prefix="TRACEBRIDGE_"):
        pin = Pin(tracer=tracer, breadcrumbs=breadcrumbs, config=BridgeConfig())
    BreadcrumbRecorder(pin).record(request_info, ResponseOutcome(status=200))

    assert len(breadcrumbs) == 1


def test_no_store(tracer, request_info):
    pin = Pin(tracer=tracer, config=make_config(breadcrumbs_logger=["http_logger"]))
    recorder = BreadcrumbRecorder(pin)

    assert not recorder.enabled_for(request_info)
    recorder.record(request_info, ResponseOutcome(status=200))


def test_not_initialized(breadcrumbs, request_info):
    pin = Pin(tracer=None, config=make_config(breadcrumbs_logger=["http_logger"]), breadcrumbs=breadcrumbs)
    BreadcrumbRecorder(pin).record(request_info, ResponseOutcome(status=200))

    assert breadcrumbs.snapshot() == []


def test_self_traffic(tracer, breadcrumbs):
    pin = make_pin(tracer=tracer, breadcrumbs=breadcrumbs, telemetry_backend_host="o1.ingest.example.com")
    request = RequestInfo("POST", "https://o1.ingest.example.com/api/1/envelope/")
    BreadcrumbRecorder(pin).record(request, ResponseOutcome(status=200))

    assert breadcrumbs.snapshot() == []


def test_store_failure_propagates_to_caller(tracer, request_info):
    store = mock.Mock()
    store.append.side_effect = RuntimeError("full")
    pin = make_pin(tracer=tracer, breadcrumbs=store)

    with pytest.raises(RuntimeError):
        BreadcrumbRecorder(pin).record(request_info, ResponseOutcome(status=200))


def test_unreadable_body_is_left_out(pii_pin, breadcrumbs, request_info):
    def explode():
        raise IOError("stream closed")

    BreadcrumbRecorder(pii_pin).record(request_info, ResponseOutcome(status=200, body=explode))

    (crumb,) = breadcrumbs.snapshot()
    assert crumb.data == {"method": "GET", "url": "https://api.example.com/users?token=abc", "status": 200}
