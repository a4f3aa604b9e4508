import pytest

from tracebridge.breadcrumbs import BreadcrumbBuffer

from .utils import DummyTracer
from .utils import make_pin


@pytest.fixture
def tracer():
    return DummyTracer()


@pytest.fixture
def breadcrumbs():
    return BreadcrumbBuffer(maxlen=100)


@pytest.fixture
def pin(tracer, breadcrumbs):
    return make_pin(tracer=tracer, breadcrumbs=breadcrumbs)


@pytest.fixture
def pii_pin(tracer, breadcrumbs):
    return make_pin(tracer=tracer, breadcrumbs=breadcrumbs, send_default_pii=True)
