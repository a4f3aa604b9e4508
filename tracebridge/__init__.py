"""
Outbound HTTP instrumentation: child spans, trace header propagation and
breadcrumbs for the requests an application sends.
"""

from tracebridge._version import __version__  # noqa: F401
from tracebridge.breadcrumbs import Breadcrumb
from tracebridge.breadcrumbs import BreadcrumbBuffer
from tracebridge.contrib.callbacks import CallbackInstrumentation
from tracebridge.contrib.transport import InstrumentedTransport
from tracebridge.ext.http import TRACE_HEADER_NAME
from tracebridge.pin import Pin
from tracebridge.settings import config


__all__ = [
    "Breadcrumb",
    "BreadcrumbBuffer",
    "CallbackInstrumentation",
    "InstrumentedTransport",
    "Pin",
    "TRACE_HEADER_NAME",
    "config",
]
