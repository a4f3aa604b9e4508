"""
Breadcrumbs are lightweight, ordered diagnostic events kept around to be
attached to a later error report.

The instrumentation only appends to a breadcrumb store supplied by the host
application. :class:`BreadcrumbBuffer` is a bounded, thread-safe store for
applications that don't bring their own::

    from tracebridge import BreadcrumbBuffer
    from tracebridge import Pin

    pin = Pin(tracer=tracing_client, breadcrumbs=BreadcrumbBuffer(maxlen=50))
"""

from collections import deque
import threading
from typing import Any
from typing import Dict
from typing import Iterator
from typing import List
from typing import Optional

import attr

from tracebridge.ext import BreadcrumbLevels


@attr.s(frozen=True, slots=True)
class Breadcrumb(object):
    category = attr.ib(type=str)
    data = attr.ib(type=Dict[str, Any], factory=dict)
    level = attr.ib(type=str, default=BreadcrumbLevels.INFO.value)
    type = attr.ib(type=str, default="info")
    message = attr.ib(type=Optional[str], default=None)
    timestamp = attr.ib(type=Optional[float], default=None)

    def to_dict(self):
        # type: () -> Dict[str, Any]
        return attr.asdict(self, recurse=False)


class BreadcrumbBuffer(object):
    """Append-only trail keeping the ``maxlen`` most recent breadcrumbs."""

    def __init__(self, maxlen=None):
        # type: (Optional[int]) -> None
        if maxlen is None:
            from tracebridge.settings import config

            maxlen = config.max_breadcrumbs
        self._buffer = deque(maxlen=maxlen)  # type: deque
        self._lock = threading.Lock()

    @property
    def maxlen(self):
        # type: () -> Optional[int]
        return self._buffer.maxlen

    def append(self, breadcrumb):
        # type: (Breadcrumb) -> None
        with self._lock:
            self._buffer.append(breadcrumb)

    def clear(self):
        # type: () -> None
        with self._lock:
            self._buffer.clear()

    def snapshot(self):
        # type: () -> List[Breadcrumb]
        with self._lock:
            return list(self._buffer)

    def __iter__(self):
        # type: () -> Iterator[Breadcrumb]
        return iter(self.snapshot())

    def __len__(self):
        # type: () -> int
        return len(self._buffer)

    def __repr__(self):
        return "BreadcrumbBuffer(maxlen=%r, size=%d)" % (self.maxlen, len(self))
