import contextlib
import contextvars
import itertools
import os
import threading
from typing import Any  # noqa:F401
from typing import Dict  # noqa:F401
from typing import List  # noqa:F401
from typing import Optional  # noqa:F401

from tracebridge.breadcrumbs import BreadcrumbBuffer
from tracebridge.pin import Pin
from tracebridge.settings import BridgeConfig


_current_transaction = contextvars.ContextVar("tracebridge_test_transaction", default=None)
_ids = itertools.count(1)


class DummySpan(object):
    """Span double recording everything the instrumentation writes on it."""

    def __init__(self, transaction, op, start_timestamp):
        self.transaction = transaction
        self.op = op
        self.span_id = next(_ids)
        self.start_timestamp = start_timestamp
        self.timestamp = None  # type: Optional[float]
        self.description = None  # type: Optional[str]
        self.data = {}  # type: Dict[str, Any]
        self.timestamp_calls = 0

    def set_description(self, description):
        self.description = description

    def set_data(self, key, value):
        self.data[key] = value

    def set_timestamp(self, timestamp):
        self.timestamp_calls += 1
        self.timestamp = timestamp

    @property
    def finished(self):
        return self.timestamp is not None

    def __repr__(self):
        return "DummySpan(op=%r, description=%r, data=%r)" % (self.op, self.description, self.data)


class DummyTransaction(object):
    def __init__(self, sampled=True):
        self.trace_id = next(_ids)
        self.sampled = sampled
        self._spans = []  # type: List[DummySpan]
        self._lock = threading.Lock()

    @property
    def spans(self):
        # type: () -> List[DummySpan]
        with self._lock:
            return list(self._spans)

    def start_child(self, op, start_timestamp):
        span = DummySpan(self, op, start_timestamp)
        with self._lock:
            self._spans.append(span)
        return span


class DummyTracer(object):
    """
    DummyTracer implements the tracing client contract in memory. The current
    transaction is context-local, so threads and tasks each see their own.
    """

    def __init__(self, serialize=True):
        self.serialize = serialize

    def current_transaction(self):
        return _current_transaction.get()

    def is_sampled(self, transaction):
        return bool(transaction.sampled)

    def start_child_span(self, transaction, op, start_timestamp):
        return transaction.start_child(op, start_timestamp)

    def serialize_trace_context(self, span):
        if not self.serialize:
            return None
        return "%032x-%016x-1" % (span.transaction.trace_id, span.span_id)

    @contextlib.contextmanager
    def transaction(self, sampled=True):
        txn = DummyTransaction(sampled=sampled)
        token = _current_transaction.set(txn)
        try:
            yield txn
        finally:
            _current_transaction.reset(token)


class FrozenClock(object):
    """Clock double ticking one second per reading."""

    def __init__(self, start=1700000000.0):
        self._ticks = itertools.count()
        self._start = start
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            return self._start + next(self._ticks)


def make_config(**values):
    # type: (Any) -> BridgeConfig
    """Build a config from explicit values only, ignoring ``TRACEBRIDGE_*`` variables of the test environment."""
    with override_env({}, prefix="TRACEBRIDGE_"):
        return BridgeConfig(**values)


def make_pin(tracer=None, breadcrumbs=None, **config_values):
    # type: (Any, Any, Any) -> Pin
    config_values.setdefault("breadcrumbs_logger", ["http_logger"])
    return Pin(
        tracer=tracer if tracer is not None else DummyTracer(),
        config=make_config(**config_values),
        breadcrumbs=breadcrumbs if breadcrumbs is not None else BreadcrumbBuffer(maxlen=100),
        clock=FrozenClock(),
    )


@contextlib.contextmanager
def override_env(env, prefix=None):
    """
    Temporarily override ``os.environ`` with provided values::

        >>> with override_env(dict(TRACEBRIDGE_SEND_DEFAULT_PII="true")):
            # Your test

    Variables starting with ``prefix`` are removed for the duration of the block.
    """
    # Copy the full original environment
    original = dict(os.environ)

    if prefix:
        for k in list(os.environ.keys()):
            if k.startswith(prefix):
                del os.environ[k]

    os.environ.update(env)
    try:
        yield
    finally:
        # Full clear the environment out and reset back to the original
        os.environ.clear()
        os.environ.update(original)
