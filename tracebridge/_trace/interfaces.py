"""Contracts of the collaborators the instrumentation is driven by.

The tracing SDK, the breadcrumb store and the clock are supplied by the host
application through a :class:`tracebridge.pin.Pin`; nothing here is
implemented by the bridge itself.
"""

from typing import Any
from typing import Callable
from typing import Optional
from typing import Protocol
from typing import runtime_checkable


Clock = Callable[[], float]


@runtime_checkable
class Span(Protocol):
    def set_description(self, description: str) -> None:
        ...

    def set_data(self, key: str, value: Any) -> None:
        ...

    def set_timestamp(self, timestamp: float) -> None:
        ...


@runtime_checkable
class Transaction(Protocol):
    """The root trace a request occurs within. Opaque to the bridge."""


@runtime_checkable
class TracingClient(Protocol):
    def current_transaction(self) -> Optional[Transaction]:
        ...

    def is_sampled(self, transaction: Transaction) -> bool:
        ...

    def start_child_span(self, transaction: Transaction, op: str, start_timestamp: float) -> Span:
        ...

    def serialize_trace_context(self, span: Span) -> Optional[str]:
        ...


@runtime_checkable
class BreadcrumbStore(Protocol):
    def append(self, breadcrumb: Any) -> None:
        ...
