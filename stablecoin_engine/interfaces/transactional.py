"""Transactional protocol: state that can be captured and restored."""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transactional(Protocol):
    """Participant in an atomic engine operation."""

    def snapshot(self) -> Any: ...

    def restore(self, state: Any) -> None: ...
