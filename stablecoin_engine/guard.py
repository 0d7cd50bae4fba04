"""Execution guard: one operation in flight, all-or-nothing effects."""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from .errors import ReentrantCall
from .interfaces.transactional import Transactional

logger = logging.getLogger(__name__)


class NonReentrantGuard:
    """Instance-wide lock that rejects nested or concurrent entry.

    A second entry while the guard is held raises ``ReentrantCall`` instead
    of waiting. The lock is released on every exit path.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def enter(self, operation: str = "") -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            logger.warning("Rejected reentrant call to %s", operation or "engine")
            raise ReentrantCall(f"Reentrant call to {operation or 'engine'}")
        try:
            yield
        finally:
            self._lock.release()


@contextmanager
def atomic(*participants: Any) -> Iterator[None]:
    """Snapshot every transactional participant and restore them on failure.

    Participants that do not implement ``snapshot``/``restore`` are ignored.
    The failing exception is re-raised after the rollback.
    """
    members: list[Any] = []
    for p in participants:
        if isinstance(p, Transactional) and all(p is not m for m in members):
            members.append(p)
    snapshots = [(p, p.snapshot()) for p in members]
    try:
        yield
    except BaseException:
        for participant, state in reversed(snapshots):
            participant.restore(state)
        logger.debug("Rolled back %d participants", len(snapshots))
        raise
