"""Dirty-state tracking for the loaded project."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class FlushTicket:
    """Identity of the snapshot a flush was issued for."""

    project_id: str
    revision: int


class DirtyTracker:
    """
    Clean/Dirty state machine for one loaded project.

    Each successful mutation bumps ``revision``. A flush captures the
    revision it covers; on completion the state becomes clean only if the
    same project is still loaded and nothing changed after issuance.
    Shared between the UI thread and flush completions, hence the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._project_id: Optional[str] = None
        self._revision = 0
        self._flushed_revision = 0

    @property
    def project_id(self) -> Optional[str]:
        return self._project_id

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def is_dirty(self) -> bool:
        with self._lock:
            return self._project_id is not None and self._revision > self._flushed_revision

    def reset(self, project_id: Optional[str], *, dirty: bool = False) -> None:
        """Start tracking ``project_id`` (None when nothing is loaded)."""
        with self._lock:
            self._project_id = project_id
            self._revision = 1 if dirty else 0
            self._flushed_revision = 0

    def mark_dirty(self, project_id: str) -> None:
        with self._lock:
            if project_id != self._project_id:
                return
            self._revision += 1

    def begin_flush(self) -> Optional[FlushTicket]:
        """Capture the snapshot identity for a flush, or None if nothing is loaded."""
        with self._lock:
            if self._project_id is None:
                return None
            return FlushTicket(project_id=self._project_id, revision=self._revision)

    def complete_flush(self, ticket: FlushTicket) -> bool:
        """
        Record a successful flush. Returns True if the state is now clean.

        A ticket for another project (stale completion after a switch) is
        ignored.
        """
        with self._lock:
            if ticket.project_id != self._project_id:
                return False
            if ticket.revision > self._flushed_revision:
                self._flushed_revision = ticket.revision
            return self._revision <= self._flushed_revision
