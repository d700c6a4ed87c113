"""Durable local cache of project documents (a single JSON file)."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

from projsync.codec import project_from_document, project_to_document
from projsync.errors import PersistenceError, ProjSyncError
from projsync.models import Project
from projsync.util.time import to_rfc3339

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "projsync-projects"


class LocalProjectCache:
    """
    Mapping of project id -> full project document, stored under a namespace.

    Layout::

        {"namespace": "...", "projects": {"<id>": {"document": {...},
                                                   "pending_sync": true}}}

    ``pending_sync`` marks a local write the remote store has not confirmed
    yet. Writes go to a temp file first and are moved into place.
    """

    def __init__(self, path: Path | str, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._path = Path(path).expanduser()
        self._namespace = namespace
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def write(self, project: Project, *, pending_sync: bool = True) -> None:
        """Store a full snapshot. Raises PersistenceError on I/O failure."""
        with self._lock:
            entries = self._read_entries()
            entries[project.id] = {
                "document": project_to_document(project),
                "pending_sync": pending_sync,
            }
            self._write_entries(entries)

    def read(self, project_id: str) -> Optional[Project]:
        entry = self._entry(project_id)
        if entry is None:
            return None
        return self._decode(project_id, entry)

    def is_pending(self, project_id: str) -> bool:
        entry = self._entry(project_id)
        return bool(entry and entry.get("pending_sync"))

    def mark_synced(self, project: Project, version: int) -> None:
        """
        Clear ``pending_sync`` and record the version the remote assigned.

        No-op when the cached snapshot is newer than ``project`` (a later
        local write is still waiting for its own push).
        """
        with self._lock:
            entries = self._read_entries()
            entry = entries.get(project.id)
            if entry is None:
                return
            document = entry.get("document") or {}
            if document.get("updatedAt") != to_rfc3339(project.updated_at):
                return
            entry["pending_sync"] = False
            document["version"] = version
            self._write_entries(entries)

    def delete(self, project_id: str) -> bool:
        with self._lock:
            entries = self._read_entries()
            if entries.pop(project_id, None) is None:
                return False
            self._write_entries(entries)
            return True

    def list_projects(self) -> list[Project]:
        """All readable cached projects, newest ``updated_at`` first."""
        with self._lock:
            entries = self._read_entries()
        projects = []
        for project_id, entry in entries.items():
            project = self._decode(project_id, entry)
            if project is not None:
                projects.append(project)
        projects.sort(key=lambda p: p.updated_at, reverse=True)
        return projects

    # ----------------------------
    # Internals
    # ----------------------------
    def _entry(self, project_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            return self._read_entries().get(project_id)

    def _decode(self, project_id: str, entry: dict[str, Any]) -> Optional[Project]:
        try:
            return project_from_document(entry.get("document") or {})
        except ProjSyncError as exc:
            logger.warning("Skipping unreadable cached project %s: %s", project_id, exc)
            return None

    def _read_entries(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(
                "Failed to read local project cache",
                details={"path": str(self._path)},
                cause=exc,
            ) from exc

        if not isinstance(payload, dict) or payload.get("namespace") != self._namespace:
            return {}
        projects = payload.get("projects")
        return projects if isinstance(projects, dict) else {}

    def _write_entries(self, entries: dict[str, Any]) -> None:
        payload = {"namespace": self._namespace, "projects": entries}
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            temp_path.replace(self._path)
        except OSError as exc:
            logger.error("Local project cache write failed: %s", exc)
            raise PersistenceError(
                "Failed to write local project cache",
                details={"path": str(self._path)},
                cause=exc,
            ) from exc
