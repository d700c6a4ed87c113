"""Storage backends for project documents behind the service."""

from __future__ import annotations

import copy
import threading
from typing import Any, Optional, Protocol

from projsync.codec import project_from_document, project_to_document
from projsync.models import Project


class ProjectRepository(Protocol):
    """Dumb document storage: no authorization, no versioning."""

    def get(self, project_id: str) -> Optional[Project]: ...

    def put(self, project: Project) -> None: ...

    def delete(self, project_id: str) -> bool: ...

    def list_all(self) -> list[Project]: ...


class InMemoryProjectRepository:
    """Keeps encoded documents so callers never share mutable state."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._documents: dict[str, dict[str, Any]] = {}

    def get(self, project_id: str) -> Optional[Project]:
        with self._lock:
            document = self._documents.get(project_id)
        if document is None:
            return None
        return project_from_document(document)

    def put(self, project: Project) -> None:
        document = project_to_document(project)
        with self._lock:
            self._documents[project.id] = document

    def delete(self, project_id: str) -> bool:
        with self._lock:
            return self._documents.pop(project_id, None) is not None

    def list_all(self) -> list[Project]:
        with self._lock:
            documents = copy.deepcopy(list(self._documents.values()))
        return [project_from_document(d) for d in documents]
