"""Remote authoritative store, as seen from the client."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from projsync.errors import NotFoundError
from projsync.models import Project
from projsync.server.service import ProjectService, ProjectUpdate

logger = logging.getLogger(__name__)


class RemoteStore(Protocol):
    """
    Client view of the remote store.

    Implementations raise SyncError (or a subclass such as NetworkError)
    when the remote cannot be reached, ConflictError for stale writes and
    AccessDeniedError/NotFoundError as the server decides.
    """

    def fetch(self, project_id: str) -> Project: ...

    def push(self, project: Project, expected_version: Optional[int] = None) -> Project: ...

    def delete(self, project_id: str) -> None: ...


class ServiceRemoteStore:
    """Routes client reads/writes through ProjectService as ``user_id``."""

    def __init__(self, service: ProjectService, user_id: Optional[str]) -> None:
        self._service = service
        self._user_id = user_id

    def fetch(self, project_id: str) -> Project:
        return self._service.get(self._user_id, project_id)

    def push(self, project: Project, expected_version: Optional[int] = None) -> Project:
        """
        Overwrite the remote copy, creating it on first push.

        ``expected_version`` of 0 means "never pushed", so the create path
        is taken directly.
        """
        if expected_version != 0:
            try:
                return self._service.update(
                    self._user_id,
                    project.id,
                    ProjectUpdate.replacing(project),
                    expected_version=expected_version,
                )
            except NotFoundError:
                logger.info("Remote copy of %s missing; recreating it", project.id)

        return self._service.create(
            self._user_id,
            name=project.name,
            description=project.description,
            files=project.files,
            settings={"theme": project.settings.theme, "autosave": project.settings.autosave},
            is_public=project.is_public,
            tags=project.tags,
            project_id=project.id,
        )

    def delete(self, project_id: str) -> None:
        self._service.delete(self._user_id, project_id)
