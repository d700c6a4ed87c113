"""Access & query layer: authorization, listing and the project service."""

from __future__ import annotations

from .access import authorize_read, authorize_write, can_read, is_owner
from .drive_repository import DriveProjectRepository
from .query import ProjectQuery, run_query
from .repository import InMemoryProjectRepository, ProjectRepository
from .service import ProjectService, ProjectUpdate

__all__ = [
    "authorize_read",
    "authorize_write",
    "can_read",
    "is_owner",
    "ProjectQuery",
    "run_query",
    "ProjectRepository",
    "InMemoryProjectRepository",
    "DriveProjectRepository",
    "ProjectService",
    "ProjectUpdate",
]
