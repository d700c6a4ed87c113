"""projsync public API."""

from __future__ import annotations

from projsync.auth import DriveAuth, build_drive_service
from projsync.codec import export_json, import_json
from projsync.config import SyncConfig
from projsync.controller import DriveDocumentController
from projsync.errors import (
    AccessDeniedError,
    ApiError,
    AuthError,
    ConflictError,
    DuplicateIdError,
    InvalidParentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PersistenceError,
    ProjSyncError,
    RateLimitError,
    SyncError,
    ValidationError,
    http_status_for,
    map_http_error,
)
from projsync.models import (
    FileNode,
    FlushResult,
    FolderNode,
    NodeKind,
    Project,
    ProjectPage,
    ProjectSettings,
    Theme,
)
from projsync.server import (
    DriveProjectRepository,
    InMemoryProjectRepository,
    ProjectQuery,
    ProjectService,
    ProjectUpdate,
)
from projsync.sync import (
    AutosaveScheduler,
    DirtyTracker,
    LocalProjectCache,
    PersistenceGateway,
    ServiceRemoteStore,
)
from projsync.tree import FileTreeStore, new_project
from projsync.workspace import ProjectWorkspace

__all__ = [
    # High-level
    "ProjectWorkspace",
    "SyncConfig",
    # Tree
    "FileTreeStore",
    "new_project",
    # Persistence
    "DirtyTracker",
    "AutosaveScheduler",
    "LocalProjectCache",
    "PersistenceGateway",
    "ServiceRemoteStore",
    "export_json",
    "import_json",
    # Server side
    "ProjectService",
    "ProjectUpdate",
    "ProjectQuery",
    "InMemoryProjectRepository",
    "DriveProjectRepository",
    # Drive
    "DriveAuth",
    "build_drive_service",
    "DriveDocumentController",
    # Models
    "FileNode",
    "FolderNode",
    "NodeKind",
    "Project",
    "ProjectSettings",
    "Theme",
    "FlushResult",
    "ProjectPage",
    # Errors
    "ProjSyncError",
    "ValidationError",
    "DuplicateIdError",
    "NotFoundError",
    "InvalidParentError",
    "AccessDeniedError",
    "ConflictError",
    "InvalidStateError",
    "PersistenceError",
    "SyncError",
    "AuthError",
    "NetworkError",
    "RateLimitError",
    "ApiError",
    "map_http_error",
    "http_status_for",
]
