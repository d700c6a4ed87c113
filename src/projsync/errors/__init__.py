"""Public error exports for projsync."""

from __future__ import annotations

from .exceptions import (
    AccessDeniedError,
    ApiError,
    AuthError,
    ConflictError,
    DuplicateIdError,
    HttpErrorInfo,
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

__all__ = [
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
    "HttpErrorInfo",
    "map_http_error",
    "http_status_for",
]
