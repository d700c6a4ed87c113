"""Exception hierarchy and HTTP status mapping for projsync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class ProjSyncError(Exception):
    """
    Base exception for projsync.

    Attributes:
        details: Optional structured information (node id, status code, ...).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ValidationError(ProjSyncError):
    """Raised for a bad shape: empty or over-long name, bad tag, bad document."""


class DuplicateIdError(ValidationError):
    """Raised when a node id is already present in the flat collection."""


class NotFoundError(ProjSyncError):
    """Raised when a node or project id does not resolve."""


class InvalidParentError(ProjSyncError):
    """Raised when a parent is missing, not a folder, or would form a cycle."""


class AccessDeniedError(ProjSyncError):
    """Raised when the requester may not read or write a project."""


class ConflictError(ProjSyncError):
    """Raised when a write is based on a stale project version."""


class InvalidStateError(ProjSyncError):
    """Raised when the library is used in an invalid state (no project loaded)."""


class PersistenceError(ProjSyncError):
    """Raised when the local durable cache cannot be written or read."""


class SyncError(ProjSyncError):
    """Raised when the remote store rejects or cannot receive a write."""


class AuthError(ProjSyncError):
    """Raised when a requester is not authenticated or OAuth refresh fails."""


class NetworkError(SyncError):
    """Raised when network/timeout issues prevent a remote request."""


class RateLimitError(SyncError):
    """Raised when the remote store rate-limits us (HTTP 429)."""


class ApiError(SyncError):
    """Raised for unclassified remote errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to projsync exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> ProjSyncError:
    """
    Map a remote HTTP error to a projsync exception.

    Policy:
        - 400 -> ValidationError
        - 401 -> AuthError
        - 403 -> AccessDeniedError, or RateLimitError for rate/quota reasons
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return ValidationError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if info.reason and "limit" in info.reason.lower():
            return RateLimitError(message, details=details, cause=cause)
        return AccessDeniedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)


_STATUS_BY_ERROR: tuple[tuple[type[ProjSyncError], int], ...] = (
    (ValidationError, 400),
    (InvalidParentError, 400),
    (AuthError, 401),
    (AccessDeniedError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def http_status_for(exc: ProjSyncError) -> int:
    """Return the REST status code a collaborator should answer with."""
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500
