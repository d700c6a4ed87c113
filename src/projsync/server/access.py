"""Ownership and visibility rules for project documents."""

from __future__ import annotations

from typing import Optional

from projsync.errors import AccessDeniedError, AuthError
from projsync.models import Project


def is_owner(project: Project, user_id: Optional[str]) -> bool:
    return user_id is not None and project.owner_id == user_id


def can_read(project: Project, user_id: Optional[str]) -> bool:
    """Public projects are readable by anyone; private ones by the owner only."""
    return project.is_public or is_owner(project, user_id)


def require_user(user_id: Optional[str], action: str) -> str:
    """Reject anonymous requesters for authenticated-only actions."""
    if user_id is None or not str(user_id).strip():
        raise AuthError(f"Authentication required to {action}", details={"action": action})
    return user_id


def authorize_read(project: Project, user_id: Optional[str]) -> None:
    if not can_read(project, user_id):
        raise AccessDeniedError(
            "Access denied", details={"project_id": project.id, "action": "read"}
        )


def authorize_write(project: Project, user_id: Optional[str]) -> None:
    if not is_owner(project, user_id):
        raise AccessDeniedError(
            "Access denied", details={"project_id": project.id, "action": "write"}
        )
