"""Public auth exports for projsync."""

from __future__ import annotations

from .credentials import DEFAULT_SCOPES, DriveAuth, build_drive_service, load_credentials

__all__ = ["DEFAULT_SCOPES", "DriveAuth", "build_drive_service", "load_credentials"]
