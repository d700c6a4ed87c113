"""Internal controller exports for projsync."""

from __future__ import annotations

from .drive_controller import DriveDocument, DriveDocumentController

__all__ = ["DriveDocument", "DriveDocumentController"]
