"""Field definitions and constants for Drive document requests."""

from __future__ import annotations

DOCUMENT_MIME: str = "application/json"

DOCUMENT_FIELDS: str = "id,name,mimeType,parents,trashed,modifiedTime,size"

LIST_FIELDS: str = f"nextPageToken,files({DOCUMENT_FIELDS})"
