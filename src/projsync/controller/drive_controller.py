"""Google Drive controller for JSON project documents (internal use only)."""

from __future__ import annotations

import io
import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from projsync.auth import DriveAuth, build_drive_service
from projsync.errors import (
    ApiError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    map_http_error,
)
from projsync.util.time import parse_rfc3339

from .fields import DOCUMENT_FIELDS, DOCUMENT_MIME, LIST_FIELDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


@dataclass(slots=True)
class DriveDocument:
    """Metadata of one document file stored in Drive."""

    file_id: str
    name: str
    mime_type: str = DOCUMENT_MIME
    trashed: bool = False
    modified_time: Optional[datetime] = None


class DriveDocumentController:
    """
    Thin wrapper over the Drive v3 ``files`` resource.

    Notes:
        - The Drive ``service`` object is NOT exposed.
        - Transient failures (429, 5xx, network) are retried with backoff;
          everything else is mapped to a projsync exception immediately.
    """

    def __init__(self, auth: DriveAuth, *, interactive: bool = True) -> None:
        self._retry_policy = _RetryPolicy()
        self._service = build_drive_service(auth, interactive=interactive)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        max_retries: int = 3,
        initial_delay_sec: float = 1.0,
    ) -> "DriveDocumentController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._retry_policy = _RetryPolicy(max_retries=max_retries, initial_delay_sec=initial_delay_sec)
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def list_documents(self, folder_id: str) -> list[DriveDocument]:
        q = f"'{folder_id}' in parents and mimeType='{DOCUMENT_MIME}' and trashed=false"
        return self._find_by_query(q)

    def find_document(self, folder_id: str, name: str) -> Optional[DriveDocument]:
        """Return the first non-trashed document named ``name`` in ``folder_id``."""
        escaped = name.replace("\\", "\\\\").replace("'", "\\'")
        q = f"'{folder_id}' in parents and name='{escaped}' and trashed=false"
        found = self._find_by_query(q)
        return found[0] if found else None

    def read_text(self, file_id: str) -> str:
        from googleapiclient.http import MediaIoBaseDownload

        req = self._service.files().get_media(fileId=file_id)
        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(buffer, req)
        done = False
        while not done:
            _, done = self._execute(downloader.next_chunk)
        return buffer.getvalue().decode("utf-8")

    def create_document(self, folder_id: str, name: str, text: str) -> DriveDocument:
        body = {"name": name, "mimeType": DOCUMENT_MIME, "parents": [folder_id]}
        req = self._service.files().create(
            body=body,
            media_body=_media(text),
            fields=DOCUMENT_FIELDS,
        )
        doc = _dict_to_document(self._execute(req.execute))
        logger.debug("Created Drive document %s (%s)", doc.file_id, name)
        return doc

    def update_document(self, file_id: str, text: str) -> DriveDocument:
        req = self._service.files().update(
            fileId=file_id,
            media_body=_media(text),
            fields=DOCUMENT_FIELDS,
        )
        return _dict_to_document(self._execute(req.execute))

    def delete(self, file_id: str) -> None:
        req = self._service.files().delete(fileId=file_id)
        self._execute(req.execute)

    # ----------------------------
    # Internals
    # ----------------------------
    def _find_by_query(self, q: str) -> list[DriveDocument]:
        documents: list[DriveDocument] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                spaces="drive",
            )
            data = self._execute(req.execute)
            for item in data.get("files", []):
                documents.append(_dict_to_document(item))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return documents

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.debug("Retrying Drive request after %s (attempt %d)", mapped, attempt + 1)
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, (RateLimitError, NetworkError)):
            return True
        if isinstance(exc, ApiError):
            status_code = exc.details.get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        from googleapiclient.errors import HttpError

        if isinstance(exc, HttpError):
            return map_http_error(_http_error_to_info(exc), cause=exc)
        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)
        return ApiError("Drive API error", cause=exc)


def _media(text: str) -> Any:
    from googleapiclient.http import MediaIoBaseUpload

    return MediaIoBaseUpload(io.BytesIO(text.encode("utf-8")), mimetype=DOCUMENT_MIME)


def _dict_to_document(data: dict[str, Any]) -> DriveDocument:
    modified_time = None
    if isinstance(data.get("modifiedTime"), str):
        try:
            modified_time = parse_rfc3339(data["modifiedTime"])
        except ValueError:
            modified_time = None

    file_id = data.get("id")
    name = data.get("name")
    mime_type = data.get("mimeType")
    return DriveDocument(
        file_id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else DOCUMENT_MIME,
        trashed=bool(data.get("trashed", False)),
        modified_time=modified_time,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            payload = None
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        try:
            status_code = int(status_code)
        except (TypeError, ValueError):
            status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
