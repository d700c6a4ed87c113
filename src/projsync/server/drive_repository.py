"""Project repository backed by JSON documents in a Google Drive folder."""

from __future__ import annotations

import json
import logging
from typing import Optional

from projsync.codec import project_from_document, project_to_document
from projsync.controller import DriveDocumentController
from projsync.errors import NotFoundError, ProjSyncError, ValidationError
from projsync.models import Project

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".project.json"


class DriveProjectRepository:
    """
    One ``<project id>.project.json`` file per project inside ``folder_id``.

    Drive file ids are cached per project id to save a lookup on writes.
    """

    def __init__(self, controller: DriveDocumentController, folder_id: str) -> None:
        if not folder_id:
            raise ValueError("folder_id must be a non-empty string")
        self._controller = controller
        self._folder_id = folder_id
        self._file_ids: dict[str, str] = {}

    def get(self, project_id: str) -> Optional[Project]:
        file_id = self._resolve(project_id)
        if file_id is None:
            return None
        try:
            text = self._controller.read_text(file_id)
        except NotFoundError:
            self._file_ids.pop(project_id, None)
            return None
        return _decode(text, project_id)

    def put(self, project: Project) -> None:
        text = json.dumps(project_to_document(project), ensure_ascii=False)
        file_id = self._resolve(project.id)
        if file_id is not None:
            try:
                self._controller.update_document(file_id, text)
                return
            except NotFoundError:
                self._file_ids.pop(project.id, None)

        doc = self._controller.create_document(self._folder_id, _document_name(project.id), text)
        self._file_ids[project.id] = doc.file_id

    def delete(self, project_id: str) -> bool:
        file_id = self._resolve(project_id)
        if file_id is None:
            return False
        try:
            self._controller.delete(file_id)
        except NotFoundError:
            return False
        finally:
            self._file_ids.pop(project_id, None)
        return True

    def list_all(self) -> list[Project]:
        projects: list[Project] = []
        for doc in self._controller.list_documents(self._folder_id):
            if not doc.name.endswith(DOCUMENT_SUFFIX):
                continue
            project_id = doc.name[: -len(DOCUMENT_SUFFIX)]
            self._file_ids[project_id] = doc.file_id
            try:
                project = _decode(self._controller.read_text(doc.file_id), project_id)
            except ValidationError as exc:
                logger.warning("Skipping unreadable Drive document %s: %s", doc.name, exc)
                continue
            projects.append(project)
        return projects

    def _resolve(self, project_id: str) -> Optional[str]:
        cached = self._file_ids.get(project_id)
        if cached is not None:
            return cached
        doc = self._controller.find_document(self._folder_id, _document_name(project_id))
        if doc is None:
            return None
        self._file_ids[project_id] = doc.file_id
        return doc.file_id


def _document_name(project_id: str) -> str:
    return f"{project_id}{DOCUMENT_SUFFIX}"


def _decode(text: str, project_id: str) -> Project:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(
            "Drive document is not valid JSON", details={"project_id": project_id}, cause=exc
        ) from exc
    try:
        return project_from_document(payload)
    except ProjSyncError as exc:
        raise ValidationError(
            f"Drive document is not a valid project: {exc}",
            details={"project_id": project_id},
            cause=exc,
        ) from exc
