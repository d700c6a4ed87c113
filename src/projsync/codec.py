"""Project <-> document conversion, plus JSON export/import."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from projsync.errors import ProjSyncError, ValidationError
from projsync.models import FileNode, FolderNode, Node, NodeKind, Project, ProjectSettings, Theme
from projsync.tree.validators import (
    MAX_PROJECT_NAME_LENGTH,
    validate_content,
    validate_description,
    validate_name,
    validate_tags,
    validate_tree,
)
from projsync.util.time import parse_rfc3339, to_rfc3339

FORMAT_NAME = "projsync.project"
FORMAT_VERSION = 1


def node_to_dict(node: Node) -> dict[str, Any]:
    return {
        "id": node.id,
        "name": node.name,
        "content": node.content,
        "type": node.kind.value,
        "parentId": node.parent_id,
    }


def node_from_dict(data: Mapping[str, Any]) -> Node:
    """
    Decode one flat node.

    Any embedded ``children`` field (nested shape) is ignored: the
    tree is rebuilt from ``parentId`` links only.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Node must be an object")

    node_id = data.get("id")
    if not isinstance(node_id, str) or not node_id:
        raise ValidationError("Node id must be a non-empty string", details={"node": data.get("name")})

    parent_id = data.get("parentId")
    if parent_id is not None and not isinstance(parent_id, str):
        raise ValidationError("parentId must be a string or null", details={"id": node_id})
    parent_id = parent_id or None

    try:
        kind = NodeKind(data.get("type"))
    except ValueError as exc:
        raise ValidationError(
            "Node type must be 'file' or 'folder'", details={"id": node_id}
        ) from exc

    name = validate_name(data.get("name", ""))
    if kind is NodeKind.FOLDER:
        return FolderNode(id=node_id, name=name, parent_id=parent_id)

    content = validate_content(data.get("content", ""), node_id)
    return FileNode(id=node_id, name=name, parent_id=parent_id, content=content)


def project_to_document(project: Project) -> dict[str, Any]:
    """Full project document (flat node collection, no derived children)."""
    return {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "tags": list(project.tags),
        "ownerId": project.owner_id,
        "isPublic": project.is_public,
        "settings": {
            "theme": project.settings.theme.value,
            "autosave": project.settings.autosave,
        },
        "files": [node_to_dict(node) for node in project.files],
        "createdAt": to_rfc3339(project.created_at),
        "updatedAt": to_rfc3339(project.updated_at),
        "version": project.version,
    }


def project_from_document(data: Mapping[str, Any]) -> Project:
    """Decode and re-validate a project document. Raises ValidationError."""
    if not isinstance(data, Mapping):
        raise ValidationError("Project document must be an object")

    project_id = data.get("id")
    owner_id = data.get("ownerId")
    if not isinstance(project_id, str) or not project_id:
        raise ValidationError("Project id must be a non-empty string")
    if not isinstance(owner_id, str) or not owner_id:
        raise ValidationError("ownerId must be a non-empty string", details={"id": project_id})

    raw_files = data.get("files") or []
    if not isinstance(raw_files, list):
        raise ValidationError("files must be a list", details={"id": project_id})
    files = tuple(node_from_dict(item) for item in raw_files)
    try:
        validate_tree(files)
    except ProjSyncError as exc:
        raise ValidationError(
            f"Invalid project tree: {exc}", details={"id": project_id}, cause=exc
        ) from exc

    created_at = _parse_time(data.get("createdAt"), "createdAt")
    updated_at = _parse_time(data.get("updatedAt"), "updatedAt")
    if updated_at < created_at:
        updated_at = created_at

    version = data.get("version", 0)
    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        raise ValidationError("version must be a non-negative integer")

    return Project(
        id=project_id,
        name=validate_name(data.get("name", ""), "Project name", MAX_PROJECT_NAME_LENGTH),
        owner_id=owner_id,
        created_at=created_at,
        updated_at=updated_at,
        description=validate_description(data.get("description")),
        tags=validate_tags(data.get("tags") or []),
        is_public=bool(data.get("isPublic", False)),
        settings=_settings_from_dict(data.get("settings")),
        files=files,
        version=version,
    )


def export_json(project: Project, *, indent: Optional[int] = 2) -> str:
    """Serialize a project as a self-describing JSON document."""
    payload = {
        "format": FORMAT_NAME,
        "formatVersion": FORMAT_VERSION,
        "project": project_to_document(project),
    }
    return json.dumps(payload, ensure_ascii=False, indent=indent)


def import_json(text: str) -> Project:
    """
    Parse an exported document.

    A bare project document (no envelope) is accepted too.
    """
    try:
        payload = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ValidationError("Import is not valid JSON", cause=exc) from exc

    if isinstance(payload, dict) and payload.get("format") == FORMAT_NAME:
        if payload.get("formatVersion") != FORMAT_VERSION:
            raise ValidationError(
                "Unsupported export format version",
                details={"formatVersion": payload.get("formatVersion")},
            )
        payload = payload.get("project")
    return project_from_document(payload)


def _settings_from_dict(data: Any) -> ProjectSettings:
    if data is None:
        return ProjectSettings()
    if not isinstance(data, Mapping):
        raise ValidationError("settings must be an object")
    try:
        theme = Theme(data.get("theme", Theme.LIGHT.value))
    except ValueError as exc:
        raise ValidationError("settings.theme must be 'light' or 'dark'") from exc
    return ProjectSettings(theme=theme, autosave=bool(data.get("autosave", True)))


def _parse_time(value: Any, field_name: str):
    try:
        return parse_rfc3339(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be an RFC3339 timestamp") from exc
