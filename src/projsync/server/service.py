"""ProjectService: authorized CRUD, listing and duplication of projects."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional

from projsync.errors import ConflictError, NotFoundError, ValidationError
from projsync.models import Node, Project, ProjectPage, ProjectSettings
from projsync.tree.store import new_project
from projsync.tree.validators import (
    MAX_PROJECT_NAME_LENGTH,
    validate_description,
    validate_name,
    validate_tags,
    validate_tree,
)
from projsync.util.time import touch

from .access import authorize_read, authorize_write, require_user
from .query import ProjectQuery, run_query
from .repository import ProjectRepository

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"


@dataclass(frozen=True, slots=True)
class ProjectUpdate:
    """
    Partial update for ``PUT /projects/:id``.

    ``None`` means "leave unchanged". ``settings`` is merged field by field.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    is_public: Optional[bool] = None
    settings: Optional[Mapping[str, Any]] = None
    files: Optional[tuple[Node, ...]] = None

    @classmethod
    def replacing(cls, project: Project) -> ProjectUpdate:
        """Full overwrite of every client-editable field from ``project``."""
        return cls(
            name=project.name,
            description=project.description or "",
            tags=project.tags,
            is_public=project.is_public,
            settings={
                "theme": project.settings.theme,
                "autosave": project.settings.autosave,
            },
            files=project.files,
        )


class ProjectService:
    """
    Server-side contract mirrored by the REST surface.

    ``user_id`` is the authenticated requester or ``None`` for anonymous.
    Every write bumps ``version``; writes that carry a stale
    ``expected_version`` are rejected with ConflictError.
    """

    def __init__(self, repository: ProjectRepository) -> None:
        self._repository = repository

    # POST /projects
    def create(
        self,
        user_id: Optional[str],
        *,
        name: str,
        description: Optional[str] = None,
        files: Optional[Iterable[Node]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        is_public: bool = False,
        tags: Iterable[str] = (),
        project_id: Optional[str] = None,
    ) -> Project:
        owner = require_user(user_id, "create a project")
        if project_id is not None and self._repository.get(project_id) is not None:
            raise ConflictError("Project id already exists", details={"project_id": project_id})

        project = new_project(
            name,
            owner,
            template=None,
            description=description,
            tags=tags,
            is_public=is_public,
            settings=_merge_settings(ProjectSettings(), settings or {}),
            project_id=project_id,
        )
        nodes = tuple(files or ())
        validate_tree(nodes)
        project = replace(project, files=nodes, version=1)

        self._repository.put(project)
        logger.info("Project %s created by %s", project.id, owner)
        return project

    # GET /projects
    def list(self, user_id: Optional[str], query: Optional[ProjectQuery] = None) -> ProjectPage:
        return run_query(self._repository.list_all(), user_id, query or ProjectQuery())

    # GET /projects/:id
    def get(self, user_id: Optional[str], project_id: str) -> Project:
        project = self._require(project_id)
        authorize_read(project, user_id)
        return project

    # PUT /projects/:id
    def update(
        self,
        user_id: Optional[str],
        project_id: str,
        changes: ProjectUpdate,
        *,
        expected_version: Optional[int] = None,
    ) -> Project:
        require_user(user_id, "update a project")
        project = self._require(project_id)
        authorize_write(project, user_id)
        _check_version(project, expected_version)

        fields: dict[str, Any] = {}
        if changes.name is not None:
            fields["name"] = validate_name(changes.name, "Project name", MAX_PROJECT_NAME_LENGTH)
        if changes.description is not None:
            fields["description"] = validate_description(changes.description) or None
        if changes.tags is not None:
            fields["tags"] = validate_tags(changes.tags)
        if changes.is_public is not None:
            fields["is_public"] = bool(changes.is_public)
        if changes.settings is not None:
            fields["settings"] = _merge_settings(project.settings, changes.settings)
        if changes.files is not None:
            validate_tree(changes.files)
            fields["files"] = tuple(changes.files)

        updated = self._bump(replace(project, **fields))
        self._repository.put(updated)
        logger.debug("Project %s updated to version %d", project_id, updated.version)
        return updated

    # DELETE /projects/:id
    def delete(self, user_id: Optional[str], project_id: str) -> None:
        require_user(user_id, "delete a project")
        project = self._require(project_id)
        authorize_write(project, user_id)
        # The document embeds every node, so removing it leaves no orphans.
        self._repository.delete(project_id)
        logger.info("Project %s deleted by %s", project_id, user_id)

    # POST /projects/:id/duplicate
    def duplicate(self, user_id: Optional[str], project_id: str) -> Project:
        original = self._require(project_id)
        authorize_read(original, user_id)

        name = original.name + COPY_SUFFIX
        if len(name) > MAX_PROJECT_NAME_LENGTH:
            name = original.name[: MAX_PROJECT_NAME_LENGTH - len(COPY_SUFFIX)] + COPY_SUFFIX

        copy = new_project(
            name,
            user_id or original.owner_id,
            template=None,
            description=original.description,
            tags=original.tags,
            is_public=False,
            settings=original.settings,
        )
        copy = replace(copy, files=original.files, version=1)
        self._repository.put(copy)
        logger.info("Project %s duplicated as %s", project_id, copy.id)
        return copy

    # ----------------------------
    # Internals
    # ----------------------------
    def _require(self, project_id: str) -> Project:
        project = self._repository.get(project_id)
        if project is None:
            raise NotFoundError("Project not found", details={"project_id": project_id})
        return project

    @staticmethod
    def _bump(project: Project) -> Project:
        return replace(project, version=project.version + 1, updated_at=touch(project.updated_at))


def _check_version(project: Project, expected_version: Optional[int]) -> None:
    if expected_version is None:
        return
    if expected_version != project.version:
        raise ConflictError(
            "Project was modified by another writer",
            details={
                "project_id": project.id,
                "expected_version": expected_version,
                "actual_version": project.version,
            },
        )


def _merge_settings(current: ProjectSettings, changes: Mapping[str, Any]) -> ProjectSettings:
    unknown = set(changes) - {"theme", "autosave"}
    if unknown:
        raise ValidationError("Unknown settings fields", details={"fields": sorted(unknown)})
    return current.merged(theme=changes.get("theme"), autosave=changes.get("autosave"))
