"""FileTreeStore: the in-memory project and its mutation API (no I/O)."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Optional

from projsync.errors import InvalidStateError, NotFoundError
from projsync.models import FileNode, FolderNode, Node, Project, ProjectSettings, Theme
from projsync.util.ids import new_node_id, new_project_id
from projsync.util.time import now_utc, touch

from .templates import DEFAULT_TEMPLATE, build_template
from .validators import (
    MAX_PROJECT_NAME_LENGTH,
    validate_content,
    validate_description,
    validate_exists,
    validate_move_no_cycle,
    validate_name,
    validate_node,
    validate_parent,
    validate_tags,
    validate_tree,
)
from .views import build_nested_view, collect_descendants, derive_children

MutationListener = Callable[[str], None]


def new_project(
    name: str,
    owner_id: str,
    *,
    template: Optional[str] = DEFAULT_TEMPLATE,
    description: Optional[str] = None,
    tags: Iterable[str] = (),
    is_public: bool = False,
    settings: Optional[ProjectSettings] = None,
    project_id: Optional[str] = None,
) -> Project:
    """Create a project, empty or seeded from a starter template."""
    if not isinstance(owner_id, str) or not owner_id.strip():
        raise InvalidStateError("A project requires an owner")
    created = now_utc()
    return Project(
        id=project_id or new_project_id(),
        name=validate_name(name, "Project name", MAX_PROJECT_NAME_LENGTH),
        owner_id=owner_id,
        created_at=created,
        updated_at=created,
        description=validate_description(description),
        tags=validate_tags(tags),
        is_public=bool(is_public),
        settings=settings or ProjectSettings(),
        files=build_template(template) if template else (),
    )


class FileTreeStore:
    """
    Single source of truth for the currently loaded project.

    Every mutation validates against the current snapshot, builds a new
    immutable Project, then swaps it in. A failed mutation therefore never
    leaves a partial change behind, and readers on other threads always see
    a whole snapshot.
    """

    def __init__(self, on_mutation: Optional[MutationListener] = None) -> None:
        self._project: Optional[Project] = None
        self._active_id: Optional[str] = None
        self._on_mutation = on_mutation

    # ----------------------------
    # Lifecycle
    # ----------------------------
    def load(self, project: Project) -> None:
        """Replace the current project wholesale. Not a mutation."""
        validate_tree(project.files)
        self._project = project
        self._active_id = None

    def unload(self) -> None:
        self._project = None
        self._active_id = None

    # ----------------------------
    # Read APIs
    # ----------------------------
    @property
    def loaded(self) -> bool:
        return self._project is not None

    @property
    def project(self) -> Project:
        """Return the current project snapshot. Requires load() first."""
        if self._project is None:
            raise InvalidStateError("No project is loaded")
        return self._project

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    def get(self, node_id: str) -> Node:
        return validate_exists(self.project.node_map(), node_id, "Node")

    def children(self, folder_id: Optional[str] = None) -> list[Node]:
        """Direct children of a folder (or of the root when ``None``)."""
        nodes = self.project.node_map()
        if folder_id is not None:
            validate_exists(nodes, folder_id, "Folder")
        return list(derive_children(nodes.values()).get(folder_id, []))

    def nested_view(self) -> list[dict]:
        return build_nested_view(self.project.files)

    def first_file(self) -> Optional[FileNode]:
        for node in self.project.files:
            if isinstance(node, FileNode):
                return node
        return None

    # ----------------------------
    # Node mutations
    # ----------------------------
    def create_file(
        self,
        name: str,
        content: str = "",
        parent_id: Optional[str] = None,
    ) -> str:
        node = FileNode(
            id=new_node_id(),
            name=validate_name(name),
            parent_id=parent_id,
            content=validate_content(content),
        )
        return self._add(node)

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> str:
        node = FolderNode(id=new_node_id(), name=validate_name(name), parent_id=parent_id)
        return self._add(node)

    def update_content(self, node_id: str, content: str) -> None:
        project = self.project
        node = project.find(node_id)
        if not isinstance(node, FileNode):
            raise NotFoundError(f"File does not exist: {node_id}", details={"id": node_id})
        content = validate_content(content, node_id)
        if node.content == content:
            return
        self._replace_node(replace(node, content=content))

    def rename_node(self, node_id: str, new_name: str) -> None:
        node = self.get(node_id)
        trimmed = validate_name(new_name)
        self._replace_node(replace(node, name=trimmed))

    def move_node(self, node_id: str, new_parent_id: Optional[str]) -> None:
        nodes = self.project.node_map()
        node = validate_exists(nodes, node_id, "Node")
        validate_parent(nodes, new_parent_id)
        validate_move_no_cycle(nodes, node_id, new_parent_id)
        self._replace_node(replace(node, parent_id=new_parent_id))

    def delete_node(self, node_id: str) -> list[str]:
        """
        Delete a node and, for folders, every transitive descendant.

        Returns the removed ids (target first).
        """
        project = self.project
        node = validate_exists(project.node_map(), node_id, "Node")

        removed = [node_id]
        if node.is_folder:
            removed.extend(collect_descendants(project.files, node_id))
        gone = set(removed)

        self._commit(files=tuple(n for n in project.files if n.id not in gone))
        if self._active_id in gone:
            self._active_id = None
        return removed

    def set_active(self, node_id: Optional[str]) -> None:
        """Select a node. Pure selection state, never marks dirty."""
        if node_id is not None:
            self.get(node_id)
        self._active_id = node_id

    # ----------------------------
    # Project-level mutations
    # ----------------------------
    def update_settings(
        self,
        *,
        theme: Optional[Theme | str] = None,
        autosave: Optional[bool] = None,
    ) -> ProjectSettings:
        settings = self.project.settings.merged(theme=theme, autosave=autosave)
        if settings != self.project.settings:
            self._commit(settings=settings)
        return settings

    def update_details(
        self,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        is_public: Optional[bool] = None,
    ) -> None:
        changes: dict = {}
        if name is not None:
            changes["name"] = validate_name(name, "Project name", MAX_PROJECT_NAME_LENGTH)
        if description is not None:
            changes["description"] = validate_description(description)
        if tags is not None:
            changes["tags"] = validate_tags(tags)
        if is_public is not None:
            changes["is_public"] = bool(is_public)
        if changes:
            self._commit(**changes)

    # ----------------------------
    # Internals
    # ----------------------------
    def _add(self, node: Node) -> str:
        project = self.project
        validate_node(node, project.node_map())
        self._commit(files=project.files + (node,))
        return node.id

    def _replace_node(self, updated: Node) -> None:
        project = self.project
        files = tuple(updated if n.id == updated.id else n for n in project.files)
        self._commit(files=files)

    def _commit(self, **changes) -> None:
        project = self.project
        self._project = replace(project, updated_at=touch(project.updated_at), **changes)
        if self._on_mutation is not None:
            self._on_mutation(project.id)
