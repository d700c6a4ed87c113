"""Project aggregate and its settings."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from projsync.errors import ValidationError

from .node import Node


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True, slots=True)
class ProjectSettings:
    """Per-project editor settings, owned by exactly one Project."""

    theme: Theme = Theme.LIGHT
    autosave: bool = True

    def merged(
        self,
        *,
        theme: Optional[Theme | str] = None,
        autosave: Optional[bool] = None,
    ) -> ProjectSettings:
        """Apply a partial update; unspecified fields keep their value."""
        if theme is not None:
            try:
                theme = Theme(theme)
            except ValueError as exc:
                raise ValidationError(
                    "settings.theme must be 'light' or 'dark'", details={"theme": theme}
                ) from exc
        return ProjectSettings(
            theme=theme if theme is not None else self.theme,
            autosave=bool(autosave) if autosave is not None else self.autosave,
        )


@dataclass(frozen=True, slots=True)
class Project:
    """
    Aggregate root: project metadata plus the flat node collection.

    ``files`` keeps insertion order; any nested view is derived from it.
    ``version`` is the optimistic concurrency token assigned by the remote
    store (0 for a project the remote has never seen).
    """

    id: str
    name: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    description: Optional[str] = None
    tags: tuple[str, ...] = ()
    is_public: bool = False
    settings: ProjectSettings = field(default_factory=ProjectSettings)
    files: tuple[Node, ...] = ()
    version: int = 0

    def node_map(self) -> dict[str, Node]:
        """Index the flat collection by node id (insertion order kept)."""
        return {node.id: node for node in self.files}

    def find(self, node_id: str) -> Optional[Node]:
        for node in self.files:
            if node.id == node_id:
                return node
        return None

    def without_content(self) -> Project:
        """Return a copy whose file contents are blanked (for listings)."""
        stripped = tuple(
            replace(node, content="") if not node.is_folder else node
            for node in self.files
        )
        return replace(self, files=stripped)
