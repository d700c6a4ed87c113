"""Project tree model, validation and the in-memory store."""

from __future__ import annotations

from .store import FileTreeStore, new_project
from .templates import TEMPLATES, build_template
from .validators import validate_node, validate_tree
from .views import build_nested_view, collect_descendants, derive_children

__all__ = [
    "FileTreeStore",
    "new_project",
    "TEMPLATES",
    "build_template",
    "validate_node",
    "validate_tree",
    "derive_children",
    "collect_descendants",
    "build_nested_view",
]
