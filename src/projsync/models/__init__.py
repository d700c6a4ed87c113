"""Public model exports for projsync."""

from __future__ import annotations

from .node import FileNode, FolderNode, Node, NodeKind
from .project import Project, ProjectSettings, Theme
from .results import FlushResult, FlushStatus, ProjectPage

__all__ = [
    "FileNode",
    "FolderNode",
    "Node",
    "NodeKind",
    "Project",
    "ProjectSettings",
    "Theme",
    "FlushResult",
    "FlushStatus",
    "ProjectPage",
]
