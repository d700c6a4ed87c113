"""Data model for project tree nodes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union


class NodeKind(str, Enum):
    """Node variants. The value is the wire name used in documents."""

    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True, slots=True)
class FileNode:
    """
    A text file in a project.

    Notes:
        - ``parent_id`` is the only statement of tree structure; ``None``
          means the file sits at the project root.
    """

    kind: ClassVar[NodeKind] = NodeKind.FILE

    id: str
    name: str
    parent_id: Optional[str] = None
    content: str = ""

    @property
    def is_folder(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class FolderNode:
    """A folder in a project. Folders hold no content of their own."""

    kind: ClassVar[NodeKind] = NodeKind.FOLDER

    id: str
    name: str
    parent_id: Optional[str] = None

    @property
    def content(self) -> str:
        return ""

    @property
    def is_folder(self) -> bool:
        return True


Node = Union[FileNode, FolderNode]
