"""Result models for flushes and listing queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from .project import Project

FlushStatus = Literal["saved", "failed"]


@dataclass(slots=True)
class FlushResult:
    """Outcome of one flush attempt for one project snapshot."""

    status: FlushStatus
    project_id: str
    revision: int

    synced: bool = False
    remote_version: Optional[int] = None

    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "saved"


@dataclass(slots=True)
class ProjectPage:
    """One page of a listing query."""

    items: list[Project] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0
    pages: int = 0
