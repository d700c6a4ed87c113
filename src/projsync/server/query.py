"""Listing query over stored projects: visibility, search, tags, paging."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from projsync.errors import ValidationError
from projsync.models import Project, ProjectPage

from .access import can_read

MAX_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class ProjectQuery:
    """Filters for ``GET /projects``. All filters compose with AND."""

    page: int = 1
    limit: int = 10
    search: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    is_public: Optional[bool] = None

    def __post_init__(self) -> None:
        if not isinstance(self.page, int) or self.page < 1:
            raise ValidationError("page must be a positive integer")
        if not isinstance(self.limit, int) or not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

    def matches(self, project: Project) -> bool:
        if self.search:
            needle = self.search.strip().lower()
            haystacks = (project.name, project.description or "")
            if needle and not any(needle in h.lower() for h in haystacks):
                return False
        if self.tags:
            if not set(self.tags).intersection(project.tags):
                return False
        if self.is_public is not None and project.is_public != self.is_public:
            return False
        return True


def run_query(
    projects: Iterable[Project],
    user_id: Optional[str],
    query: ProjectQuery,
) -> ProjectPage:
    """
    Filter, sort and paginate.

    Visibility comes first: own OR public for a signed-in user, public only
    for anonymous requesters. Search never widens that set.
    """
    visible = [p for p in projects if can_read(p, user_id) and query.matches(p)]
    visible.sort(key=lambda p: p.updated_at, reverse=True)

    total = len(visible)
    start = (query.page - 1) * query.limit
    return ProjectPage(
        items=visible[start:start + query.limit],
        page=query.page,
        limit=query.limit,
        total=total,
        pages=math.ceil(total / query.limit),
    )
