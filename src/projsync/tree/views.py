"""Read-only projections derived from the flat node collection."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import Any, Optional

from projsync.models import Node


def derive_children(nodes: Iterable[Node]) -> dict[Optional[str], list[Node]]:
    """
    Group nodes by parent id.

    Root-level nodes are listed under ``None``. Every folder gets an entry,
    possibly empty. Order within a group is the flat collection's order.
    """
    children: dict[Optional[str], list[Node]] = {None: []}
    ordered = list(nodes)
    for node in ordered:
        if node.is_folder:
            children.setdefault(node.id, [])
    for node in ordered:
        children.setdefault(node.parent_id, []).append(node)
    return children


def collect_descendants(nodes: Iterable[Node], folder_id: str) -> list[str]:
    """Return ids of all transitive descendants of ``folder_id`` (BFS order)."""
    children = derive_children(nodes)
    result: list[str] = []
    q: deque[str] = deque([folder_id])
    visited: set[str] = {folder_id}

    while q:
        cur = q.popleft()
        for child in children.get(cur, []):
            if child.id in visited:
                continue
            visited.add(child.id)
            result.append(child.id)
            q.append(child.id)
    return result


def build_nested_view(nodes: Iterable[Node]) -> list[dict[str, Any]]:
    """
    Build the nested display view.

    Folders carry a ``children`` list, files never do. The result is a fresh
    structure on every call; mutating it has no effect on the project.
    """
    children = derive_children(nodes)

    def render(node: Node) -> dict[str, Any]:
        item: dict[str, Any] = {
            "id": node.id,
            "name": node.name,
            "type": node.kind.value,
            "parentId": node.parent_id,
        }
        if node.is_folder:
            item["children"] = [render(child) for child in children.get(node.id, [])]
        else:
            item["content"] = node.content
        return item

    return [render(node) for node in children[None]]
