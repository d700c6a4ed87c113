"""Strict validation helpers for the project tree and project fields."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional

from projsync.errors import (
    DuplicateIdError,
    InvalidParentError,
    NotFoundError,
    ValidationError,
)
from projsync.models import Node

MAX_NODE_NAME_LENGTH = 100
MAX_PROJECT_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_TAG_LENGTH = 20


def validate_name(name: str, what: str = "Name", limit: int = MAX_NODE_NAME_LENGTH) -> str:
    """Return the trimmed name or raise ValidationError."""
    if not isinstance(name, str):
        raise ValidationError(f"{what} must be a string")
    trimmed = name.strip()
    if not trimmed:
        raise ValidationError(f"{what} must not be empty")
    if len(trimmed) > limit:
        raise ValidationError(
            f"{what} cannot exceed {limit} characters",
            details={"length": len(trimmed)},
        )
    return trimmed


def validate_exists(nodes: Mapping[str, Node], node_id: str, what: str) -> Node:
    node = nodes.get(node_id)
    if node is None:
        raise NotFoundError(f"{what} does not exist: {node_id}", details={"id": node_id})
    return node


def validate_parent(nodes: Mapping[str, Node], parent_id: Optional[str]) -> None:
    """A parent, when given, must be an existing folder."""
    if parent_id is None:
        return
    parent = nodes.get(parent_id)
    if parent is None:
        raise InvalidParentError(
            f"Parent does not exist: {parent_id}", details={"parent_id": parent_id}
        )
    if not parent.is_folder:
        raise InvalidParentError(
            f"Parent must be a folder: {parent_id}", details={"parent_id": parent_id}
        )


def validate_node(node: Node, existing: Mapping[str, Node]) -> None:
    """
    Check a node that is about to join ``existing``.

    Raises ValidationError (name), DuplicateIdError or InvalidParentError.
    """
    validate_name(node.name)
    if node.id in existing:
        raise DuplicateIdError(f"Duplicate node id: {node.id}", details={"id": node.id})
    if node.parent_id == node.id:
        raise InvalidParentError("A node cannot be its own parent", details={"id": node.id})
    validate_parent(existing, node.parent_id)


def validate_move_no_cycle(
    nodes: Mapping[str, Node],
    target_id: str,
    new_parent_id: Optional[str],
) -> None:
    """
    Reject cycles: walk from new_parent towards the root; hitting target
    means the move would make target its own ancestor.
    """
    if new_parent_id is None:
        return
    if target_id == new_parent_id:
        raise InvalidParentError("Move would create a cycle (target == new parent)")

    visited: set[str] = set()
    cur: Optional[str] = new_parent_id
    while cur is not None and cur not in visited:
        if cur == target_id:
            raise InvalidParentError(
                "Move would create a cycle",
                details={"id": target_id, "parent_id": new_parent_id},
            )
        visited.add(cur)
        parent = nodes.get(cur)
        cur = parent.parent_id if parent is not None else None


def validate_tree(nodes: Iterable[Node]) -> dict[str, Node]:
    """
    Validate a whole flat collection (load/import path) and index it.

    Parents may appear after their children in the collection, so ids are
    collected first and parent links checked afterwards.
    """
    indexed: dict[str, Node] = {}
    for node in nodes:
        validate_name(node.name)
        if node.id in indexed:
            raise DuplicateIdError(f"Duplicate node id: {node.id}", details={"id": node.id})
        indexed[node.id] = node

    for node in indexed.values():
        if node.parent_id == node.id:
            raise InvalidParentError("A node cannot be its own parent", details={"id": node.id})
        validate_parent(indexed, node.parent_id)

    for node in indexed.values():
        _check_acyclic(indexed, node)
    return indexed


def _check_acyclic(nodes: Mapping[str, Node], node: Node) -> None:
    seen: set[str] = {node.id}
    cur = node.parent_id
    while cur is not None:
        if cur in seen:
            raise InvalidParentError("Parent chain contains a cycle", details={"id": node.id})
        seen.add(cur)
        cur = nodes[cur].parent_id


def validate_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Trim, bound and de-duplicate tags (first occurrence wins)."""
    result: list[str] = []
    for tag in tags:
        trimmed = validate_name(tag, "Tag", MAX_TAG_LENGTH)
        if trimmed not in result:
            result.append(trimmed)
    return tuple(result)


def validate_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    if not isinstance(description, str):
        raise ValidationError("Description must be a string")
    trimmed = description.strip()
    if len(trimmed) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
            details={"length": len(trimmed)},
        )
    return trimmed


def validate_content(content: Optional[str], node_id: Optional[str] = None) -> str:
    """File content is text; ``None`` means empty."""
    if content is None:
        return ""
    if not isinstance(content, str):
        raise ValidationError("File content must be text", details={"id": node_id})
    return content
