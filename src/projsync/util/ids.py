from __future__ import annotations

import uuid


def new_uuid() -> str:
    """Generate a UUID4 string."""
    return str(uuid.uuid4())


def new_node_id() -> str:
    """Generate an id for a file or folder node (never reused)."""
    return new_uuid()


def new_project_id() -> str:
    """Generate an id for a project document."""
    return uuid.uuid4().hex
