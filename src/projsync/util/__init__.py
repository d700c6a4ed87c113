from .ids import new_node_id, new_project_id, new_uuid
from .time import normalize_dt, now_utc, parse_rfc3339, to_rfc3339, touch

__all__ = [
    "new_uuid",
    "new_node_id",
    "new_project_id",
    "now_utc",
    "touch",
    "parse_rfc3339",
    "to_rfc3339",
    "normalize_dt",
]
