"""Record Merge Utilities

Zephyr Scale only exposes test case updates as full-record replacement (PUT).
These helpers overlay the caller's changes onto the current record so that
fields the caller omitted keep their previous value.
"""

import copy
from typing import Dict, Any, List


def merge_record(current: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay changed fields onto a copy of the current record.

    Each supplied top-level field replaces the current value as a whole, so
    a changed reference such as ``folder`` carries no stale keys (``self``)
    from the previous target. Keys absent from ``changes`` are kept as they
    are. Neither input is modified.

    Args:
        current: Full record as returned by the API
            Example: {"name": "Login", "folder": {"id": 1, "self": "..."}, "labels": ["a"]}
        changes: Fields supplied by the caller
            Example: {"folder": {"id": 7}}

    Returns:
        Merged record.
        Example: {"name": "Login", "folder": {"id": 7}, "labels": ["a"]}

    Raises:
        ValueError: If changes is empty
    """
    if not changes:
        raise ValueError("At least one field must be provided for update")

    merged = copy.deepcopy(current)
    for field_name, field_value in changes.items():
        merged[field_name] = copy.deepcopy(field_value)

    return merged


def changed_fields(current: Dict[str, Any], merged: Dict[str, Any]) -> List[str]:
    """List the top-level field names whose value differs after a merge."""
    return sorted(
        name for name in merged
        if name not in current or current[name] != merged[name]
    )
