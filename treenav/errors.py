"""Exception hierarchy for treenav.

Hierarchy
---------
TreeNavError (base)
├── PreconditionViolation   – caller passed a node the query cannot accept
├── StructuralInconsistency – node graph breaks the acyclic-forest invariant
└── SnapshotError           – malformed tree snapshot handed to the store

Lookups that find nothing are not errors: they return ``None`` or an empty
list and leave the decision to the caller.
"""

from __future__ import annotations

from typing import Any


class TreeNavError(Exception):
    """Base exception for treenav."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class PreconditionViolation(TreeNavError):
    """Query invoked on a node it is not defined for."""

    pass


class StructuralInconsistency(TreeNavError):
    """Ancestor or descendant walk exceeded the depth bound."""

    pass


class SnapshotError(TreeNavError):
    """Snapshot entry is missing required fields or has the wrong shape."""

    pass


__all__ = [
    "TreeNavError",
    "PreconditionViolation",
    "StructuralInconsistency",
    "SnapshotError",
]
