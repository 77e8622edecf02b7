"""Public package surface for treenav.

Exports the tree store, the navigator, and ``main`` for programmatic CLI
invocation. Most implementation lives in submodules under ``treenav``.
"""

from __future__ import annotations

from .errors import PreconditionViolation, SnapshotError, StructuralInconsistency, TreeNavError
from .navigation import TreeNavigator
from .tree_model import TreeNode, TreeStore


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = [
    "main",
    "TreeNode",
    "TreeStore",
    "TreeNavigator",
    "TreeNavError",
    "PreconditionViolation",
    "StructuralInconsistency",
    "SnapshotError",
]
