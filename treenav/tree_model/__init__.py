"""Tree data model: node datatype, in-memory store, and filesystem snapshots.

The store owns every node and all parent/child edges. Navigation queries live
in ``treenav.navigation`` and only read what the store exposes.
"""

from __future__ import annotations

from .fs import DirectoryChild, build_snapshot, list_directory_children
from .store import DIR_TYPE, FILE_TYPE, TreeStore
from .types import TreeNode

__all__ = [
    "TreeNode",
    "TreeStore",
    "DIR_TYPE",
    "FILE_TYPE",
    "DirectoryChild",
    "list_directory_children",
    "build_snapshot",
]
