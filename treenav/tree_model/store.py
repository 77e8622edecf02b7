"""In-memory tree store: owns nodes, ids, open flags, and widget selection.

The store is the only writer of node structure. A rebuild assembles the new
forest off to the side and swaps it in with one assignment, so readers see
either the old tree or the new one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from loguru import logger

from ..errors import SnapshotError
from .types import TreeNode

DIR_TYPE = "d"
FILE_TYPE = "f"


@dataclass(frozen=True)
class _Forest:
    roots: list[TreeNode]
    by_tid: dict[str, TreeNode]


class TreeStore:
    """Forest of ``TreeNode`` objects built from a snapshot."""

    def __init__(self, tree_id: str = "files") -> None:
        self.tree_id = tree_id
        self._forest = _Forest(roots=[], by_tid={})
        self._selected_tid: str | None = None

    @classmethod
    def from_snapshot(cls, entries: Iterable[Mapping[str, object]], tree_id: str = "files") -> TreeStore:
        """Create a store and load ``entries`` into it."""
        store = cls(tree_id=tree_id)
        store.load(entries)
        return store

    def load(self, entries: Iterable[Mapping[str, object]]) -> None:
        """Replace the whole tree with nodes built from ``entries``.

        Every node returned before this call is invalidated.
        """
        by_tid: dict[str, TreeNode] = {}
        counter = 0

        def build(raw_entries: Iterable[Mapping[str, object]], parent: TreeNode | None, level: int) -> list[TreeNode]:
            nonlocal counter
            siblings: list[TreeNode] = []
            for raw in raw_entries:
                if not isinstance(raw, Mapping):
                    raise SnapshotError("snapshot entry must be a mapping", {"entry": raw})
                path = raw.get("path")
                if not isinstance(path, str) or not path:
                    raise SnapshotError("snapshot entry has no path", {"entry": dict(raw)})
                entry_type = raw.get("type", FILE_TYPE)
                if entry_type not in (DIR_TYPE, FILE_TYPE):
                    raise SnapshotError(f"unknown entry type {entry_type!r}", {"path": path})
                name = raw.get("name")
                if not isinstance(name, str) or not name:
                    name = path.rstrip("/").rsplit("/", 1)[-1] or path

                counter += 1
                node = TreeNode(
                    tid=f"{self.tree_id}_{counter}",
                    name=name,
                    path=path,
                    is_dir=entry_type == DIR_TYPE,
                    level=level,
                    parent_tid=parent.tid if parent is not None else None,
                )
                by_tid[node.tid] = node
                raw_children = raw.get("children") or []
                if not isinstance(raw_children, list):
                    raise SnapshotError("children must be a list", {"path": path})
                if raw_children and not node.is_dir:
                    raise SnapshotError("file entry cannot have children", {"path": path})
                node.children = build(raw_children, node, level + 1)
                siblings.append(node)
            if siblings:
                siblings[-1].is_last_node = True
            return siblings

        roots = build(entries, None, 0)
        self._forest = _Forest(roots=roots, by_tid=by_tid)
        self._selected_tid = None
        logger.debug(f"Loaded tree {self.tree_id!r} with {len(by_tid)} nodes")

    def get_nodes(self) -> list[TreeNode]:
        """Return root nodes in display order."""
        return self._forest.roots

    def transform_to_array(self, nodes: list[TreeNode] | None = None) -> list[TreeNode]:
        """Flatten ``nodes`` (default: all roots) in pre-order, ignoring open state."""
        pending = list(reversed(self._forest.roots if nodes is None else nodes))
        flat: list[TreeNode] = []
        while pending:
            node = pending.pop()
            flat.append(node)
            pending.extend(reversed(node.children))
        return flat

    def __len__(self) -> int:
        return len(self._forest.by_tid)

    def contains(self, node: TreeNode) -> bool:
        """Return whether ``node`` belongs to the current tree build."""
        return self._forest.by_tid.get(node.tid) is node

    def get_node_by_tid(self, tid: str | None) -> TreeNode | None:
        if tid is None:
            return None
        return self._forest.by_tid.get(tid)

    def get_parent_node(self, node: TreeNode) -> TreeNode | None:
        return self.get_node_by_tid(node.parent_tid)

    def _siblings(self, node: TreeNode) -> list[TreeNode]:
        parent = self.get_parent_node(node)
        return parent.children if parent is not None else self._forest.roots

    def get_next_node(self, node: TreeNode) -> TreeNode | None:
        """Return the following sibling, or ``None`` for a last sibling."""
        if node.is_last_node:
            return None
        siblings = self._siblings(node)
        for idx, sibling in enumerate(siblings):
            if sibling is node:
                return siblings[idx + 1] if idx + 1 < len(siblings) else None
        return None

    def get_pre_node(self, node: TreeNode) -> TreeNode | None:
        """Return the preceding sibling, or ``None`` for a first sibling."""
        siblings = self._siblings(node)
        for idx, sibling in enumerate(siblings):
            if sibling is node:
                return siblings[idx - 1] if idx > 0 else None
        return None

    def expand_node(self, node: TreeNode, expand: bool | None = None) -> bool:
        """Set or toggle ``node.open``.

        Files and empty directories cannot be opened; the call is a no-op that
        returns ``False``. Otherwise returns the new open state.
        """
        if not node.is_dir or not node.children:
            return False
        node.open = (not node.open) if expand is None else bool(expand)
        return node.open

    def expand_all(self, expand: bool) -> None:
        """Open or close every directory that has children."""
        for node in self.transform_to_array():
            if node.is_dir and node.children:
                node.open = expand

    def select_node(self, node: TreeNode) -> None:
        self._selected_tid = node.tid

    def selected_node(self) -> TreeNode | None:
        return self.get_node_by_tid(self._selected_tid)


__all__ = [
    "DIR_TYPE",
    "FILE_TYPE",
    "TreeStore",
]
