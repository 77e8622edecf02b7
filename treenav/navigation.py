"""Visibility-aware navigation queries over a ``TreeStore``.

This module intentionally has no UI concerns and never mutates nodes.
Every answer is derived from the current ``open`` flags at call time.
Walks are iterative and bounded by ``max_depth``; exceeding the bound means
the store no longer holds a forest and raises ``StructuralInconsistency``.
"""

from __future__ import annotations

from .errors import PreconditionViolation, StructuralInconsistency
from .tree_model import TreeNode, TreeStore

DEFAULT_MAX_DEPTH = 4096


class TreeNavigator:
    """Read-only queries answering "what is shown where" for one store."""

    def __init__(self, store: TreeStore, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.store = store
        self.max_depth = max(1, max_depth)

    def _require_member(self, node: TreeNode) -> None:
        if not self.store.contains(node):
            raise PreconditionViolation(
                f"node {node.tid} ({node.path}) is not part of the current tree",
                {"tid": node.tid, "path": node.path},
            )

    def _check_depth(self, steps: int, node: TreeNode) -> None:
        if steps > self.max_depth:
            raise StructuralInconsistency(
                f"walk from {node.path} exceeded depth bound {self.max_depth}",
                {"tid": node.tid, "max_depth": self.max_depth},
            )

    def last_visible_descendant(self, node: TreeNode) -> TreeNode:
        """Return the deepest last visible node inside ``node``'s subtree.

        Follows the last child while it is open. ``node`` must have children.
        """
        self._require_member(node)
        if not node.children:
            raise PreconditionViolation(
                f"{node.path} has no children",
                {"tid": node.tid, "path": node.path},
            )
        current = node.children[-1]
        steps = 1
        while current.open and current.children:
            steps += 1
            self._check_depth(steps, node)
            current = current.children[-1]
        return current

    def next_visible_node(self, node: TreeNode) -> TreeNode | None:
        """Return the row after ``node``'s subtree in display order.

        Root-level nodes use their plain next sibling. Deeper nodes skip their
        own siblings and climb to the nearest ancestor with a next sibling.
        ``None`` means the end of the tree.
        """
        self._require_member(node)
        current = node
        steps = 0
        while current.level != 0:
            parent = self.store.get_parent_node(current)
            if parent is None:
                raise PreconditionViolation(
                    f"{current.path} is at level {current.level} but has no parent",
                    {"tid": current.tid},
                )
            sibling = self.store.get_next_node(parent)
            if sibling is not None:
                return sibling
            current = parent
            steps += 1
            self._check_depth(steps, node)
        if current is not node:
            # the ancestor climb already found no sibling at the root level
            return None
        return self.store.get_next_node(current)

    def is_bottom_node(self, node: TreeNode) -> bool:
        """Return whether ``node`` is the last visible row of the whole tree.

        Hidden nodes (any closed ancestor) are never the bottom.
        """
        self._require_member(node)
        if node.open:
            return False
        current = node
        steps = 0
        while True:
            if not current.is_last_node:
                return False
            parent = self.store.get_parent_node(current)
            if parent is None:
                return True
            if not parent.open:
                return False
            current = parent
            steps += 1
            self._check_depth(steps, node)

    def find_tid_by_path(self, path: str) -> str | None:
        """Return the id of the first node whose path equals ``path``.

        Scans the flattened tree front to back on every call.
        """
        for node in self.store.transform_to_array():
            if node.path == path:
                return node.tid
        return None

    def open_paths(self) -> list[str]:
        """Return paths of every open node in flattened order.

        Closed ancestors do not hide an open descendant from this list.
        """
        return [node.path for node in self.store.transform_to_array() if node.open]

    def is_ancestor(self, candidate_tid: str, ancestor_tid: str) -> bool:
        """Return whether ``ancestor_tid`` is a proper ancestor of ``candidate_tid``."""
        node = self.store.get_node_by_tid(candidate_tid)
        if node is None:
            return False
        start = node
        steps = 0
        while node is not None and node.parent_tid is not None:
            if node.parent_tid == ancestor_tid:
                return True
            node = self.store.get_node_by_tid(node.parent_tid)
            steps += 1
            self._check_depth(steps, start)
        return False

    def visible_nodes(self) -> list[TreeNode]:
        """Return currently visible nodes in display order."""
        pending = list(reversed(self.store.get_nodes()))
        visible: list[TreeNode] = []
        while pending:
            node = pending.pop()
            visible.append(node)
            if node.open:
                pending.extend(reversed(node.children))
        return visible


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "TreeNavigator",
]
