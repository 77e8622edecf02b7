"""Tree event handlers with explicit selection context.

Click handlers record the current node in a ``SelectionContext`` owned by the
caller instead of module state. Keyboard moves return the adjacent visible
row computed by ``TreeNavigator``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .editor import EditorTab, EditorTabs
from .navigation import TreeNavigator
from .tree_model import TreeNode

FILE_MENU = "file"
DIR_MENU = "dir"


@dataclass
class SelectionContext:
    cur_node: TreeNode | None = None
    cur_editor: EditorTab | None = None
    last_error: str | None = None


@dataclass
class TreeEvents:
    """Click, double-click, right-click, and arrow-key handling for one tree."""

    navigator: TreeNavigator
    tabs: EditorTabs
    context: SelectionContext

    def _select(self, node: TreeNode) -> None:
        self.context.cur_node = node
        self.navigator.store.select_node(node)

    def on_click(self, node: TreeNode | None) -> None:
        if node is None:
            return
        self._select(node)

    def on_double_click(self, node: TreeNode | None) -> EditorTab | None:
        """Open the clicked file; records a load failure in ``last_error``."""
        if node is None:
            return None
        self.context.cur_node = node
        tab, error = self.tabs.open_file(node)
        self.context.last_error = error
        if tab is not None:
            self.context.cur_editor = tab
        return tab

    def on_right_click(self, node: TreeNode | None) -> str | None:
        """Select ``node`` and return which context menu applies to it."""
        if node is None:
            return None
        self._select(node)
        return DIR_MENU if node.is_dir else FILE_MENU

    def move_down(self, node: TreeNode) -> TreeNode | None:
        """Return the visible row below ``node``, or ``None`` at the bottom."""
        if self.navigator.is_bottom_node(node):
            return None
        if node.open and node.children:
            return node.children[0]
        sibling = self.navigator.store.get_next_node(node)
        if sibling is not None:
            return sibling
        return self.navigator.next_visible_node(node)

    def move_up(self, node: TreeNode) -> TreeNode | None:
        """Return the visible row above ``node``, or ``None`` at the top."""
        store = self.navigator.store
        previous = store.get_pre_node(node)
        if previous is None:
            return store.get_parent_node(node)
        if previous.open and previous.children:
            return self.navigator.last_visible_descendant(previous)
        return previous

    def select_down(self) -> TreeNode | None:
        """Move the current selection one row down and return the new row."""
        return self._step(self.move_down)

    def select_up(self) -> TreeNode | None:
        return self._step(self.move_up)

    def _step(self, move: Callable[[TreeNode], TreeNode | None]) -> TreeNode | None:
        current = self.context.cur_node
        if current is None:
            roots = self.navigator.store.get_nodes()
            target = roots[0] if roots else None
        else:
            target = move(current)
        if target is not None:
            self._select(target)
        return target
