"""Tests for click handlers and arrow-key movement over visible rows."""

from __future__ import annotations

import unittest
from unittest import mock

from treenav.editor import EditorTabs, FileContent
from treenav.navigation import TreeNavigator
from treenav.selection import DIR_MENU, FILE_MENU, SelectionContext, TreeEvents
from treenav.tree_model import TreeStore


def _dir(path: str, *children: dict[str, object]) -> dict[str, object]:
    return {"path": path, "type": "d", "children": list(children)}


def _file(path: str) -> dict[str, object]:
    return {"path": path, "type": "f"}


def _events(load=None) -> tuple[TreeEvents, TreeStore]:
    store = TreeStore.from_snapshot(
        [
            _dir("/a", _file("/a/a1"), _dir("/a/a2", _file("/a/a2/a2a"))),
            _file("/b"),
        ]
    )
    if load is None:
        load = lambda path: FileContent(path=path, succ=True, mode="python", content="x = 1\n")
    events = TreeEvents(
        navigator=TreeNavigator(store),
        tabs=EditorTabs(load=load),
        context=SelectionContext(),
    )
    return events, store


def _node(store: TreeStore, path: str):
    for node in store.transform_to_array():
        if node.path == path:
            return node
    raise AssertionError(path)


class ClickHandlerTests(unittest.TestCase):
    def test_click_selects_and_records_current_node(self) -> None:
        events, store = _events()
        b = _node(store, "/b")

        events.on_click(b)

        self.assertIs(events.context.cur_node, b)
        self.assertIs(store.selected_node(), b)

    def test_click_without_node_is_ignored(self) -> None:
        events, store = _events()

        events.on_click(None)

        self.assertIsNone(events.context.cur_node)
        self.assertIsNone(store.selected_node())

    def test_right_click_reports_menu_kind(self) -> None:
        events, store = _events()

        self.assertEqual(events.on_right_click(_node(store, "/a")), DIR_MENU)
        self.assertEqual(events.on_right_click(_node(store, "/b")), FILE_MENU)
        self.assertIs(store.selected_node(), _node(store, "/b"))
        self.assertIsNone(events.on_right_click(None))

    def test_double_click_opens_file_and_sets_current_editor(self) -> None:
        events, store = _events()
        b = _node(store, "/b")

        tab = events.on_double_click(b)

        self.assertIsNotNone(tab)
        self.assertIs(events.context.cur_editor, tab)
        self.assertIs(events.context.cur_node, b)
        self.assertIsNone(events.context.last_error)

    def test_double_click_failure_is_recorded(self) -> None:
        events, store = _events(load=lambda path: FileContent(path=path, succ=False, msg="denied"))

        tab = events.on_double_click(_node(store, "/b"))

        self.assertIsNone(tab)
        self.assertEqual(events.context.last_error, "denied")
        self.assertIsNone(events.context.cur_editor)

    def test_double_click_directory_loads_nothing(self) -> None:
        load = mock.Mock()
        events, store = _events(load=load)

        self.assertIsNone(events.on_double_click(_node(store, "/a")))
        load.assert_not_called()


class KeyboardMoveTests(unittest.TestCase):
    def test_move_down_walks_visible_rows_in_order(self) -> None:
        events, store = _events()
        store.expand_all(True)
        rows = []
        node = store.get_nodes()[0]
        while node is not None:
            rows.append(node.path)
            node = events.move_down(node)

        self.assertEqual(rows, ["/a", "/a/a1", "/a/a2", "/a/a2/a2a", "/b"])

    def test_move_up_walks_visible_rows_in_reverse(self) -> None:
        events, store = _events()
        store.expand_all(True)
        rows = []
        node = _node(store, "/b")
        while node is not None:
            rows.append(node.path)
            node = events.move_up(node)

        self.assertEqual(rows, ["/b", "/a/a2/a2a", "/a/a2", "/a/a1", "/a"])

    def test_moves_skip_closed_subtrees(self) -> None:
        events, store = _events()
        store.expand_node(_node(store, "/a"), True)

        self.assertIs(events.move_down(_node(store, "/a/a2")), _node(store, "/b"))
        self.assertIs(events.move_up(_node(store, "/b")), _node(store, "/a/a2"))

    def test_select_down_starts_at_first_root_and_stops_at_bottom(self) -> None:
        events, store = _events()

        self.assertIs(events.select_down(), _node(store, "/a"))
        self.assertIs(events.select_down(), _node(store, "/b"))
        self.assertIsNone(events.select_down())
        self.assertIs(events.context.cur_node, _node(store, "/b"))
        self.assertIs(events.select_up(), _node(store, "/a"))


if __name__ == "__main__":
    unittest.main()
