"""Tests for opening tree nodes into editor tabs."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from treenav.editor import IMAGE_MODE, TEXT_MODE, EditorTabs, FileContent, detect_mode, load_file_content, read_text
from treenav.navigation import TreeNavigator
from treenav.tree_model import TreeStore


def _store() -> TreeStore:
    return TreeStore.from_snapshot(
        [
            {
                "path": "/w/src",
                "type": "d",
                "children": [
                    {"path": "/w/src/main.py", "type": "f"},
                    {"path": "/w/src/logo.png", "type": "f"},
                ],
            },
            {"path": "/w/notes.txt", "type": "f"},
        ]
    )


def _fake_load(path: str) -> FileContent:
    if path.endswith(".png"):
        return FileContent(path=path, succ=True, mode=IMAGE_MODE)
    return FileContent(path=path, succ=True, mode="python", content=f"# {path}\n")


class EditorTabsTests(unittest.TestCase):
    def test_open_file_creates_current_tab(self) -> None:
        store = _store()
        main_py = store.transform_to_array()[1]
        tabs = EditorTabs(load=_fake_load)

        tab, error = tabs.open_file(main_py)

        self.assertIsNone(error)
        self.assertEqual(tab.tid, main_py.tid)
        self.assertEqual(tab.content, "# /w/src/main.py\n")
        self.assertIs(tabs.current(), tab)

    def test_reopening_switches_to_existing_tab_without_loading(self) -> None:
        store = _store()
        _src, main_py, _logo, notes = store.transform_to_array()
        load = mock.Mock(side_effect=_fake_load)
        tabs = EditorTabs(load=load)
        first, _ = tabs.open_file(main_py)
        tabs.open_file(notes)

        again, error = tabs.open_file(main_py)

        self.assertIsNone(error)
        self.assertIs(again, first)
        self.assertEqual(tabs.current_tid, main_py.tid)
        self.assertEqual(load.call_count, 2)
        self.assertEqual(len(tabs.data), 2)

    def test_images_go_to_external_viewer(self) -> None:
        store = _store()
        logo = store.transform_to_array()[2]
        opened: list[str] = []
        tabs = EditorTabs(load=_fake_load, open_external=opened.append)

        tab, error = tabs.open_file(logo)

        self.assertIsNone(tab)
        self.assertIsNone(error)
        self.assertEqual(opened, ["/w/src/logo.png"])
        self.assertEqual(tabs.data, [])

    def test_load_failure_returns_message(self) -> None:
        store = _store()
        notes = store.transform_to_array()[3]
        tabs = EditorTabs(load=lambda path: FileContent(path=path, succ=False, msg="gone"))

        tab, error = tabs.open_file(notes)

        self.assertIsNone(tab)
        self.assertEqual(error, "gone")
        self.assertIsNone(tabs.current())

    def test_close_moves_current_to_previous_tab(self) -> None:
        store = _store()
        _src, main_py, _logo, notes = store.transform_to_array()
        tabs = EditorTabs(load=_fake_load)
        tabs.open_file(main_py)
        tabs.open_file(notes)

        self.assertTrue(tabs.close(notes.tid))
        self.assertEqual(tabs.current_tid, main_py.tid)
        self.assertTrue(tabs.close(main_py.tid))
        self.assertIsNone(tabs.current_tid)
        self.assertFalse(tabs.close(main_py.tid))

    def test_tabs_under_scopes_by_ancestor(self) -> None:
        store = _store()
        src, main_py, _logo, notes = store.transform_to_array()
        tabs = EditorTabs(load=_fake_load)
        tabs.open_file(main_py)
        tabs.open_file(notes)

        scoped = tabs.tabs_under(TreeNavigator(store), src.tid)

        self.assertEqual([tab.path for tab in scoped], ["/w/src/main.py"])


class FileLoadingTests(unittest.TestCase):
    def test_load_file_content_detects_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "demo.py"
            target.write_text("print('hi')\n", encoding="utf-8")

            loaded = load_file_content(str(target))

            self.assertTrue(loaded.succ)
            self.assertEqual(loaded.mode, "python")
            self.assertEqual(loaded.content, "print('hi')\n")

    def test_load_file_content_flags_images_without_reading(self) -> None:
        loaded = load_file_content("/nowhere/picture.png")

        self.assertTrue(loaded.succ)
        self.assertEqual(loaded.mode, IMAGE_MODE)

    def test_load_file_content_reports_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            loaded = load_file_content(str(Path(tmp) / "missing.py"))

            self.assertFalse(loaded.succ)
            self.assertIn("missing.py", loaded.msg)

    def test_unknown_extension_falls_back_to_text_mode(self) -> None:
        self.assertEqual(detect_mode(Path("data.unknownext")), TEXT_MODE)

    def test_read_text_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "latin.txt"
            target.write_bytes(b"caf\xe9\n")

            self.assertEqual(read_text(target), "café\n")


if __name__ == "__main__":
    unittest.main()
