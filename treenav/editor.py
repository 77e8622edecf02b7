"""Editor tabs opened from tree nodes.

Opening a node reuses an existing tab for the same node id, ignores
directories, hands images to an external viewer callback, and otherwise
loads the file into a new current tab. Load failures come back as a message
string instead of an exception so the UI can show an alert.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger
from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from .navigation import TreeNavigator
from .tree_model import TreeNode

TEXT_MODE = "text"
IMAGE_MODE = "img"


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def detect_mode(path: Path, content: str = "") -> str:
    """Return the Pygments lexer alias used as editor mode for ``path``."""
    try:
        lexer = get_lexer_for_filename(path.name, content)
    except ClassNotFound:
        return TEXT_MODE
    return lexer.aliases[0] if lexer.aliases else TEXT_MODE


@dataclass(frozen=True)
class FileContent:
    """Result of loading one file for the editor."""

    path: str
    succ: bool
    mode: str = TEXT_MODE
    content: str = ""
    msg: str = ""


def load_file_content(path: str) -> FileContent:
    """Load ``path`` for editing, flagging images and unreadable files."""
    target = Path(path)
    mime_type, _encoding = mimetypes.guess_type(target.name)
    if mime_type is not None and mime_type.startswith("image/"):
        return FileContent(path=path, succ=True, mode=IMAGE_MODE)
    try:
        content = read_text(target)
    except OSError as exc:
        return FileContent(path=path, succ=False, msg=f"Cannot open {path}: {exc}")
    return FileContent(path=path, succ=True, mode=detect_mode(target, content), content=content)


@dataclass
class EditorTab:
    tid: str
    path: str
    mode: str
    content: str


@dataclass
class EditorTabs:
    """Ordered open tabs plus the current one, keyed by tree node id."""

    load: Callable[[str], FileContent] = load_file_content
    open_external: Callable[[str], None] | None = None
    data: list[EditorTab] = field(default_factory=list)
    current_tid: str | None = None

    def find(self, tid: str) -> EditorTab | None:
        for tab in self.data:
            if tab.tid == tid:
                return tab
        return None

    def current(self) -> EditorTab | None:
        if self.current_tid is None:
            return None
        return self.find(self.current_tid)

    def set_current(self, tid: str) -> EditorTab | None:
        tab = self.find(tid)
        if tab is not None:
            self.current_tid = tid
        return tab

    def open_file(self, node: TreeNode) -> tuple[EditorTab | None, str | None]:
        """Open ``node`` in a tab.

        Returns ``(tab, error)``. ``tab`` is ``None`` for directories, images,
        and failures; ``error`` is set only when loading failed.
        """
        existing = self.set_current(node.tid)
        if existing is not None:
            return existing, None
        if node.is_dir:
            return None, None

        loaded = self.load(node.path)
        if not loaded.succ:
            logger.warning(f"Failed to open {node.path}: {loaded.msg}")
            return None, loaded.msg
        if loaded.mode == IMAGE_MODE:
            if self.open_external is not None:
                self.open_external(loaded.path)
            return None, None

        tab = EditorTab(tid=node.tid, path=node.path, mode=loaded.mode, content=loaded.content)
        self.data.append(tab)
        self.current_tid = tab.tid
        logger.debug(f"Opened {node.path} in mode {tab.mode!r}")
        return tab, None

    def close(self, tid: str) -> bool:
        """Close the tab for ``tid``; the previous tab becomes current."""
        for idx, tab in enumerate(self.data):
            if tab.tid != tid:
                continue
            del self.data[idx]
            if self.current_tid == tid:
                fallback = self.data[max(0, idx - 1)] if self.data else None
                self.current_tid = fallback.tid if fallback is not None else None
            return True
        return False

    def tabs_under(self, navigator: TreeNavigator, dir_tid: str) -> list[EditorTab]:
        """Return open tabs whose node lies somewhere under ``dir_tid``."""
        return [tab for tab in self.data if navigator.is_ancestor(tab.tid, dir_tid)]
