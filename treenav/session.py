"""Save and restore expansion state and open tabs per workspace root.

Session records live in the JSON config under ``sessions`` keyed by the
resolved workspace root. Restoring is tolerant: paths that no longer exist in
the rebuilt tree are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from . import config
from .editor import EditorTabs
from .navigation import TreeNavigator


@dataclass(frozen=True)
class SessionRecord:
    """Persisted UI state for one workspace root."""

    open_paths: tuple[str, ...] = ()
    file_paths: tuple[str, ...] = ()
    current_file: str | None = None

    def to_json(self) -> dict[str, object]:
        return {
            "open_paths": list(self.open_paths),
            "file_paths": list(self.file_paths),
            "current_file": self.current_file,
        }

    @classmethod
    def from_json(cls, raw: dict[str, object]) -> SessionRecord:
        """Build a record from config data, dropping non-string paths."""

        def strings(key: str) -> tuple[str, ...]:
            value = raw.get(key)
            if not isinstance(value, list):
                return ()
            return tuple(item for item in value if isinstance(item, str) and item)

        current_file = raw.get("current_file")
        return cls(
            open_paths=strings("open_paths"),
            file_paths=strings("file_paths"),
            current_file=current_file if isinstance(current_file, str) and current_file else None,
        )


@dataclass
class RestoreResult:
    expanded: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    reopened: list[str] = field(default_factory=list)


def _session_key(root: Path) -> str:
    return str(root.resolve())


def capture_session(
    navigator: TreeNavigator,
    tabs: EditorTabs | None = None,
    previous: SessionRecord | None = None,
) -> SessionRecord:
    """Return the current open paths and tab paths as a record.

    Without ``tabs`` the tab fields are carried over from ``previous``.
    """
    open_paths = tuple(navigator.open_paths())
    if tabs is None:
        if previous is None:
            return SessionRecord(open_paths=open_paths)
        return SessionRecord(
            open_paths=open_paths,
            file_paths=previous.file_paths,
            current_file=previous.current_file,
        )
    current = tabs.current()
    return SessionRecord(
        open_paths=open_paths,
        file_paths=tuple(tab.path for tab in tabs.data),
        current_file=current.path if current is not None else None,
    )


def save_session(root: Path, navigator: TreeNavigator, tabs: EditorTabs | None = None) -> SessionRecord:
    """Store the session for ``root``; saved tabs survive a save without ``tabs``."""
    sessions = config.load_sessions()
    key = _session_key(root)
    previous = SessionRecord.from_json(sessions[key]) if key in sessions else None
    record = capture_session(navigator, tabs, previous)
    sessions[key] = record.to_json()
    config.save_sessions(sessions)
    logger.debug(f"Saved session for {root} with {len(record.open_paths)} open paths")
    return record


def load_session(root: Path) -> SessionRecord | None:
    raw = config.load_sessions().get(_session_key(root))
    if raw is None:
        return None
    return SessionRecord.from_json(raw)


def apply_session(
    record: SessionRecord,
    navigator: TreeNavigator,
    tabs: EditorTabs | None = None,
) -> RestoreResult:
    """Expand saved paths and reopen saved tabs in the navigator's store."""
    store = navigator.store
    result = RestoreResult()
    for path in record.open_paths:
        node = store.get_node_by_tid(navigator.find_tid_by_path(path))
        if node is None or not store.expand_node(node, True):
            logger.warning(f"Skipping saved open path no longer in tree: {path}")
            result.missing.append(path)
            continue
        result.expanded.append(path)

    if tabs is None:
        return result

    current_tid: str | None = None
    for path in record.file_paths:
        node = store.get_node_by_tid(navigator.find_tid_by_path(path))
        if node is None:
            logger.warning(f"Skipping saved tab no longer in tree: {path}")
            result.missing.append(path)
            continue
        tab, _error = tabs.open_file(node)
        if tab is None:
            result.missing.append(path)
            continue
        result.reopened.append(path)
        if path == record.current_file:
            current_tid = tab.tid
    if current_tid is not None:
        tabs.set_current(current_tid)
    return result


def restore_session(root: Path, navigator: TreeNavigator, tabs: EditorTabs | None = None) -> RestoreResult:
    """Load the record for ``root`` and apply it; empty result when none saved."""
    record = load_session(root)
    if record is None:
        return RestoreResult()
    return apply_session(record, navigator, tabs)
