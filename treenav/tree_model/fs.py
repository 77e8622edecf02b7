"""Filesystem scanning into the snapshot shape consumed by ``TreeStore.load``."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .store import DIR_TYPE, FILE_TYPE


@dataclass(frozen=True)
class DirectoryChild:
    """One directory child seen during a scan."""

    name: str
    path: Path
    is_dir: bool


def list_directory_children(
    directory: Path,
    show_hidden: bool,
) -> tuple[list[DirectoryChild], Exception | None]:
    """List children of ``directory`` with directories first, then by name.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be scanned.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                children.append(DirectoryChild(name=name, path=Path(child.path), is_dir=is_dir))
    except (PermissionError, OSError) as exc:
        return [], exc

    children.sort(key=lambda item: (not item.is_dir, item.name.lower()))
    return children, None


def build_snapshot(root: Path, show_hidden: bool = False) -> list[dict[str, object]]:
    """Return snapshot entries for the children of ``root``.

    Each entry is ``{"name", "path", "type", "children"}`` with ``type`` set
    to ``"d"`` or ``"f"``. Paths are absolute strings.
    """
    root = root.resolve()

    def walk(directory: Path) -> list[dict[str, object]]:
        children, scan_error = list_directory_children(directory, show_hidden)
        if scan_error is not None:
            logger.debug(f"Skipping unreadable directory {directory}: {scan_error}")
            return []
        entries: list[dict[str, object]] = []
        for child in children:
            entries.append(
                {
                    "name": child.name,
                    "path": str(child.path),
                    "type": DIR_TYPE if child.is_dir else FILE_TYPE,
                    "children": walk(child.path) if child.is_dir else [],
                }
            )
        return entries

    return walk(root)


__all__ = [
    "DirectoryChild",
    "list_directory_children",
    "build_snapshot",
]
