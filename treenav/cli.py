"""Command-line front door for treenav.

Scans a workspace directory into a tree, applies expansion from flags or the
saved session, then answers one navigation query and prints the result.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import config
from .errors import TreeNavError
from .navigation import TreeNavigator
from .session import restore_session, save_session
from .tree_model import TreeNode, TreeStore, build_snapshot

NONE_MARKER = "-"


def _resolve_node(navigator: TreeNavigator, raw_path: str) -> TreeNode:
    """Find the node for ``raw_path`` or exit with a not-found message."""
    path = str(Path(raw_path).resolve())
    node = navigator.store.get_node_by_tid(navigator.find_tid_by_path(path))
    if node is None:
        raise SystemExit(f"Path not in tree: {raw_path}")
    return node


def _format_node(node: TreeNode | None) -> str:
    return node.path if node is not None else NONE_MARKER


def run_query(navigator: TreeNavigator, args: argparse.Namespace) -> list[str]:
    """Evaluate the selected query and return output lines."""
    if args.find is not None:
        tid = navigator.find_tid_by_path(str(Path(args.find).resolve()))
        return [tid if tid is not None else NONE_MARKER]
    if args.next is not None:
        return [_format_node(navigator.next_visible_node(_resolve_node(navigator, args.next)))]
    if args.last is not None:
        return [_format_node(navigator.last_visible_descendant(_resolve_node(navigator, args.last)))]
    if args.is_bottom is not None:
        return ["yes" if navigator.is_bottom_node(_resolve_node(navigator, args.is_bottom)) else "no"]
    if args.visible:
        return [f"{'  ' * node.level}{node.name}{'/' if node.is_dir else ''}" for node in navigator.visible_nodes()]
    return navigator.open_paths()


def main(default_root: Path | None = None) -> None:
    """Parse CLI arguments, build the tree, and print one query result.

    ``default_root`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = argparse.ArgumentParser(description="Answer file-tree navigation queries for a workspace.")
    parser.add_argument("root", nargs="?", default=None, help="Workspace directory. Defaults to current directory.")
    parser.add_argument("--show-hidden", action="store_true", default=None, help="Include dot files.")
    parser.add_argument(
        "--no-show-hidden",
        dest="show_hidden",
        action="store_false",
        default=None,
        help="Skip dot files.",
    )
    parser.add_argument("--expand", action="append", default=[], metavar="PATH", help="Open a directory (repeatable).")
    parser.add_argument("--restore", action="store_true", help="Apply the saved session before querying.")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save open paths, and any --show-hidden/--no-show-hidden choice, after querying.",
    )
    query = parser.add_mutually_exclusive_group()
    query.add_argument("--list-open", action="store_true", help="Print open directory paths (default).")
    query.add_argument("--find", metavar="PATH", help="Print the node id for PATH.")
    query.add_argument("--next", metavar="PATH", help="Print the next visible node after PATH's subtree.")
    query.add_argument("--last", metavar="PATH", help="Print the last visible node under PATH.")
    query.add_argument("--is-bottom", metavar="PATH", help="Print whether PATH is the last visible row.")
    query.add_argument("--visible", action="store_true", help="Print visible rows indented by depth.")
    args = parser.parse_args()

    if default_root is None:
        default_root = Path.cwd()
    root = Path(args.root or default_root).resolve()
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    show_hidden = config.load_show_hidden() if args.show_hidden is None else args.show_hidden
    store = TreeStore.from_snapshot(build_snapshot(root, show_hidden=show_hidden))
    navigator = TreeNavigator(store, max_depth=config.load_max_tree_depth())

    if args.restore:
        restore_session(root, navigator)
    for raw_path in args.expand:
        store.expand_node(_resolve_node(navigator, raw_path), True)

    try:
        lines = run_query(navigator, args)
    except TreeNavError as exc:
        raise SystemExit(str(exc)) from exc

    if args.save:
        save_session(root, navigator)
        if args.show_hidden is not None:
            config.save_show_hidden(args.show_hidden)
    for line in lines:
        sys.stdout.write(line + "\n")


if __name__ == "__main__":
    main()
