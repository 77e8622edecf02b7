"""Tree node datatype shared by the store, navigator, and event handlers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class TreeNode:
    """One file or directory row owned by a ``TreeStore``.

    ``parent_tid`` is a lookup key into the owning store, not a reference.
    Equality is identity: two nodes with equal fields from different tree
    builds are different nodes.
    """

    tid: str
    name: str
    path: str
    is_dir: bool
    level: int
    parent_tid: str | None = None
    children: list[TreeNode] = field(default_factory=list, repr=False)
    open: bool = False
    is_last_node: bool = False

    @property
    def is_parent(self) -> bool:
        """Return whether this node currently has child nodes."""
        return bool(self.children)
