"""Tree node datatypes shared by builders, cache, and outline rendering."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Branch:
    """Directory node: a name plus ordered, mutable children.

    Children are file-name strings (leaves) or nested ``Branch`` nodes.
    Order is only guaranteed after ``sort_tree``.
    """

    name: str
    children: list["TreeNode"] = field(default_factory=list)

    def child_named(self, name: str) -> "TreeNode | None":
        """Return the direct child called ``name`` or ``None``."""
        for child in self.children:
            if node_name(child) == name:
                return child
        return None

    def index_of(self, name: str) -> int | None:
        for idx, child in enumerate(self.children):
            if node_name(child) == name:
                return idx
        return None


TreeNode = Branch | str


def node_name(node: TreeNode) -> str:
    """Return the bare name of a leaf or branch."""
    return node.name if isinstance(node, Branch) else node


def relabel(node: TreeNode, name: str) -> TreeNode:
    """Return ``node`` carrying ``name``; branches keep their children list."""
    if isinstance(node, Branch):
        return Branch(name, node.children)
    return name


def copy_tree(node: TreeNode) -> TreeNode:
    """Deep-copy a tree; leaves are immutable strings and are shared."""
    if isinstance(node, Branch):
        return Branch(node.name, [copy_tree(child) for child in node.children])
    return node


__all__ = [
    "Branch",
    "TreeNode",
    "node_name",
    "relabel",
    "copy_tree",
]
