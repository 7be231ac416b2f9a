"""Canonical ordering, inline-folder compression, and flattening of trees."""

from __future__ import annotations

from .types import Branch, TreeNode, node_name


def child_sort_key(node: TreeNode) -> tuple[bool, str]:
    """Sort directories before files and then by plain string order."""
    return (not isinstance(node, Branch), node_name(node))


def sort_children(branch: Branch) -> None:
    """Sort only the direct children of ``branch``."""
    branch.children.sort(key=child_sort_key)


def sort_tree(tree: Branch) -> Branch:
    """Sort ``tree`` recursively in place and return it."""
    sort_children(tree)
    for child in tree.children:
        if isinstance(child, Branch):
            sort_tree(child)
    return tree


def _compress_branch(branch: Branch) -> Branch:
    name = branch.name
    children = branch.children
    while len(children) == 1 and isinstance(children[0], Branch):
        only = children[0]
        name = f"{name}/{only.name}"
        children = only.children
    return Branch(
        name,
        [_compress_branch(child) if isinstance(child, Branch) else child for child in children],
    )


def compress_tree(tree: Branch) -> Branch:
    """Return a copy with single-directory chains merged into ``a/b`` names.

    A branch whose only child is another branch absorbs it, repeatedly, until
    it has zero or several children or its single child is a file. The root
    keeps its own name because it is never rendered. The input is not mutated.
    """
    return Branch(
        tree.name,
        [_compress_branch(child) if isinstance(child, Branch) else child for child in tree.children],
    )


def flatten_tree(tree: Branch) -> list[str]:
    """Return the root-relative ``/``-joined path of every file, pre-order."""
    out: list[str] = []

    def walk(branch: Branch, prefix: str) -> None:
        for child in branch.children:
            if isinstance(child, Branch):
                walk(child, f"{prefix}{child.name}/")
            else:
                out.append(prefix + child)

    walk(tree, "")
    return out


__all__ = [
    "child_sort_key",
    "sort_children",
    "sort_tree",
    "compress_tree",
    "flatten_tree",
]
