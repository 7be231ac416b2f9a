"""Path-segment lookup, insertion, and removal against a canonical tree.

Paths are absolute filesystem paths interpreted relative to the directory the
tree was built from. A trailing separator marks a directory when inserting.
"""

from __future__ import annotations

import os
from pathlib import Path

from .ordering import sort_children
from .types import Branch, TreeNode, relabel

PathLike = str | os.PathLike


def normalize_path(path: PathLike) -> Path:
    """Return ``path`` absolute and normalized without resolving symlinks."""
    return Path(os.path.abspath(os.fspath(path)))


def has_directory_marker(path: PathLike) -> bool:
    """Return whether ``path`` is spelled with a trailing separator."""
    raw = os.fspath(path)
    return raw.endswith("/") or raw.endswith(os.sep)


def relative_segments(root_dir: PathLike, path: PathLike) -> list[str] | None:
    """Split ``path`` into segments below ``root_dir``.

    Returns ``[]`` for the root itself and ``None`` when ``path`` lies outside
    the root.
    """
    root = normalize_path(root_dir)
    target = normalize_path(path)
    try:
        relative = target.relative_to(root)
    except ValueError:
        return None
    return list(relative.parts)


def _walk(tree: Branch, segments: list[str]) -> TreeNode | None:
    node: TreeNode = tree
    for segment in segments:
        if not isinstance(node, Branch):
            return None
        child = node.child_named(segment)
        if child is None:
            return None
        node = child
    return node


def lookup(tree: Branch, root_dir: PathLike, path: PathLike) -> TreeNode | None:
    """Return the node at ``path`` or ``None`` when any segment is absent."""
    segments = relative_segments(root_dir, path)
    if segments is None:
        return None
    return _walk(tree, segments)


def _parent_branch(tree: Branch, root_dir: PathLike, path: PathLike) -> tuple[Branch, str]:
    segments = relative_segments(root_dir, path)
    if segments is None:
        raise ValueError(f"path is outside the tree root: {os.fspath(path)}")
    if not segments:
        raise ValueError("the tree root cannot be inserted or removed")
    parent = _walk(tree, segments[:-1])
    if not isinstance(parent, Branch):
        raise ValueError(f"parent directory is not in the tree: {os.fspath(path)}")
    return parent, segments[-1]


def insert(
    tree: Branch,
    root_dir: PathLike,
    path: PathLike,
    node: TreeNode | None = None,
) -> TreeNode:
    """Attach a leaf, an empty branch, or ``node`` at ``path``.

    Without ``node`` a trailing separator creates an empty directory branch and
    anything else a file leaf. A given ``node`` is relabelled to the terminal
    segment. An existing child of the same name is replaced. Only the parent's
    children are re-sorted. The parent must already exist.
    """
    parent, name = _parent_branch(tree, root_dir, path)
    if node is None:
        new_node: TreeNode = Branch(name) if has_directory_marker(path) else name
    else:
        new_node = relabel(node, name)

    existing_idx = parent.index_of(name)
    if existing_idx is None:
        parent.children.append(new_node)
    else:
        parent.children[existing_idx] = new_node
    sort_children(parent)
    return new_node


def remove(tree: Branch, root_dir: PathLike, path: PathLike) -> TreeNode | None:
    """Detach and return the node at ``path``; no-op when it is absent."""
    segments = relative_segments(root_dir, path)
    if segments is None:
        return None
    if not segments:
        raise ValueError("the tree root cannot be inserted or removed")
    parent = _walk(tree, segments[:-1])
    if not isinstance(parent, Branch):
        return None
    idx = parent.index_of(segments[-1])
    if idx is None:
        return None
    return parent.children.pop(idx)


__all__ = [
    "PathLike",
    "normalize_path",
    "has_directory_marker",
    "relative_segments",
    "lookup",
    "insert",
    "remove",
]
