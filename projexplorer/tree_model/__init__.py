"""Canonical directory-tree model and its path index.

A tree is a ``Branch`` (directory name plus ordered children) whose leaves are
plain file-name strings. Helpers here sort, compress, flatten, and edit trees
by absolute path without any filesystem access.
"""

from __future__ import annotations

from .accumulate import build_tree_from_records
from .ordering import child_sort_key, compress_tree, flatten_tree, sort_children, sort_tree
from .path_index import (
    has_directory_marker,
    insert,
    lookup,
    normalize_path,
    relative_segments,
    remove,
)
from .types import Branch, TreeNode, copy_tree, node_name, relabel

__all__ = [
    "Branch",
    "TreeNode",
    "node_name",
    "relabel",
    "copy_tree",
    "child_sort_key",
    "sort_children",
    "sort_tree",
    "compress_tree",
    "flatten_tree",
    "build_tree_from_records",
    "normalize_path",
    "has_directory_marker",
    "relative_segments",
    "lookup",
    "insert",
    "remove",
]
