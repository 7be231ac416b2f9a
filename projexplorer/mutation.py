"""Single-path edits applied to a live tree without a full rebuild."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .tree_model import (
    Branch,
    TreeNode,
    copy_tree,
    has_directory_marker,
    insert,
    lookup,
    normalize_path,
    relative_segments,
    remove,
)
from .tree_model.path_index import PathLike

if TYPE_CHECKING:
    from .session import ExplorerSession

logger = logging.getLogger(__name__)


class MutationEngine:
    """Create, delete, rename, and copy entries for one session.

    Every public operation cancels an in-flight build, runs the filesystem
    call (whose ``OSError`` propagates with the tree untouched), patches the
    session tree through the path index, and repaints. ``rebuild`` restarts a
    full build afterwards; by default only when a build was interrupted.
    """

    def __init__(self, session: "ExplorerSession") -> None:
        self.session = session

    def _is_below_root(self, path: PathLike) -> bool:
        root = self.session.root
        if root is None:
            return False
        segments = relative_segments(root, path)
        return bool(segments)

    def _require_below_root(self, path: PathLike) -> Path:
        if not self._is_below_root(path):
            raise ValueError(f"path is not below the explorer root: {path}")
        return normalize_path(path)

    def add(self, path: PathLike, existing_node: TreeNode | None = None) -> bool:
        """Insert a leaf, empty branch, or ``existing_node`` at ``path``.

        Paths outside the root are ignored, as are paths the builders would
        not show: excluded names and entries whose parent is not in the tree.
        """
        tree = self.session.tree
        if tree is None or not self._is_below_root(path):
            return False
        target = normalize_path(path)
        if not self.session.is_interesting(target.name):
            logger.debug("not showing excluded entry %s", target)
            return False
        if not isinstance(lookup(tree, self.session.root, target.parent), Branch):
            logger.debug("not showing %s: parent directory is not in the tree", target)
            return False
        insert(tree, self.session.root, path, existing_node)
        return True

    def delete(self, path: PathLike) -> bool:
        tree = self.session.tree
        if tree is None or not self._is_below_root(path):
            return False
        return remove(tree, self.session.root, path) is not None

    def create(self, path: PathLike, rebuild: bool | None = None) -> None:
        """Create an empty file, or a directory when ``path`` ends in a separator."""
        target = self._require_below_root(path)
        interrupted = self.session.cancel_build()
        if has_directory_marker(path):
            self.session.fs_ops.make_directory(target)
        else:
            self.session.fs_ops.create_file(target)
        self.add(path)
        logger.info("created %s", target)
        self._commit(interrupted if rebuild is None else rebuild)

    def delete_path(self, path: PathLike, rebuild: bool | None = None) -> bool:
        """Delete a file or a directory tree; returns ``False`` when declined."""
        target = self._require_below_root(path)
        if not self.session.confirm_delete(target):
            return False
        interrupted = self.session.cancel_build()
        if target.is_dir() and not target.is_symlink():
            self.session.fs_ops.delete_directory(target)
        else:
            self.session.fs_ops.delete_file(target)
        self.delete(target)
        logger.info("deleted %s", target)
        self._commit(interrupted if rebuild is None else rebuild)
        return True

    def rename(self, old: PathLike, new: PathLike, rebuild: bool | None = None) -> None:
        source = self._require_below_root(old)
        target = normalize_path(new)
        interrupted = self.session.cancel_build()
        node = self._existing_node(source)
        self.session.fs_ops.rename(source, target)
        self.delete(source)
        self.add(target, node if node is not None else self._node_from_disk(target))
        logger.info("renamed %s to %s", source, target)
        self._commit(interrupted if rebuild is None else rebuild)

    def copy(self, old: PathLike, new: PathLike, rebuild: bool | None = None) -> None:
        source = self._require_below_root(old)
        target = normalize_path(new)
        interrupted = self.session.cancel_build()
        node = self._existing_node(source)
        self.session.fs_ops.copy(source, target)
        self.add(target, copy_tree(node) if node is not None else self._node_from_disk(target))
        logger.info("copied %s to %s", source, target)
        self._commit(interrupted if rebuild is None else rebuild)

    def _existing_node(self, path: Path) -> TreeNode | None:
        tree = self.session.tree
        if tree is None:
            return None
        return lookup(tree, self.session.root, path)

    @staticmethod
    def _node_from_disk(path: Path) -> TreeNode:
        return Branch(path.name) if path.is_dir() else path.name

    def _commit(self, rebuild: bool) -> None:
        session = self.session
        if session.tree is not None:
            session.set_tree(session.tree)
        if rebuild:
            session.refresh()


__all__ = ["MutationEngine"]
