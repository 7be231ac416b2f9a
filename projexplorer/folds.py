"""Path-keyed set of folded directories that survives tree rebuilds."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from .tree_model import normalize_path
from .tree_model.path_index import PathLike


def _is_prefix(prefix: Path, path: Path) -> bool:
    """Component-wise prefix test; a path is a prefix of itself."""
    return path == prefix or path.is_relative_to(prefix)


class FoldSet:
    """Folded paths under one tree root, most specific entry wins.

    ``add`` drops members that are prefixes of the new path. ``remove`` drops
    the path and everything below it, then re-adds the parent when no folded
    descendant of it remains, unless the parent is the tree root.
    """

    def __init__(self, root: PathLike) -> None:
        self.root = normalize_path(root)
        self._paths: set[Path] = set()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return normalize_path(path) in self._paths

    def __iter__(self) -> Iterator[Path]:
        return iter(sorted(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def add(self, path: PathLike) -> None:
        target = normalize_path(path)
        self._paths = {member for member in self._paths if not _is_prefix(member, target)}
        self._paths.add(target)

    def remove(self, path: PathLike) -> None:
        target = normalize_path(path)
        self._paths = {member for member in self._paths if not _is_prefix(target, member)}
        parent = target.parent
        if parent == self.root or not parent.is_relative_to(self.root):
            return
        if any(_is_prefix(parent, member) for member in self._paths):
            return
        self._paths.add(parent)

    def discard(self, path: PathLike) -> None:
        """Forget exactly ``path`` without touching relatives."""
        self._paths.discard(normalize_path(path))

    def clear(self) -> None:
        self._paths.clear()

    def reset(self, root: PathLike) -> None:
        """Empty the set and rebind it to a new tree root."""
        self.root = normalize_path(root)
        self._paths.clear()


__all__ = ["FoldSet"]
