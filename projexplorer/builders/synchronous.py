"""Blocking depth-first filesystem walk."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..tree_model import Branch
from .base import CompletionCallback, TreeBuilder
from .listing import list_directory_children

logger = logging.getLogger(__name__)


def walk_directory(directory: Path, is_interesting: Callable[[str], bool]) -> Branch:
    """Return the full tree below ``directory``; unreadable dirs stay empty."""
    branch = Branch(directory.name or str(directory))
    children, scan_error = list_directory_children(directory, is_interesting)
    if scan_error is not None:
        return branch
    for child in children:
        if child.is_dir:
            branch.children.append(walk_directory(child.path, is_interesting))
        else:
            branch.children.append(child.name)
    return branch


class SynchronousTreeBuilder(TreeBuilder):
    """Walk the whole hierarchy before returning control to the caller."""

    def __init__(self, is_interesting: Callable[[str], bool]) -> None:
        super().__init__()
        self.is_interesting = is_interesting

    def build(self, root_dir: Path, on_complete: CompletionCallback) -> None:
        self._in_progress = True
        try:
            tree = walk_directory(Path(root_dir), self.is_interesting)
        finally:
            self._in_progress = False
        logger.info("built tree for %s synchronously", root_dir)
        on_complete(tree)


__all__ = ["walk_directory", "SynchronousTreeBuilder"]
