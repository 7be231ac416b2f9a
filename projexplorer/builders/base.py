"""Common interface shared by all tree-construction strategies."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..tree_model import Branch

CompletionCallback = Callable[[Branch], None]


class TreeBuilder:
    """Build a tree for a root directory and hand it to a callback.

    Asynchronous strategies return from ``build`` before the tree exists and
    call ``on_complete`` later from the executor; ``cancel`` stops them.
    """

    is_async = False

    def __init__(self) -> None:
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    def build(self, root_dir: Path, on_complete: CompletionCallback) -> None:
        raise NotImplementedError

    def cancel(self) -> None:
        """Stop an in-flight build; a no-op for blocking strategies."""
        self._in_progress = False


__all__ = ["CompletionCallback", "TreeBuilder"]
