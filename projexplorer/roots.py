"""Project-root resolution collaborators.

A root function takes no arguments and returns an absolute directory; the
originating location is implicit (the process working directory by default).
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .tree_model import normalize_path


def default_root_function() -> Path:
    """Use the current working directory as the project root."""
    return normalize_path(Path.cwd())


def root_function_for(origin: Path) -> Callable[[], Path]:
    """Return a root function anchored at ``origin`` (a file or directory)."""
    anchored = normalize_path(origin)

    def resolve() -> Path:
        return anchored if anchored.is_dir() else anchored.parent

    return resolve


def resolve_root(root_function: Callable[[], Path]) -> Path:
    """Call ``root_function`` and normalize its answer to an absolute path."""
    return normalize_path(root_function())


__all__ = ["default_root_function", "root_function_for", "resolve_root"]
