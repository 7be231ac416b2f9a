"""One-directory listing and the exclusion ("interesting") predicate."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE = r"^\.|^#|~$|\.py[co]$|^__pycache__$|^node_modules$"


def make_interesting_predicate(exclude: str | re.Pattern[str] | None) -> Callable[[str], bool]:
    """Return ``name -> bool`` rejecting bare names matched by ``exclude``.

    ``None`` or an empty pattern keeps everything.
    """
    if exclude is None or exclude == "":
        return lambda _name: True
    pattern = re.compile(exclude) if isinstance(exclude, str) else exclude
    return lambda name: pattern.search(name) is None


@dataclass(frozen=True)
class DirectoryChild:
    """One interesting entry of a listed directory."""

    name: str
    path: Path
    is_dir: bool


def list_directory_children(
    directory: Path,
    is_interesting: Callable[[str], bool],
) -> tuple[list[DirectoryChild], Exception | None]:
    """List interesting children of ``directory`` sorted by name.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be scanned; children is then empty.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not is_interesting(name):
                    continue
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                children.append(DirectoryChild(name=name, path=Path(child.path), is_dir=is_dir))
    except (PermissionError, OSError) as exc:
        logger.debug("skipping unreadable directory %s: %s", directory, exc)
        return [], exc

    children.sort(key=lambda item: item.name)
    return children, None


__all__ = [
    "DEFAULT_EXCLUDE",
    "DirectoryChild",
    "make_interesting_predicate",
    "list_directory_children",
]
