"""Map filesystem paths to outline rows and back.

Lookups walk the rendered rows by indentation, so they honor inline-folder
compression: a row named ``a/b`` answers for both ``a`` and ``a/b``.
"""

from __future__ import annotations

import os
from collections.abc import Sequence

from ..tree_model import normalize_path, relative_segments
from ..tree_model.path_index import PathLike
from .rendering import OutlineLine


def locate(
    lines: Sequence[OutlineLine],
    root_dir: PathLike,
    path: PathLike,
    closest: bool = False,
) -> int | None:
    """Return the row index showing ``path``.

    Each logical segment is matched against the rows at the current
    indentation; a compressed row consumes several segments before the walk
    descends. On a miss, ``closest`` returns the deepest row matched so far
    instead of ``None``.
    """
    segments = relative_segments(root_dir, path)
    if not segments:
        return None

    best: int | None = None
    seg_idx = 0
    depth = 0
    start = 0
    while seg_idx < len(segments):
        found: int | None = None
        for idx in range(start, len(lines)):
            line = lines[idx]
            if line.depth < depth:
                break
            if line.depth == depth and line.segments[0] == segments[seg_idx]:
                found = idx
                break
        if found is None:
            return best if closest else None

        best = found
        line_segments = lines[found].segments
        offset = 1
        seg_idx += 1
        while offset < len(line_segments) and seg_idx < len(segments):
            if line_segments[offset] != segments[seg_idx]:
                return best if closest else None
            offset += 1
            seg_idx += 1
        depth += 1
        start = found + 1
    return best


def parent_line(lines: Sequence[OutlineLine], index: int) -> int | None:
    """Return the nearest preceding row one indentation level up."""
    if not 0 <= index < len(lines):
        return None
    depth = lines[index].depth
    idx = index - 1
    while idx >= 0:
        if lines[idx].depth < depth:
            return idx
        idx -= 1
    return None


def path_at(lines: Sequence[OutlineLine], root_dir: PathLike, index: int) -> str | None:
    """Return the absolute path shown on row ``index``.

    Directory paths end with a separator.
    """
    if not 0 <= index < len(lines):
        return None
    names: list[str] = []
    current: int | None = index
    while current is not None:
        names.append(lines[current].name)
        if lines[current].depth == 0:
            break
        current = parent_line(lines, current)
    segments: list[str] = []
    for name in reversed(names):
        segments.extend(name.split("/"))
    path = os.path.join(str(normalize_path(root_dir)), *segments)
    if lines[index].is_dir:
        path += os.sep
    return path


def directory_at(lines: Sequence[OutlineLine], root_dir: PathLike, index: int) -> str | None:
    """Return the directory row ``index`` belongs to: itself or its parent."""
    if not 0 <= index < len(lines):
        return None
    if lines[index].is_dir:
        return path_at(lines, root_dir, index)
    parent = parent_line(lines, index)
    if parent is None:
        return str(normalize_path(root_dir)) + os.sep
    return path_at(lines, root_dir, parent)


def next_sibling_line(lines: Sequence[OutlineLine], index: int) -> int | None:
    """Return the next row at the same depth under the same parent."""
    if not 0 <= index < len(lines):
        return None
    depth = lines[index].depth
    for idx in range(index + 1, len(lines)):
        if lines[idx].depth < depth:
            return None
        if lines[idx].depth == depth:
            return idx
    return None


def previous_sibling_line(lines: Sequence[OutlineLine], index: int) -> int | None:
    """Return the previous row at the same depth under the same parent."""
    if not 0 <= index < len(lines):
        return None
    depth = lines[index].depth
    for idx in range(index - 1, -1, -1):
        if lines[idx].depth < depth:
            return None
        if lines[idx].depth == depth:
            return idx
    return None


__all__ = [
    "locate",
    "parent_line",
    "path_at",
    "directory_at",
    "next_sibling_line",
    "previous_sibling_line",
]
