"""Render a tree as a tab-indented outline with collapsible ranges."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..tree_model import Branch, compress_tree, copy_tree, normalize_path, sort_tree
from ..tree_model.path_index import PathLike

INDENT = "\t"
FOLD_PLACEHOLDER = " ..."


@dataclass(frozen=True)
class OutlineLine:
    """One rendered row; compressed directory names contain ``/``."""

    depth: int
    name: str
    is_dir: bool

    @property
    def text(self) -> str:
        return INDENT * self.depth + self.name + ("/" if self.is_dir else "")

    @property
    def segments(self) -> list[str]:
        """Logical path segments covered by this row."""
        return self.name.split("/") if self.is_dir else [self.name]


@dataclass(frozen=True)
class FoldRange:
    """Lines ``start + 1 .. end - 1`` are the children of header ``start``."""

    start: int
    end: int

    def __contains__(self, idx: object) -> bool:
        return isinstance(idx, int) and self.start < idx < self.end


@dataclass
class RenderedOutline:
    root: Path
    lines: list[OutlineLine] = field(default_factory=list)
    ranges: dict[int, FoldRange] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "".join(line.text + "\n" for line in self.lines)


def render_outline(tree: Branch, root_dir: PathLike, compress: bool = True) -> RenderedOutline:
    """Sort a copy of ``tree``, optionally compress it, and lay out its rows.

    The root itself is not emitted; its children sit at depth zero. Every
    directory with at least one child row gets a ``FoldRange``.
    """
    shaped = sort_tree(copy_tree(tree))
    if compress:
        shaped = compress_tree(shaped)
    outline = RenderedOutline(root=normalize_path(root_dir))

    def emit(branch: Branch, depth: int) -> None:
        for child in branch.children:
            if not isinstance(child, Branch):
                outline.lines.append(OutlineLine(depth, child, False))
                continue
            start = len(outline.lines)
            outline.lines.append(OutlineLine(depth, child.name, True))
            emit(child, depth + 1)
            end = len(outline.lines)
            if end > start + 1:
                outline.ranges[start] = FoldRange(start, end)

    emit(shaped, 0)
    return outline


__all__ = [
    "INDENT",
    "FOLD_PLACEHOLDER",
    "OutlineLine",
    "FoldRange",
    "RenderedOutline",
    "render_outline",
]
