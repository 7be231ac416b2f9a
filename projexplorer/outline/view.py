"""Rendered outline plus per-range fold state kept in sync with a ``FoldSet``."""

from __future__ import annotations

from pathlib import Path

from ..folds import FoldSet
from ..tree_model import Branch, normalize_path
from ..tree_model.path_index import PathLike
from .navigation import locate, path_at
from .rendering import FOLD_PLACEHOLDER, OutlineLine, RenderedOutline, render_outline


class OutlineView:
    """Paint trees and fold or unfold directory ranges by row index.

    Fold state lives in two places: the row indices folded in the current
    rendering and the path-keyed ``FoldSet`` that outlives it. ``paint``
    rebuilds the former from the latter.
    """

    def __init__(self, root_dir: PathLike, fold_set: FoldSet | None = None, compress: bool = True) -> None:
        self.root = normalize_path(root_dir)
        self.fold_set = fold_set if fold_set is not None else FoldSet(self.root)
        self.compress = compress
        self.outline = RenderedOutline(root=self.root)
        self._folded: set[int] = set()

    @property
    def lines(self) -> list[OutlineLine]:
        return self.outline.lines

    def paint(self, tree: Branch) -> None:
        """Render ``tree`` and re-fold every path the fold set still resolves."""
        self.outline = render_outline(tree, self.root, compress=self.compress)
        self._folded = set()
        self.restore_folds()

    def restore_folds(self) -> None:
        for path in list(self.fold_set):
            idx = locate(self.lines, self.root, path)
            if idx is None or idx not in self.outline.ranges:
                self.fold_set.discard(path)
                continue
            self._folded.add(idx)

    def line_path(self, index: int) -> Path | None:
        raw = path_at(self.lines, self.root, index)
        return normalize_path(raw) if raw is not None else None

    def is_folded(self, index: int) -> bool:
        return index in self._folded

    def is_visible(self, index: int) -> bool:
        return not any(index in self.outline.ranges[header] for header in self._folded)

    def _nested_headers(self, index: int) -> list[int]:
        fold_range = self.outline.ranges[index]
        return [header for header in sorted(self.outline.ranges) if header in fold_range]

    def fold(self, index: int) -> bool:
        """Fold the directory on row ``index``; returns whether it has a range.

        Nested directories already folded (on screen or in the fold set) are
        folded again in the same pass so unfold then fold round-trips.
        """
        if index not in self.outline.ranges:
            return False
        nested = [
            header
            for header in self._nested_headers(index)
            if header in self._folded or self.line_path(header) in self.fold_set
        ]
        # Deeper rows first: FoldSet.add drops ancestors of what it adds.
        for header in reversed(nested):
            self._folded.add(header)
            self.fold_set.add(self.line_path(header))
        self._folded.add(index)
        self.fold_set.add(self.line_path(index))
        return True

    def unfold(self, index: int) -> bool:
        """Open the directory on row ``index``; nested folds stay as they were."""
        if index not in self._folded:
            return False
        path = self.line_path(index)
        parent_was_folded = path.parent in self.fold_set
        self._folded.discard(index)
        self.fold_set.remove(path)
        for header in reversed(self._nested_headers(index)):
            if header in self._folded:
                self.fold_set.add(self.line_path(header))
        # remove() may re-add the parent; keep it only if its row is folded.
        if not parent_was_folded and path.parent in self.fold_set:
            if locate(self.lines, self.root, path.parent) not in self._folded:
                self.fold_set.discard(path.parent)
        return True

    def toggle(self, index: int) -> bool:
        if index in self._folded:
            return self.unfold(index)
        return self.fold(index)

    def fold_all(self) -> None:
        for header in sorted(self.outline.ranges, reverse=True):
            self._folded.add(header)
            self.fold_set.add(self.line_path(header))

    def unfold_all(self) -> None:
        self._folded.clear()
        self.fold_set.clear()

    def reveal(self, path: PathLike) -> int | None:
        """Unfold every range hiding ``path`` and return its row."""
        index = locate(self.lines, self.root, path)
        if index is None:
            return None
        for header in sorted(self._folded):
            if index in self.outline.ranges[header]:
                self.unfold(header)
        return index

    def visible_rows(self) -> list[int]:
        rows: list[int] = []
        idx = 0
        while idx < len(self.lines):
            rows.append(idx)
            if idx in self._folded:
                idx = self.outline.ranges[idx].end
                continue
            idx += 1
        return rows

    def visible_text(self) -> str:
        """Outline text with folded ranges collapsed to a placeholder."""
        out: list[str] = []
        for idx in self.visible_rows():
            suffix = FOLD_PLACEHOLDER if idx in self._folded else ""
            out.append(self.lines[idx].text + suffix + "\n")
        return "".join(out)


__all__ = ["OutlineView"]
