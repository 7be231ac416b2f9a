"""Outline rendering, fold state, and path/row navigation."""

from __future__ import annotations

from .navigation import (
    directory_at,
    locate,
    next_sibling_line,
    parent_line,
    path_at,
    previous_sibling_line,
)
from .rendering import FOLD_PLACEHOLDER, INDENT, FoldRange, OutlineLine, RenderedOutline, render_outline
from .view import OutlineView

__all__ = [
    "INDENT",
    "FOLD_PLACEHOLDER",
    "OutlineLine",
    "FoldRange",
    "RenderedOutline",
    "render_outline",
    "OutlineView",
    "locate",
    "path_at",
    "parent_line",
    "directory_at",
    "next_sibling_line",
    "previous_sibling_line",
]
