"""Explorer session: one root directory, its tree, folds, builder, and view.

Control flow: opening or refreshing a root runs the configured builder; its
completion hands the tree to the cache and repaints the outline. Point
mutations go through ``MutationEngine`` and repaint without a rebuild.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .builders import IdleExecutor, TreeBuilder, make_interesting_predicate, make_tree_builder
from .cache import TreeCache
from .config import ExplorerConfig
from .folds import FoldSet
from .fs_ops import FileOperations
from .mutation import MutationEngine
from .outline import OutlineView, directory_at, locate, next_sibling_line, path_at, previous_sibling_line
from .roots import resolve_root
from .tree_model import Branch, flatten_tree, normalize_path
from .tree_model.path_index import PathLike

logger = logging.getLogger(__name__)


class ExplorerSession:
    """State owned by one explorer buffer.

    ``confirm`` is asked before deletions when ``confirm_delete`` is set;
    ``on_paint`` runs after every repaint so a host can redraw.
    """

    def __init__(
        self,
        config: ExplorerConfig,
        scheduler: IdleExecutor,
        *,
        cache: TreeCache | None = None,
        fs_ops: FileOperations | None = None,
        buffer_id: str = "explorer",
        confirm: Callable[[str], bool] | None = None,
        on_paint: Callable[["ExplorerSession"], None] | None = None,
    ) -> None:
        self.config = config
        self.scheduler = scheduler
        self.cache = cache if cache is not None else TreeCache(config.cache_dir, persist=config.cache_enabled)
        self.fs_ops = fs_ops if fs_ops is not None else FileOperations()
        self.buffer_id = buffer_id
        self.confirm = confirm
        self.on_paint = on_paint
        self.show_excluded = False
        self.root: Path | None = None
        self.tree: Branch | None = None
        self.fold_set: FoldSet | None = None
        self.view: OutlineView | None = None
        self.current_path: Path | None = None
        self.current_line: int | None = None
        self.builder: TreeBuilder = self._make_builder()
        self.mutations = MutationEngine(self)

    def _make_builder(self) -> TreeBuilder:
        exclude = None if self.show_excluded else self.config.exclude
        self.is_interesting = make_interesting_predicate(exclude)
        return make_tree_builder(
            self.config.builder,
            self.scheduler,
            self.is_interesting,
            buffer_id=self.buffer_id,
            idle_delay=self.config.idle_delay,
            listing_command=self.config.listing_command,
            poll_interval=self.config.poll_interval,
        )

    @property
    def building(self) -> bool:
        return self.builder.in_progress

    def open(self, root: PathLike | None = None, current_file: PathLike | None = None) -> None:
        """Show ``root`` (default: the configured root function's answer).

        Switching roots cancels any build and clears the fold set. A cache
        hit paints immediately and, for async builders with auto refresh,
        starts a background rebuild; a miss builds.
        """
        target = normalize_path(root) if root is not None else resolve_root(self.config.root_function)
        if current_file is not None and self.config.goto_current_file:
            self.current_path = normalize_path(current_file)

        if target == self.root and self.tree is not None:
            self._paint()
            return

        self.cancel_build()
        self.root = target
        self.tree = None
        if self.fold_set is None:
            self.fold_set = FoldSet(target)
        else:
            self.fold_set.reset(target)
        self.view = OutlineView(target, self.fold_set, compress=self.config.inline_folders)
        logger.info("opening %s", target)

        cached = self.cache.load(target)
        if cached is None:
            self.refresh()
            return
        self.tree = cached
        self._paint()
        if self.config.auto_refresh_cache and self.builder.is_async:
            self.refresh()

    def refresh(self) -> None:
        """Rebuild the current root from disk; folds are restored afterwards."""
        if self.root is None:
            raise ValueError("no root directory is open")
        self.cancel_build()
        self.builder.build(self.root, self.set_tree)

    def cancel_build(self) -> bool:
        """Cancel an in-flight build; returns whether one was running."""
        if not self.builder.in_progress:
            return False
        self.builder.cancel()
        return True

    def set_tree(self, tree: Branch) -> None:
        """Adopt ``tree``, write it to the cache, and repaint."""
        if self.root is None:
            raise ValueError("no root directory is open")
        self.tree = tree
        self.cache.save(self.root, tree)
        self._paint()

    def _paint(self) -> None:
        if self.view is None or self.tree is None:
            return
        self.view.paint(self.tree)
        if self.current_path is not None:
            self.current_line = locate(self.view.lines, self.view.root, self.current_path, closest=True)
        if self.on_paint is not None:
            self.on_paint(self)

    def toggle_exclusion(self) -> None:
        """Show or hide entries matched by the exclusion pattern and rebuild."""
        self.cancel_build()
        self.show_excluded = not self.show_excluded
        self.builder = self._make_builder()
        if self.root is not None:
            self.refresh()

    def reveal(self, path: PathLike | None = None) -> int | None:
        """Unfold down to ``path`` (default: the current file) and select it."""
        target = normalize_path(path) if path is not None else self.current_path
        if self.view is None or target is None:
            return None
        index = self.view.reveal(target)
        if index is not None:
            self.current_path = target
            self.current_line = index
        return index

    def path_at(self, index: int) -> str | None:
        if self.view is None:
            return None
        return path_at(self.view.lines, self.view.root, index)

    def directory_at(self, index: int) -> str | None:
        if self.view is None:
            return None
        return directory_at(self.view.lines, self.view.root, index)

    def sibling_line(self, index: int, forward: bool = True) -> int | None:
        """Row of the next (or previous) entry sharing ``index``'s parent."""
        if self.view is None:
            return None
        if forward:
            return next_sibling_line(self.view.lines, index)
        return previous_sibling_line(self.view.lines, index)

    def locate(self, path: PathLike, closest: bool = False) -> int | None:
        if self.view is None:
            return None
        return locate(self.view.lines, self.view.root, path, closest=closest)

    def file_list(self) -> list[str]:
        """Root-relative paths of every file, for whole-project candidate lists."""
        return flatten_tree(self.tree) if self.tree is not None else []

    def confirm_delete(self, path: Path) -> bool:
        if not self.config.confirm_delete or self.confirm is None:
            return True
        return self.confirm(f"Delete {path}?")

    def create(self, path: PathLike, rebuild: bool | None = None) -> None:
        self.mutations.create(path, rebuild=rebuild)

    def delete(self, path: PathLike, rebuild: bool | None = None) -> bool:
        return self.mutations.delete_path(path, rebuild=rebuild)

    def rename(self, old: PathLike, new: PathLike, rebuild: bool | None = None) -> None:
        self.mutations.rename(old, new, rebuild=rebuild)

    def copy(self, old: PathLike, new: PathLike, rebuild: bool | None = None) -> None:
        self.mutations.copy(old, new, rebuild=rebuild)

    def clear_cache(self) -> None:
        self.cache.clear()


__all__ = ["ExplorerSession"]
