"""Cooperative builder that lists one directory per idle slot.

Each directory is listed synchronously when it is expanded. Its files become
leaves right away; every subdirectory becomes an empty placeholder branch and
an ``ExpansionTask`` on a FIFO queue. One executor slot is armed at a time:
it pops a task, lists that directory, splices the result into the placeholder
slot and re-arms, or calls the completion callback once the queue is empty.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..tree_model import Branch
from .base import CompletionCallback, TreeBuilder
from .listing import list_directory_children
from .scheduler import IdleExecutor, ScheduledCall

logger = logging.getLogger(__name__)

DEFAULT_IDLE_DELAY = 0.01


@dataclass(frozen=True)
class ExpansionTask:
    """Deferred expansion of ``directory`` into ``parent.children[slot_index]``."""

    buffer_id: str
    parent: Branch
    slot_index: int
    directory: Path


class IncrementalTreeBuilder(TreeBuilder):
    """Build breadth-by-one-directory on an ``IdleExecutor``.

    A builder serves one buffer; starting a new build cancels the previous
    one. After cancellation ``partial_tree`` keeps whatever was spliced in.
    """

    is_async = True

    def __init__(
        self,
        scheduler: IdleExecutor,
        is_interesting: Callable[[str], bool],
        idle_delay: float = DEFAULT_IDLE_DELAY,
        buffer_id: str = "",
    ) -> None:
        super().__init__()
        self.scheduler = scheduler
        self.is_interesting = is_interesting
        self.idle_delay = idle_delay
        self.buffer_id = buffer_id
        self.queue: deque[ExpansionTask] = deque()
        self.partial_tree: Branch | None = None
        self._slot: ScheduledCall | None = None
        self._on_complete: CompletionCallback | None = None

    def build(self, root_dir: Path, on_complete: CompletionCallback) -> None:
        self.cancel()
        root_dir = Path(root_dir)
        self._in_progress = True
        self._on_complete = on_complete
        logger.info("starting incremental build of %s", root_dir)
        self.partial_tree = self._expand(root_dir)
        self._arm()

    def _expand(self, directory: Path) -> Branch:
        """List ``directory`` now and queue its subdirectories."""
        branch = Branch(directory.name or str(directory))
        children, scan_error = list_directory_children(directory, self.is_interesting)
        if scan_error is not None:
            return branch
        for child in children:
            if not child.is_dir:
                branch.children.append(child.name)
                continue
            slot_index = len(branch.children)
            branch.children.append(Branch(child.name))
            self.queue.append(
                ExpansionTask(
                    buffer_id=self.buffer_id,
                    parent=branch,
                    slot_index=slot_index,
                    directory=child.path,
                )
            )
        logger.debug("listed %s (%d queued)", directory, len(self.queue))
        return branch

    def _arm(self) -> None:
        self._slot = self.scheduler.call_later(self.idle_delay, self._step)

    def _step(self) -> None:
        self._slot = None
        if not self._in_progress:
            return
        if self.queue:
            task = self.queue.popleft()
            logger.debug("expanding %s for buffer %r", task.directory, task.buffer_id)
            task.parent.children[task.slot_index] = self._expand(task.directory)
            self._arm()
            return

        tree = self.partial_tree
        on_complete = self._on_complete
        self._in_progress = False
        self._on_complete = None
        logger.info("incremental build finished for buffer %r", self.buffer_id)
        if tree is not None and on_complete is not None:
            on_complete(tree)

    def cancel(self) -> None:
        """Drop queued expansions and the armed slot; keep the partial tree."""
        if self._slot is not None:
            self._slot.cancel()
            self._slot = None
        if self._in_progress:
            logger.info("cancelled incremental build with %d queued directories", len(self.queue))
        self.queue.clear()
        self._on_complete = None
        self._in_progress = False


__all__ = ["DEFAULT_IDLE_DELAY", "ExpansionTask", "IncrementalTreeBuilder"]
