"""Interchangeable tree-construction strategies.

``make_tree_builder`` picks one by name so callers never depend on which
strategy is configured.
"""

from __future__ import annotations

from collections.abc import Callable

from .base import CompletionCallback, TreeBuilder
from .external import DEFAULT_LISTING_COMMAND, DEFAULT_POLL_INTERVAL, ExternalProcessTreeBuilder, parse_listing
from .incremental import DEFAULT_IDLE_DELAY, ExpansionTask, IncrementalTreeBuilder
from .listing import DEFAULT_EXCLUDE, DirectoryChild, list_directory_children, make_interesting_predicate
from .scheduler import IdleExecutor, ScheduledCall
from .synchronous import SynchronousTreeBuilder, walk_directory

BUILDER_STRATEGIES = ("incremental", "synchronous", "external")


def make_tree_builder(
    strategy: str,
    scheduler: IdleExecutor,
    is_interesting: Callable[[str], bool],
    *,
    buffer_id: str = "",
    idle_delay: float = DEFAULT_IDLE_DELAY,
    listing_command: str = DEFAULT_LISTING_COMMAND,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> TreeBuilder:
    """Return the builder named by ``strategy``."""
    if strategy == "synchronous":
        return SynchronousTreeBuilder(is_interesting)
    if strategy == "external":
        return ExternalProcessTreeBuilder(
            scheduler,
            is_interesting,
            command=listing_command,
            poll_interval=poll_interval,
        )
    if strategy == "incremental":
        return IncrementalTreeBuilder(
            scheduler,
            is_interesting,
            idle_delay=idle_delay,
            buffer_id=buffer_id,
        )
    raise ValueError(f"unknown builder strategy: {strategy!r}")


__all__ = [
    "BUILDER_STRATEGIES",
    "CompletionCallback",
    "TreeBuilder",
    "DEFAULT_EXCLUDE",
    "DirectoryChild",
    "list_directory_children",
    "make_interesting_predicate",
    "IdleExecutor",
    "ScheduledCall",
    "SynchronousTreeBuilder",
    "walk_directory",
    "DEFAULT_LISTING_COMMAND",
    "DEFAULT_POLL_INTERVAL",
    "ExternalProcessTreeBuilder",
    "parse_listing",
    "DEFAULT_IDLE_DELAY",
    "ExpansionTask",
    "IncrementalTreeBuilder",
    "make_tree_builder",
]
