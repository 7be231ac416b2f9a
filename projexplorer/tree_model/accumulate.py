"""Path accumulation: turn flat listing records into a tree."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .types import Branch


def build_tree_from_records(
    root_name: str,
    records: Iterable[str],
    is_interesting: Callable[[str], bool] | None = None,
) -> Branch:
    """Insert every record's segment chain into one tree.

    Records are ``/``-separated paths relative to the root; a trailing ``/``
    marks a directory. Intermediate directories are created on demand. When
    ``is_interesting`` rejects any segment the whole record is dropped.
    """
    root = Branch(root_name)
    branches: dict[tuple[str, ...], Branch] = {(): root}
    leaves: set[tuple[str, ...]] = set()

    def branch_for(key: tuple[str, ...]) -> Branch:
        existing = branches.get(key)
        if existing is not None:
            return existing
        parent = branch_for(key[:-1])
        created = Branch(key[-1])
        parent.children.append(created)
        branches[key] = created
        return created

    for raw in records:
        record = raw.strip("\r")
        if record.startswith("./"):
            record = record[2:]
        is_dir = record.endswith("/")
        segments = tuple(part for part in record.split("/") if part and part != ".")
        if not segments:
            continue
        if is_interesting is not None and not all(is_interesting(part) for part in segments):
            continue
        if is_dir:
            branch_for(segments)
            continue
        if segments in leaves or segments in branches:
            continue
        branch_for(segments[:-1]).children.append(segments[-1])
        leaves.add(segments)
    return root


__all__ = ["build_tree_from_records"]
