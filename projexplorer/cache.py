"""Per-root tree cache held in memory and as JSON files on disk.

Trees are stored canonical: sorted and never compressed. On disk a branch is
``[name, child, ...]`` and a leaf is its bare name, so files stay readable.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
from pathlib import Path

from .tree_model import Branch, TreeNode, copy_tree, normalize_path, sort_tree

logger = logging.getLogger(__name__)

CACHE_FILE_SUFFIX = ".json"


def tree_to_payload(node: TreeNode) -> object:
    """Convert a tree into JSON-compatible nested lists."""
    if isinstance(node, Branch):
        return [node.name, *(tree_to_payload(child) for child in node.children)]
    return node


def tree_from_payload(payload: object) -> TreeNode:
    """Rebuild a tree from ``tree_to_payload`` output.

    Raises ``ValueError`` for anything that is not a well-formed tree.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return Branch(payload[0], [tree_from_payload(item) for item in payload[1:]])
    raise ValueError(f"malformed tree payload: {payload!r:.80}")


def cache_filename(root: Path) -> str:
    """Deterministic file name for ``root``'s cache entry."""
    digest = hashlib.sha1(str(root).encode("utf-8", errors="surrogateescape")).hexdigest()
    return digest + CACHE_FILE_SUFFIX


class TreeCache:
    """Map absolute root directories to canonical trees.

    ``persist`` toggles the on-disk copy; the in-memory map is always used.
    Returned trees are copies so callers may mutate them freely.
    """

    def __init__(self, cache_dir: Path | None, persist: bool = True) -> None:
        self.cache_dir = Path(cache_dir).expanduser() if cache_dir is not None else None
        self.persist = persist and self.cache_dir is not None
        self._memory: dict[str, Branch] = {}

    def path_for(self, root: str | os.PathLike) -> Path | None:
        """Return the on-disk cache file for ``root`` (whether or not it exists)."""
        if self.cache_dir is None:
            return None
        return self.cache_dir / cache_filename(normalize_path(root))

    def _persisted_path(self, root: str | os.PathLike) -> Path | None:
        if not self.persist:
            return None
        return self.path_for(root)

    def save(self, root: str | os.PathLike, tree: Branch) -> None:
        """Store a canonical copy of ``tree`` for ``root``."""
        key = str(normalize_path(root))
        canonical = sort_tree(copy_tree(tree))
        self._memory[key] = canonical
        cache_path = self._persisted_path(key)
        if cache_path is None:
            return
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(json.dumps(tree_to_payload(canonical), indent=1) + "\n", encoding="utf-8")
        logger.debug("wrote tree cache for %s to %s", key, cache_path)

    def load(self, root: str | os.PathLike) -> Branch | None:
        """Return the cached tree for ``root`` or ``None``.

        Falls back to the disk file when memory has no entry, remembering what
        it read. Unreadable or malformed files count as absent.
        """
        key = str(normalize_path(root))
        cached = self._memory.get(key)
        if cached is not None:
            return copy_tree(cached)
        cache_path = self._persisted_path(key)
        if cache_path is None or not cache_path.is_file():
            return None
        try:
            tree = tree_from_payload(json.loads(cache_path.read_text(encoding="utf-8")))
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable tree cache %s: %s", cache_path, exc)
            return None
        if not isinstance(tree, Branch):
            logger.warning("ignoring tree cache %s without a root directory", cache_path)
            return None
        self._memory[key] = tree
        return copy_tree(tree)

    def clear(self) -> None:
        """Forget every entry in memory and delete all cache files."""
        self._memory.clear()
        if self.cache_dir is None or not self.cache_dir.is_dir():
            return
        for entry in self.cache_dir.iterdir():
            if entry.is_file():
                entry.unlink()
        logger.info("cleared tree cache in %s", self.cache_dir)


__all__ = [
    "CACHE_FILE_SUFFIX",
    "tree_to_payload",
    "tree_from_payload",
    "cache_filename",
    "TreeCache",
]
