"""Filesystem operations invoked by the mutation engine.

Each call either succeeds or raises ``OSError``; nothing is retried.
"""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path


class FileOperations:
    """Thin wrappers over ``os``/``shutil``; replace to intercept mutations."""

    def make_directory(self, path: Path) -> None:
        Path(path).mkdir()

    def create_file(self, path: Path) -> None:
        Path(path).touch(exist_ok=False)

    def delete_file(self, path: Path) -> None:
        Path(path).unlink()

    def delete_directory(self, path: Path) -> None:
        shutil.rmtree(path)

    def rename(self, source: Path, target: Path) -> None:
        os.rename(source, target)

    def copy(self, source: Path, target: Path) -> None:
        """Copy ``source`` to exactly ``target``; an existing directory there is an error."""
        if Path(target).is_dir():
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(target))
        if Path(source).is_dir():
            shutil.copytree(source, target)
        else:
            shutil.copy2(source, target)


__all__ = ["FileOperations"]
