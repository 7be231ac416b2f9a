"""Tree builder backed by one external listing process.

The child's stdout is read on a daemon thread into a queue; a polling step on
the shared ``IdleExecutor`` drains it so the tree is only ever assembled on
the executor's thread.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
from collections.abc import Callable
from pathlib import Path
from queue import Empty, Queue

from ..tree_model import Branch, build_tree_from_records
from .base import CompletionCallback, TreeBuilder
from .scheduler import IdleExecutor, ScheduledCall

logger = logging.getLogger(__name__)

DEFAULT_LISTING_COMMAND = (
    "find . -mindepth 1 -name '.*' -prune -o -type d -printf '%P/\\n' -o -printf '%P\\n'"
)
DEFAULT_POLL_INTERVAL = 0.05
_READ_CHUNK_BYTES = 65536
_READER_JOIN_TIMEOUT = 2.0


def parse_listing(
    root_name: str,
    output: str,
    is_interesting: Callable[[str], bool] | None = None,
) -> Branch:
    """Parse newline-delimited listing records into a tree."""
    return build_tree_from_records(root_name, output.splitlines(), is_interesting)


def _pump_stdout(stream, chunks: Queue) -> None:
    """Copy raw output chunks into ``chunks`` and finish with ``None``."""
    try:
        while True:
            data = stream.read1(_READ_CHUNK_BYTES) if hasattr(stream, "read1") else stream.read(_READ_CHUNK_BYTES)
            if not data:
                break
            chunks.put(data)
    except (OSError, ValueError):
        pass
    finally:
        chunks.put(None)


def _kill_process_group(process: subprocess.Popen) -> None:
    """SIGKILL the shell and everything it spawned."""
    if os.name == "posix":
        try:
            os.killpg(process.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
        except PermissionError:
            pass
    process.kill()


class ExternalProcessTreeBuilder(TreeBuilder):
    """Run a shell listing command in the root directory and parse its output."""

    is_async = True

    def __init__(
        self,
        scheduler: IdleExecutor,
        is_interesting: Callable[[str], bool] | None = None,
        command: str = DEFAULT_LISTING_COMMAND,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        super().__init__()
        self.scheduler = scheduler
        self.is_interesting = is_interesting
        self.command = command
        self.poll_interval = poll_interval
        self._process: subprocess.Popen | None = None
        self._chunks: Queue | None = None
        self._reader: threading.Thread | None = None
        self._received: list[bytes] = []
        self._slot: ScheduledCall | None = None
        self._root_dir: Path | None = None
        self._on_complete: CompletionCallback | None = None

    def build(self, root_dir: Path, on_complete: CompletionCallback) -> None:
        self.cancel()
        root_dir = Path(root_dir)
        try:
            process = subprocess.Popen(
                self.command,
                shell=True,
                cwd=str(root_dir),
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                start_new_session=os.name == "posix",
            )
        except OSError as exc:
            logger.warning("listing command failed to start in %s: %s", root_dir, exc)
            return

        chunks: Queue = Queue()
        reader = threading.Thread(
            target=_pump_stdout,
            args=(process.stdout, chunks),
            name="projexplorer-listing-reader",
            daemon=True,
        )
        reader.start()

        self._process = process
        self._chunks = chunks
        self._reader = reader
        self._received = []
        self._root_dir = root_dir
        self._on_complete = on_complete
        self._in_progress = True
        logger.info("started listing process for %s", root_dir)
        self._slot = self.scheduler.call_later(self.poll_interval, self._poll)

    def _poll(self) -> None:
        self._slot = None
        chunks = self._chunks
        process = self._process
        if chunks is None or process is None:
            return

        finished = False
        while True:
            try:
                data = chunks.get_nowait()
            except Empty:
                break
            if data is None:
                finished = True
                break
            self._received.append(data)

        if not finished:
            self._slot = self.scheduler.call_later(self.poll_interval, self._poll)
            return

        returncode = process.wait()
        if process.stdout is not None:
            process.stdout.close()
        root_dir = self._root_dir
        on_complete = self._on_complete
        output = b"".join(self._received).decode("utf-8", errors="replace")
        self._reset()
        if returncode != 0 or root_dir is None or on_complete is None:
            logger.warning("listing command exited with %s in %s; build abandoned", returncode, root_dir)
            return
        tree = parse_listing(root_dir.name or str(root_dir), output, self.is_interesting)
        logger.info("built tree for %s from listing command", root_dir)
        on_complete(tree)

    def _reset(self) -> None:
        self._process = None
        self._chunks = None
        self._reader = None
        self._received = []
        self._root_dir = None
        self._on_complete = None
        self._in_progress = False

    def cancel(self) -> None:
        """Kill the child process and drop any pending poll."""
        if self._slot is not None:
            self._slot.cancel()
            self._slot = None
        process = self._process
        reader = self._reader
        if process is not None:
            if process.poll() is None or (reader is not None and reader.is_alive()):
                _kill_process_group(process)
                process.wait()
                logger.info("cancelled listing process for %s", self._root_dir)
            if reader is not None:
                reader.join(_READER_JOIN_TIMEOUT)
            if process.stdout is not None and (reader is None or not reader.is_alive()):
                process.stdout.close()
        self._reset()


__all__ = [
    "DEFAULT_LISTING_COMMAND",
    "DEFAULT_POLL_INTERVAL",
    "parse_listing",
    "ExternalProcessTreeBuilder",
]
