"""Command-line front door for projexplorer.

Parses CLI options, opens an explorer session on the requested root, drives
the cooperative executor until the tree is built, and prints the outline.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .builders import BUILDER_STRATEGIES, IdleExecutor
from .config import load_explorer_config
from .session import ExplorerSession

BUILD_TIMEOUT_SECONDS = 600.0


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def clip_lines(text: str, width: int | None) -> str:
    """Clip every line of ``text`` to ``width`` columns, expanding tabs."""
    if width is None:
        return text
    out: list[str] = []
    for line in text.splitlines():
        expanded = line.expandtabs(2)
        out.append(expanded if len(expanded) <= width else expanded[: max(0, width - 1)] + "…")
    return "".join(item + "\n" for item in out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print a directory as a collapsible outline, cached per project root."
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory. Defaults to the configured root.")
    parser.add_argument("--builder", choices=BUILDER_STRATEGIES, default=None, help="Tree-building strategy.")
    exclusion = parser.add_mutually_exclusive_group()
    exclusion.add_argument("--exclude", metavar="REGEX", default=None, help="Skip entries whose name matches REGEX.")
    exclusion.add_argument("--no-exclude", action="store_true", help="Show every entry.")
    parser.add_argument("--no-inline-folders", action="store_true", help="Do not merge single-directory chains.")
    parser.add_argument("--no-cache", action="store_true", help="Do not read or write the on-disk cache.")
    parser.add_argument("--cache-dir", metavar="DIR", default=None, help="Directory holding cached trees.")
    parser.add_argument("--clear-cache", action="store_true", help="Delete all cached trees before running.")
    parser.add_argument("--fold", metavar="PATH", action="append", default=[], help="Fold the directory PATH.")
    parser.add_argument("--fold-all", action="store_true", help="Fold every directory.")
    parser.add_argument("--reveal", metavar="PATH", default=None, help="Unfold down to PATH.")
    parser.add_argument("--list-files", action="store_true", help="Print root-relative file paths instead.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Clip output to this many columns.")
    parser.add_argument("--verbose", action="store_true", help="Log build progress to stderr.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print the outline for a directory root."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = load_explorer_config().with_overrides(
        builder=args.builder,
        cache_dir=Path(args.cache_dir).expanduser() if args.cache_dir else None,
        exclude=args.exclude,
        cache_enabled=False if args.no_cache else None,
        inline_folders=False if args.no_inline_folders else None,
    )
    if args.no_exclude:
        config = config.with_overrides(exclude="")

    root: Path | None = None
    if args.path is not None:
        root = Path(args.path)
        if not root.is_dir():
            raise SystemExit(f"Not a directory: {root}")

    executor = IdleExecutor()
    session = ExplorerSession(config, executor)
    if args.clear_cache:
        session.clear_cache()
    session.open(root)
    if not executor.run_until(lambda: not session.building, timeout=BUILD_TIMEOUT_SECONDS):
        session.cancel_build()
        raise SystemExit("Timed out while building the tree.")
    if session.tree is None or session.view is None:
        raise SystemExit(f"Could not build a tree for {session.root}")

    if args.list_files:
        sys.stdout.write("".join(item + "\n" for item in session.file_list()))
        return

    view = session.view
    if args.fold_all:
        view.fold_all()
    for raw in args.fold:
        index = session.locate(Path(raw).absolute())
        if index is None:
            raise SystemExit(f"Not in tree: {raw}")
        view.fold(index)
    if args.reveal is not None and session.reveal(Path(args.reveal).absolute()) is None:
        raise SystemExit(f"Not in tree: {args.reveal}")
    sys.stdout.write(clip_lines(view.visible_text(), args.width))


if __name__ == "__main__":
    main()
