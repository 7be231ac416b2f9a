"""CLI behavior tests for ``projexplorer.cli.main``.

Runs the synchronous builder against temporary trees and inspects stdout.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from projexplorer import cli


def _make_project(base: Path) -> Path:
    root = base / "proj"
    (root / "a" / "b").mkdir(parents=True)
    (root / "a" / "b" / "c.txt").write_text("", encoding="utf-8")
    (root / "a" / "b" / "d.txt").write_text("", encoding="utf-8")
    (root / "e.txt").write_text("", encoding="utf-8")
    (root / ".git").mkdir()
    return root


class ExplorerCliTests(unittest.TestCase):
    def _run(self, base: Path, argv: list[str]) -> str:
        stdout = io.StringIO()
        with mock.patch("projexplorer.config.CONFIG_PATH", base / "config.json"), mock.patch(
            "sys.stdout", stdout
        ):
            cli.main(["--builder", "synchronous", "--cache-dir", str(base / "cache"), *argv])
        return stdout.getvalue()

    def test_prints_outline_for_explicit_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = _make_project(base)

            output = self._run(base, [str(root)])

            self.assertEqual(output, "a/b/\n\tc.txt\n\td.txt\ne.txt\n")
            self.assertEqual(len(list((base / "cache").iterdir())), 1)

    def test_defaults_to_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = _make_project(base)
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                output = self._run(base, ["--no-cache"])
            finally:
                os.chdir(previous_cwd)

            self.assertIn("e.txt\n", output)
            self.assertFalse((base / "cache").exists())

    def test_fold_and_fold_all(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = _make_project(base)

            folded = self._run(base, ["--fold", str(root / "a" / "b"), str(root)])
            everything = self._run(base, ["--fold-all", str(root)])

            self.assertEqual(folded, "a/b/ ...\ne.txt\n")
            self.assertEqual(everything, "a/b/ ...\ne.txt\n")

    def test_no_exclude_and_no_inline_folders(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = _make_project(base)

            output = self._run(base, ["--no-cache", "--no-exclude", "--no-inline-folders", str(root)])

            self.assertEqual(output, ".git/\na/\n\tb/\n\t\tc.txt\n\t\td.txt\ne.txt\n")

    def test_list_files_prints_relative_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = _make_project(base)

            output = self._run(base, ["--list-files", str(root)])

            self.assertEqual(output, "a/b/c.txt\na/b/d.txt\ne.txt\n")

    def test_width_clips_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = _make_project(base)

            output = self._run(base, ["--width", "4", str(root)])

            self.assertEqual(output.splitlines(), ["a/b/", "  c…", "  d…", "e.t…"])

    def test_clear_cache_removes_previous_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = _make_project(base)
            stale = base / "cache" / "stale.json"
            stale.parent.mkdir()
            stale.write_text("[]", encoding="utf-8")

            self._run(base, ["--clear-cache", str(root)])

            self.assertFalse(stale.exists())

    def test_rejects_missing_directory_and_unknown_fold(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = _make_project(base)

            with self.assertRaises(SystemExit):
                self._run(base, [str(base / "nope")])
            with self.assertRaises(SystemExit):
                self._run(base, ["--fold", str(root / "zzz"), str(root)])

    def test_clip_lines_leaves_text_alone_without_width(self) -> None:
        self.assertEqual(cli.clip_lines("\tabc\n", None), "\tabc\n")


if __name__ == "__main__":
    unittest.main()
