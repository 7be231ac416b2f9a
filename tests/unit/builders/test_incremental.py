"""Tests for the cooperative one-directory-per-slot builder."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from projexplorer.builders import IdleExecutor, IncrementalTreeBuilder, make_interesting_predicate
from projexplorer.builders import incremental as incremental_module
from projexplorer.tree_model import Branch, sort_tree


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


def _executor() -> IdleExecutor:
    clock = FakeClock()
    return IdleExecutor(clock=clock, sleep=clock.sleep)


class IncrementalTreeBuilderTests(unittest.TestCase):
    def test_build_completes_through_executor_with_spliced_subtrees(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "proj"
            (root / "a" / "b").mkdir(parents=True)
            (root / "a" / "b" / "c.txt").write_text("", encoding="utf-8")
            (root / "a" / "z.txt").write_text("", encoding="utf-8")
            (root / "m.txt").write_text("", encoding="utf-8")
            (root / "q").mkdir()

            executor = _executor()
            builder = IncrementalTreeBuilder(executor, make_interesting_predicate(None), idle_delay=0.01)
            results: list[Branch] = []
            builder.build(root, results.append)

            self.assertTrue(builder.is_async)
            self.assertTrue(builder.in_progress)
            self.assertEqual(results, [])

            self.assertTrue(executor.run_until(lambda: not builder.in_progress))
            self.assertEqual(len(results), 1)
            self.assertEqual(
                sort_tree(results[0]),
                Branch("proj", [Branch("a", [Branch("b", ["c.txt"]), "z.txt"]), Branch("q"), "m.txt"]),
            )
            self.assertEqual(len(builder.queue), 0)

    def test_each_idle_slot_lists_exactly_one_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("p", "q", "r"):
                (root / name).mkdir()

            executor = _executor()
            builder = IncrementalTreeBuilder(executor, make_interesting_predicate(None))
            listed: list[Path] = []
            real_list = incremental_module.list_directory_children

            def recording_list(directory: Path, is_interesting):
                listed.append(Path(directory))
                return real_list(directory, is_interesting)

            with mock.patch.object(incremental_module, "list_directory_children", side_effect=recording_list):
                builder.build(root, lambda _tree: None)
                self.assertEqual(listed, [root])
                executor.run_once(wait=True)
                self.assertEqual(listed, [root, root / "p"])
                executor.run_once(wait=True)
                self.assertEqual(listed, [root, root / "p", root / "q"])

    def test_cancel_after_first_task_keeps_partial_splice(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "proj"
            (root / "p").mkdir(parents=True)
            (root / "p" / "inside.txt").write_text("", encoding="utf-8")
            (root / "q").mkdir()
            (root / "q" / "never.txt").write_text("", encoding="utf-8")

            executor = _executor()
            builder = IncrementalTreeBuilder(executor, make_interesting_predicate(None))
            results: list[Branch] = []
            builder.build(root, results.append)
            self.assertEqual(len(builder.queue), 2)

            self.assertTrue(executor.run_once(wait=True))
            builder.cancel()

            self.assertFalse(builder.in_progress)
            self.assertEqual(len(builder.queue), 0)
            self.assertEqual(executor.pending, 0)
            self.assertEqual(results, [])
            self.assertEqual(builder.partial_tree, Branch("proj", [Branch("p", ["inside.txt"]), Branch("q")]))

    def test_queued_tasks_carry_the_owning_buffer(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "p").mkdir()

            executor = _executor()
            builder = IncrementalTreeBuilder(executor, make_interesting_predicate(None), buffer_id="sidebar-1")
            builder.build(root, lambda _tree: None)
            self.assertEqual([task.buffer_id for task in builder.queue], ["sidebar-1"])

            with self.assertLogs("projexplorer.builders.incremental", level="DEBUG") as logs:
                executor.run_once(wait=True)
            self.assertTrue(any("'sidebar-1'" in line for line in logs.output))

    def test_new_build_cancels_previous_one(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp).resolve() / "first"
            second = Path(tmp).resolve() / "second"
            (first / "sub").mkdir(parents=True)
            (second / "other").mkdir(parents=True)

            executor = _executor()
            builder = IncrementalTreeBuilder(executor, make_interesting_predicate(None))
            first_results: list[Branch] = []
            second_results: list[Branch] = []
            builder.build(first, first_results.append)
            builder.build(second, second_results.append)
            executor.run_until(lambda: not builder.in_progress)

            self.assertEqual(first_results, [])
            self.assertEqual(second_results, [Branch("second", [Branch("other")])])

    def test_unreadable_subdirectory_is_left_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "proj"
            (root / "gone").mkdir(parents=True)
            (root / "ok.txt").write_text("", encoding="utf-8")

            executor = _executor()
            builder = IncrementalTreeBuilder(executor, make_interesting_predicate(None))
            results: list[Branch] = []
            builder.build(root, results.append)
            (root / "gone").rmdir()
            executor.run_until(lambda: not builder.in_progress)

            self.assertEqual(results, [Branch("proj", [Branch("gone"), "ok.txt"])])


if __name__ == "__main__":
    unittest.main()
