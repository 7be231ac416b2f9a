"""Tests for outline rendering and fold ranges."""

from __future__ import annotations

import unittest
from pathlib import Path

from projexplorer.outline import FoldRange, OutlineLine, render_outline
from projexplorer.tree_model import Branch

ROOT = Path("/work/proj")


def _tree() -> Branch:
    return Branch(
        "proj",
        [
            "e.txt",
            Branch("f", ["g.txt", Branch("h", ["i.txt"])]),
            Branch("a", [Branch("b", ["d.txt", "c.txt"])]),
        ],
    )


class RenderOutlineTests(unittest.TestCase):
    def test_compressed_outline_is_tab_indented_and_directories_first(self) -> None:
        outline = render_outline(_tree(), ROOT)

        self.assertEqual(
            outline.text,
            "a/b/\n\tc.txt\n\td.txt\nf/\n\th/\n\t\ti.txt\n\tg.txt\ne.txt\n",
        )
        self.assertEqual(outline.lines[0], OutlineLine(0, "a/b", True))
        self.assertEqual(outline.lines[0].segments, ["a", "b"])

    def test_each_nonempty_directory_gets_a_range_over_its_children(self) -> None:
        outline = render_outline(_tree(), ROOT)

        self.assertEqual(outline.ranges, {0: FoldRange(0, 3), 3: FoldRange(3, 7), 4: FoldRange(4, 6)})
        self.assertIn(5, outline.ranges[3])
        self.assertNotIn(3, outline.ranges[3])
        self.assertNotIn(7, outline.ranges[3])

    def test_uncompressed_outline_keeps_every_directory_line(self) -> None:
        outline = render_outline(_tree(), ROOT, compress=False)

        self.assertEqual(outline.text.splitlines()[:4], ["a/", "\tb/", "\t\tc.txt", "\t\td.txt"])
        self.assertEqual(outline.ranges[0], FoldRange(0, 4))
        self.assertEqual(outline.ranges[1], FoldRange(1, 4))

    def test_empty_directory_has_no_range(self) -> None:
        outline = render_outline(Branch("proj", [Branch("empty"), "x"]), ROOT)

        self.assertEqual(outline.text, "empty/\nx\n")
        self.assertEqual(outline.ranges, {})

    def test_render_does_not_reorder_the_input_tree(self) -> None:
        tree = _tree()
        render_outline(tree, ROOT)

        self.assertEqual(tree.children[0], "e.txt")


if __name__ == "__main__":
    unittest.main()
