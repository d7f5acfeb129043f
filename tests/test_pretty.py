import io
import unittest

from dotpath.core.models import Dot, PuzzleResult
from dotpath.engine.patterns import boustrophedon
from dotpath.utils.pretty import format_puzzle, format_solution, pretty_print_puzzle

RESULT = PuzzleResult(
    dots=(Dot(1, 0, 0), Dot(2, 1, 0)),
    solution_path=tuple(boustrophedon(2)),
    grid_size=2,
)


class PrettyTests(unittest.TestCase):
    def test_puzzle_board_shows_dots_only(self) -> None:
        lines = format_puzzle(RESULT).splitlines()
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[2].split("|")[1].split(), ["1", "."])
        self.assertEqual(lines[3].split("|")[1].split(), ["2", "."])

    def test_solution_board_numbers_every_cell(self) -> None:
        lines = format_solution(RESULT).splitlines()
        self.assertEqual(lines[2].split("|")[1].split(), ["1", "2"])
        self.assertEqual(lines[3].split("|")[1].split(), ["4", "3"])

    def test_pretty_print_writes_label_and_summary(self) -> None:
        stream = io.StringIO()
        pretty_print_puzzle(RESULT, label="Stage 1", show_solution=True, stream=stream)
        text = stream.getvalue()
        self.assertTrue(text.startswith("Stage 1\n"))
        self.assertIn("2x2, 2 dots, boustrophedon (construction, attempt 1)", text)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
