import unittest

from dotpath.core.models import Dot, PuzzleResult
from dotpath.engine.patterns import boustrophedon
from dotpath.engine.rules import check_trace

SNAKE = boustrophedon(3)
RESULT = PuzzleResult(
    dots=(Dot(1, 0, 0), Dot(2, 1, 2), Dot(3, 2, 2)),
    solution_path=tuple(SNAKE),
    grid_size=3,
)


class CheckTraceTests(unittest.TestCase):
    def test_full_solution_wins(self) -> None:
        report = check_trace(RESULT, SNAKE)
        self.assertTrue(report.valid)
        self.assertTrue(report.won)
        self.assertEqual(report.reached, 3)

    def test_partial_trace_is_valid(self) -> None:
        report = check_trace(RESULT, SNAKE[:4])
        self.assertTrue(report.valid)
        self.assertFalse(report.won)
        self.assertEqual(report.reached, 2)

    def test_empty_trace(self) -> None:
        report = check_trace(RESULT, [])
        self.assertTrue(report.valid)
        self.assertEqual(report.reached, 0)

    def test_must_start_on_first_dot(self) -> None:
        report = check_trace(RESULT, [(0, 1), (0, 0)])
        self.assertFalse(report.valid)
        self.assertIn("dot 1", report.messages[0])

    def test_diagonal_move_is_rejected(self) -> None:
        report = check_trace(RESULT, [(0, 0), (1, 1)])
        self.assertFalse(report.valid)
        self.assertIn("not adjacent", report.messages[0])

    def test_revisit_is_rejected(self) -> None:
        report = check_trace(RESULT, [(0, 0), (0, 1), (0, 0)])
        self.assertFalse(report.valid)
        self.assertIn("twice", report.messages[0])

    def test_dots_out_of_order(self) -> None:
        trace = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
        report = check_trace(RESULT, trace)
        self.assertFalse(report.valid)
        self.assertIn("Dot 3 entered before dot 2", report.messages[0])
        self.assertEqual(report.reached, 1)

    def test_covering_grid_without_ending_on_last_dot(self) -> None:
        result = PuzzleResult(
            dots=(Dot(1, 0, 0), Dot(2, 2, 0)),
            solution_path=tuple(SNAKE),
            grid_size=3,
        )
        trace = [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2)]
        report = check_trace(result, trace)
        self.assertTrue(report.valid)
        self.assertFalse(report.won)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
