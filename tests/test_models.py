import json
import unittest

from dotpath.core.constants import Certification, OracleVerdict, PatternFamily, PlacementStrategy
from dotpath.core.exceptions import InvalidSpecError
from dotpath.core.models import Dot, OracleResult, PuzzleResult, PuzzleSpec
from dotpath.engine.patterns import boustrophedon


class PuzzleSpecTests(unittest.TestCase):
    def test_names_are_normalised(self) -> None:
        spec = PuzzleSpec(grid_size=5, dot_count=4, pattern_family="Snake", placement="scattered")
        self.assertEqual(spec.pattern_family, PatternFamily.BOUSTROPHEDON)
        self.assertEqual(spec.placement, PlacementStrategy.SCATTERED)
        self.assertEqual(spec.cell_count, 25)

    def test_aliases(self) -> None:
        self.assertEqual(PatternFamily.parse("uturn"), PatternFamily.LAYERED_ROTATION)
        self.assertEqual(PatternFamily.parse("column-zigzag"), PatternFamily.COLUMN_ZIGZAG)
        self.assertEqual(PatternFamily.parse("fractal"), PatternFamily.QUADRANT_FRACTAL)

    def test_unknown_names_raise(self) -> None:
        with self.assertRaises(InvalidSpecError):
            PuzzleSpec(grid_size=5, dot_count=4, pattern_family="hexagon")
        with self.assertRaises(InvalidSpecError):
            PuzzleSpec(grid_size=5, dot_count=4, placement="random")

    def test_invalid_spec_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            PuzzleSpec(grid_size=3, dot_count=10).validate()

    def test_non_integer_size(self) -> None:
        with self.assertRaises(InvalidSpecError):
            PuzzleSpec(grid_size=4.0, dot_count=3).validate()


class PuzzleResultTests(unittest.TestCase):
    def setUp(self) -> None:
        self.result = PuzzleResult(
            dots=(Dot(1, 0, 0), Dot(2, 1, 0), Dot(3, 2, 0)),
            solution_path=tuple(boustrophedon(3)),
            grid_size=3,
            certification=Certification.CONSTRUCTION,
        )

    def test_json_payload(self) -> None:
        payload = self.result.to_jsonable()
        self.assertEqual(payload["grid_size"], 3)
        self.assertEqual(payload["dots"][1], {"num": 2, "row": 1, "col": 0})
        self.assertEqual(payload["solution_path"][3], [1, 2])
        self.assertEqual(payload["pattern_family"], "boustrophedon")
        self.assertEqual(PuzzleResult.from_jsonable(json.loads(json.dumps(payload))), self.result)

    def test_lookups(self) -> None:
        self.assertEqual(self.result.dot_at((1, 0)), Dot(2, 1, 0))
        self.assertIsNone(self.result.dot_at((1, 1)))
        self.assertEqual(self.result.path_index((1, 0)), 5)


class OracleResultTests(unittest.TestCase):
    def test_solved_flag(self) -> None:
        self.assertTrue(OracleResult(verdict=OracleVerdict.SOLVED, path=[(0, 0)]).solved)
        self.assertFalse(OracleResult(verdict=OracleVerdict.TIMEOUT).solved)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
