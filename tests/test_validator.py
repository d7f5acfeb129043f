import unittest

from dotpath.engine.patterns import boustrophedon
from dotpath.engine.validator import PathValidator


class PathValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = PathValidator()

    def test_snake_is_certified(self) -> None:
        result = self.validator.certify(boustrophedon(5), 5)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_jump_is_rejected(self) -> None:
        path = boustrophedon(3)
        path[3], path[5] = path[5], path[3]
        result = self.validator.certify(path, 3)
        self.assertFalse(result.ok)
        self.assertIn("jumps", result.messages[0])

    def test_short_path_is_rejected(self) -> None:
        result = self.validator.certify(boustrophedon(3)[:-1], 3)
        self.assertFalse(result.ok)
        self.assertIn("expected 9", result.messages[0])

    def test_revisit_is_rejected(self) -> None:
        path = [(0, 0), (0, 1), (1, 1), (0, 1)]
        result = self.validator.certify(path, 2)
        self.assertFalse(result.ok)
        self.assertIn("twice", result.messages[0])

    def test_adjacency_is_checked_before_coverage(self) -> None:
        result = self.validator.certify([(0, 0), (1, 1)], 2)
        self.assertFalse(result.ok)
        self.assertIn("jumps", result.messages[0])

    def test_out_of_bounds_cell_is_rejected(self) -> None:
        path = [(0, 0), (0, 1), (0, 2), (1, 2)]
        self.assertFalse(self.validator.is_valid(path, 2))

    def test_validator_never_repairs_input(self) -> None:
        path = [(0, 0), (1, 1), (0, 1), (1, 0)]
        snapshot = list(path)
        self.validator.certify(path, 2)
        self.assertEqual(path, snapshot)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
