import random
import unittest

from dotpath.core.constants import PatternFamily
from dotpath.engine.patterns import (HARD_FAMILIES, PATTERN_GENERATORS, boustrophedon, choose_family,
                                     column_zigzag, generate_pattern, labyrinth, maze,
                                     quadrant_fractal, spiral, wave)
from dotpath.engine.validator import PathValidator

ALWAYS_VALID = (
    PatternFamily.BOUSTROPHEDON,
    PatternFamily.SPIRAL,
    PatternFamily.COLUMN_ZIGZAG,
    PatternFamily.L_SHAPE,
    PatternFamily.DIAMOND_RING,
    PatternFamily.LAYERED_ROTATION,
    PatternFamily.COMPLEX_DUAL_SPIRAL,
)


class SweepPatternTests(unittest.TestCase):
    def test_boustrophedon_on_four_by_four(self) -> None:
        path = boustrophedon(4)
        self.assertEqual(path[:5], [(0, 0), (0, 1), (0, 2), (0, 3), (1, 3)])
        self.assertEqual(path[-1], (3, 0))
        self.assertEqual(len(path), 16)

    def test_column_zigzag_runs_down_then_up(self) -> None:
        path = column_zigzag(3)
        self.assertEqual(path[:4], [(0, 0), (1, 0), (2, 0), (2, 1)])
        self.assertEqual(path[-1], (2, 2))

    def test_spiral_on_five_by_five_ends_in_center(self) -> None:
        path = spiral(5)
        self.assertEqual(path[:7], [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (1, 4), (2, 4)])
        self.assertEqual(path[-1], (2, 2))


class CertifiedFamilyTests(unittest.TestCase):
    def test_ring_and_sweep_families_are_hamiltonian(self) -> None:
        validator = PathValidator()
        rng = random.Random(0)
        for family in ALWAYS_VALID:
            for n in range(2, 10):
                with self.subTest(family=family.value, n=n):
                    path = generate_pattern(family, n, rng)
                    result = validator.certify(path, n)
                    self.assertTrue(result.ok, result.messages)

    def test_fractal_is_valid_for_powers_of_two(self) -> None:
        validator = PathValidator()
        for n in (2, 4, 8):
            with self.subTest(n=n):
                self.assertTrue(validator.is_valid(quadrant_fractal(n), n))

    def test_fractal_phased_sweep_is_rejected(self) -> None:
        path = quadrant_fractal(5)
        self.assertEqual(len(path), 25)
        self.assertFalse(PathValidator().is_valid(path, 5))

    def test_wave_on_three_by_three(self) -> None:
        path = wave(3)
        self.assertEqual(
            path,
            [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0), (1, 0), (1, 1)],
        )


class RandomizedFamilyTests(unittest.TestCase):
    def test_maze_covers_every_cell_once(self) -> None:
        for n in (3, 6, 9):
            path = maze(n, random.Random(n))
            self.assertEqual(len(path), n * n)
            self.assertEqual(len(set(path)), n * n)

    def test_maze_is_reproducible_with_seed(self) -> None:
        self.assertEqual(maze(7, random.Random(11)), maze(7, random.Random(11)))

    def test_labyrinth_never_repeats_cells(self) -> None:
        self.assertEqual(labyrinth(2), [(0, 0), (0, 1), (1, 1), (1, 0)])
        path = labyrinth(7)
        self.assertEqual(len(path), len(set(path)))

    def test_every_family_is_registered(self) -> None:
        expected = {family for family in PatternFamily if family != PatternFamily.AUTO}
        self.assertEqual(set(PATTERN_GENERATORS), expected)


class FamilySelectionTests(unittest.TestCase):
    def test_small_grids_never_get_hard_families(self) -> None:
        rng = random.Random(3)
        picks = {choose_family(4, rng) for _ in range(300)}
        self.assertTrue(picks.isdisjoint(HARD_FAMILIES))
        self.assertIn(PatternFamily.BOUSTROPHEDON, picks)

    def test_auto_dispatch_returns_a_path(self) -> None:
        path = generate_pattern("auto", 5, random.Random(5))
        self.assertTrue(path)

    def test_aliases_resolve_to_families(self) -> None:
        self.assertEqual(PatternFamily.parse("cross"), PatternFamily.BOUSTROPHEDON)
        self.assertEqual(PatternFamily.parse("zigzag"), PatternFamily.COLUMN_ZIGZAG)
        self.assertEqual(PatternFamily.parse("uturn"), PatternFamily.LAYERED_ROTATION)
        with self.assertRaises(ValueError):
            PatternFamily.parse("hexagon")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
