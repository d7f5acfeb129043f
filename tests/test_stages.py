import unittest
from datetime import date

from dotpath.core.constants import PatternFamily
from dotpath.core.exceptions import InvalidSpecError
from dotpath.data.stages import STAGES, daily_seed, daily_spec, daily_stage, get_stage, stage_spec
from dotpath.engine.generator import PuzzleFactory


class StagePresetTests(unittest.TestCase):
    def test_twelve_numbered_stages(self) -> None:
        self.assertEqual(len(STAGES), 12)
        self.assertEqual([stage.number for stage in STAGES], list(range(1, 13)))

    def test_first_and_last_stage(self) -> None:
        first = stage_spec(1)
        self.assertEqual((first.grid_size, first.dot_count), (5, 4))
        self.assertEqual(first.pattern_family, PatternFamily.BOUSTROPHEDON)
        last = stage_spec(12)
        self.assertEqual((last.grid_size, last.dot_count), (9, 9))
        self.assertEqual(last.pattern_family, PatternFamily.MAZE)

    def test_stage_names_map_to_families(self) -> None:
        self.assertEqual(get_stage(3).family, PatternFamily.COLUMN_ZIGZAG)
        self.assertEqual(get_stage(6).family, PatternFamily.BOUSTROPHEDON)
        self.assertEqual(get_stage(8).family, PatternFamily.LAYERED_ROTATION)
        self.assertEqual(get_stage(10).family, PatternFamily.QUADRANT_FRACTAL)

    def test_every_preset_is_a_valid_request(self) -> None:
        for stage in STAGES:
            with self.subTest(stage=stage.number):
                stage.to_spec().validate()

    def test_out_of_range_stage(self) -> None:
        for number in (0, 13, -1):
            with self.assertRaises(InvalidSpecError):
                get_stage(number)

    def test_stage_generates(self) -> None:
        result = PuzzleFactory().generate(stage_spec(2))
        self.assertEqual(result.grid_size, 5)
        self.assertEqual(result.dots[-1].cell, (2, 2))


class DailyChallengeTests(unittest.TestCase):
    def test_seed_is_derived_from_the_date(self) -> None:
        self.assertEqual(daily_seed(date(2024, 3, 7)), 20240307)

    def test_stage_is_picked_by_seed(self) -> None:
        self.assertEqual(daily_stage(date(2024, 3, 7)).number, 4)
        self.assertEqual(daily_spec(date(2024, 3, 7)), stage_spec(4))

    def test_every_day_maps_to_a_preset(self) -> None:
        numbers = {daily_stage(date(2024, 1, day)).number for day in range(1, 32)}
        self.assertTrue(numbers <= set(range(1, 13)))
        self.assertGreater(len(numbers), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
