import unittest

from dotpath.core.exceptions import InvalidSpecError
from dotpath.core.models import PuzzleSpec
from dotpath.engine.batch import generate_batch
from dotpath.engine.generator import FactoryConfig, PuzzleFactory


class GenerateBatchTests(unittest.TestCase):
    def test_results_follow_input_order(self) -> None:
        specs = [PuzzleSpec(grid_size=n, dot_count=n) for n in (6, 3, 5, 4)]
        results = generate_batch(specs, PuzzleFactory(FactoryConfig(seed=3)), workers=3)
        self.assertEqual([result.grid_size for result in results], [6, 3, 5, 4])
        self.assertEqual([len(result.dots) for result in results], [6, 3, 5, 4])

    def test_seeded_batch_is_reproducible(self) -> None:
        specs = [PuzzleSpec(grid_size=5, dot_count=4) for _ in range(4)]
        first = generate_batch(specs, PuzzleFactory(FactoryConfig(seed=11)), workers=4)
        second = generate_batch(specs, PuzzleFactory(FactoryConfig(seed=11)), workers=2)
        self.assertEqual(first, second)

    def test_invalid_spec_fails_before_generation(self) -> None:
        specs = [PuzzleSpec(grid_size=4, dot_count=3), PuzzleSpec(grid_size=2, dot_count=5)]
        with self.assertRaises(InvalidSpecError):
            generate_batch(specs)

    def test_empty_batch(self) -> None:
        self.assertEqual(generate_batch([]), [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
