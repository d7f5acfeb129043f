"""Concurrent generation of independent puzzles."""

from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from ..core.models import PuzzleResult, PuzzleSpec
from .generator import PuzzleFactory
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def generate_batch(
    specs: Sequence[PuzzleSpec],
    factory: Optional[PuzzleFactory] = None,
    workers: int = 4,
) -> List[PuzzleResult]:
    """Generate one puzzle per spec on a thread pool, preserving input order.

    Specs are validated up front so a bad request fails before any work is
    scheduled. Each call owns its random state, seeded from the factory config
    plus the spec's position, so a seeded batch is reproducible.
    """

    factory = factory or PuzzleFactory()
    for spec in specs:
        spec.validate()
    if not specs:
        return []

    base_seed = factory.config.seed

    def _one(position: int) -> PuzzleResult:
        rng = random.Random(None if base_seed is None else base_seed + position)
        return factory.generate(specs[position], rng=rng)

    LOGGER.info("Generating %s puzzles on %s workers", len(specs), workers)
    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        return list(pool.map(_one, range(len(specs))))
