"""Puzzle factory orchestration.

Each attempt runs: pattern generation, certification (snake fallback on
rejection), dot placement and, when the placement is not certified by the
path itself, the solvability oracle. When every attempt fails the factory
returns the snake with evenly spaced dots, so a valid spec always yields a
puzzle.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.constants import Certification, OracleBackend, OracleVerdict, PatternFamily
from ..core.exceptions import (ExhaustedRetries, GenerationInvariantViolation, OracleNoSolution,
                               OracleTimeout, PuzzleError)
from ..core.models import Cell, Dot, OracleResult, PuzzleResult, PuzzleSpec
from .oracle import DEFAULT_CHECK_INTERVAL, SolvabilityOracle
from .patterns import boustrophedon, choose_family, generate_pattern
from .placement import DotPlacer, PlacementOverride, placement_is_certified, resolve_override
from .solver import solve_with_cpsat
from .validator import PathValidator
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class FactoryConfig:
    seed: Optional[int] = None
    max_attempts: int = 20
    oracle_timeout_seconds: float = 2.0
    oracle_backend: OracleBackend = OracleBackend.BACKTRACKING
    oracle_check_interval: int = DEFAULT_CHECK_INTERVAL
    cpsat_workers: int = 4


class PuzzleFactory:
    """High-level orchestrator: candidate path, certification, dots, oracle.

    The factory keeps no per-call state. Every ``generate`` call draws from
    its own ``random.Random`` (seeded from the config unless one is passed
    in), so independent calls may run concurrently.
    """

    def __init__(
        self,
        config: Optional[FactoryConfig] = None,
        validator: Optional[PathValidator] = None,
        placer: Optional[DotPlacer] = None,
        oracle: Optional[SolvabilityOracle] = None,
    ) -> None:
        self.config = config or FactoryConfig()
        self.validator = validator or PathValidator()
        self.placer = placer or DotPlacer()
        self.oracle = oracle or SolvabilityOracle(check_interval=self.config.oracle_check_interval)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, spec: PuzzleSpec, rng: Optional[random.Random] = None) -> PuzzleResult:
        spec.validate()
        override = resolve_override(spec.placement_override)
        rng = rng or random.Random(self.config.seed)

        try:
            return self._run_attempts(spec, rng, override)
        except ExhaustedRetries as exc:
            LOGGER.warning("%s; returning the guaranteed snake puzzle", exc)
        return self.fallback(spec, attempts=self.config.max_attempts)

    def fallback(self, spec: PuzzleSpec, attempts: int = 0) -> PuzzleResult:
        """Boustrophedon path with evenly spaced dots; valid for every spec."""

        path = boustrophedon(spec.grid_size)
        dots = self.placer.place(path, spec.dot_count)
        return self._build_result(spec, path, dots, PatternFamily.BOUSTROPHEDON, Certification.FALLBACK, attempts)

    # ------------------------------------------------------------------
    # Attempt loop
    # ------------------------------------------------------------------
    def _run_attempts(
        self,
        spec: PuzzleSpec,
        rng: random.Random,
        override: Optional[PlacementOverride],
    ) -> PuzzleResult:
        n = spec.grid_size
        for attempt in range(1, self.config.max_attempts + 1):
            LOGGER.info("Generation attempt %s/%s (N=%s, K=%s)", attempt, self.config.max_attempts, n, spec.dot_count)
            try:
                family, path = self._certified_path(spec, rng)
                dots = self.placer.place(
                    path,
                    spec.dot_count,
                    strategy=spec.placement,
                    rng=rng,
                    override=override,
                )
                if placement_is_certified(path, dots):
                    result = self._build_result(spec, path, dots, family, Certification.CONSTRUCTION, attempt)
                else:
                    solution = self._consult_oracle(dots, n)
                    result = self._build_result(spec, solution, dots, family, Certification.ORACLE, attempt)
                self._check_result(result)
                LOGGER.info(
                    "Generated %sx%s puzzle with %s dots from %s (%s)",
                    n,
                    n,
                    spec.dot_count,
                    family.value,
                    result.certification.value,
                )
                return result
            except OracleTimeout as exc:
                LOGGER.warning("Generation attempt timed out: %s", exc)
            except PuzzleError as exc:
                LOGGER.warning("Generation attempt failed: %s", exc)
        raise ExhaustedRetries(f"No certified puzzle after {self.config.max_attempts} attempts")

    def _certified_path(self, spec: PuzzleSpec, rng: random.Random) -> Tuple[PatternFamily, List[Cell]]:
        n = spec.grid_size
        family = spec.pattern_family
        if family == PatternFamily.AUTO:
            family = choose_family(n, rng)
        candidate = generate_pattern(family, n, rng)
        certification = self.validator.certify(candidate, n)
        if certification.ok:
            return family, candidate
        LOGGER.info(
            "Pattern %s rejected for N=%s (%s); using boustrophedon",
            family.value,
            n,
            "; ".join(certification.messages),
        )
        return PatternFamily.BOUSTROPHEDON, boustrophedon(n)

    def _consult_oracle(self, dots: Sequence[Dot], n: int) -> List[Cell]:
        budget = self.config.oracle_timeout_seconds
        if self.config.oracle_backend == OracleBackend.CPSAT:
            outcome: OracleResult = solve_with_cpsat(dots, n, budget, num_workers=self.config.cpsat_workers)
        else:
            outcome = self.oracle.verify(dots, n, budget)

        if outcome.verdict == OracleVerdict.TIMEOUT:
            raise OracleTimeout(f"Oracle gave up after {outcome.elapsed:.2f}s")
        if outcome.verdict == OracleVerdict.NO_SOLUTION:
            raise OracleNoSolution(f"Placement has no ordered traversal ({', '.join(outcome.messages)})")
        if outcome.path is None:
            raise GenerationInvariantViolation("Oracle reported a solution without a path")
        return outcome.path

    def _check_result(self, result: PuzzleResult) -> None:
        certification = self.validator.certify(result.solution_path, result.grid_size)
        if not certification.ok:
            raise GenerationInvariantViolation("; ".join(certification.messages))
        if not placement_is_certified(result.solution_path, result.dots):
            raise GenerationInvariantViolation("Dots are not in ascending path order")

    @staticmethod
    def _build_result(
        spec: PuzzleSpec,
        path: Sequence[Cell],
        dots: Sequence[Dot],
        family: PatternFamily,
        certification: Certification,
        attempts: int,
    ) -> PuzzleResult:
        return PuzzleResult(
            dots=tuple(sorted(dots, key=lambda dot: dot.num)),
            solution_path=tuple((row, col) for row, col in path),
            grid_size=spec.grid_size,
            pattern_family=family,
            certification=certification,
            attempts=attempts,
        )
