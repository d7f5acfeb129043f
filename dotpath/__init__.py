"""Grid path puzzle generator with a solvability oracle.

This package exposes the public API surface via:

- ``dotpath.engine.generator.PuzzleFactory``: turns a ``PuzzleSpec`` into a
  certified ``PuzzleResult``.
- ``dotpath.engine.oracle.SolvabilityOracle``: checks arbitrary dot placements.
- ``dotpath.data.stages``: the preset stage progression.
"""

from .core.constants import Certification, OracleBackend, PatternFamily, PlacementStrategy
from .core.models import Dot, PuzzleResult, PuzzleSpec
from .engine.generator import FactoryConfig, PuzzleFactory
from .engine.oracle import SolvabilityOracle
from .data.stages import STAGES, daily_spec, stage_spec

__all__ = [
    "Certification",
    "Dot",
    "FactoryConfig",
    "OracleBackend",
    "PatternFamily",
    "PlacementStrategy",
    "PuzzleFactory",
    "PuzzleResult",
    "PuzzleSpec",
    "STAGES",
    "SolvabilityOracle",
    "daily_spec",
    "stage_spec",
]

__version__ = "0.1.0"
