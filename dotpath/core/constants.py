"""Shared constants and enumerations for the puzzle generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class PatternFamily(str, Enum):
    """Path-generation strategies, plus ``AUTO`` for weighted selection."""

    BOUSTROPHEDON = "boustrophedon"
    SPIRAL = "spiral"
    COLUMN_ZIGZAG = "column_zigzag"
    L_SHAPE = "l_shape"
    DIAMOND_RING = "diamond_ring"
    WAVE = "wave"
    LAYERED_ROTATION = "layered_rotation"
    QUADRANT_FRACTAL = "quadrant_fractal"
    COMPLEX_DUAL_SPIRAL = "complex_dual_spiral"
    MAZE = "maze"
    LABYRINTH = "labyrinth"
    AUTO = "auto"

    @classmethod
    def parse(cls, name: "str | PatternFamily") -> "PatternFamily":
        if isinstance(name, PatternFamily):
            return name
        key = name.strip().lower().replace("-", "_")
        if key in FAMILY_ALIASES:
            return FAMILY_ALIASES[key]
        return cls(key)


# Names used by the stage table.
FAMILY_ALIASES: Dict[str, PatternFamily] = {
    "simple": PatternFamily.BOUSTROPHEDON,
    "snake": PatternFamily.BOUSTROPHEDON,
    "cross": PatternFamily.BOUSTROPHEDON,
    "zigzag": PatternFamily.COLUMN_ZIGZAG,
    "lshape": PatternFamily.L_SHAPE,
    "diamond": PatternFamily.DIAMOND_RING,
    "uturn": PatternFamily.LAYERED_ROTATION,
    "fractal": PatternFamily.QUADRANT_FRACTAL,
    "complex": PatternFamily.COMPLEX_DUAL_SPIRAL,
}


class PlacementStrategy(str, Enum):
    """How checkpoints are distributed along a path."""

    EVEN = "even"
    JITTERED = "jittered"
    SCATTERED = "scattered"


class OracleVerdict(str, Enum):
    SOLVED = "solved"
    TIMEOUT = "timeout"
    NO_SOLUTION = "no_solution"


class OracleBackend(str, Enum):
    BACKTRACKING = "backtracking"
    CPSAT = "cpsat"


class Certification(str, Enum):
    """Why a returned puzzle is known to be solvable."""

    CONSTRUCTION = "construction"
    ORACLE = "oracle"
    FALLBACK = "fallback"


# Up, down, left, right: the order every search expands neighbours in.
ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

MIN_GRID_SIZE = 2
MIN_DOT_COUNT = 2


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
