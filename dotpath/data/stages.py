"""Stage progression presets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Tuple

from ..core.constants import PatternFamily
from ..core.exceptions import InvalidSpecError
from ..core.models import PuzzleSpec


@dataclass(frozen=True)
class StagePreset:
    number: int
    grid_size: int
    dot_count: int
    family: PatternFamily
    description: str

    def to_spec(self) -> PuzzleSpec:
        return PuzzleSpec(
            grid_size=self.grid_size,
            dot_count=self.dot_count,
            pattern_family=self.family,
        )


_STAGE_TABLE: Tuple[Tuple[int, int, str, str], ...] = (
    (5, 4, "simple", "Snake: 4 dots, 5x5 grid"),
    (5, 5, "spiral", "Spiral: 5 dots, 5x5 grid"),
    (6, 5, "zigzag", "Zigzag: 5 dots, 6x6 grid"),
    (6, 6, "lshape", "L-Shape: 6 dots, 6x6 grid"),
    (6, 7, "diamond", "Diamond: 7 dots, 6x6 grid"),
    (7, 6, "cross", "Cross: 6 dots, 7x7 grid"),
    (7, 7, "wave", "Wave: 7 dots, 7x7 grid"),
    (7, 8, "uturn", "U-Turn: 8 dots, 7x7 grid"),
    (8, 7, "complex", "Complex: 7 dots, 8x8 grid"),
    (8, 8, "fractal", "Fractal: 8 dots, 8x8 grid"),
    (8, 9, "labyrinth", "Labyrinth: 9 dots, 8x8 grid"),
    (9, 9, "maze", "Master: 9 dots, 9x9 grid"),
)

STAGES: List[StagePreset] = [
    StagePreset(
        number=index,
        grid_size=size,
        dot_count=dots,
        family=PatternFamily.parse(family),
        description=description,
    )
    for index, (size, dots, family, description) in enumerate(_STAGE_TABLE, start=1)
]


def get_stage(number: int) -> StagePreset:
    if not 1 <= number <= len(STAGES):
        raise InvalidSpecError(f"Stage must be between 1 and {len(STAGES)}, got {number}")
    return STAGES[number - 1]


def stage_spec(number: int) -> PuzzleSpec:
    """Puzzle request for a stage of the progression (1-based)."""

    return get_stage(number).to_spec()


# ----------------------------------------------------------------------
# Daily challenge
# ----------------------------------------------------------------------
def daily_seed(day: date) -> int:
    """Date-derived seed, e.g. ``20240307`` for 7 March 2024."""

    return day.year * 10000 + day.month * 100 + day.day


def daily_stage(day: date) -> StagePreset:
    """The preset every player gets on ``day``; paired with :func:`daily_seed`."""

    return STAGES[daily_seed(day) % len(STAGES)]


def daily_spec(day: date) -> PuzzleSpec:
    return daily_stage(day).to_spec()
