"""Data models supporting the puzzle generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import (Certification, MIN_DOT_COUNT, MIN_GRID_SIZE, OracleVerdict,
                        PatternFamily, PlacementStrategy)
from .exceptions import InvalidSpecError

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Dot:
    """A numbered checkpoint pinned to one cell."""

    num: int
    row: int
    col: int

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)

    def to_jsonable(self) -> Dict[str, int]:
        return {"num": self.num, "row": self.row, "col": self.col}


@dataclass(frozen=True)
class PuzzleSpec:
    """A puzzle request: grid size, checkpoint count and path family."""

    grid_size: int
    dot_count: int
    pattern_family: PatternFamily = PatternFamily.AUTO
    placement: PlacementStrategy = PlacementStrategy.EVEN
    placement_override: Optional[str] = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "pattern_family", PatternFamily.parse(self.pattern_family))
            object.__setattr__(self, "placement", PlacementStrategy(self.placement))
        except (ValueError, AttributeError) as exc:
            raise InvalidSpecError(str(exc)) from exc

    @property
    def cell_count(self) -> int:
        return self.grid_size * self.grid_size

    def validate(self) -> None:
        if not isinstance(self.grid_size, int) or isinstance(self.grid_size, bool):
            raise InvalidSpecError(f"Grid size must be an integer, got {self.grid_size!r}")
        if not isinstance(self.dot_count, int) or isinstance(self.dot_count, bool):
            raise InvalidSpecError(f"Dot count must be an integer, got {self.dot_count!r}")
        if self.grid_size < MIN_GRID_SIZE:
            raise InvalidSpecError(
                f"Grid size must be at least {MIN_GRID_SIZE}, got {self.grid_size}"
            )
        if not MIN_DOT_COUNT <= self.dot_count <= self.cell_count:
            raise InvalidSpecError(
                f"Dot count must be between {MIN_DOT_COUNT} and {self.cell_count} "
                f"for a {self.grid_size}x{self.grid_size} grid, got {self.dot_count}"
            )


@dataclass(frozen=True)
class PuzzleResult:
    """A finished puzzle together with the path that proves it solvable.

    ``pattern_family`` names the seed pattern the dots were placed on. For
    oracle-certified puzzles ``solution_path`` is the oracle's own traversal,
    which generally does not follow that pattern.
    """

    dots: Tuple[Dot, ...]
    solution_path: Tuple[Cell, ...]
    grid_size: int
    pattern_family: PatternFamily = PatternFamily.BOUSTROPHEDON
    certification: Certification = Certification.CONSTRUCTION
    attempts: int = 1

    def dot_at(self, cell: Cell) -> Optional[Dot]:
        for dot in self.dots:
            if dot.cell == cell:
                return dot
        return None

    def path_index(self, cell: Cell) -> int:
        return self.solution_path.index(cell)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "grid_size": self.grid_size,
            "dots": [dot.to_jsonable() for dot in self.dots],
            "solution_path": [[row, col] for row, col in self.solution_path],
            "pattern_family": self.pattern_family.value,
            "certification": self.certification.value,
            "attempts": self.attempts,
        }

    @classmethod
    def from_jsonable(cls, payload: Dict[str, Any]) -> "PuzzleResult":
        return cls(
            dots=tuple(Dot(num=int(d["num"]), row=int(d["row"]), col=int(d["col"])) for d in payload["dots"]),
            solution_path=tuple((int(row), int(col)) for row, col in payload["solution_path"]),
            grid_size=int(payload["grid_size"]),
            pattern_family=PatternFamily.parse(payload.get("pattern_family", "boustrophedon")),
            certification=Certification(payload.get("certification", "construction")),
            attempts=int(payload.get("attempts", 1)),
        )


@dataclass
class OracleResult:
    """Outcome of a solvability check."""

    verdict: OracleVerdict
    path: Optional[List[Cell]] = None
    elapsed: float = 0.0
    expansions: int = 0
    messages: List[str] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.verdict == OracleVerdict.SOLVED
