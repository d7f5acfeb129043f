"""Rule checks for a player's trace over a generated puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Set

from ..core.models import Cell, PuzzleResult
from .grid import GridTopology


@dataclass
class TraceReport:
    valid: bool
    won: bool = False
    reached: int = 0
    messages: List[str] = field(default_factory=list)


def check_trace(result: PuzzleResult, trace: Sequence[Cell]) -> TraceReport:
    """Check a (possibly partial) trace against the game rules.

    The trace must start on dot 1, move between 4-adjacent cells, never
    revisit a cell and enter dot cells in ascending order. ``reached`` is the
    highest dot collected so far. The puzzle is won when every cell is filled
    and the last cell is the highest dot.
    """

    topology = GridTopology(result.grid_size)
    final = max((dot.num for dot in result.dots), default=0)

    if not trace:
        return TraceReport(valid=True)
    cells = [(row, col) for row, col in trace]
    first = result.dot_at(cells[0])
    if first is None or first.num != 1:
        return TraceReport(valid=False, messages=[f"Trace must start on dot 1, not {cells[0]}"])

    seen: Set[Cell] = set()
    reached = 0
    for index, cell in enumerate(cells):
        if not topology.in_bounds(cell):
            return TraceReport(valid=False, reached=reached, messages=[f"Cell {cell} is outside the grid"])
        if index and not topology.adjacent(cells[index - 1], cell):
            return TraceReport(
                valid=False,
                reached=reached,
                messages=[f"Cells {cells[index - 1]} and {cell} are not adjacent"],
            )
        if cell in seen:
            return TraceReport(valid=False, reached=reached, messages=[f"Cell {cell} is visited twice"])
        seen.add(cell)
        dot = result.dot_at(cell)
        if dot is not None:
            number = dot.num
            if number != reached + 1:
                return TraceReport(
                    valid=False,
                    reached=reached,
                    messages=[f"Dot {number} entered before dot {reached + 1}"],
                )
            reached = number

    last = result.dot_at(cells[-1])
    won = len(seen) == topology.cell_count and reached == final and last is not None and last.num == final
    return TraceReport(valid=True, won=won, reached=reached)
