"""Tip slices: short stretches of the solution shown to a stuck player."""

from __future__ import annotations

from typing import Iterable, List, Set

from ..core.models import Cell, PuzzleResult

OPENING_FALLBACK = 20
OPENING_PAST_SECOND_DOT = 8
PAST_NEXT_DOT = 15
CLOSING_STRETCH = 25
CORRECTION_PAST_FIRST_DOT = 12


def tip_path(result: PuzzleResult, filled_cells: Iterable[Cell]) -> List[Cell]:
    """Return the forward slice of the solution to reveal for ``filled_cells``.

    With no progress the tip runs from the start to a few cells past dot 2.
    Otherwise it starts right after the furthest filled solution cell and runs
    past the next dot, or covers the closing stretch when no dot is left.
    """

    solution = list(result.solution_path)
    filled: Set[Cell] = {(row, col) for row, col in filled_cells}
    positions = {cell: index for index, cell in enumerate(solution)}

    if not filled:
        first = result.dots[0].cell if result.dots else None
        second = result.dots[1].cell if len(result.dots) > 1 else None
        if first in positions and second in positions and positions[second] > positions[first]:
            return solution[: positions[second] + OPENING_PAST_SECOND_DOT]
        return solution[:OPENING_FALLBACK]

    last_match = max((positions[cell] for cell in filled if cell in positions), default=-1)
    if last_match < 0:
        first = result.dots[0].cell if result.dots else None
        if first in positions:
            return solution[: positions[first] + CORRECTION_PAST_FIRST_DOT]
        return []

    start = last_match + 1
    dot_cells = {dot.cell for dot in result.dots}
    next_dot = next((i for i in range(start, len(solution)) if solution[i] in dot_cells), -1)
    if next_dot >= 0:
        return solution[start : next_dot + PAST_NEXT_DOT]
    return solution[start : start + CLOSING_STRETCH]
