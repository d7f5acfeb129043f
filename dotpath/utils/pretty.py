"""Pretty-print helpers for generated puzzles."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict

from ..core.models import Cell

if TYPE_CHECKING:
    from ..core.models import PuzzleResult


def _render(size: int, symbols: Dict[Cell, str], width: int) -> str:
    header_cells = [f"{c:>{width}}" for c in range(size)]
    lines = [" " * 5 + " ".join(header_cells)]
    lines.append(" " * 5 + "-" * ((width + 1) * size - 1))
    for r in range(size):
        row_render = " ".join(f"{symbols.get((r, c), '.'):>{width}}" for c in range(size))
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_puzzle(result: PuzzleResult) -> str:
    """The board as a player sees it: dot numbers and empty cells."""

    symbols = {dot.cell: str(dot.num) for dot in result.dots}
    width = max(2, len(str(len(result.dots))))
    return _render(result.grid_size, symbols, width)


def format_solution(result: PuzzleResult) -> str:
    """Each cell labelled with its 1-based position on the solution path."""

    symbols = {cell: str(index) for index, cell in enumerate(result.solution_path, start=1)}
    width = max(2, len(str(len(result.solution_path))))
    return _render(result.grid_size, symbols, width)


def pretty_print_puzzle(
    result: PuzzleResult,
    *,
    label: str | None = None,
    show_solution: bool = False,
    stream=None,
) -> None:
    """Print the puzzle (and optionally its solution) in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_puzzle(result), file=stream)
    if show_solution:
        print(file=stream)
        print(format_solution(result), file=stream)
    print(file=stream)
    print(
        f"  {result.grid_size}x{result.grid_size}, {len(result.dots)} dots, "
        f"{result.pattern_family.value} ({result.certification.value}, "
        f"attempt {result.attempts})",
        file=stream,
    )
