"""Square grid topology: bounds, neighbours and cell indexing."""

from __future__ import annotations

from typing import Iterator, List, Tuple

from ..core.constants import ORTHOGONAL_STEPS, Bounds
from ..core.models import Cell


class GridTopology:
    """Pure helper over an N x N grid with 4-connectivity.

    Cells are ``(row, col)`` tuples. ``index``/``cell_at`` map them onto a flat
    row-major arena so searches can keep their state in plain lists.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def contains(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def in_bounds(self, cell: Cell) -> bool:
        return self.bounds.contains(cell[0], cell[1])

    def neighbors(self, cell: Cell) -> List[Cell]:
        row, col = cell
        result: List[Cell] = []
        for dr, dc in ORTHOGONAL_STEPS:
            nr, nc = row + dr, col + dc
            if self.bounds.contains(nr, nc):
                result.append((nr, nc))
        return result

    def cells(self) -> Iterator[Cell]:
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)

    def index(self, cell: Cell) -> int:
        return cell[0] * self.size + cell[1]

    def cell_at(self, index: int) -> Cell:
        return divmod(index, self.size)

    def neighbor_table(self) -> List[Tuple[int, ...]]:
        """Neighbour indices for every arena slot, in search order."""

        return [
            tuple(self.index(nb) for nb in self.neighbors(self.cell_at(i)))
            for i in range(self.cell_count)
        ]

    @staticmethod
    def manhattan(a: Cell, b: Cell) -> int:
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    @staticmethod
    def adjacent(a: Cell, b: Cell) -> bool:
        return GridTopology.manhattan(a, b) == 1

    @staticmethod
    def color(cell: Cell) -> int:
        """Checkerboard colour; every grid step flips it."""

        return (cell[0] + cell[1]) % 2
