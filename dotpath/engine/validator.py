"""Deterministic certification of candidate paths."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Set

from ..core.exceptions import GenerationInvariantViolation
from ..core.models import Cell
from .grid import GridTopology
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class CertificationResult:
    ok: bool
    messages: List[str] = field(default_factory=list)


class PathValidator:
    """Accepts a candidate only if it is a Hamiltonian path of the grid.

    Adjacency is checked before coverage. The validator never repairs a path;
    the caller decides what to substitute.
    """

    def certify(self, path: Sequence[Cell], n: int) -> CertificationResult:
        topology = GridTopology(n)
        try:
            self._check_adjacency(path, topology)
            self._check_coverage(path, topology)
        except GenerationInvariantViolation as exc:
            LOGGER.debug("Path rejected: %s", exc)
            return CertificationResult(ok=False, messages=[str(exc)])
        return CertificationResult(ok=True)

    def is_valid(self, path: Sequence[Cell], n: int) -> bool:
        return self.certify(path, n).ok

    def _check_adjacency(self, path: Sequence[Cell], topology: GridTopology) -> None:
        for index in range(len(path) - 1):
            current, following = path[index], path[index + 1]
            if not topology.adjacent(current, following):
                raise GenerationInvariantViolation(
                    f"Step {index} jumps from {tuple(current)} to {tuple(following)}"
                )

    def _check_coverage(self, path: Sequence[Cell], topology: GridTopology) -> None:
        if len(path) != topology.cell_count:
            raise GenerationInvariantViolation(
                f"Path has {len(path)} cells, expected {topology.cell_count}"
            )
        seen: Set[Cell] = set()
        for cell in path:
            cell = (cell[0], cell[1])
            if not topology.in_bounds(cell):
                raise GenerationInvariantViolation(f"Cell {cell} is outside the grid")
            if cell in seen:
                raise GenerationInvariantViolation(f"Cell {cell} is visited twice")
            seen.add(cell)
