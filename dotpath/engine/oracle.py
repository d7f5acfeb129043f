"""Backtracking solvability oracle for dot placements.

The search walks from dot 1 over 4-neighbours, only entering a dot cell when
it carries the next expected number, and succeeds once every cell is covered
with the final dot as the last cell. It runs on an explicit frame stack over
a flat arena of cell indices, so large grids never touch the interpreter's
recursion limit, and it checks the wall clock every ``check_interval``
expansions.

Pruning is sound: a colour-parity test on the two endpoints, a degree test
on the cells next to the square just left behind, and a connectivity test on
the unvisited region.
"""

from __future__ import annotations

import time
from typing import Callable, List, Sequence, Tuple

from ..core.constants import OracleVerdict
from ..core.exceptions import InvalidSpecError
from ..core.models import Dot, OracleResult
from .grid import GridTopology
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_CHECK_INTERVAL = 64


def index_dots(dots: Sequence[Dot], topology: GridTopology) -> Tuple[List[int], int, int, int]:
    """Map dots onto the cell arena.

    Returns ``(dot_at, start, end, k)`` where ``dot_at[i]`` is the dot number
    on cell ``i`` (0 for none). Malformed dot sets raise ``InvalidSpecError``.
    """

    k = len(dots)
    if k < 2:
        raise InvalidSpecError("At least two dots are required")
    numbers = sorted(dot.num for dot in dots)
    if numbers != list(range(1, k + 1)):
        raise InvalidSpecError(f"Dot numbers must be 1..{k}, got {numbers}")
    dot_at = [0] * topology.cell_count
    start = end = -1
    for dot in dots:
        if not topology.contains(dot.row, dot.col):
            raise InvalidSpecError(f"Dot {dot.num} at {dot.cell} is outside the grid")
        index = topology.index(dot.cell)
        if dot_at[index]:
            raise InvalidSpecError(f"Dots {dot_at[index]} and {dot.num} share cell {dot.cell}")
        dot_at[index] = dot.num
        if dot.num == 1:
            start = index
        if dot.num == k:
            end = index
    return dot_at, start, end, k


class SolvabilityOracle:
    """Decides whether a set of dots admits an ascending Hamiltonian traversal."""

    def __init__(
        self,
        check_interval: int = DEFAULT_CHECK_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if check_interval < 1:
            raise ValueError("check_interval must be positive")
        self.check_interval = check_interval
        self._clock = clock

    def verify(self, dots: Sequence[Dot], n: int, time_budget: float) -> OracleResult:
        started = self._clock()
        deadline = started + time_budget
        topology = GridTopology(n)
        dot_at, start, end, k = index_dots(dots, topology)
        total = topology.cell_count

        if not self._parity_allows(topology, start, end):
            LOGGER.info(
                "Oracle: endpoints %s and %s cannot bound a Hamiltonian path",
                topology.cell_at(start),
                topology.cell_at(end),
            )
            return OracleResult(
                verdict=OracleVerdict.NO_SOLUTION,
                elapsed=self._clock() - started,
                messages=["endpoint colour parity"],
            )

        neighbors = topology.neighbor_table()
        visited = bytearray(total)
        visited[start] = 1
        path: List[int] = [start]
        cursors: List[int] = [0]
        expected: List[int] = [2]
        expansions = 0

        while True:
            if len(path) == total:
                elapsed = self._clock() - started
                LOGGER.debug("Oracle: solved in %.3fs (%s expansions)", elapsed, expansions)
                return OracleResult(
                    verdict=OracleVerdict.SOLVED,
                    path=[topology.cell_at(index) for index in path],
                    elapsed=elapsed,
                    expansions=expansions,
                )

            expansions += 1
            if expansions % self.check_interval == 0 and self._clock() >= deadline:
                elapsed = self._clock() - started
                LOGGER.warning(
                    "Oracle: timed out after %.2fs (%s expansions, depth %s/%s)",
                    elapsed,
                    expansions,
                    len(path),
                    total,
                )
                return OracleResult(
                    verdict=OracleVerdict.TIMEOUT,
                    elapsed=elapsed,
                    expansions=expansions,
                    messages=[f"budget of {time_budget:.2f}s exhausted"],
                )

            head = path[-1]
            options = neighbors[head]
            cursor = cursors[-1]
            advanced = False
            while cursor < len(options):
                candidate = options[cursor]
                cursor += 1
                if visited[candidate]:
                    continue
                wanted = expected[-1]
                number = dot_at[candidate]
                if number:
                    if number != wanted:
                        continue
                    if number == k and len(path) + 1 != total:
                        continue
                    wanted += 1
                visited[candidate] = 1
                if not self._viable(neighbors, visited, head, candidate, end, total - len(path) - 1):
                    visited[candidate] = 0
                    continue
                cursors[-1] = cursor
                path.append(candidate)
                cursors.append(0)
                expected.append(wanted)
                advanced = True
                break

            if advanced:
                continue
            if len(path) == 1:
                elapsed = self._clock() - started
                LOGGER.info(
                    "Oracle: no ordered traversal exists (%s expansions, %.2fs)",
                    expansions,
                    elapsed,
                )
                return OracleResult(
                    verdict=OracleVerdict.NO_SOLUTION,
                    elapsed=elapsed,
                    expansions=expansions,
                    messages=["search space exhausted"],
                )
            visited[path.pop()] = 0
            cursors.pop()
            expected.pop()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _parity_allows(topology: GridTopology, start: int, end: int) -> bool:
        first = topology.color(topology.cell_at(start))
        last = topology.color(topology.cell_at(end))
        if topology.cell_count % 2 == 0:
            return first != last
        # Odd grids have one extra colour-0 cell, so both ends must use it.
        return first == 0 and last == 0

    @staticmethod
    def _viable(
        neighbors: Sequence[Tuple[int, ...]],
        visited: bytearray,
        previous: int,
        head: int,
        end: int,
        remaining: int,
    ) -> bool:
        if remaining == 0:
            return True

        for cell in neighbors[previous]:
            if visited[cell]:
                continue
            free = sum(1 for other in neighbors[cell] if not visited[other] or other == head)
            if free < (1 if cell == end else 2):
                return False

        seen = bytearray(visited)
        frontier = [cell for cell in neighbors[head] if not seen[cell]]
        for cell in frontier:
            seen[cell] = 1
        reached = 0
        while frontier:
            cell = frontier.pop()
            reached += 1
            for other in neighbors[cell]:
                if not seen[other]:
                    seen[other] = 1
                    frontier.append(other)
        return reached == remaining
