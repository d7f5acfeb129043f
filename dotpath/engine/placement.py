"""Checkpoint placement along a certified path."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Protocol, Sequence, Set

from ..core.constants import PlacementStrategy
from ..core.exceptions import InvalidSpecError, PlacementError
from ..core.models import Cell, Dot
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

JITTER_SPAN = 0.15
JITTER_CEILING = 0.95
SCATTER_TRIES = 50


class PlacementOverride(Protocol):
    """Adjusts the path indices chosen for each dot (index ``i`` is dot ``i + 1``)."""

    name: str

    def apply(self, path: Sequence[Cell], indices: List[int]) -> List[int]:
        ...


class LiftCheckpointOverride:
    """Moves one dot to a cell one row above its placed cell.

    The search walks backwards along the path from the dot's index, first for
    the cell directly above and then for any cell in that row. Interior dots
    stay strictly between their neighbours; the final dot may land anywhere
    earlier on the path, which leaves the placement to the oracle.
    """

    def __init__(self, dot_number: int = 9, name: str = "lift_ninth") -> None:
        self.dot_number = dot_number
        self.name = name

    def apply(self, path: Sequence[Cell], indices: List[int]) -> List[int]:
        pos = self.dot_number - 1
        if pos < 1 or pos >= len(indices):
            return indices
        index = indices[pos]
        row, col = path[index]
        if row == 0:
            LOGGER.debug("Dot %s is on the top row; nothing to lift", self.dot_number)
            return indices

        terminal = pos == len(indices) - 1
        lowest = 1 if terminal else indices[pos - 1] + 1
        taken = set(indices)
        window = [j for j in range(index - 1, lowest - 1, -1) if j not in taken]
        target = next((j for j in window if path[j] == (row - 1, col)), None)
        if target is None:
            target = next((j for j in window if path[j][0] == row - 1), None)
        if target is None:
            LOGGER.debug("No cell above dot %s within its window", self.dot_number)
            return indices

        LOGGER.debug(
            "Lifting dot %s from %s to %s", self.dot_number, path[index], path[target]
        )
        adjusted = list(indices)
        adjusted[pos] = target
        return adjusted


PLACEMENT_OVERRIDES: Dict[str, PlacementOverride] = {
    "lift_ninth": LiftCheckpointOverride(9),
}


def resolve_override(name: Optional[str]) -> Optional[PlacementOverride]:
    if name is None:
        return None
    try:
        return PLACEMENT_OVERRIDES[name]
    except KeyError as exc:
        raise InvalidSpecError(
            f"Unknown placement override '{name}' (known: {', '.join(sorted(PLACEMENT_OVERRIDES))})"
        ) from exc


class DotPlacer:
    """Chooses which path cells become numbered dots.

    Dot 1 is always the first cell and dot K the last. With the ``even``
    strategy the interior dots sit at multiples of ``(len - 1) // (K - 1)``,
    which keeps every path index strictly increasing; the randomized strategies
    may break that order.
    """

    def place(
        self,
        path: Sequence[Cell],
        k: int,
        *,
        strategy: PlacementStrategy = PlacementStrategy.EVEN,
        rng: Optional[random.Random] = None,
        override: Optional[PlacementOverride] = None,
    ) -> List[Dot]:
        length = len(path)
        if k < 2 or k > length:
            raise InvalidSpecError(f"Cannot place {k} dots on a path of {length} cells")

        strategy = PlacementStrategy(strategy)
        if strategy == PlacementStrategy.EVEN:
            indices = self._even_indices(length, k)
        elif strategy == PlacementStrategy.JITTERED:
            indices = self._jittered_indices(length, k, rng or random.Random())
        else:
            indices = self._scattered_indices(length, k, rng or random.Random())

        if override is not None:
            indices = override.apply(path, indices)

        return [Dot(num=i + 1, row=path[index][0], col=path[index][1]) for i, index in enumerate(indices)]

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------
    def _even_indices(self, length: int, k: int) -> List[int]:
        stride = (length - 1) // (k - 1)
        taken: Set[int] = {0, length - 1}
        indices = [0]
        for i in range(2, k):
            indices.append(self._claim(min(stride * (i - 1), length - 2), taken, length))
        indices.append(length - 1)
        return indices

    def _jittered_indices(self, length: int, k: int, rng: random.Random) -> List[int]:
        taken: Set[int] = {0, length - 1}
        indices = [0]
        for i in range(2, k):
            ratio = (i - 1) / (k - 1) + (rng.random() - 0.5) * JITTER_SPAN
            ratio = min(max(ratio, 0.0), JITTER_CEILING)
            indices.append(self._claim(int(ratio * (length - 2)), taken, length))
        indices.append(length - 1)
        return indices

    def _scattered_indices(self, length: int, k: int, rng: random.Random) -> List[int]:
        variance = min(0.3, 1 / k)
        min_gap = max(3, length // (2 * k))
        if min_gap * k > length:
            min_gap = 1
        taken: Set[int] = {0, length - 1}
        indices = [0]
        for i in range(2, k):
            base = (i - 1) / (k - 1)
            high = min(0.9, base + variance)
            low = min(max(0.1, base - variance), high)
            for _ in range(SCATTER_TRIES):
                index = int((low + rng.random() * (high - low)) * (length - 1))
                index = min(max(index, 1), length - 2)
                if all(abs(index - other) >= min_gap for other in taken):
                    break
            else:
                raise PlacementError(
                    f"Could not scatter dot {i} with spacing {min_gap} on {length} cells"
                )
            taken.add(index)
            indices.append(index)
        indices.append(length - 1)
        return indices

    @staticmethod
    def _claim(index: int, taken: Set[int], length: int) -> int:
        """Advance past occupied indices, never reaching the final cell."""

        index = max(index, 0)
        while index in taken and index < length - 2:
            index += 1
        if index in taken:
            raise PlacementError(f"No free path index left at or after {index}")
        taken.add(index)
        return index


def placement_is_certified(path: Sequence[Cell], dots: Sequence[Dot]) -> bool:
    """True when the path itself proves the dots can be visited in order."""

    if len(dots) < 2 or not path:
        return False
    positions = {(cell[0], cell[1]): i for i, cell in enumerate(path)}
    ordered = sorted(dots, key=lambda dot: dot.num)
    if [dot.num for dot in ordered] != list(range(1, len(ordered) + 1)):
        return False
    indices = [positions.get(dot.cell, -1) for dot in ordered]
    if indices[0] != 0 or indices[-1] != len(path) - 1:
        return False
    return all(a < b for a, b in zip(indices, indices[1:]))
