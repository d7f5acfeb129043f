"""Candidate path generators, one per pattern family.

Every generator takes the grid size and a ``random.Random`` and returns an
ordered list of cells. Only the boustrophedon snake is guaranteed to be a
Hamiltonian path for every size; the other families are certified afterwards
by :class:`~dotpath.engine.validator.PathValidator`, and the factory falls back
to the snake when a candidate is rejected.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from ..core.constants import PatternFamily
from ..core.models import Cell
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

PatternGenerator = Callable[[int, random.Random], List[Cell]]

# right, down, left, up
_COMPASS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

# Preferred direction order (indices into _COMPASS) for each labyrinth phase.
_LABYRINTH_PHASES: Tuple[Tuple[int, int, int, int], ...] = (
    (0, 1, 2, 3),
    (1, 0, 3, 2),
    (2, 1, 0, 3),
    (3, 2, 1, 0),
    (0, 3, 2, 1),
    (1, 2, 3, 0),
    (2, 3, 0, 1),
    (3, 0, 1, 2),
)


def _in_grid(n: int, row: int, col: int) -> bool:
    return 0 <= row < n and 0 <= col < n


# ----------------------------------------------------------------------
# Sweeps
# ----------------------------------------------------------------------
def boustrophedon(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Row-major snake: even rows left to right, odd rows right to left."""

    path: List[Cell] = []
    for row in range(n):
        cols = range(n) if row % 2 == 0 else range(n - 1, -1, -1)
        path.extend((row, col) for col in cols)
    return path


def column_zigzag(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Column-major snake: even columns top to bottom, odd columns bottom to top."""

    path: List[Cell] = []
    for col in range(n):
        rows = range(n) if col % 2 == 0 else range(n - 1, -1, -1)
        path.extend((row, col) for row in rows)
    return path


# ----------------------------------------------------------------------
# Ring based families
# ----------------------------------------------------------------------
def _clockwise_spiral(top: int, left: int, bottom: int, right: int) -> List[Cell]:
    path: List[Cell] = []
    while top <= bottom and left <= right:
        path.extend((top, col) for col in range(left, right + 1))
        top += 1
        path.extend((row, right) for row in range(top, bottom + 1))
        right -= 1
        if top <= bottom:
            path.extend((bottom, col) for col in range(right, left - 1, -1))
            bottom -= 1
        if left <= right:
            path.extend((row, left) for row in range(bottom, top - 1, -1))
            left += 1
    return path


def _counter_clockwise_spiral(top: int, left: int, bottom: int, right: int) -> List[Cell]:
    path: List[Cell] = []
    while top <= bottom and left <= right:
        path.extend((row, left) for row in range(top, bottom + 1))
        left += 1
        if top <= bottom:
            path.extend((bottom, col) for col in range(left, right + 1))
            bottom -= 1
        if left <= right:
            path.extend((row, right) for row in range(bottom, top - 1, -1))
            right -= 1
        if top <= bottom:
            path.extend((top, col) for col in range(right, left - 1, -1))
            top += 1
    return path


def _outer_ring(n: int) -> List[Cell]:
    """Border clockwise from the top-left corner, ending at (1, 0)."""

    ring: List[Cell] = [(0, col) for col in range(n)]
    ring.extend((row, n - 1) for row in range(1, n))
    ring.extend((n - 1, col) for col in range(n - 2, -1, -1))
    ring.extend((row, 0) for row in range(n - 2, 0, -1))
    return ring


def spiral(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Clockwise inward spiral from (0, 0)."""

    return _clockwise_spiral(0, 0, n - 1, n - 1)


def diamond_ring(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Outer border first, then the interior as an inward spiral."""

    if n == 1:
        return [(0, 0)]
    return _outer_ring(n) + _clockwise_spiral(1, 1, n - 2, n - 2)


def complex_dual_spiral(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Outer ring clockwise, interior wound the opposite way."""

    if n == 1:
        return [(0, 0)]
    return _outer_ring(n) + _counter_clockwise_spiral(1, 1, n - 2, n - 2)


def l_shape(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Border traced left, bottom, right, top, then nested interior L layers."""

    path: List[Cell] = [(row, 0) for row in range(n)]
    path.extend((n - 1, col) for col in range(1, n))
    path.extend((row, n - 1) for row in range(n - 2, -1, -1))
    path.extend((0, col) for col in range(n - 2, 0, -1))

    top, left, bottom, right = 1, 1, n - 2, n - 2
    while top <= bottom and left <= right:
        # Down the left side, then along the bottom.
        path.extend((row, left) for row in range(top, bottom + 1))
        path.extend((bottom, col) for col in range(left + 1, right + 1))
        left += 1
        bottom -= 1
        if top > bottom or left > right:
            break
        # Up the right side, then back along the top.
        path.extend((row, right) for row in range(bottom, top - 1, -1))
        path.extend((top, col) for col in range(right - 1, left - 1, -1))
        right -= 1
        top += 1
    return path


def layered_rotation(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Concentric layers entered at their top-left, alternating winding."""

    path: List[Cell] = []
    layer = 0
    while layer <= (n - 1) // 2:
        top = left = layer
        bottom = right = n - 1 - layer
        if top == bottom:
            path.append((top, left))
            break
        if layer % 2 == 0:
            path.extend((top, col) for col in range(left, right + 1))
            path.extend((row, right) for row in range(top + 1, bottom + 1))
            path.extend((bottom, col) for col in range(right - 1, left - 1, -1))
            path.extend((row, left) for row in range(bottom - 1, top, -1))
        else:
            path.extend((row, left) for row in range(top, bottom + 1))
            path.extend((bottom, col) for col in range(left + 1, right + 1))
            path.extend((row, right) for row in range(bottom - 1, top - 1, -1))
            path.extend((top, col) for col in range(right - 1, left, -1))
        layer += 1
    return path


# ----------------------------------------------------------------------
# Automata and walks
# ----------------------------------------------------------------------
def wave(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Horizontal runs broken by single vertical steps.

    When both phases are blocked the walk jumps to the first unvisited cell in
    row-major order, so the result may contain non-adjacent steps.
    """

    total = n * n
    path: List[Cell] = []
    visited: Set[Cell] = set()
    row = col = 0
    direction = 1
    horizontal = True
    guard = 4 * total + 4

    while len(visited) < total and guard > 0:
        guard -= 1
        if (row, col) not in visited:
            path.append((row, col))
            visited.add((row, col))

        if horizontal:
            next_col = col + direction
            if 0 <= next_col < n and (row, next_col) not in visited:
                col = next_col
                continue
            horizontal = False
            direction = -direction
            if row + 1 < n:
                row += 1
            continue

        if row + 1 < n and (row + 1, col) not in visited:
            row += 1
            continue
        horizontal = True
        next_col = col + direction
        if 0 <= next_col < n and (row, next_col) not in visited:
            col = next_col
            continue
        jump = _first_unvisited(n, visited)
        if jump is None:
            break
        row, col = jump

    if len(visited) < total:
        LOGGER.debug("Wave walk stopped early with %s/%s cells", len(visited), total)
    return path


def _first_unvisited(n: int, visited: Set[Cell]) -> Optional[Cell]:
    for row in range(n):
        for col in range(n):
            if (row, col) not in visited:
                return (row, col)
    return None


def labyrinth(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Greedy walk whose preferred turn order cycles through eight phases.

    Dead ends are escaped by walking towards the nearest unvisited cell; the
    connector passes over visited cells without recording them.
    """

    total = n * n
    row = col = 0
    path: List[Cell] = [(0, 0)]
    visited: Set[Cell] = {(0, 0)}
    step = 0

    while len(visited) < total:
        moved = False
        order = _LABYRINTH_PHASES[step % 8] + (0, 1, 2, 3)
        for index in order:
            dr, dc = _COMPASS[index]
            nr, nc = row + dr, col + dc
            if _in_grid(n, nr, nc) and (nr, nc) not in visited:
                row, col = nr, nc
                path.append((row, col))
                visited.add((row, col))
                moved = True
                break

        if not moved:
            target = _nearest_unvisited(n, visited, (row, col))
            if target is None:
                break
            while (row, col) != target:
                row_diff = target[0] - row
                col_diff = target[1] - col
                if (step % 2 == 0 and col_diff != 0) or row_diff == 0:
                    col += 1 if col_diff > 0 else -1
                else:
                    row += 1 if row_diff > 0 else -1
                if (row, col) not in visited:
                    path.append((row, col))
                    visited.add((row, col))
                step += 1

        step += 1
        if step > total * 2:
            LOGGER.debug("Labyrinth walk hit its step limit with %s/%s cells", len(visited), total)
            break
    return path


def _nearest_unvisited(n: int, visited: Set[Cell], origin: Cell) -> Optional[Cell]:
    best: Optional[Cell] = None
    best_distance = n * 4
    for row in range(n):
        for col in range(n):
            if (row, col) in visited:
                continue
            distance = abs(row - origin[0]) + abs(col - origin[1])
            if distance < best_distance:
                best, best_distance = (row, col), distance
    return best


# ----------------------------------------------------------------------
# Quadrant fractal
# ----------------------------------------------------------------------
def quadrant_fractal(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Recursive quadrant ordering for power-of-two sizes.

    Each level visits its four quadrants in one of four rotated orders so that
    consecutive quadrants share an edge (a Hilbert ordering). Other sizes use a
    phased row sweep whose direction only flips every few rows, which is
    usually rejected by certification.
    """

    if n & (n - 1) == 0:
        return [_hilbert_cell(n, d) for d in range(n * n)]
    path: List[Cell] = []
    for row in range(n):
        if (row * 8 // n) % 8 < 4:
            path.extend((row, col) for col in range(n))
        else:
            path.extend((row, col) for col in range(n - 1, -1, -1))
    return path


def _hilbert_cell(n: int, distance: int) -> Cell:
    x = y = 0
    span = 1
    remaining = distance
    while span < n:
        rx = 1 & (remaining // 2)
        ry = 1 & (remaining ^ rx)
        if ry == 0:
            if rx == 1:
                x = span - 1 - x
                y = span - 1 - y
            x, y = y, x
        x += span * rx
        y += span * ry
        remaining //= 4
        span *= 2
    return (y, x)


# ----------------------------------------------------------------------
# Maze
# ----------------------------------------------------------------------
def maze(n: int, rng: Optional[random.Random] = None) -> List[Cell]:
    """Four-phase randomized fill.

    1. backtracking walk from a random cell, with two-cell jumps and small
       ring sweeps at some depths;
    2. three zigzag passes over the rows;
    3. short random walks from each leftover cell;
    4. row scan for anything still missing.
    """

    rng = rng or random.Random()
    total = n * n
    path: List[Cell] = []
    visited: Set[Cell] = set()

    start = (rng.randrange(n), rng.randrange(n))
    stack: List[Iterator[Tuple[int, int, int]]] = [
        _maze_frame(n, start[0], start[1], 0, visited, path, rng)
    ]
    while stack:
        try:
            row, col, depth = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue
        stack.append(_maze_frame(n, row, col, depth, visited, path, rng))
    LOGGER.debug("Maze phase 1 covered %s/%s cells", len(path), total)

    direction = 1
    for _ in range(3):
        for row in range(n):
            if row % 2 == 0:
                cols = range(n) if direction == 1 else range(n - 1, -1, -1)
                direction = -direction
            else:
                cols = range(n)
            for col in cols:
                if (row, col) not in visited:
                    visited.add((row, col))
                    path.append((row, col))

    leftovers = [(row, col) for row in range(n) for col in range(n) if (row, col) not in visited]
    for cell in leftovers:
        if cell in visited:
            continue
        visited.add(cell)
        path.append(cell)
        row, col = cell
        for _ in range(5):
            dr, dc = rng.choice(_COMPASS)
            nr, nc = row + dr, col + dc
            if _in_grid(n, nr, nc) and (nr, nc) not in visited:
                visited.add((nr, nc))
                path.append((nr, nc))
                row, col = nr, nc

    for row in range(n):
        for col in range(n):
            if (row, col) not in visited:
                visited.add((row, col))
                path.append((row, col))
    return path


def _maze_frame(
    n: int,
    row: int,
    col: int,
    depth: int,
    visited: Set[Cell],
    path: List[Cell],
    rng: random.Random,
) -> Iterator[Tuple[int, int, int]]:
    """One backtracking step; yields the child cells to expand in order."""

    if (row, col) in visited or depth > n * n:
        return
    visited.add((row, col))
    path.append((row, col))

    directions = list(_COMPASS)
    rng.shuffle(directions)
    for dr, dc in directions:
        nr, nc = row + dr, col + dc
        if not _in_grid(n, nr, nc) or (nr, nc) in visited:
            continue
        far_row, far_col = row + 2 * dr, col + 2 * dc
        if depth % 3 == 0 and _in_grid(n, far_row, far_col):
            if (far_row, far_col) not in visited:
                yield (nr, nc, depth + 1)
                yield (far_row, far_col, depth + 2)
        else:
            yield (nr, nc, depth + 1)

    if depth % 5 == 0:
        for radius in (1, 2):
            for dr in range(-radius, radius + 1):
                for dc in range(-radius, radius + 1):
                    if abs(dr) != radius and abs(dc) != radius:
                        continue
                    ring_cell = (row + dr, col + dc)
                    if _in_grid(n, *ring_cell) and ring_cell not in visited:
                        visited.add(ring_cell)
                        path.append(ring_cell)


# ----------------------------------------------------------------------
# Registry
# ----------------------------------------------------------------------
PATTERN_GENERATORS: Dict[PatternFamily, PatternGenerator] = {
    PatternFamily.BOUSTROPHEDON: boustrophedon,
    PatternFamily.SPIRAL: spiral,
    PatternFamily.COLUMN_ZIGZAG: column_zigzag,
    PatternFamily.L_SHAPE: l_shape,
    PatternFamily.DIAMOND_RING: diamond_ring,
    PatternFamily.WAVE: wave,
    PatternFamily.LAYERED_ROTATION: layered_rotation,
    PatternFamily.QUADRANT_FRACTAL: quadrant_fractal,
    PatternFamily.COMPLEX_DUAL_SPIRAL: complex_dual_spiral,
    PatternFamily.MAZE: maze,
    PatternFamily.LABYRINTH: labyrinth,
}

SIMPLE_FAMILIES: Tuple[PatternFamily, ...] = (
    PatternFamily.BOUSTROPHEDON,
    PatternFamily.SPIRAL,
    PatternFamily.COLUMN_ZIGZAG,
)
MODERATE_FAMILIES: Tuple[PatternFamily, ...] = (
    PatternFamily.L_SHAPE,
    PatternFamily.DIAMOND_RING,
    PatternFamily.WAVE,
    PatternFamily.LAYERED_ROTATION,
    PatternFamily.COMPLEX_DUAL_SPIRAL,
)
HARD_FAMILIES: Tuple[PatternFamily, ...] = (
    PatternFamily.QUADRANT_FRACTAL,
    PatternFamily.MAZE,
    PatternFamily.LABYRINTH,
)


def tier_weights(n: int) -> Tuple[int, int, int]:
    """Relative weights of the simple, moderate and hard tiers for a size."""

    if n <= 4:
        return (6, 1, 0)
    if n <= 6:
        return (3, 3, 1)
    return (1, 2, 2)


def choose_family(n: int, rng: random.Random) -> PatternFamily:
    """Weighted random family, favouring simpler ones on small grids."""

    simple, moderate, hard = tier_weights(n)
    families: List[PatternFamily] = []
    weights: List[int] = []
    for tier, weight in ((SIMPLE_FAMILIES, simple), (MODERATE_FAMILIES, moderate), (HARD_FAMILIES, hard)):
        if weight <= 0:
            continue
        families.extend(tier)
        weights.extend([weight] * len(tier))
    return rng.choices(families, weights=weights, k=1)[0]


def generate_pattern(
    family: PatternFamily | str,
    n: int,
    rng: Optional[random.Random] = None,
) -> List[Cell]:
    """Run the generator for ``family``; ``auto`` picks one with ``rng``."""

    rng = rng or random.Random()
    family = PatternFamily.parse(family)
    if family == PatternFamily.AUTO:
        family = choose_family(n, rng)
    path = PATTERN_GENERATORS[family](n, rng)
    LOGGER.debug("Generated %s candidate for N=%s (%s cells)", family.value, n, len(path))
    return path
