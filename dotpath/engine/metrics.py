"""Shape metrics, descriptions and player hints for generated paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Sequence, Set, Tuple

from ..core.constants import PatternFamily
from ..core.models import Cell

SYMMETRY_THRESHOLD = 0.7

FAMILY_HINTS: Dict[PatternFamily, Tuple[str, ...]] = {
    PatternFamily.BOUSTROPHEDON: ("Start simple and build up", "Follow the basic pattern"),
    PatternFamily.SPIRAL: ("Start from outside and work inward", "Follow the circular motion"),
    PatternFamily.COLUMN_ZIGZAG: ("Alternate direction each column", "Look for the back-and-forth pattern"),
    PatternFamily.L_SHAPE: ("Look for L-shaped segments", "Corner turns are important"),
    PatternFamily.DIAMOND_RING: ("Trace the border before the middle", "Follow the rings inward"),
    PatternFamily.WAVE: ("Follow the wave-like motion", "Smooth curves are key"),
    PatternFamily.LAYERED_ROTATION: ("Watch for sharp direction changes", "Each ring turns the other way"),
    PatternFamily.QUADRANT_FRACTAL: ("Look for repeating sub-patterns", "Think recursively"),
    PatternFamily.COMPLEX_DUAL_SPIRAL: ("Break it down into smaller sections", "Look for patterns within patterns"),
    PatternFamily.MAZE: ("Find the longest continuous path", "Avoid dead ends"),
    PatternFamily.LABYRINTH: ("There is only one correct path", "Patience is key"),
}
DEFAULT_HINTS: Tuple[str, ...] = ("Take your time", "Look for patterns")

# (minimum level, hint) pairs appended after the family hints.
LEVEL_HINTS: Tuple[Tuple[int, str], ...] = (
    (6, "Pay attention to symmetry"),
    (8, "Consider rotational patterns"),
    (10, "Think about recursive structures"),
)


@dataclass(frozen=True)
class PatternMetrics:
    turn_count: int
    complexity: int
    complexity_score: float
    symmetry: bool
    compactness: float


def _steps(path: Sequence[Cell]) -> List[Tuple[int, int]]:
    return [(b[0] - a[0], b[1] - a[1]) for a, b in zip(path, path[1:])]


def measure_pattern(path: Sequence[Cell], n: int) -> PatternMetrics:
    """Turn count, 1-10 complexity, mirror symmetry and compactness of a path."""

    steps = _steps(path)
    turns = sum(1 for before, after in zip(steps, steps[1:]) if before != after)
    max_turns = max(1, len(path) - 1)
    complexity = min(10, int(turns / max_turns * 10) + 1)
    travelled = sum(abs(dr) + abs(dc) for dr, dc in steps)
    compactness = (len(path) - 1) / travelled if travelled else 1.0
    return PatternMetrics(
        turn_count=turns,
        complexity=complexity,
        complexity_score=turns / max_turns,
        symmetry=_mirror_symmetric(path, n),
        compactness=compactness,
    )


def _mirror_symmetric(path: Sequence[Cell], n: int) -> bool:
    """True when most steps reappear mirrored left-to-right."""

    edges: Set[FrozenSet[Cell]] = {frozenset((a, b)) for a, b in zip(path, path[1:])}
    if not edges:
        return True
    matches = 0
    for edge in edges:
        mirrored = frozenset((row, n - 1 - col) for row, col in edge)
        if mirrored in edges:
            matches += 1
    return matches / len(edges) > SYMMETRY_THRESHOLD


def complexity_label(complexity: int) -> str:
    if complexity <= 3:
        return "Simple"
    if complexity <= 6:
        return "Moderate"
    if complexity <= 8:
        return "Complex"
    return "Expert"


def challenge_label(complexity_score: float) -> str:
    if complexity_score > 0.4:
        return "impossible"
    if complexity_score > 0.3:
        return "insane"
    return "extreme"


def describe_pattern(family: PatternFamily, metrics: PatternMetrics, seeded: bool = False) -> str:
    """Human readable summary, e.g. ``"Moderate spiral with symmetry (efficient path)"``.

    With ``seeded`` the path is not the family's own shape (it was found by the
    oracle from dots placed on it), so the family is only named as the seed.
    """

    name = family.value.replace("_", " ")
    if seeded:
        name = f"traversal seeded by {name}"
    symmetry = " with symmetry" if metrics.symmetry else ""
    if metrics.compactness > 0.8:
        shape = " (efficient path)"
    elif metrics.compactness > 0.6:
        shape = " (moderate path)"
    else:
        shape = " (winding path)"
    return f"{complexity_label(metrics.complexity)} {name}{symmetry}{shape}"


def pattern_hints(family: PatternFamily, level: int = 1) -> List[str]:
    hints = list(FAMILY_HINTS.get(family, DEFAULT_HINTS))
    hints.extend(hint for minimum, hint in LEVEL_HINTS if level >= minimum)
    return hints
