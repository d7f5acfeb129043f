"""CP-SAT solvability backend using OR-Tools.

Answers the same question as :class:`~dotpath.engine.oracle.SolvabilityOracle`
with a circuit model: every cell is a node, an extra depot node closes the
path from the last dot back to the first, and integer positions force the
dots into ascending order.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.constants import OracleVerdict
from ..core.models import Dot, OracleResult
from .grid import GridTopology
from .oracle import index_dots
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def solve_with_cpsat(
    dots: Sequence[Dot],
    n: int,
    time_budget: float = 8.0,
    num_workers: int = 4,
) -> OracleResult:
    """Search for an ordered Hamiltonian traversal with CP-SAT.

    Args:
        dots: Checkpoints numbered 1..K.
        n: Grid size.
        time_budget: Solver time limit in seconds.
        num_workers: CP-SAT search workers.

    Returns:
        An :class:`OracleResult`; ``UNKNOWN`` maps to a timeout and
        ``INFEASIBLE`` to no solution.
    """
    topology = GridTopology(n)
    dot_at, start, end, k = index_dots(dots, topology)
    total = topology.cell_count
    depot = total

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Arc literals over grid edges plus the closing depot arcs
    # ------------------------------------------------------------------
    arcs: List[Tuple[int, int, cp_model.IntVar]] = []
    arc_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    neighbors = topology.neighbor_table()
    for tail in range(total):
        for head in neighbors[tail]:
            if head == start or tail == end:
                continue
            literal = model.new_bool_var(f"arc_{tail}_{head}")
            arc_vars[(tail, head)] = literal
            arcs.append((tail, head, literal))

    enter = model.new_bool_var("depot_enter")
    leave = model.new_bool_var("depot_leave")
    model.add(enter == 1)
    model.add(leave == 1)
    arcs.append((depot, start, enter))
    arcs.append((end, depot, leave))
    model.add_circuit(arcs)

    # ------------------------------------------------------------------
    # Step 2: Positions along the path and dot ordering
    # ------------------------------------------------------------------
    position = [model.new_int_var(0, total - 1, f"pos_{i}") for i in range(total)]
    model.add(position[start] == 0)
    model.add(position[end] == total - 1)
    for (tail, head), literal in arc_vars.items():
        model.add(position[head] == position[tail] + 1).only_enforce_if(literal)

    ordered = sorted(range(total), key=lambda i: dot_at[i])
    dot_cells = [i for i in ordered if dot_at[i]]
    for earlier, later in zip(dot_cells, dot_cells[1:]):
        model.add(position[earlier] < position[later])

    # ------------------------------------------------------------------
    # Step 3: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = time_budget
    solver.parameters.num_workers = num_workers

    LOGGER.info(
        "CP-SAT: %d cells, %d dots, %d arcs, solving (timeout=%0.1fs)...",
        total,
        k,
        len(arcs),
        time_budget,
    )
    status = solver.solve(model)

    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: placement proven unsolvable in %.2fs", solver.wall_time)
        return OracleResult(
            verdict=OracleVerdict.NO_SOLUTION,
            elapsed=solver.wall_time,
            messages=[f"status={solver.status_name(status)}"],
        )
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        return OracleResult(
            verdict=OracleVerdict.TIMEOUT,
            elapsed=solver.wall_time,
            messages=[f"status={solver.status_name(status)}"],
        )

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 4: Extract the path from the position values
    # ------------------------------------------------------------------
    by_position = sorted(range(total), key=lambda i: solver.value(position[i]))
    return OracleResult(
        verdict=OracleVerdict.SOLVED,
        path=[topology.cell_at(i) for i in by_position],
        elapsed=solver.wall_time,
    )
