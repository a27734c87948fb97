from __future__ import annotations

import time

import structlog

from ..graph import Graph
from ..palette import Palette
from .backtracking import solve_with_backtracking
from .types import SolveResult, SolverName, SolveStatus
from .z3_solver import solve_with_z3

SOLVER_CHOICES: tuple[SolverName, ...] = ("backtracking", "z3")

log = structlog.get_logger(__name__)


def solve_coloring(
    graph: Graph,
    palette: Palette,
    *,
    solver: SolverName = "backtracking",
    timeout_ms: int | None = None,
    max_steps: int | None = None,
) -> SolveResult:
    if solver not in SOLVER_CHOICES:
        raise ValueError(f"Unknown solver {solver!r}. Choose one of: {', '.join(SOLVER_CHOICES)}")

    log.debug("solve.start", solver=solver, nodes=len(graph), edges=len(graph.edges), colors=len(palette))
    started = time.monotonic()
    if solver == "z3":
        res = solve_with_z3(graph, palette, timeout_ms=timeout_ms)
    else:
        res = solve_with_backtracking(graph, palette, timeout_ms=timeout_ms, max_steps=max_steps)
    log.info(
        "solve.finish",
        solver=solver,
        status=res.status,
        steps=res.steps,
        elapsed_ms=round((time.monotonic() - started) * 1000.0, 3),
        reason=res.reason or None,
    )
    return res


__all__ = [
    "SolveResult",
    "SolveStatus",
    "SolverName",
    "SOLVER_CHOICES",
    "solve_coloring",
    "solve_with_backtracking",
    "solve_with_z3",
]
