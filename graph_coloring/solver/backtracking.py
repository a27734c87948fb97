from __future__ import annotations

import time
from types import MappingProxyType
from typing import List, Optional

from ..graph import Graph
from ..palette import Palette
from .types import SolveResult


class SearchAborted(Exception):
    pass


def solve_with_backtracking(
    graph: Graph,
    palette: Palette,
    *,
    timeout_ms: int | None = None,
    max_steps: int | None = None,
) -> SolveResult:
    """Depth-first backtracking over nodes in declaration order.

    Colors are tried in palette order; the first complete assignment found
    wins. The search keeps an explicit stack instead of recursing, so node
    count is not bounded by the interpreter's recursion limit.
    """

    start_time = time.monotonic()

    if graph.self_loops:
        return SolveResult(
            status="uncolorable",
            node_color=None,
            solver="backtracking",
            reason=f"Self-loop on {', '.join(repr(n) for n in graph.self_loops)}",
        )

    ids = graph.node_ids
    n = len(ids)
    k = len(palette)
    neighbors: List[List[int]] = [[graph.index_of(nb) for nb in graph.neighbors(u)] for u in ids]

    # Palette index per node position; None => uncolored.
    assigned: List[Optional[int]] = [None] * n

    steps = 0

    def check_budget() -> None:
        if max_steps is not None and steps > max_steps:
            raise SearchAborted(f"Search gave up after {max_steps} steps")
        if timeout_ms is not None and steps % 1000 == 0:
            elapsed_ms = (time.monotonic() - start_time) * 1000.0
            if elapsed_ms > timeout_ms:
                raise SearchAborted(f"Search timed out after {timeout_ms}ms")

    def is_safe(pos: int) -> bool:
        color = assigned[pos]
        for nb in neighbors[pos]:
            if assigned[nb] == color:
                return False
        return True

    # stack[d] = next palette index to resume from when backtracking into depth d
    stack: List[int] = []
    next_color = 0

    try:
        while len(stack) < n:
            depth = len(stack)
            placed = False
            for c in range(next_color, k):
                steps += 1
                check_budget()
                assigned[depth] = c
                if is_safe(depth):
                    stack.append(c + 1)
                    next_color = 0
                    placed = True
                    break
                assigned[depth] = None

            if placed:
                continue

            if not stack:
                return SolveResult(
                    status="uncolorable",
                    node_color=None,
                    solver="backtracking",
                    steps=steps,
                    reason=f"No valid coloring with {k} colors",
                )
            next_color = stack.pop()
            assigned[len(stack)] = None
    except SearchAborted as e:
        return SolveResult(status="aborted", node_color=None, solver="backtracking", steps=steps, reason=str(e))

    node_color = {u: palette.colors[assigned[i]] for i, u in enumerate(ids)}  # type: ignore[index]
    return SolveResult(
        status="colored",
        node_color=MappingProxyType(node_color),
        solver="backtracking",
        steps=steps,
    )
