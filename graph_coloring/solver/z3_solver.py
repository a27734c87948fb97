from __future__ import annotations

import base64
from types import MappingProxyType
from typing import Dict

from ..graph import Graph, NodeId
from ..palette import Color, Palette
from .types import SolveResult


def solve_with_z3(graph: Graph, palette: Palette, *, timeout_ms: int | None = None) -> SolveResult:
    """Solve using Z3.

    One Int per node ranging over palette indices, and one disequality per
    edge. A self-loop becomes `x != x`, which Z3 reports as UNSAT.
    """

    try:
        import z3  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("z3-solver is required. Install with: pip install z3-solver") from e

    ids = graph.node_ids
    k = len(palette)
    col = {n: z3.Int(_z3_name("col", n)) for n in ids}

    s = z3.Solver()
    if timeout_ms is not None:
        s.set(timeout=timeout_ms)

    for n in ids:
        s.add(z3.And(col[n] >= 0, col[n] < k))

    for u, v in graph.unique_edges():
        s.add(col[u] != col[v])

    chk = s.check()
    if chk == z3.unknown:
        return SolveResult(
            status="aborted",
            node_color=None,
            solver="z3",
            reason=f"Solver returned UNKNOWN: {s.reason_unknown()}",
        )
    if chk != z3.sat:
        return SolveResult(
            status="uncolorable",
            node_color=None,
            solver="z3",
            reason=f"No valid coloring with {k} colors",
        )

    model = s.model()
    node_color: Dict[NodeId, Color] = {}
    for n in ids:
        idx = model.eval(col[n], model_completion=True).as_long()
        node_color[n] = palette.colors[idx]

    return SolveResult(status="colored", node_color=MappingProxyType(node_color), solver="z3")


def _z3_name(prefix: str, raw: str) -> str:
    """Encode arbitrary strings into collision-free Z3-safe names."""
    enc = base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")
    return f"{prefix}_{enc or 'empty'}"
