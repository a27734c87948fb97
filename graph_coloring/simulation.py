from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple

from .graph import Graph, build_graph
from .palette import Color, Palette
from .sequencer import Frame, frames_from_result
from .solver import SolveResult, SolverName, solve_coloring


@dataclass(frozen=True)
class Simulation:
    graph: Graph
    palette: Palette
    result: SolveResult
    frames: Tuple[Frame, ...]  # empty unless result.colored

    @property
    def message(self) -> str:
        if self.result.colored:
            return f"Graph colored using {len(self.palette)} colors."
        if self.result.aborted:
            return f"Search stopped before finishing: {self.result.reason}"
        return f"Graph cannot be colored using {len(self.palette)} colors."


def make_palette(colors: Optional[int] = None, palette: Optional[Sequence[Color]] = None) -> Palette:
    """Resolve a requested color count and/or custom palette into a `Palette`."""
    if palette is not None:
        custom = Palette.custom(palette)
        return custom if colors is None else custom.first(colors)
    return Palette.from_catalog(3 if colors is None else colors)


def simulate(
    nodes: Iterable[Any],
    edges: Iterable[Any],
    colors: Optional[int] = None,
    *,
    palette: Optional[Sequence[Color]] = None,
    solver: SolverName = "backtracking",
    timeout_ms: int | None = None,
    max_steps: int | None = None,
) -> Simulation:
    """Validate, solve and expand in one call.

    Raises `GraphValidationError` or `PaletteError` for bad input; an
    uncolorable graph is a normal result with no frames.
    """

    graph = build_graph(nodes, edges)
    pal = make_palette(colors, palette)
    res = solve_coloring(graph, pal, solver=solver, timeout_ms=timeout_ms, max_steps=max_steps)
    return Simulation(graph=graph, palette=pal, result=res, frames=frames_from_result(graph, res, palette=pal))
