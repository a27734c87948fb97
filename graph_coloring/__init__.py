from .graph import Edge, Graph, GraphValidationError, Node, NodeId, build_graph
from .palette import CATALOG, CATALOG_SIZE, Color, Palette, PaletteError
from .sequencer import Frame, expand_frames, frames_from_result
from .simulation import Simulation, make_palette, simulate
from .solver import SOLVER_CHOICES, SolveResult, solve_coloring

__all__ = [
    "CATALOG",
    "CATALOG_SIZE",
    "Color",
    "Edge",
    "Frame",
    "Graph",
    "GraphValidationError",
    "Node",
    "NodeId",
    "Palette",
    "PaletteError",
    "SOLVER_CHOICES",
    "Simulation",
    "SolveResult",
    "build_graph",
    "expand_frames",
    "frames_from_result",
    "make_palette",
    "simulate",
    "solve_coloring",
]
