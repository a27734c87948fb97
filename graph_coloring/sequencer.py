from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from .graph import Graph, NodeId
from .palette import Color, Palette
from .solver.types import SolveResult


@dataclass(frozen=True)
class Frame:
    """One step of the reveal animation.

    `colors` holds every node in declaration order, paired with its color or
    None while it is still uncolored.
    """

    index: int
    colors: Tuple[Tuple[NodeId, Optional[Color]], ...]

    def color_of(self, node_id: NodeId) -> Optional[Color]:
        for nid, color in self.colors:
            if nid == node_id:
                return color
        raise KeyError(f"Unknown node: {node_id!r}")

    def colored(self) -> Dict[NodeId, Color]:
        return {nid: c for nid, c in self.colors if c is not None}

    @property
    def colored_count(self) -> int:
        return sum(1 for _nid, c in self.colors if c is not None)

    def as_dict(self) -> Dict[NodeId, Optional[Color]]:
        return dict(self.colors)


def expand_frames(
    graph: Graph,
    node_color: Mapping[NodeId, Color],
    *,
    palette: Optional[Palette] = None,
) -> Tuple[Frame, ...]:
    """Expand a finished assignment into `len(graph) + 1` frames.

    Frame 0 is blank; frame k shows the first k nodes in declaration order
    with their final colors, so the last frame is the full assignment.
    """

    final = []
    for nid in graph.node_ids:
        if nid not in node_color:
            raise ValueError(f"Assignment is missing node {nid!r}")
        color = node_color[nid]
        if palette is not None and color not in palette:
            raise ValueError(f"Node {nid!r} has color {color!r} outside the palette")
        final.append((nid, color))

    frames = []
    for k in range(len(final) + 1):
        revealed = tuple(
            (nid, color if pos < k else None) for pos, (nid, color) in enumerate(final)
        )
        frames.append(Frame(index=k, colors=revealed))
    return tuple(frames)


def frames_from_result(graph: Graph, result: SolveResult, *, palette: Optional[Palette] = None) -> Tuple[Frame, ...]:
    if not result.colored or result.node_color is None:
        return ()
    return expand_frames(graph, result.node_color, palette=palette)
