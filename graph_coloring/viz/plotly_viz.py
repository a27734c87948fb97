from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from ..graph import Graph, NodeId
from ..palette import UNCOLORED_HEX, Palette
from ..sequencer import Frame

DEFAULT_INTERVAL_MS = 1000


def node_positions(graph: Graph) -> Dict[NodeId, Tuple[float, float]]:
    """Place nodes on a circle in declaration order (stable across runs)."""
    import networkx as nx

    pos = nx.circular_layout(graph.to_networkx())
    return {nid: (float(xy[0]), float(xy[1])) for nid, xy in pos.items()}


def _edge_trace(graph: Graph, pos: Dict[NodeId, Tuple[float, float]]):
    import plotly.graph_objects as go

    ex, ey = [], []
    for u, v in graph.unique_edges():
        ex += [pos[u][0], pos[v][0], None]
        ey += [pos[u][1], pos[v][1], None]
    return go.Scatter(
        x=ex,
        y=ey,
        mode="lines",
        line=dict(width=2, color="#000"),
        hoverinfo="none",
        name="edges",
    )


def _node_trace(graph: Graph, pos: Dict[NodeId, Tuple[float, float]], frame: Optional[Frame], palette: Palette):
    import plotly.graph_objects as go

    colors = frame.as_dict() if frame is not None else {}
    nx_, ny, ntext, nhover, ncolor = [], [], [], [], []
    for node in graph.nodes:
        nx_.append(pos[node.id][0])
        ny.append(pos[node.id][1])
        ntext.append(node.label)
        color = colors.get(node.id)
        nhover.append(f"id={node.id}<br>color={color or 'uncolored'}")
        ncolor.append(palette.hex_for(color) if color is not None else UNCOLORED_HEX)

    return go.Scatter(
        x=nx_,
        y=ny,
        mode="markers+text",
        marker=dict(size=28, color=ncolor, line=dict(width=1, color="#333")),
        text=ntext,
        textposition="top center",
        hovertext=nhover,
        hoverinfo="text",
        name="nodes",
    )


def build_animation_figure(
    graph: Graph,
    frames: Sequence[Frame],
    palette: Palette,
    *,
    title: str = "Graph Coloring",
    interval_ms: int = DEFAULT_INTERVAL_MS,
):
    """Animated figure stepping through `frames` with Play/Stop controls.

    With no frames (e.g. an uncolorable graph) the figure shows the bare graph.
    """
    import plotly.graph_objects as go

    pos = node_positions(graph)
    edges = _edge_trace(graph, pos)
    first = frames[0] if frames else None
    fig = go.Figure(data=[edges, _node_trace(graph, pos, first, palette)])

    if frames:
        fig.frames = [
            go.Frame(data=[edges, _node_trace(graph, pos, f, palette)], name=str(f.index)) for f in frames
        ]
        fig.update_layout(
            updatemenus=[
                dict(
                    type="buttons",
                    direction="left",
                    x=0.0,
                    y=-0.05,
                    showactive=False,
                    buttons=[
                        dict(
                            label="Play",
                            method="animate",
                            args=[
                                None,
                                dict(
                                    frame=dict(duration=interval_ms, redraw=True),
                                    transition=dict(duration=0),
                                    fromcurrent=True,
                                ),
                            ],
                        ),
                        dict(
                            label="Stop",
                            method="animate",
                            args=[
                                [None],
                                dict(frame=dict(duration=0, redraw=False), transition=dict(duration=0), mode="immediate"),
                            ],
                        ),
                    ],
                )
            ],
            sliders=[
                dict(
                    active=0,
                    currentvalue=dict(prefix="Step "),
                    steps=[
                        dict(
                            label=f"{f.index + 1} / {len(frames)}",
                            method="animate",
                            args=[[str(f.index)], dict(mode="immediate", frame=dict(duration=0, redraw=True))],
                        )
                        for f in frames
                    ],
                )
            ],
        )

    fig.update_layout(
        title=title,
        showlegend=False,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False, scaleanchor="x", scaleratio=1),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def write_animation_html(
    graph: Graph,
    frames: Sequence[Frame],
    palette: Palette,
    *,
    out_path: str | Path,
    title: str = "Graph Coloring",
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig = build_animation_figure(graph, frames, palette, title=title, interval_ms=interval_ms)
    fig.write_html(str(out_path), include_plotlyjs="cdn", full_html=True, auto_play=False)
    return out_path
