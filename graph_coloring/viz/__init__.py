from .plotly_viz import build_animation_figure, node_positions, write_animation_html

__all__ = [
    "build_animation_figure",
    "node_positions",
    "write_animation_html",
]
