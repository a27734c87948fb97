from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .graph import Graph, build_graph
from .palette import Color, Palette
from .simulation import make_palette


@dataclass
class ColoringProblem:
    """A graph plus the palette it should be colored with.

    - `graph` is already validated.
    - `palette` is either the first `colors` catalog entries or a custom list.
    """

    graph: Graph
    palette: Palette
    meta: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_file(path: str | Path, *, colors: Optional[int] = None) -> "ColoringProblem":
        path = Path(path)
        if path.suffix.lower() == ".json":
            return ColoringProblem.from_json(path.read_text(encoding="utf-8"), colors=colors)
        return ColoringProblem.from_text(path.read_text(encoding="utf-8"), source_name=str(path), colors=colors)

    @staticmethod
    def from_json(text: str, *, colors: Optional[int] = None) -> "ColoringProblem":
        """Parse ``{"nodes": [...], "edges": [...], "colors": 3, "palette": [...]}``.

        Nodes are ``{"id", "label"}`` objects or bare ids; edges are
        ``{"from", "to"}`` objects or ``[from, to]`` pairs. `colors` overrides
        the file's own count.
        """
        obj = json.loads(text)
        if not isinstance(obj, dict):
            raise ValueError("Problem JSON must be an object")

        for key in ("nodes", "edges"):
            if not isinstance(obj.get(key, []), list):
                raise ValueError(f"Problem JSON {key!r} must be a list")
        custom: Optional[List[Color]] = obj.get("palette")
        if custom is not None and not (isinstance(custom, list) and all(isinstance(c, str) for c in custom)):
            raise ValueError("Problem JSON 'palette' must be a list of color names")
        meta = obj.get("meta", {})
        if not isinstance(meta, dict):
            raise ValueError("Problem JSON 'meta' must be an object")

        graph = build_graph(obj.get("nodes", []), obj.get("edges", []))
        count = colors if colors is not None else obj.get("colors")
        palette = make_palette(count, custom)
        return ColoringProblem(graph=graph, palette=palette, meta=dict(meta))

    @staticmethod
    def from_text(text: str, *, source_name: str = "<text>", colors: Optional[int] = None) -> "ColoringProblem":
        """Parse the line-based `.graph` format.

        ```
        # colors: 3
        # title: triangle
        node A Alpha
        node B
        edge A B
        ```

        "# key: value" lines are directives (``colors`` and ``palette`` are
        understood, anything else goes to `meta`); other "# " lines are
        comments.
        """
        meta: Dict[str, Any] = {"source": source_name}
        count: Optional[int] = None
        custom: Optional[List[Color]] = None
        nodes: List[Dict[str, str]] = []
        edges: List[List[str]] = []

        for lineno, ln in enumerate(text.splitlines(), start=1):
            raw = ln.strip()
            if not raw:
                continue
            if raw.startswith("#"):
                hdr = raw[1:].strip()
                if ":" in hdr:
                    k, v = [x.strip() for x in hdr.split(":", 1)]
                    if k.lower() == "colors":
                        try:
                            count = int(v)
                        except ValueError as e:
                            raise ValueError(f"{source_name}:{lineno}: colors must be an integer") from e
                    elif k.lower() == "palette":
                        custom = [c.strip() for c in v.split(",") if c.strip()]
                    else:
                        meta[k] = v
                continue

            parts = raw.split()
            kind = parts[0].lower()
            if kind == "node" and len(parts) >= 2:
                nodes.append({"id": parts[1], "label": " ".join(parts[2:])})
            elif kind == "edge" and len(parts) == 3:
                edges.append([parts[1], parts[2]])
            else:
                raise ValueError(f"{source_name}:{lineno}: expected 'node ID [LABEL]' or 'edge FROM TO', got {raw!r}")

        graph = build_graph(nodes, edges)
        palette = make_palette(colors if colors is not None else count, custom)
        return ColoringProblem(graph=graph, palette=palette, meta=meta)
