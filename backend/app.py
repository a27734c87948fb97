from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# Allow running `python backend/app.py` from repo root.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from graph_coloring.graph import Graph, GraphValidationError, build_graph
from graph_coloring.logs import configure_logging
from graph_coloring.palette import CATALOG, PaletteError
from graph_coloring.simulation import Simulation, simulate
from graph_coloring.viz import build_animation_figure

MAX_TIMEOUT_MS = 60_000
MAX_COLORS_CUSTOM = 64
DEFAULT_TIMEOUT_MS = int(os.environ.get("DEFAULT_TIMEOUT_MS", "10000"))

configure_logging(os.environ.get("LOG_LEVEL", "info"))
log = structlog.get_logger(__name__)


class NodeIn(BaseModel):
    id: Optional[str] = None
    label: Optional[str] = None


class EdgeIn(BaseModel):
    source: Optional[str] = Field(default=None, alias="from")
    target: Optional[str] = Field(default=None, alias="to")

    model_config = {"populate_by_name": True}


class GraphRequest(BaseModel):
    nodes: List[NodeIn]
    edges: List[Union[EdgeIn, List[str]]] = Field(default_factory=list)


class SolveRequest(GraphRequest):
    colors: Optional[int] = Field(default=None, ge=1, le=MAX_COLORS_CUSTOM)
    palette: Optional[List[str]] = Field(default=None, max_length=MAX_COLORS_CUSTOM)
    solver: str = Field(default="backtracking")
    timeout_ms: Optional[int] = Field(default=None, ge=1, le=MAX_TIMEOUT_MS)
    max_steps: Optional[int] = Field(default=None, ge=1)


class AnimateRequest(SolveRequest):
    interval_ms: int = Field(default=1000, ge=50, le=60_000)
    title: str = Field(default="Graph Coloring")


def _raw_nodes(req: GraphRequest) -> List[Dict[str, Any]]:
    return [{"id": n.id, "label": n.label} for n in req.nodes]


def _raw_edges(req: GraphRequest) -> List[Any]:
    out: List[Any] = []
    for e in req.edges:
        if isinstance(e, EdgeIn):
            out.append({"from": e.source, "to": e.target})
        else:
            out.append(e)
    return out


def _graph_payload(graph: Graph) -> Dict[str, Any]:
    return {
        "nodes": [{"id": n.id, "label": n.label} for n in graph.nodes],
        "edges": [{"from": e.source, "to": e.target} for e in graph.edges],
        "adjacency": graph.adjacency(),
        "self_loops": list(graph.self_loops),
    }


def _run(req: SolveRequest) -> Simulation:
    try:
        return simulate(
            _raw_nodes(req),
            _raw_edges(req),
            req.colors,
            palette=req.palette,
            solver=req.solver,  # type: ignore[arg-type]
            timeout_ms=req.timeout_ms if req.timeout_ms is not None else DEFAULT_TIMEOUT_MS,
            max_steps=req.max_steps,
        )
    except GraphValidationError as e:
        log.info("request.invalid_graph", issues=e.issues)
        raise HTTPException(status_code=400, detail={"error": "invalid_graph", "issues": e.issues}) from e
    except PaletteError as e:
        raise HTTPException(status_code=400, detail={"error": "invalid_palette", "issues": [str(e)]}) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail={"error": "bad_request", "issues": [str(e)]}) from e


app = FastAPI(title="Graph Coloring API", version="0.1.0")

cors_raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
cors_list = [c.strip() for c in cors_raw.split(",") if c.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/palette")
def palette() -> Dict[str, Any]:
    return {"colors": [{"name": name, "hex": hex_} for name, hex_ in CATALOG], "size": len(CATALOG)}


@app.post("/graph")
def validate_graph(req: GraphRequest) -> Dict[str, Any]:
    try:
        graph = build_graph(_raw_nodes(req), _raw_edges(req))
    except GraphValidationError as e:
        raise HTTPException(status_code=400, detail={"error": "invalid_graph", "issues": e.issues}) from e
    return {"graph": _graph_payload(graph)}


@app.post("/solve")
def solve(req: SolveRequest) -> Dict[str, Any]:
    sim = _run(req)
    res = sim.result
    return {
        "status": res.status,
        "message": sim.message,
        "solver": res.solver,
        "steps": res.steps,
        "reason": res.reason or None,
        "palette": list(sim.palette.colors),
        "node_color": dict(res.node_color) if res.node_color is not None else None,
        "frames": [f.as_dict() for f in sim.frames],
        "graph": _graph_payload(sim.graph),
    }


@app.post("/animate", response_class=HTMLResponse)
def animate(req: AnimateRequest) -> HTMLResponse:
    sim = _run(req)
    title = req.title if sim.result.colored else f"{req.title}: {sim.message}"
    fig = build_animation_figure(sim.graph, sim.frames, sim.palette, title=title, interval_ms=req.interval_ms)
    return HTMLResponse(fig.to_html(include_plotlyjs="cdn", full_html=True))
