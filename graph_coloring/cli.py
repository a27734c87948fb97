from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from .logs import configure_logging
from .problem import ColoringProblem
from .sequencer import frames_from_result
from .solver import SOLVER_CHOICES, solve_coloring
from .viz import write_animation_html


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="graph_coloring", description="Backtracking graph coloring solver + step animator")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log solver progress (-vv for debug)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("problem", type=str, help="Path to .graph or .json problem file")
        p.add_argument("--colors", type=int, default=None, help="Number of colors (overrides the file)")
        p.add_argument("--solver", choices=SOLVER_CHOICES, default="backtracking", help="Solver backend")
        p.add_argument("--timeout-ms", type=int, default=None, help="Give up after this many milliseconds")
        p.add_argument("--max-steps", type=int, default=None, help="Give up after trying this many colors")

    p_solve = sub.add_parser("solve", help="Solve and print the color of each node")
    add_common(p_solve)

    p_frames = sub.add_parser("frames", help="Solve and print the animation frames as JSON")
    add_common(p_frames)

    p_anim = sub.add_parser("animate", help="Solve and write an animated HTML replay")
    add_common(p_anim)
    p_anim.add_argument("--out", type=str, default="out/coloring.html", help="Output HTML path")
    p_anim.add_argument("--interval-ms", type=int, default=1000, help="Time each frame stays on screen")

    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging({0: "warning", 1: "info"}.get(args.verbose, "debug"))

    problem_path = Path(args.problem)
    try:
        problem = ColoringProblem.from_file(problem_path, colors=args.colors)
    except ValueError as e:
        print(f"Invalid problem {problem_path.name}: {e}")
        return 2

    graph, palette = problem.graph, problem.palette
    res = solve_coloring(graph, palette, solver=args.solver, timeout_ms=args.timeout_ms, max_steps=args.max_steps)

    if res.aborted:
        print(f"Gave up on {problem_path.name}: {res.reason}")
        return 1
    if not res.colored or res.node_color is None:
        print(f"Graph cannot be colored using {len(palette)} colors.")
        if res.reason:
            print(f"  reason: {res.reason}")
        return 1

    if args.cmd == "solve":
        print(f"Solved {problem_path.name}: nodes={len(graph)}, edges={sum(1 for _ in graph.unique_edges())}, colors={len(palette)}, steps={res.steps}")
        for node in graph.nodes:
            print(f"  {node.id}: {res.node_color[node.id]}")
        return 0

    frames = frames_from_result(graph, res, palette=palette)

    if args.cmd == "frames":
        print(json.dumps([f.colored() for f in frames], indent=2))
        return 0

    if args.cmd == "animate":
        out = write_animation_html(
            graph,
            frames,
            palette,
            out_path=args.out,
            title=f"Coloring: {problem_path.name}",
            interval_ms=args.interval_ms,
        )
        print(f"Wrote {len(frames)} frames to {out}")
        return 0

    raise AssertionError("unreachable")
