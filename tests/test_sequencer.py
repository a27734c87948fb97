"""Tests for frame expansion."""

import dataclasses

import pytest

from graph_coloring.graph import build_graph
from graph_coloring.palette import Palette
from graph_coloring.sequencer import Frame, expand_frames, frames_from_result
from graph_coloring.solver import solve_coloring


def path_graph():
    return build_graph(["A", "B", "C"], [["A", "B"], ["B", "C"]])


class TestExpandFrames:
    """Test expand_frames."""

    def test_reveals_in_declaration_order(self):
        """The A-B-C example reveals one node per frame."""
        graph = path_graph()
        res = solve_coloring(graph, Palette.from_catalog(2))
        frames = expand_frames(graph, res.node_color)
        assert [f.colored() for f in frames] == [
            {},
            {"A": "yellow"},
            {"A": "yellow", "B": "blue"},
            {"A": "yellow", "B": "blue", "C": "yellow"},
        ]
        assert [f.index for f in frames] == [0, 1, 2, 3]

    def test_frame_count_and_monotonicity(self):
        ids = [f"n{i}" for i in range(8)]
        graph = build_graph(ids, list(zip(ids, ids[1:])) + [["n0", "n7"]])
        res = solve_coloring(graph, Palette.from_catalog(3))
        frames = expand_frames(graph, res.node_color)
        assert len(frames) == len(ids) + 1
        for k, frame in enumerate(frames):
            assert frame.colored_count == k
            if k:
                prev = frames[k - 1].colored()
                cur = frame.colored()
                assert set(prev) < set(cur)
                assert all(cur[n] == c for n, c in prev.items())
        assert frames[-1].colored() == dict(res.node_color)

    def test_every_frame_lists_every_node(self):
        frames = expand_frames(path_graph(), {"A": "red", "B": "blue", "C": "red"})
        for frame in frames:
            assert [nid for nid, _c in frame.colors] == ["A", "B", "C"]
        assert frames[0].as_dict() == {"A": None, "B": None, "C": None}
        assert frames[2].color_of("B") == "blue"
        assert frames[2].color_of("C") is None
        with pytest.raises(KeyError):
            frames[0].color_of("Z")

    def test_empty_graph_has_one_blank_frame(self):
        frames = expand_frames(build_graph([]), {})
        assert frames == (Frame(index=0, colors=()),)

    def test_frames_are_frozen_and_replayable(self):
        graph = path_graph()
        frames = expand_frames(graph, {"A": "red", "B": "blue", "C": "red"})
        assert isinstance(frames, tuple)
        assert list(frames) == list(frames)
        with pytest.raises(dataclasses.FrozenInstanceError):
            frames[0].index = 5  # type: ignore[misc]

    def test_missing_node(self):
        with pytest.raises(ValueError, match="missing node 'C'"):
            expand_frames(path_graph(), {"A": "red", "B": "blue"})

    def test_color_outside_palette(self):
        with pytest.raises(ValueError, match="outside the palette"):
            expand_frames(path_graph(), {"A": "red", "B": "blue", "C": "mauve"}, palette=Palette.from_catalog(3))


class TestFramesFromResult:
    """Test frames_from_result."""

    def test_uncolorable_yields_no_frames(self):
        graph = build_graph(["A", "B", "C"], [["A", "B"], ["B", "C"], ["C", "A"]])
        res = solve_coloring(graph, Palette.from_catalog(2))
        assert frames_from_result(graph, res) == ()

    def test_colored_yields_frames(self):
        graph = path_graph()
        pal = Palette.from_catalog(2)
        frames = frames_from_result(graph, solve_coloring(graph, pal), palette=pal)
        assert len(frames) == 4
