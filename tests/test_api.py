"""Tests for the HTTP service."""

import pytest
from fastapi.testclient import TestClient

from backend.app import app

client = TestClient(app)

TRIANGLE = {
    "nodes": [{"id": "A", "label": "Alpha"}, {"id": "B", "label": "Beta"}, {"id": "C", "label": "Gamma"}],
    "edges": [{"from": "A", "to": "B"}, {"from": "B", "to": "C"}, {"from": "C", "to": "A"}],
}


class TestBasics:
    def test_health(self):
        assert client.get("/health").json() == {"status": "ok"}

    def test_palette(self):
        body = client.get("/palette").json()
        assert body["size"] == 6
        assert [c["name"] for c in body["colors"]] == ["yellow", "blue", "red", "green", "gray", "pink"]


class TestGraphEndpoint:
    def test_normalizes_graph(self):
        resp = client.post("/graph", json={"nodes": [{"id": "A"}, {"id": "B"}], "edges": [["A", "B"], ["B", "B"]]})
        assert resp.status_code == 200
        graph = resp.json()["graph"]
        assert graph["nodes"] == [{"id": "A", "label": "A"}, {"id": "B", "label": "B"}]
        assert graph["adjacency"] == {"A": ["B"], "B": ["A", "B"]}
        assert graph["self_loops"] == ["B"]

    def test_reports_validation_issues(self):
        resp = client.post("/graph", json={"nodes": [{"id": "X"}, {"id": ""}], "edges": [{"from": "X", "to": "Y"}]})
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["error"] == "invalid_graph"
        assert len(detail["issues"]) == 2


class TestSolveEndpoint:
    def test_colored(self):
        resp = client.post("/solve", json={**TRIANGLE, "colors": 3})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "colored"
        assert body["node_color"] == {"A": "yellow", "B": "blue", "C": "red"}
        assert len(body["frames"]) == 4
        assert body["frames"][0] == {"A": None, "B": None, "C": None}
        assert body["frames"][-1] == body["node_color"]

    def test_uncolorable_is_not_an_error(self):
        resp = client.post("/solve", json={**TRIANGLE, "colors": 2})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "uncolorable"
        assert body["message"] == "Graph cannot be colored using 2 colors."
        assert body["node_color"] is None
        assert body["frames"] == []

    def test_overflow_rejected(self):
        resp = client.post("/solve", json={**TRIANGLE, "colors": 7})
        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "invalid_palette"

    def test_custom_palette(self):
        resp = client.post("/solve", json={**TRIANGLE, "palette": ["#111111", "#222222", "#333333", "#444444"]})
        body = resp.json()
        assert body["status"] == "colored"
        assert body["palette"] == ["#111111", "#222222", "#333333", "#444444"]
        assert body["node_color"]["C"] == "#333333"

    def test_unknown_solver(self):
        resp = client.post("/solve", json={**TRIANGLE, "solver": "greedy"})
        assert resp.status_code == 400
        assert "Unknown solver" in resp.json()["detail"]["issues"][0]

    def test_invalid_graph(self):
        resp = client.post("/solve", json={"nodes": [{"id": "A"}, {"id": "A"}], "colors": 2})
        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "invalid_graph"

    @pytest.mark.parametrize("colors", [0, -3])
    def test_colors_must_be_positive(self, colors):
        assert client.post("/solve", json={**TRIANGLE, "colors": colors}).status_code == 422

    def test_aborted(self):
        resp = client.post("/solve", json={**TRIANGLE, "colors": 3, "max_steps": 1})
        body = resp.json()
        assert body["status"] == "aborted"
        assert body["frames"] == []


class TestAnimateEndpoint:
    @pytest.fixture(autouse=True)
    def _needs_plotly(self):
        pytest.importorskip("plotly")
        pytest.importorskip("networkx")

    def test_returns_html(self):
        resp = client.post("/animate", json={**TRIANGLE, "colors": 3, "interval_ms": 500})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "Play" in resp.text

    def test_uncolorable_still_renders_graph(self):
        resp = client.post("/animate", json={**TRIANGLE, "colors": 2})
        assert resp.status_code == 200
        assert "cannot be colored" in resp.text


class TestSearchBudget:
    """The service never runs an unbounded search."""

    def _spy(self, monkeypatch):
        import backend.app as service

        seen = {}
        real = service.simulate

        def recording_simulate(*args, **kwargs):
            seen.update(kwargs)
            return real(*args, **kwargs)

        monkeypatch.setattr(service, "simulate", recording_simulate)
        return service, seen

    def test_default_timeout_applied(self, monkeypatch):
        service, seen = self._spy(monkeypatch)
        resp = client.post("/solve", json={**TRIANGLE, "colors": 3})
        assert resp.status_code == 200
        assert seen["timeout_ms"] == service.DEFAULT_TIMEOUT_MS

    def test_client_timeout_wins(self, monkeypatch):
        _service, seen = self._spy(monkeypatch)
        client.post("/solve", json={**TRIANGLE, "colors": 3, "timeout_ms": 250})
        assert seen["timeout_ms"] == 250

    def test_timeout_above_cap_rejected(self):
        resp = client.post("/solve", json={**TRIANGLE, "timeout_ms": 10_000_000})
        assert resp.status_code == 422
