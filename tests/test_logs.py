"""Tests for logging configuration."""

import pytest
import structlog

from graph_coloring.graph import build_graph
from graph_coloring.logs import configure_logging
from graph_coloring.palette import Palette
from graph_coloring.solver import solve_coloring


class TestConfigureLogging:
    def test_info_logs_solve_outcome(self, capsys):
        configure_logging("info")
        solve_coloring(build_graph(["A", "B"], [["A", "B"]]), Palette.from_catalog(2))
        err = capsys.readouterr().err
        assert "solve.finish" in err
        assert "status=colored" in err

    def test_warning_hides_solver_events(self, capsys):
        configure_logging("warning")
        solve_coloring(build_graph(["A"]), Palette.from_catalog(1))
        assert "solve.finish" not in capsys.readouterr().err

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("chatty")

    def teardown_method(self):
        structlog.reset_defaults()
