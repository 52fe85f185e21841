"""
Tests for JSON export and the plotly quick-look scene.
"""
import json
import math

import plotly.graph_objects as go
import pytest

from orrery.objects.body import Body
from orrery.physics.elements import OrbitalElements, SecularRates
from orrery.physics.orbit import PositionCalculator
from orrery.physics.path import sample_orbit_path
from orrery.simulation.body_graph import BodyGraph
from orrery.simulation.engine import Engine, SimulationLog
from orrery.simulation.systems.state_recorder import StateRecorderSystem
from orrery.visualization.export_log import export_log_to_json, export_orbit_paths, orbit_paths
from orrery.visualization.plotly_viewer import build_scene_figure, render_static_scene


@pytest.fixture
def graph():
    return BodyGraph([
        Body(body_id="star", name="Star"),
        Body(body_id="planet", name="Planet", parent_id="star",
             elements=OrbitalElements(a=1.0, e=0.0, inc_rad=0.0, lan_rad=0.0, argp_rad=0.0, M0_rad=0.0, period=4.0)),
        Body(body_id="moon", name="Moon", parent_id="planet",
             elements=OrbitalElements(a=0.1, e=0.0, inc_rad=0.0, lan_rad=0.0, argp_rad=0.0, M0_rad=0.0, period=1.0)),
    ])


@pytest.fixture
def log(graph):
    return Engine(dt=1.0, systems=[StateRecorderSystem()]).run(graph, t_start=0.0, t_end=4.0)


class TestExportLog:
    def test_writes_times_and_positions(self, log, tmp_path):
        out = export_log_to_json(log, out_path=str(tmp_path / "nested" / "log.json"))
        with open(out, encoding="utf-8") as f:
            data = json.load(f)
        assert data["times"] == [0.0, 1.0, 2.0, 3.0, 4.0]
        assert set(data["body_positions"]) == {"star", "planet", "moon"}
        assert len(data["body_positions"]["moon"]) == 5
        assert data["body_positions"]["star"][0] == [0.0, 0.0, 0.0]

    def test_rejects_ragged_log(self, tmp_path):
        ragged = SimulationLog()
        ragged.record_position("a", 0.0, (0.0, 0.0, 0.0))
        ragged.record_position("a", 1.0, (0.0, 0.0, 0.0))
        ragged.record_position("b", 0.0, (0.0, 0.0, 0.0))
        with pytest.raises(ValueError, match="b samples length mismatch"):
            export_log_to_json(ragged, out_path=str(tmp_path / "log.json"))


class TestOrbitPaths:
    def test_local_paths(self, graph):
        paths = orbit_paths(graph, segment_count=4)
        assert set(paths) == {"planet", "moon"}
        assert paths["moon"]["parent"] == "planet"
        assert len(paths["moon"]["points"]) == 5
        assert abs(paths["moon"]["points"][0][0] - 0.1) < 1e-12

    def test_absolute_paths_follow_parent(self, graph):
        paths = orbit_paths(graph, t=0.0, segment_count=4, absolute=True)
        assert abs(paths["moon"]["points"][0][0] - 1.1) < 1e-12

    def test_local_paths_follow_calculator_rate_setting(self):
        drifting = OrbitalElements(a=1.0, e=0.2, inc_rad=0.0, lan_rad=0.0, argp_rad=0.0, M0_rad=0.0,
                                   period=1.0, rates=SecularRates(argp_rate=math.pi / 2))
        bodies = [
            Body(body_id="star", name="Star"),
            Body(body_id="planet", name="Planet", parent_id="star", elements=drifting),
        ]
        fixed = BodyGraph(bodies, calculator=PositionCalculator(apply_rates=False))
        drifted = BodyGraph(bodies)

        fixed_points = orbit_paths(fixed, t=1.0, segment_count=4)["planet"]["points"]
        drifted_points = orbit_paths(drifted, t=1.0, segment_count=4)["planet"]["points"]
        assert fixed_points == [list(p) for p in sample_orbit_path(drifting, 4)]
        assert drifted_points == [list(p) for p in sample_orbit_path(drifting, 4, t=1.0)]
        # Local and absolute paths agree on which orbit they draw
        absolute = orbit_paths(fixed, t=1.0, segment_count=4, absolute=True)["planet"]["points"]
        assert absolute == fixed_points

    def test_absolute_paths_need_time(self, graph):
        with pytest.raises(ValueError, match="need a time"):
            orbit_paths(graph, absolute=True)

    def test_export_orbit_paths(self, graph, tmp_path):
        out = export_orbit_paths(graph, out_path=str(tmp_path / "paths.json"), segment_count=8)
        with open(out, encoding="utf-8") as f:
            data = json.load(f)
        assert data["planet"]["parent"] == "star"
        assert len(data["planet"]["points"]) == 9


class TestPlotlyViewer:
    def test_build_scene_figure(self, graph, log):
        paths = {"planet": graph.orbit_path("planet", 4.0, 16)}
        fig = build_scene_figure(log, paths)
        assert isinstance(fig, go.Figure)
        names = [trace.name for trace in fig.data]
        assert "planet orbit" in names
        assert "moon track" in names
        assert "moon now" in names

    def test_render_static_scene(self, graph, log, tmp_path):
        out = render_static_scene(graph, log, out_html=str(tmp_path / "scene.html"), segment_count=16)
        with open(out, encoding="utf-8") as f:
            assert "plotly" in f.read().lower()
