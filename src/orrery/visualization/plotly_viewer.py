from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import plotly.graph_objects as go

from orrery.core.constants import DEFAULT_ORBIT_SEGMENTS
from orrery.core.frames import Vector3
from orrery.simulation.body_graph import BodyGraph
from orrery.simulation.engine import SimulationLog


def build_scene_figure(
    log: SimulationLog,
    paths: Optional[Dict[str, List[Vector3]]] = None,
    title: str = "Orrery (Static Scene)",
    length_unit: str = "au",
) -> go.Figure:
    """
    Quick-look 3D figure:
      - Orbit line for each body in `paths` (absolute coordinates)
      - Recorded track for each body in the log
      - Last position marker for each body
    """
    fig = go.Figure()

    for body_id, points in (paths or {}).items():
        fig.add_trace(go.Scatter3d(
            x=[p[0] for p in points],
            y=[p[1] for p in points],
            z=[p[2] for p in points],
            mode="lines",
            line=dict(width=1),
            opacity=0.4,
            name=f"{body_id} orbit",
        ))

    for body_id, samples in log.body_positions.items():
        if not samples:
            continue
        xs = [r[0] for (_t, r) in samples]
        ys = [r[1] for (_t, r) in samples]
        zs = [r[2] for (_t, r) in samples]

        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode="lines",
            name=f"{body_id} track",
        ))

        # last point
        fig.add_trace(go.Scatter3d(
            x=[xs[-1]], y=[ys[-1]], z=[zs[-1]],
            mode="markers",
            name=f"{body_id} now",
            marker=dict(size=4),
        ))

    fig.update_layout(
        title=title,
        scene=dict(
            xaxis_title=f"X ({length_unit})",
            yaxis_title=f"Y ({length_unit})",
            zaxis_title=f"Z ({length_unit})",
            aspectmode="data",
        ),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
    )
    return fig


def render_static_scene(
    graph: BodyGraph,
    log: SimulationLog,
    out_html: str = "out/orrery_scene.html",
    segment_count: int = DEFAULT_ORBIT_SEGMENTS,
) -> str:
    """
    Write a static HTML scene with orbit lines drawn at the last logged time.
    """
    times = log.times()
    paths: Dict[str, List[Vector3]] = {}
    if times:
        t_last = times[-1]
        for body in graph.bodies():
            if not body.is_root:
                paths[body.body_id] = graph.orbit_path(body.body_id, t_last, segment_count)

    fig = build_scene_figure(log, paths)

    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
