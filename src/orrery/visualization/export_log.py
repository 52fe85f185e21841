from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from orrery.core.constants import DEFAULT_ORBIT_SEGMENTS
from orrery.physics.path import sample_orbit_path
from orrery.simulation.body_graph import BodyGraph
from orrery.simulation.engine import SimulationLog


def export_log_to_json(log: SimulationLog, out_path: str = "out/orrery_log.json") -> str:
    """
    Export playback data for an external renderer:
      {
        "times": [t0, t1, ...],
        "body_positions": {
          "earth": [[x,y,z], ...],
          ...
        }
      }
    """
    times = log.times()
    data: Dict[str, Any] = {"times": times, "body_positions": {}}

    for body_id, samples in log.body_positions.items():
        if len(samples) != len(times):
            raise ValueError(f"{body_id} samples length mismatch.")
        data["body_positions"][body_id] = [[r[0], r[1], r[2]] for (_t, r) in samples]

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    return out_path


def orbit_paths(graph: BodyGraph, t: Optional[float] = None,
                segment_count: int = DEFAULT_ORBIT_SEGMENTS,
                absolute: bool = False) -> Dict[str, Any]:
    """
    Orbit lines for every non-root body.

    With absolute=False (default) each line is in its parent's local frame,
    which is what a renderer that parents the line to the planet wants.
    absolute=True centres each line on its parent's position at t.
    """
    if absolute and t is None:
        raise ValueError("Absolute orbit paths need a time t.")

    # Draw the same orbit the graph's calculator propagates
    rate_time = t if graph.calculator.apply_rates else None

    paths: Dict[str, Any] = {}
    for body in graph.bodies():
        if body.is_root:
            continue
        if absolute:
            points = graph.orbit_path(body.body_id, t, segment_count)
        else:
            points = sample_orbit_path(body.elements, segment_count, t=rate_time)
        paths[body.body_id] = {
            "parent": body.parent_id,
            "points": [[p[0], p[1], p[2]] for p in points],
        }
    return paths


def export_orbit_paths(graph: BodyGraph, out_path: str = "out/orbit_paths.json",
                       t: Optional[float] = None,
                       segment_count: int = DEFAULT_ORBIT_SEGMENTS) -> str:
    """
    Write local-frame orbit lines for every non-root body:
      {"earth": {"parent": "sun", "points": [[x,y,z], ...]}, ...}
    """
    data = orbit_paths(graph, t=t, segment_count=segment_count)

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    return out_path
