from __future__ import annotations

from dataclasses import dataclass

from orrery.simulation.body_graph import BodyGraph
from orrery.simulation.engine import SimulationLog


@dataclass
class StateRecorderSystem:
    name: str = "state_recorder"

    def on_step(self, t: float, graph: BodyGraph, log: SimulationLog) -> None:
        for body_id, r in graph.absolute_positions(t).items():
            log.record_position(body_id, t, r)
