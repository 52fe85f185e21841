from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple

from orrery.core.frames import Vector3
from orrery.simulation.body_graph import BodyGraph


class System(Protocol):
    """
    Plugin interface for simulation systems.
    Each system runs per tick and can write to the log.
    """
    name: str

    def on_step(self, t: float, graph: BodyGraph, log: "SimulationLog") -> None:
        ...


@dataclass
class SimulationLog:
    """
    Stores outputs from a simulation run.
    Keep it simple and serializable.
    """
    # Positions: body_id -> list of (t, r_absolute)
    body_positions: Dict[str, List[Tuple[float, Vector3]]] = field(default_factory=dict)

    # Free-form events
    events: List[Dict[str, Any]] = field(default_factory=list)

    def record_position(self, body_id: str, t: float, r: Vector3) -> None:
        self.body_positions.setdefault(body_id, []).append((t, r))

    def times(self) -> List[float]:
        if not self.body_positions:
            return []
        first = next(iter(self.body_positions.values()))
        return [t for (t, _r) in first]


@dataclass
class Engine:
    """
    Fixed-step driver over a body graph.
    Deterministic replay: given same graph + dt + start/end => same output.
    """
    dt: float
    systems: List[System] = field(default_factory=list)

    def run(self, graph: BodyGraph, t_start: float, t_end: float) -> SimulationLog:
        if self.dt <= 0:
            raise ValueError("dt must be positive.")
        if t_end < t_start:
            raise ValueError("t_end must be >= t_start.")

        log = SimulationLog()

        # t = t_start + step * dt, never a running sum
        # Inclusive end if it lands exactly; otherwise last tick < end
        step = 0
        t = t_start
        while t <= t_end + 1e-9 * max(1.0, abs(t_end)):
            for sys in self.systems:
                sys.on_step(t, graph, log)
            step += 1
            t = t_start + step * self.dt

        return log
