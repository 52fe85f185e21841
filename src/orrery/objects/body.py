from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from orrery.core.errors import InvalidElementsError
from orrery.core.frames import ORIGIN, Vector3
from orrery.physics.elements import OrbitalElements
from orrery.physics.orbit import position_at


@dataclass(frozen=True)
class Body:
    """
    A node in the body graph: a star, planet, moon, ...

    Position is never stored here; it is derived per query from the elements.
    `payload` (radius, rotation period, axial tilt, colour, ...) is carried for
    consumers and never read by the engine.
    """
    body_id: str
    name: str
    parent_id: Optional[str] = None
    elements: Optional[OrbitalElements] = None
    payload: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.body_id.strip():
            raise ValueError("Body ID cannot be empty or whitespace.")
        if not self.name.strip():
            raise ValueError("Body name cannot be empty or whitespace.")
        if self.parent_id is not None and self.elements is None:
            raise InvalidElementsError(
                f"Body '{self.body_id}' orbits '{self.parent_id}' but has no orbital elements."
            )

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def local_position_at(self, t: float) -> Vector3:
        """
        Offset from the parent at time t (the origin for a root body).
        """
        if self.is_root:
            return ORIGIN
        return position_at(self.elements, t)
