"""
Hierarchy of orbiting bodies (star -> planets -> moons -> ...).

Each body's orbit is expressed relative to its parent; absolute positions
are obtained by summing local offsets down the parent chain. Roots sit at
the coordinate origin. Topology is validated once, at construction, and is
immutable afterwards.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from orrery.core.constants import DEFAULT_ORBIT_SEGMENTS
from orrery.core.errors import CycleDetectedError, DuplicateBodyError, UnknownParentError
from orrery.core.frames import ORIGIN, Vector3, add, sub
from orrery.objects.body import Body
from orrery.physics.orbit import PositionCalculator
from orrery.physics.path import sample_orbit_path

logger = logging.getLogger(__name__)


class BodyGraph:
    """
    Forest of bodies keyed by body ID.

    All queries are pure functions of (topology, elements, t). The batch
    query memoizes parent positions in a dict local to that call; nothing
    time-dependent is kept on the instance.
    """

    def __init__(self, bodies: Iterable[Body], calculator: Optional[PositionCalculator] = None):
        """
        Args:
            bodies: every body in the system, in any order
            calculator: solver settings used for all orbits (defaults apply
                secular rates with the standard Kepler tolerance)

        Raises:
            DuplicateBodyError: two bodies share an ID
            UnknownParentError: a parent_id names no body in the set
            CycleDetectedError: following parent links returns to a body
        """
        self.calculator = calculator if calculator is not None else PositionCalculator()

        self._bodies: Dict[str, Body] = {}
        for body in bodies:
            if body.body_id in self._bodies:
                raise DuplicateBodyError(f"Duplicate body ID: {body.body_id}")
            self._bodies[body.body_id] = body

        self._children: Dict[str, List[str]] = {body_id: [] for body_id in self._bodies}
        for body in self._bodies.values():
            if body.parent_id is None:
                continue
            if body.parent_id not in self._bodies:
                raise UnknownParentError(
                    f"Body '{body.body_id}' references unknown parent '{body.parent_id}'."
                )
            self._children[body.parent_id].append(body.body_id)

        self._check_acyclic()
        self._order: Tuple[str, ...] = self._topological_order()

        depths: Dict[str, int] = {}
        for body_id in self._order:
            parent_id = self._bodies[body_id].parent_id
            depths[body_id] = 0 if parent_id is None else depths[parent_id] + 1
        logger.debug(
            "Built body graph: %d bodies, %d roots, max depth %d",
            len(self._bodies), len(self.roots()), max(depths.values(), default=0),
        )

    def _check_acyclic(self) -> None:
        acyclic: set = set()
        for start in self._bodies:
            path: List[str] = []
            on_path: set = set()
            node: Optional[str] = start
            while node is not None and node not in acyclic:
                if node in on_path:
                    cycle = path[path.index(node):] + [node]
                    raise CycleDetectedError(f"Parent cycle detected: {' -> '.join(cycle)}")
                path.append(node)
                on_path.add(node)
                node = self._bodies[node].parent_id
            acyclic.update(path)

    def _topological_order(self) -> Tuple[str, ...]:
        # Parents always precede their children
        order: List[str] = []
        queue = [body_id for body_id, body in self._bodies.items() if body.is_root]
        while queue:
            body_id = queue.pop(0)
            order.append(body_id)
            queue.extend(self._children[body_id])
        return tuple(order)

    # ---- topology ----

    def __len__(self) -> int:
        return len(self._bodies)

    def __contains__(self, body_id: object) -> bool:
        return body_id in self._bodies

    def body(self, body_id: str) -> Body:
        try:
            return self._bodies[body_id]
        except KeyError:
            raise KeyError(f"Unknown body ID: {body_id}") from None

    def bodies(self) -> List[Body]:
        return [self._bodies[body_id] for body_id in self._order]

    def roots(self) -> List[Body]:
        return [body for body in self._bodies.values() if body.is_root]

    def children(self, body_id: str) -> List[Body]:
        self.body(body_id)
        return [self._bodies[child] for child in self._children[body_id]]

    def ancestors(self, body_id: str) -> List[Body]:
        """Parent chain, nearest first, ending at the root."""
        chain: List[Body] = []
        parent_id = self.body(body_id).parent_id
        while parent_id is not None:
            parent = self._bodies[parent_id]
            chain.append(parent)
            parent_id = parent.parent_id
        return chain

    def depth(self, body_id: str) -> int:
        return len(self.ancestors(body_id))

    # ---- positions ----

    def local_position(self, body_id: str, t: float) -> Vector3:
        """Offset of a body from its parent at time t (origin for roots)."""
        body = self.body(body_id)
        if body.is_root:
            return ORIGIN
        return self.calculator.position(body.elements, t)

    def absolute_position(self, body_id: str, t: float) -> Vector3:
        """
        Position relative to the root at time t.

        Recomputes every ancestor; prefer absolute_positions() when many
        bodies are needed for the same t.
        """
        chain = [self.body(body_id)] + self.ancestors(body_id)
        position = ORIGIN
        # Root first, matching the summation order of absolute_positions()
        for body in reversed(chain):
            if not body.is_root:
                position = add(position, self.local_position(body.body_id, t))
        return position

    def absolute_positions(self, t: float) -> Dict[str, Vector3]:
        """
        Positions of every body at time t, each computed exactly once.
        """
        positions: Dict[str, Vector3] = {}
        for body_id in self._order:
            body = self._bodies[body_id]
            if body.is_root:
                positions[body_id] = ORIGIN
            else:
                positions[body_id] = add(positions[body.parent_id], self.local_position(body_id, t))
        return positions

    def relative_position(self, from_id: str, to_id: str, t: float) -> Vector3:
        """Vector from one body to another at time t."""
        return sub(self.absolute_position(to_id, t), self.absolute_position(from_id, t))

    def orbit_path(self, body_id: str, t: float,
                   segment_count: int = DEFAULT_ORBIT_SEGMENTS) -> List[Vector3]:
        """
        Orbit line of a body in absolute coordinates, centred on where its
        parent is at time t.
        """
        body = self.body(body_id)
        if body.is_root:
            raise ValueError(f"Root body '{body_id}' has no orbit.")
        parent_abs = self.absolute_position(body.parent_id, t)
        rate_time = t if self.calculator.apply_rates else None
        return [add(parent_abs, p) for p in sample_orbit_path(body.elements, segment_count, t=rate_time)]
