"""
Orbit line geometry for display.

The path is traced by sweeping true anomaly directly and using the orbit
equation, so no time-of-flight (and no Kepler solve) is involved.
"""

from __future__ import annotations

import math
from typing import List, Optional

from orrery.core.constants import DEFAULT_ORBIT_SEGMENTS, TWO_PI
from orrery.core.frames import Vector3, orbital_plane_to_reference
from orrery.physics.anomaly import radius_at_true_anomaly
from orrery.physics.elements import OrbitalElements
from orrery.physics.epoch import apply_secular_rates, elapsed_rate_units, time_since_epoch


def sample_orbit_path(elements: OrbitalElements,
                      segment_count: int = DEFAULT_ORBIT_SEGMENTS,
                      t: Optional[float] = None) -> List[Vector3]:
    """
    Points along one full orbit, in the parent's reference frame.

    Args:
        elements: element set to draw
        segment_count: number of line segments; segment_count + 1 points are
            returned and the last one closes the loop onto the first
        t: if given, secular rates are applied for this simulation time so the
            line matches the drifted orbit

    Returns:
        List of positions at ν = k * 2π / segment_count, k = 0..segment_count
    """
    if segment_count < 1:
        raise ValueError(f"Segment count must be at least 1. Got: {segment_count}")

    if t is not None:
        elapsed = time_since_epoch(elements, t)
        elements = apply_secular_rates(elements, elapsed_rate_units(elements, elapsed))

    a = elements.a
    e = elements.e
    step = TWO_PI / segment_count

    points: List[Vector3] = []
    for k in range(segment_count + 1):
        nu = k * step
        r = radius_at_true_anomaly(a, e, nu)
        points.append(orbital_plane_to_reference(
            r * math.cos(nu),
            r * math.sin(nu),
            elements.argp_rad,
            elements.inc_rad,
            elements.lan_rad,
        ))
    return points
