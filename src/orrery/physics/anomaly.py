from __future__ import annotations

import math

from orrery.core.constants import DEG_TO_RAD
from orrery.physics.kepler import wrap_to_2pi


def eccentric_to_true_anomaly(E_rad: float, e: float) -> float:
    """
    ν = 2 atan2( sqrt(1+e) sin(E/2), sqrt(1-e) cos(E/2) )

    The half-angle form stays well conditioned near periapsis and apoapsis.
    """
    return 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(E_rad / 2.0),
        math.sqrt(1.0 - e) * math.cos(E_rad / 2.0),
    )


def true_to_eccentric_anomaly(nu_rad: float, e: float) -> float:
    """Inverse of eccentric_to_true_anomaly."""
    return 2.0 * math.atan2(
        math.sqrt(1.0 - e) * math.sin(nu_rad / 2.0),
        math.sqrt(1.0 + e) * math.cos(nu_rad / 2.0),
    )


def orbital_radius(a: float, e: float, E_rad: float) -> float:
    """Distance from the focus, r = a(1 - e cos E)."""
    return a * (1.0 - e * math.cos(E_rad))


def radius_at_true_anomaly(a: float, e: float, nu_rad: float) -> float:
    """Orbit equation, r = a(1 - e^2) / (1 + e cos ν)."""
    return a * (1.0 - e * e) / (1.0 + e * math.cos(nu_rad))


def mean_longitude_to_mean_anomaly(mean_longitude_deg: float, longitude_of_perihelion_deg: float) -> float:
    """
    M = L - ϖ, for element tables that publish mean longitude L and
    longitude of perihelion ϖ (ϖ = Ω + ω) instead of M and ω.

    Returns:
        Mean anomaly in radians, wrapped to [0, 2π).
    """
    return wrap_to_2pi((mean_longitude_deg - longitude_of_perihelion_deg) * DEG_TO_RAD)
