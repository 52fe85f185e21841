# Kepler's equation for elliptic two-body orbits

from __future__ import annotations

import math

from orrery.core.constants import (
    KEPLER_HIGH_ECCENTRICITY,
    KEPLER_MAX_ITER,
    KEPLER_TOLERANCE_RAD,
    TWO_PI,
)
from orrery.core.errors import InvalidElementsError, NonConvergenceError


def wrap_to_2pi(angle_rad: float) -> float:
    """Wrap angle to [0, 2π)."""
    wrapped = angle_rad % TWO_PI
    # -tiny % 2π rounds to exactly 2π
    if wrapped >= TWO_PI:
        return 0.0
    return wrapped


def wrap_to_pi(angle_rad: float) -> float:
    """Wrap angle to [-π, π)."""
    return wrap_to_2pi(angle_rad + math.pi) - math.pi


def mean_anomaly_from_eccentric(E_rad: float, e: float) -> float:
    """Kepler's equation in the forward direction: M = E - e sin(E)."""
    return E_rad - e * math.sin(E_rad)


def solve_keplers_equation(M_rad: float, e: float,
                           tol: float = KEPLER_TOLERANCE_RAD,
                           max_iter: int = KEPLER_MAX_ITER) -> float:
    """
    Solve Kepler's equation for elliptic orbits:
        M = E - e sin(E)
    using Newton-Raphson.

    M is normalized to [0, 2π) before iterating and E is returned on the
    same revolution, so E - e sin(E) matches the normalized M.

    The initial guess is E0 = M, except for e >= 0.8 where it is E0 = π.
    The converged root is the same either way; the π start avoids the
    overshoot Newton shows from E0 = M near periapsis on very eccentric
    orbits.

    Args:
        M_rad: Mean anomaly (rad), any real value
        e: eccentricity (0 <= e < 1)
        tol: convergence tolerance on |ΔE| (rad)
        max_iter: iteration cap

    Returns:
        E_rad: Eccentric anomaly (rad)

    Raises:
        InvalidElementsError: e outside [0, 1)
        NonConvergenceError: cap exhausted before |ΔE| < tol
    """
    if not (0.0 <= e < 1.0):
        raise InvalidElementsError(f"Elliptic Kepler solver requires 0 <= e < 1. Got: {e}")

    M = wrap_to_2pi(M_rad)

    if e < KEPLER_HIGH_ECCENTRICITY:
        E = M
    else:
        # For higher e, start at pi so Newton approaches the root from one side
        E = math.pi

    for _ in range(max_iter):
        f = E - e * math.sin(E) - M
        fp = 1.0 - e * math.cos(E)
        if abs(fp) < 1e-15:
            break
        dE = -f / fp
        E += dE
        if abs(dE) < tol:
            return E

    raise NonConvergenceError(M, e, max_iter)
