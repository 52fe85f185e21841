# src/orrery/physics/orbit.py

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from orrery.core.constants import KEPLER_MAX_ITER, KEPLER_TOLERANCE_RAD
from orrery.core.frames import Vector3, orbital_plane_to_reference
from orrery.physics.anomaly import eccentric_to_true_anomaly, orbital_radius
from orrery.physics.elements import OrbitalElements
from orrery.physics.epoch import apply_secular_rates, elapsed_rate_units, time_since_epoch
from orrery.physics.kepler import solve_keplers_equation, wrap_to_2pi


def position_at(elements: OrbitalElements, t: float,
                tol: float = KEPLER_TOLERANCE_RAD,
                max_iter: int = KEPLER_MAX_ITER,
                apply_rates: bool = True) -> Vector3:
    """
    Position of a body relative to its parent at simulation time t.
    Two-body Keplerian propagation using mean anomaly.

    Args:
        elements: validated element set
        t: simulation time, same scale and unit as elements.epoch/period
        tol, max_iter: Kepler solver settings
        apply_rates: drift the elements by their secular rates first

    Returns:
        Position in the parent's reference frame, in the unit of elements.a

    Raises:
        NonConvergenceError: propagated from the Kepler solver
    """
    elapsed = time_since_epoch(elements, t)
    if apply_rates:
        elements = apply_secular_rates(elements, elapsed_rate_units(elements, elapsed))

    e = elements.e

    # Signed mean motion: a negative period runs the anomaly backwards
    M = wrap_to_2pi(elements.M0_rad + elements.mean_motion * elapsed)

    E = solve_keplers_equation(M, e, tol=tol, max_iter=max_iter)
    nu = eccentric_to_true_anomaly(E, e)
    r = orbital_radius(elements.a, e, E)

    return orbital_plane_to_reference(
        r * math.cos(nu),
        r * math.sin(nu),
        elements.argp_rad,
        elements.inc_rad,
        elements.lan_rad,
    )


def propagate(elements: OrbitalElements, times: Iterable[float],
              apply_rates: bool = True) -> List[Tuple[float, Vector3]]:
    """
    Evaluate an orbit across a sequence of simulation times.
    Returns list of (t, r).
    """
    out: List[Tuple[float, Vector3]] = []
    for t in times:
        out.append((t, position_at(elements, t, apply_rates=apply_rates)))
    return out


class PositionCalculator:
    """
    Solver settings bundled with the position pipeline.

    Holds configuration only; every call is independent, so one instance can
    be shared across threads.
    """

    def __init__(self,
                 tolerance: float = KEPLER_TOLERANCE_RAD,
                 max_iterations: int = KEPLER_MAX_ITER,
                 apply_rates: bool = True):
        """
        Args:
            tolerance: Kepler convergence tolerance on |ΔE| (rad)
            max_iterations: Kepler iteration cap
            apply_rates: apply secular rates before solving
        """
        if not (tolerance > 0.0):
            raise ValueError(f"Tolerance must be positive. Got: {tolerance}")
        if max_iterations < 1:
            raise ValueError(f"Max iterations must be at least 1. Got: {max_iterations}")
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.apply_rates = apply_rates

    def position(self, elements: OrbitalElements, t: float) -> Vector3:
        return position_at(
            elements, t,
            tol=self.tolerance,
            max_iter=self.max_iterations,
            apply_rates=self.apply_rates,
        )

    def __repr__(self) -> str:
        return (f"PositionCalculator(tolerance={self.tolerance!r}, "
                f"max_iterations={self.max_iterations!r}, apply_rates={self.apply_rates!r})")
