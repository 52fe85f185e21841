import math
import pytest

from orrery.core.errors import InvalidElementsError, NonConvergenceError
from orrery.physics.kepler import (
    mean_anomaly_from_eccentric,
    solve_keplers_equation,
    wrap_to_2pi,
    wrap_to_pi,
)

TWO_PI = 2.0 * math.pi


def test_kepler_zero_eccentricity():
    # If e=0, E=M exactly
    for M in [0.0, 0.5, 1.0, 2.0, 5.0]:
        E = solve_keplers_equation(M, 0.0)
        assert math.isclose((E - (M % TWO_PI)) % TWO_PI, 0.0, abs_tol=1e-12)


def test_kepler_converges_typical():
    E = solve_keplers_equation(M_rad=1.0, e=0.4)
    # Verify equation residual
    res = E - 0.4 * math.sin(E) - 1.0
    assert abs(res) < 1e-10


@pytest.mark.parametrize("e", [0.0, 0.1, 0.2, 0.3, 0.5, 0.7, 0.79, 0.8, 0.9, 0.95, 0.99])
def test_kepler_residual_across_mean_anomaly(e):
    tol = 1e-8
    samples = [k * TWO_PI / 72 for k in range(72)] + [1e-9, 1e-4, TWO_PI - 1e-6]
    for M in samples:
        E = solve_keplers_equation(M, e, tol=tol)
        assert abs(mean_anomaly_from_eccentric(E, e) - M) < tol


def test_kepler_normalizes_mean_anomaly():
    E_wrapped = solve_keplers_equation(1.3, 0.3)
    E_shifted = solve_keplers_equation(1.3 + 3 * TWO_PI, 0.3)
    E_negative = solve_keplers_equation(1.3 - TWO_PI, 0.3)
    assert abs(E_shifted - E_wrapped) < 1e-9
    assert abs(E_negative - E_wrapped) < 1e-9


def test_kepler_half_orbit_is_pi():
    for e in [0.0, 0.2, 0.85]:
        assert abs(solve_keplers_equation(math.pi, e) - math.pi) < 1e-12


def test_kepler_rejects_non_elliptic():
    with pytest.raises(InvalidElementsError, match="0 <= e < 1"):
        solve_keplers_equation(1.0, 1.0)
    with pytest.raises(ValueError, match="0 <= e < 1"):
        solve_keplers_equation(1.0, -0.1)


def test_kepler_iteration_cap_raises():
    with pytest.raises(NonConvergenceError) as excinfo:
        solve_keplers_equation(1.0, 0.9, tol=1e-15, max_iter=1)
    err = excinfo.value
    assert err.iterations == 1
    assert err.eccentricity == 0.9
    assert isinstance(err, RuntimeError)


class TestWrap:
    def test_wrap_to_2pi_range(self):
        for angle in [-10.0, -TWO_PI, -1e-18, 0.0, 3.0, TWO_PI, 20.0]:
            w = wrap_to_2pi(angle)
            assert 0.0 <= w < TWO_PI

    def test_wrap_to_2pi_idempotent(self):
        for angle in [0.0, 0.5, math.pi, 6.0]:
            assert wrap_to_2pi(angle) == angle
            assert wrap_to_2pi(wrap_to_2pi(angle)) == wrap_to_2pi(angle)

    def test_wrap_to_pi_range(self):
        assert abs(wrap_to_pi(3 * math.pi / 2) + math.pi / 2) < 1e-12
        assert abs(wrap_to_pi(-3 * math.pi / 2) - math.pi / 2) < 1e-12
        for angle in [-7.0, -1.0, 0.0, 1.0, 7.0]:
            w = wrap_to_pi(angle)
            assert -math.pi <= w < math.pi
