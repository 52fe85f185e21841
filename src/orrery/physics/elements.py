from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from orrery.core.constants import DAYS_PER_JULIAN_CENTURY, DEG_TO_RAD, J2000_JD, TWO_PI
from orrery.core.errors import InvalidElementsError
from orrery.physics.kepler import wrap_to_2pi


@dataclass(frozen=True)
class SecularRates:
    """
    Linear drift of the shape/orientation elements.

    Units:
        a_rate: length per rate unit
        e_rate: per rate unit
        inc_rate, lan_rate, argp_rate: radians per rate unit
        time_unit: how many time units (the unit of `period`/`epoch`) make
            one rate unit, e.g. 36525.0 for per-century rates on day clocks
    """
    a_rate: float = 0.0
    e_rate: float = 0.0
    inc_rate: float = 0.0
    lan_rate: float = 0.0
    argp_rate: float = 0.0
    time_unit: float = 1.0

    def __post_init__(self):
        for name in ("a_rate", "e_rate", "inc_rate", "lan_rate", "argp_rate"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidElementsError(f"Secular rate {name} must be finite. Got: {value}")
        if not (math.isfinite(self.time_unit) and self.time_unit > 0.0):
            raise InvalidElementsError(f"Rate time unit must be positive. Got: {self.time_unit}")

    @property
    def is_zero(self) -> bool:
        return (self.a_rate == 0.0 and self.e_rate == 0.0 and self.inc_rate == 0.0
                and self.lan_rate == 0.0 and self.argp_rate == 0.0)


@dataclass(frozen=True)
class OrbitalElements:
    """
    Classical (Keplerian) orbital elements of one body relative to its parent.

    Units:
        a: semi-major axis, any length unit (positions come out in the same unit)
        e: eccentricity (0 <= e < 1)
        inc_rad: inclination in radians (> π/2 is a retrograde plane)
        lan_rad: longitude of ascending node Ω in radians
        argp_rad: argument of periapsis ω in radians
        M0_rad: mean anomaly at epoch in radians
        period: orbital period in the simulation time unit; negative means
            retrograde (clockwise) motion
        epoch: instant the values are valid at, on the simulation time scale
        rates: optional secular drift

    Angles are normalized to [0, 2π) on construction.
    """
    a: float
    e: float
    inc_rad: float
    lan_rad: float
    argp_rad: float
    M0_rad: float
    period: float
    epoch: float = 0.0
    rates: Optional[SecularRates] = None

    def __post_init__(self):
        if not math.isfinite(self.a) or self.a <= 0:
            raise InvalidElementsError(f"Semi-major axis must be positive. Got: {self.a}")
        if not (0.0 <= self.e < 1.0):
            raise InvalidElementsError(
                f"Only elliptic orbits are supported (0 <= e < 1). Got: {self.e}"
            )
        if not math.isfinite(self.period) or self.period == 0.0:
            raise InvalidElementsError(f"Orbital period must be finite and non-zero. Got: {self.period}")
        if not math.isfinite(self.epoch):
            raise InvalidElementsError(f"Epoch must be finite. Got: {self.epoch}")

        for name, label in (("inc_rad", "Inclination"),
                            ("lan_rad", "Longitude of ascending node"),
                            ("argp_rad", "Argument of periapsis"),
                            ("M0_rad", "Mean anomaly")):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidElementsError(f"{label} must be finite. Got: {value}")
            object.__setattr__(self, name, wrap_to_2pi(value))

    @property
    def mean_motion(self) -> float:
        """Signed mean motion, 2π / period (negative for retrograde)."""
        return TWO_PI / self.period

    @property
    def is_retrograde(self) -> bool:
        return self.period < 0.0

    @property
    def periapsis(self) -> float:
        return self.a * (1.0 - self.e)

    @property
    def apoapsis(self) -> float:
        return self.a * (1.0 + self.e)

    @property
    def semi_latus_rectum(self) -> float:
        return self.a * (1.0 - self.e * self.e)

    @classmethod
    def from_degrees(cls, a: float, e: float, inc_deg: float, lan_deg: float,
                     argp_deg: float, M0_deg: float, period: float,
                     epoch: float = 0.0, rates: Optional[SecularRates] = None) -> "OrbitalElements":
        """Build from angles given in degrees (rates, if any, are already in radians)."""
        return cls(
            a=a,
            e=e,
            inc_rad=inc_deg * DEG_TO_RAD,
            lan_rad=lan_deg * DEG_TO_RAD,
            argp_rad=argp_deg * DEG_TO_RAD,
            M0_rad=M0_deg * DEG_TO_RAD,
            period=period,
            epoch=epoch,
            rates=rates,
        )

    @classmethod
    def from_jpl(cls, a: float, e: float, i_deg: float, L_deg: float,
                 varpi_deg: float, node_deg: float,
                 a_dot: float = 0.0, e_dot: float = 0.0, i_dot: float = 0.0,
                 L_dot: float = 0.0, varpi_dot: float = 0.0, node_dot: float = 0.0,
                 epoch: float = J2000_JD) -> "OrbitalElements":
        """
        Convert a JPL "approximate positions" row (J2000 ecliptic, rates per
        Julian century) into classical elements on a Julian Date clock.

            ω  = ϖ - Ω
            M0 = L - ϖ
            period (days) from the anomalistic rate L_dot - ϖ_dot (deg/century)

        Args:
            a: semi-major axis (au)
            e: eccentricity
            i_deg, L_deg, varpi_deg, node_deg: inclination, mean longitude,
                longitude of perihelion, longitude of ascending node (deg)
            *_dot: rates per Julian century (au or deg)
            epoch: Julian Date the row is valid at
        """
        anomaly_rate = L_dot - varpi_dot
        if anomaly_rate == 0.0:
            raise InvalidElementsError("Mean longitude rate must differ from perihelion rate to define a period.")
        period_days = 360.0 / anomaly_rate * DAYS_PER_JULIAN_CENTURY

        rates = SecularRates(
            a_rate=a_dot,
            e_rate=e_dot,
            inc_rate=i_dot * DEG_TO_RAD,
            lan_rate=node_dot * DEG_TO_RAD,
            argp_rate=(varpi_dot - node_dot) * DEG_TO_RAD,
            time_unit=DAYS_PER_JULIAN_CENTURY,
        )
        return cls.from_degrees(
            a=a,
            e=e,
            inc_deg=i_deg,
            lan_deg=node_deg,
            argp_deg=varpi_deg - node_deg,
            M0_deg=L_deg - varpi_deg,
            period=period_days,
            epoch=epoch,
            rates=None if rates.is_zero else rates,
        )
