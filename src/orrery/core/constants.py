from __future__ import annotations

import math

TWO_PI: float = 2.0 * math.pi
DEG_TO_RAD: float = math.pi / 180.0
RAD_TO_DEG: float = 180.0 / math.pi

# Astronomical unit in km (IAU 2012)
AU_KM: float = 149597870.7

# Julian Date of the J2000.0 epoch (2000-01-01 12:00 TT)
J2000_JD: float = 2451545.0

# Julian Date of the Unix epoch (1970-01-01 00:00 UTC)
UNIX_EPOCH_JD: float = 2440587.5

SECONDS_PER_DAY: float = 86400.0
DAYS_PER_JULIAN_CENTURY: float = 36525.0

# Kepler solver defaults (1e-8 rad is ~2e-6 deg)
KEPLER_TOLERANCE_RAD: float = 1e-8
KEPLER_MAX_ITER: int = 50

# Eccentricity above which the solver starts from E = pi instead of E = M
KEPLER_HIGH_ECCENTRICITY: float = 0.8

# Points per orbit line
DEFAULT_ORBIT_SEGMENTS: int = 128
