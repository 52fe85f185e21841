"""
Vector helpers and the orbital-plane -> reference-frame rotation.

Axis convention (right-handed):
    +X  toward the reference direction (vernal equinox for ecliptic J2000)
    +Z  along the reference pole (north ecliptic pole)
    +Y  completes the triad, 90 deg east of +X in the reference plane

In the orbital plane +X points at periapsis and +Z along the orbit normal.
"""

from __future__ import annotations

import math
from typing import Tuple

Vector3 = Tuple[float, float, float]

ORIGIN: Vector3 = (0.0, 0.0, 0.0)


def rot3(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (c * x - s * y, s * x + c * y, z)


def rot1(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (x, c * y - s * z, s * y + c * z)


def dot(a: Vector3, b: Vector3) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]+b[0], a[1]+b[1], a[2]+b[2])


def sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]-b[0], a[1]-b[1], a[2]-b[2])


def scale(v: Vector3, k: float) -> Vector3:
    return (v[0]*k, v[1]*k, v[2]*k)


def norm(a: Vector3) -> float:
    return math.sqrt(dot(a, a))


def orbital_plane_to_reference(x_orb: float, y_orb: float,
                               argp_rad: float, inc_rad: float, lan_rad: float) -> Vector3:
    """
    Rotate an in-plane position (z = 0) into the parent's reference frame.

    Args:
        x_orb: Coordinate toward periapsis
        y_orb: Coordinate 90 deg ahead of periapsis in the direction of motion
        argp_rad: Argument of periapsis ω (radians)
        inc_rad: Inclination i (radians)
        lan_rad: Longitude of ascending node Ω (radians)

    Returns:
        Position in the reference frame, same length unit as the input.
    """
    # Order is fixed: R3(Ω) * R1(i) * R3(ω)
    # 1. ω about the orbit normal puts periapsis in place within the plane
    r = rot3(argp_rad, (x_orb, y_orb, 0.0))
    # 2. i about the line of nodes (X) tilts the plane
    r = rot1(inc_rad, r)
    # 3. Ω about the reference pole orients the ascending node
    return rot3(lan_rad, r)


def ecliptic_to_y_up(v: Vector3) -> Vector3:
    """
    Swap Y and Z for consumers that use a Y-up world (ecliptic north becomes +Y).
    """
    return (v[0], v[2], v[1])
