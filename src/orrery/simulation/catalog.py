"""
Body catalog records and conversion into Body objects.

A record is a plain mapping (the shape a JSON file would decode to):

    {
        "id": "earth",
        "name": "Earth",
        "parent": "sun",                  # omitted/None for the root
        "jpl": {...},                     # OrbitalElements.from_jpl kwargs, or
        "elements": {...},                # OrbitalElements.from_degrees kwargs
        "payload": {...},                 # passed through untouched
    }

SOLAR_SYSTEM_J2000 holds the JPL "approximate positions of the planets"
elements (J2000 ecliptic, valid 1800-2050, rates per Julian century) with the
Moon's mean elements about Earth. Lengths are in au, time is Julian Date.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from orrery.core.constants import AU_KM, DEG_TO_RAD, J2000_JD
from orrery.core.errors import InvalidElementsError
from orrery.objects.body import Body
from orrery.physics.elements import OrbitalElements, SecularRates
from orrery.physics.orbit import PositionCalculator
from orrery.simulation.body_graph import BodyGraph

logger = logging.getLogger(__name__)


SOLAR_SYSTEM_J2000: List[Dict[str, Any]] = [
    {
        "id": "sun", "name": "Sun",
        "payload": {"radius_km": 695700.0, "rotation_period_days": 25.38, "tilt_deg": 7.25},
    },
    {
        "id": "mercury", "name": "Mercury", "parent": "sun",
        "jpl": dict(a=0.38709927, e=0.20563593, i_deg=7.00497902, L_deg=252.25032350,
                    varpi_deg=77.45779628, node_deg=48.33076593,
                    a_dot=0.00000037, e_dot=0.00001906, i_dot=-0.00594749,
                    L_dot=149472.67411175, varpi_dot=0.16047689, node_dot=-0.12534081),
        "payload": {"radius_km": 2439.7, "rotation_period_days": 58.6, "tilt_deg": 0.034},
    },
    {
        "id": "venus", "name": "Venus", "parent": "sun",
        "jpl": dict(a=0.72333566, e=0.00677672, i_deg=3.39467605, L_deg=181.97909950,
                    varpi_deg=131.60246718, node_deg=76.67984255,
                    a_dot=0.00000390, e_dot=-0.00004107, i_dot=-0.00078890,
                    L_dot=58517.81538729, varpi_dot=0.00268329, node_dot=-0.27769418),
        "payload": {"radius_km": 6051.8, "rotation_period_days": -243.0, "tilt_deg": 177.4},
    },
    {
        "id": "earth", "name": "Earth", "parent": "sun",
        "jpl": dict(a=1.00000261, e=0.01671123, i_deg=-0.00001531, L_deg=100.46457166,
                    varpi_deg=102.93768193, node_deg=0.0,
                    a_dot=0.00000562, e_dot=-0.00004392, i_dot=-0.01294668,
                    L_dot=35999.37244981, varpi_dot=0.32327364, node_dot=0.0),
        "payload": {"radius_km": 6371.0, "rotation_period_days": 1.0, "tilt_deg": 23.44},
    },
    {
        "id": "mars", "name": "Mars", "parent": "sun",
        "jpl": dict(a=1.52371034, e=0.09339410, i_deg=1.84969142, L_deg=-4.55343205,
                    varpi_deg=-23.94362959, node_deg=49.55953891,
                    a_dot=0.00001847, e_dot=0.00007882, i_dot=-0.00813131,
                    L_dot=19140.30268499, varpi_dot=0.44441088, node_dot=-0.29257343),
        "payload": {"radius_km": 3389.5, "rotation_period_days": 1.026, "tilt_deg": 25.19},
    },
    {
        "id": "jupiter", "name": "Jupiter", "parent": "sun",
        "jpl": dict(a=5.20288700, e=0.04838624, i_deg=1.30439695, L_deg=34.39644051,
                    varpi_deg=14.72847983, node_deg=100.47390909,
                    a_dot=-0.00011607, e_dot=-0.00013253, i_dot=-0.00183714,
                    L_dot=3034.74612775, varpi_dot=0.21252668, node_dot=0.20469106),
        "payload": {"radius_km": 69911.0, "rotation_period_days": 0.41, "tilt_deg": 3.13},
    },
    {
        "id": "saturn", "name": "Saturn", "parent": "sun",
        "jpl": dict(a=9.53667594, e=0.05386179, i_deg=2.48599187, L_deg=49.95424423,
                    varpi_deg=92.59887831, node_deg=113.66242448,
                    a_dot=-0.00125060, e_dot=-0.00050991, i_dot=0.00193609,
                    L_dot=1222.49362201, varpi_dot=-0.41897216, node_dot=-0.28867794),
        "payload": {"radius_km": 58232.0, "rotation_period_days": 0.45, "tilt_deg": 26.73},
    },
    {
        "id": "uranus", "name": "Uranus", "parent": "sun",
        "jpl": dict(a=19.18916464, e=0.04725744, i_deg=0.77263783, L_deg=313.23810451,
                    varpi_deg=170.95427630, node_deg=74.01692503,
                    a_dot=-0.00196176, e_dot=-0.00004397, i_dot=-0.00242939,
                    L_dot=428.48202785, varpi_dot=0.40805281, node_dot=0.04240589),
        "payload": {"radius_km": 25362.0, "rotation_period_days": -0.72, "tilt_deg": 97.77},
    },
    {
        "id": "neptune", "name": "Neptune", "parent": "sun",
        "jpl": dict(a=30.06992276, e=0.00859048, i_deg=1.77004347, L_deg=-55.12002969,
                    varpi_deg=44.96476227, node_deg=131.78422574,
                    a_dot=0.00026291, e_dot=0.00005105, i_dot=0.00035372,
                    L_dot=218.45945325, varpi_dot=-0.32241464, node_dot=-0.00508664),
        "payload": {"radius_km": 24622.0, "rotation_period_days": 0.67, "tilt_deg": 28.32},
    },
    {
        "id": "moon", "name": "Moon", "parent": "earth",
        # Mean elements, ecliptic of date approximated as J2000
        "elements": dict(a=384400.0 / AU_KM, e=0.0549, inc_deg=5.145, lan_deg=125.08,
                         argp_deg=318.15, M0_deg=135.27, period=27.554550, epoch=J2000_JD),
        # Nodal regression and apsidal advance, deg/century
        "rates": dict(lan_rate_deg=-1934.136, argp_rate_deg=6003.15, time_unit=36525.0),
        "payload": {"radius_km": 1737.4, "rotation_period_days": 27.32, "tilt_deg": 6.68},
    },
]


def _rates_from_record(row: Mapping[str, Any]) -> SecularRates:
    return SecularRates(
        a_rate=row.get("a_rate", 0.0),
        e_rate=row.get("e_rate", 0.0),
        inc_rate=row.get("inc_rate_deg", 0.0) * DEG_TO_RAD,
        lan_rate=row.get("lan_rate_deg", 0.0) * DEG_TO_RAD,
        argp_rate=row.get("argp_rate_deg", 0.0) * DEG_TO_RAD,
        time_unit=row.get("time_unit", 1.0),
    )


def body_from_record(record: Mapping[str, Any]) -> Body:
    """
    Build one Body from a catalog record.

    Raises:
        InvalidElementsError: missing/unknown element fields or an element
            set that violates its invariants
        ValueError: empty ID or name
    """
    body_id = record.get("id", "")
    parent_id: Optional[str] = record.get("parent")
    elements: Optional[OrbitalElements] = None

    try:
        if "jpl" in record:
            elements = OrbitalElements.from_jpl(**record["jpl"])
        elif "elements" in record:
            rates = _rates_from_record(record["rates"]) if "rates" in record else None
            elements = OrbitalElements.from_degrees(**record["elements"], rates=rates)
    except TypeError as exc:
        raise InvalidElementsError(f"Malformed elements for body '{body_id}': {exc}") from exc

    return Body(
        body_id=body_id,
        name=record.get("name", body_id),
        parent_id=parent_id,
        elements=elements,
        payload=dict(record.get("payload", {})),
    )


def load_bodies(records: Iterable[Mapping[str, Any]], skip_invalid: bool = False) -> List[Body]:
    """
    Convert catalog records into bodies.

    Args:
        records: catalog records
        skip_invalid: drop (and log) records whose elements are invalid
            instead of raising

    Returns:
        Bodies in record order
    """
    bodies: List[Body] = []
    for record in records:
        try:
            bodies.append(body_from_record(record))
        except InvalidElementsError as exc:
            if not skip_invalid:
                raise
            logger.warning("Skipping body %r: %s", record.get("id"), exc)
    return bodies


def build_solar_system(calculator: Optional[PositionCalculator] = None) -> BodyGraph:
    """Sun, the eight planets and the Moon, on a Julian Date clock in au."""
    return BodyGraph(load_bodies(SOLAR_SYSTEM_J2000), calculator=calculator)
