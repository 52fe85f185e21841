"""
Epoch bookkeeping: elapsed time since an element set's epoch, secular-rate
correction, and Julian Date helpers for callers whose clock is a datetime.

The engine never reads a wall clock; time is always passed in.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from orrery.core.constants import (
    DAYS_PER_JULIAN_CENTURY,
    J2000_JD,
    SECONDS_PER_DAY,
    UNIX_EPOCH_JD,
)
from orrery.physics.elements import OrbitalElements


def time_since_epoch(elements: OrbitalElements, t: float) -> float:
    """Elapsed time since the element epoch, in the unit of `elements.period`."""
    return t - elements.epoch


def elapsed_rate_units(elements: OrbitalElements, elapsed: float) -> float:
    """Convert elapsed time to the unit the secular rates are quoted per."""
    if elements.rates is None:
        return 0.0
    return elapsed / elements.rates.time_unit


def apply_secular_rates(elements: OrbitalElements, elapsed_rate_units: float) -> OrbitalElements:
    """
    Return the element set drifted by `elapsed_rate_units` of secular change.

    Elements without rates (or with all-zero rates) come back unchanged, as
    the same object. Angles are re-normalized by OrbitalElements itself, and
    drift that breaks an invariant (e.g. e >= 1) raises InvalidElementsError.
    """
    rates = elements.rates
    if rates is None or rates.is_zero or elapsed_rate_units == 0.0:
        return elements

    T = elapsed_rate_units
    return replace(
        elements,
        a=elements.a + rates.a_rate * T,
        e=elements.e + rates.e_rate * T,
        inc_rad=elements.inc_rad + rates.inc_rate * T,
        lan_rad=elements.lan_rad + rates.lan_rate * T,
        argp_rad=elements.argp_rad + rates.argp_rate * T,
    )


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def julian_date(moment: datetime) -> float:
    """Julian Date of a datetime (naive datetimes are taken as UTC)."""
    return UNIX_EPOCH_JD + _as_utc(moment).timestamp() / SECONDS_PER_DAY


def days_since_j2000(moment: datetime) -> float:
    return julian_date(moment) - J2000_JD


def centuries_since_j2000(moment: datetime) -> float:
    return days_since_j2000(moment) / DAYS_PER_JULIAN_CENTURY
