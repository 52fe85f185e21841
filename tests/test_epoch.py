"""
Tests for epoch bookkeeping and secular-rate correction.
"""
import math
from datetime import datetime, timedelta, timezone

import pytest

from orrery.core.errors import InvalidElementsError
from orrery.physics.elements import OrbitalElements, SecularRates
from orrery.physics.epoch import (
    apply_secular_rates,
    centuries_since_j2000,
    days_since_j2000,
    elapsed_rate_units,
    julian_date,
    time_since_epoch,
)


@pytest.fixture
def drifting_elements():
    return OrbitalElements(
        a=1.0, e=0.1, inc_rad=0.2, lan_rad=6.2, argp_rad=1.0, M0_rad=0.0,
        period=365.25, epoch=2451545.0,
        rates=SecularRates(a_rate=0.01, e_rate=0.002, inc_rate=0.001,
                           lan_rate=0.1, argp_rate=-0.05, time_unit=36525.0),
    )


class TestTimeSinceEpoch:
    def test_elapsed_is_difference(self, drifting_elements):
        assert time_since_epoch(drifting_elements, 2451545.0) == 0.0
        assert time_since_epoch(drifting_elements, 2451645.0) == 100.0
        assert time_since_epoch(drifting_elements, 2451445.0) == -100.0

    def test_elapsed_rate_units(self, drifting_elements):
        assert elapsed_rate_units(drifting_elements, 36525.0) == 1.0

    def test_elapsed_rate_units_without_rates(self):
        elements = OrbitalElements(a=1.0, e=0.0, inc_rad=0.0, lan_rad=0.0, argp_rad=0.0, M0_rad=0.0, period=1.0)
        assert elapsed_rate_units(elements, 1000.0) == 0.0


class TestApplySecularRates:
    def test_identity_without_rates(self):
        elements = OrbitalElements(a=1.0, e=0.2, inc_rad=0.1, lan_rad=0.0, argp_rad=0.0, M0_rad=0.0, period=1.0)
        assert apply_secular_rates(elements, 5.0) is elements

    def test_identity_with_zero_rates(self):
        elements = OrbitalElements(a=1.0, e=0.2, inc_rad=0.1, lan_rad=0.0, argp_rad=0.0, M0_rad=0.0,
                                   period=1.0, rates=SecularRates())
        assert apply_secular_rates(elements, 5.0) is elements

    def test_identity_at_epoch(self, drifting_elements):
        assert apply_secular_rates(drifting_elements, 0.0) is drifting_elements

    def test_linear_drift(self, drifting_elements):
        drifted = apply_secular_rates(drifting_elements, 2.0)
        assert abs(drifted.a - 1.02) < 1e-12
        assert abs(drifted.e - 0.104) < 1e-12
        assert abs(drifted.inc_rad - 0.202) < 1e-12
        assert abs(drifted.argp_rad - 0.9) < 1e-12
        # Unrated fields carry over
        assert drifted.M0_rad == drifting_elements.M0_rad
        assert drifted.period == drifting_elements.period
        assert drifted.epoch == drifting_elements.epoch
        # Input untouched
        assert drifting_elements.a == 1.0

    def test_drifted_angles_are_normalized(self, drifting_elements):
        drifted = apply_secular_rates(drifting_elements, 2.0)
        # 6.2 + 0.2 wraps past 2π
        assert 0.0 <= drifted.lan_rad < 2 * math.pi
        assert abs(drifted.lan_rad - (6.4 - 2 * math.pi)) < 1e-12

    def test_drift_out_of_elliptic_range_raises(self, drifting_elements):
        with pytest.raises(InvalidElementsError):
            apply_secular_rates(drifting_elements, 1000.0)


class TestJulianDate:
    def test_j2000_epoch(self):
        assert julian_date(datetime(2000, 1, 1, 12, tzinfo=timezone.utc)) == 2451545.0

    def test_unix_epoch(self):
        assert julian_date(datetime(1970, 1, 1, tzinfo=timezone.utc)) == 2440587.5

    def test_naive_datetime_is_utc(self):
        assert julian_date(datetime(2000, 1, 1, 12)) == 2451545.0

    def test_offset_timezone(self):
        plus_two = timezone(timedelta(hours=2))
        assert julian_date(datetime(2000, 1, 1, 14, tzinfo=plus_two)) == 2451545.0

    def test_days_and_centuries(self):
        moment = datetime(2000, 1, 11, 12, tzinfo=timezone.utc)
        assert abs(days_since_j2000(moment) - 10.0) < 1e-9
        assert abs(centuries_since_j2000(moment) - 10.0 / 36525.0) < 1e-12
