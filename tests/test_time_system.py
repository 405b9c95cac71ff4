"""
Unit Tests for the Time System

Covers Julian date construction and arithmetic, day-of-year conversion and
both sidereal time formulas.

Run with:
    python -m pytest tests/test_time_system.py -v
"""

import math
import unittest
from datetime import datetime, timedelta, timezone

from sgp4.api import jday as sgp4_jday

from tle_frames.config import SGP4_EPOCH_JD
from tle_frames.time_system import (
    JulianDate,
    days_to_mdhms,
    gstime,
    gstime_from_date,
    is_leap_year,
    jday,
    theta_g_jd,
)


class TestJulianDate(unittest.TestCase):
    """Test suite for JulianDate construction and arithmetic."""

    def test_j2000(self):
        jd = jday(2000, 1, 1, 12, 0, 0.0)

        self.assertEqual(jd.day, 2451544.5)
        self.assertEqual(jd.fraction, 0.5)
        self.assertEqual(jd.single(), 2451545.0)

    def test_day_and_fraction_kept_apart(self):
        jd = JulianDate.from_calendar(2008, 9, 20, 12, 25, 40.104192)

        self.assertEqual(jd.day, 2454729.5)
        self.assertAlmostEqual(jd.fraction, 0.51782528, places=9)

    def test_matches_sgp4_jday(self):
        """Same formula as the sgp4 library for dates in the TLE range."""
        cases = [
            (1957, 10, 4, 19, 28, 34.0),
            (1999, 12, 31, 23, 59, 59.5),
            (2024, 2, 29, 6, 30, 0.25),
            (2056, 7, 1, 0, 0, 0.0),
        ]
        for fields in cases:
            with self.subTest(fields=fields):
                jd = jday(*fields)
                ref_jd, ref_fr = sgp4_jday(*fields)
                self.assertEqual(jd.day, ref_jd)
                self.assertAlmostEqual(jd.fraction, ref_fr, places=14)

    def test_subtract_reference(self):
        jd = jday(2000, 6, 27, 18, 50, 19.733568)

        self.assertAlmostEqual(jd.subtract(SGP4_EPOCH_JD), 18441.78495062, places=8)

    def test_minutes_since(self):
        start = jday(2023, 9, 16, 13, 0, 0.0)
        later = jday(2023, 9, 17, 13, 30, 0.0)

        self.assertAlmostEqual(later.minutes_since(start), 1470.0, places=9)
        self.assertAlmostEqual(start.minutes_since(later), -1470.0, places=9)

    def test_normalized(self):
        jd = JulianDate(2451544.5, 1.25).normalized()

        self.assertEqual(jd.day, 2451545.5)
        self.assertEqual(jd.fraction, 0.25)

        jd = JulianDate(2451544.5, -0.25).normalized()
        self.assertEqual(jd.day, 2451543.5)
        self.assertEqual(jd.fraction, 0.75)

    def test_from_datetime(self):
        dt = datetime(2023, 9, 16, 13, 49, 9, 500000, tzinfo=timezone.utc)
        jd = JulianDate.from_datetime(dt)

        self.assertEqual(jd, jday(2023, 9, 16, 13, 49, 9.5))

    def test_from_aware_datetime_converts_to_utc(self):
        local = datetime(2023, 9, 16, 15, 49, 9, tzinfo=timezone(timedelta(hours=2)))
        utc = datetime(2023, 9, 16, 13, 49, 9)

        self.assertEqual(JulianDate.from_datetime(local), JulianDate.from_datetime(utc))

    def test_to_datetime(self):
        dt = jday(2023, 9, 16, 13, 49, 9.0).to_datetime()

        expected = datetime(2023, 9, 16, 13, 49, 9, tzinfo=timezone.utc)
        self.assertLess(abs((dt - expected).total_seconds()), 1e-3)

    def test_out_of_range_fields_are_not_rejected(self):
        jd = jday(2023, 13, 40, 25, 61, 75.0)

        self.assertTrue(math.isfinite(jd.single()))


class TestDaysToMDHMS(unittest.TestCase):
    """Test day-of-year to calendar conversion."""

    def test_iss_epoch(self):
        mon, day, hr, minute, sec = days_to_mdhms(2023, 259.57580000)

        self.assertEqual((mon, day, hr, minute), (9, 16, 13, 49))
        self.assertAlmostEqual(sec, 9.12, places=3)

    def test_first_day(self):
        self.assertEqual(days_to_mdhms(2021, 1.0), (1, 1, 0, 0, 0.0))

    def test_leap_year_february(self):
        mon, day, _, _, _ = days_to_mdhms(2024, 60.0)
        self.assertEqual((mon, day), (2, 29))

        mon, day, _, _, _ = days_to_mdhms(2023, 60.0)
        self.assertEqual((mon, day), (3, 1))

    def test_last_day_of_year(self):
        mon, day, _, _, _ = days_to_mdhms(2023, 365.5)
        self.assertEqual((mon, day), (12, 31))

        mon, day, _, _, _ = days_to_mdhms(2000, 366.0)
        self.assertEqual((mon, day), (12, 31))

    def test_day_past_end_of_year(self):
        with self.assertRaises(ValueError):
            days_to_mdhms(2023, 366.5)

    def test_leap_rule_every_fourth_year(self):
        self.assertTrue(is_leap_year(1960))
        self.assertTrue(is_leap_year(2000))
        self.assertTrue(is_leap_year(2056))
        self.assertFalse(is_leap_year(1957))
        self.assertFalse(is_leap_year(2023))


class TestSiderealTime(unittest.TestCase):
    """Test both Greenwich mean sidereal time formulas."""

    def test_gstime_at_j2000(self):
        # 18h 41m 50.548s = 280.46061837 deg
        self.assertAlmostEqual(math.degrees(gstime(2451545.0)), 280.46061837, places=6)

    def test_gstime_range(self):
        for jd in (2433281.5, 2440000.0, 2451545.0, 2460204.076, 2470000.25):
            with self.subTest(jd=jd):
                value = gstime(jd)
                self.assertGreaterEqual(value, 0.0)
                self.assertLess(value, 2 * math.pi)

    def test_gstime_advances_one_sidereal_day(self):
        # One solar day is 1.0027379 sidereal days: GMST gains ~0.9856 deg per day
        gained = gstime(2451546.0) - gstime(2451545.0)
        self.assertAlmostEqual(math.degrees(gained), 0.98564736, places=5)

    def test_gstime_from_date(self):
        self.assertEqual(gstime_from_date(2000, 1, 1, 12, 0, 0.0), gstime(2451545.0))

    def test_theta_g_jd_agrees_with_gstime(self):
        """The two formulas differ by far less than an arcsecond."""
        arcsecond = math.radians(1.0 / 3600.0)
        for jd in (2451545.0, 2454729.71782528, 2460204.076, 2465000.9):
            with self.subTest(jd=jd):
                diff = math.fmod(theta_g_jd(jd) - gstime(jd), 2 * math.pi)
                diff = min(abs(diff), 2 * math.pi - abs(diff))
                self.assertLess(diff, arcsecond)

    def test_theta_g_jd_at_j2000(self):
        self.assertAlmostEqual(theta_g_jd(2451545.0), 4.894961212789146, places=9)


if __name__ == "__main__":
    unittest.main()
