"""
Time System

Julian dates, calendar conversions and Greenwich sidereal time.

An instant is held as a whole Julian day number plus a fractional day. A
single float cannot keep sub-millisecond resolution over several centuries,
so the two parts travel separately until a caller explicitly collapses them.

Two sidereal time formulas are provided and both are used:
    gstime: IAU-82 polynomial in Julian centuries of UT1 since J2000.
        Used to rotate propagated positions into the Earth-fixed frame.
    theta_g_jd: 1992 Astronomical Almanac form (page B6) that splits the
        date into 0h UT and the elapsed fraction of the day. Used to place
        observers in the inertial frame.
They agree to well under an arcsecond but are not bit-identical.

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications (4th ed.).
    The Astronomical Almanac (1992), pages B6 and K11.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Tuple

from tle_frames.config import MONTH_SEARCH_LIMIT
from tle_frames.logging_config import get_logger

logger = get_logger(__name__)

TWOPI = 2.0 * math.pi
DEG2RAD = math.pi / 180.0

J2000_JD = 2451545.0
_J2000_DATETIME = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_LEAP_MONTH_DAYS = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class JulianDate(NamedTuple):
    """
    Absolute instant as whole Julian day plus fractional day.

    The fraction is meant to lie in [0, 1) but nothing enforces it; use
    normalized() after composing several fractional contributions.
    """

    day: float
    fraction: float

    @classmethod
    def from_calendar(cls, year: int, mon: int, day: int, hr: int, minute: int,
                      sec: float) -> "JulianDate":
        """Julian date for a Gregorian calendar date and UT time of day."""
        return jday(year, mon, day, hr, minute, sec)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "JulianDate":
        """
        Julian date for a datetime.

        Aware datetimes are converted to UTC first; naive ones are taken as UTC.
        """
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        sec = dt.second + dt.microsecond / 1e6
        return jday(dt.year, dt.month, dt.day, dt.hour, dt.minute, sec)

    def subtract(self, reference: float) -> float:
        """Days elapsed since a reference Julian date given as a single float."""
        return self.day + self.fraction - reference

    def minutes_since(self, other: "JulianDate") -> float:
        """Signed difference self - other in minutes."""
        return (self.day - other.day) * 1440 + (self.fraction - other.fraction) * 1440

    def single(self) -> float:
        """Collapse to one float, giving up sub-millisecond precision."""
        return self.day + self.fraction

    def normalized(self) -> "JulianDate":
        """Equivalent date with the fraction moved into [0, 1)."""
        whole, fraction = divmod(self.fraction, 1.0)
        return JulianDate(self.day + whole, fraction)

    def to_datetime(self) -> datetime:
        """Timezone-aware UTC datetime for this instant."""
        offset = (self.day - J2000_JD) + self.fraction
        return _J2000_DATETIME + timedelta(days=offset)


def jday(year: int, mon: int, day: int, hr: int, minute: int, sec: float) -> JulianDate:
    """
    Julian date from calendar fields.

    The Julian date counts days elapsed since noon, January 1, 4713 BC. The
    formula is valid for the Gregorian calendar between 1900 and 2100. Fields
    are not range checked; out-of-range values give a finite but meaningless
    result.

    Args:
        year: Four-digit year
        mon: Month (1-12)
        day: Day of month
        hr: Hour (UT)
        minute: Minute
        sec: Seconds, may be fractional

    Returns:
        JulianDate with the day number ending in .5 and the time of day as fraction
    """
    jd = (367.0 * year
          - math.floor(7 * (year + math.floor((mon + 9) / 12.0)) * 0.25)
          + math.floor(275 * mon / 9.0)
          + day
          + 1721013.5)
    fr = (sec + minute * 60.0 + hr * 3600.0) / 86400.0
    return JulianDate(jd, fr)


def is_leap_year(year: int) -> bool:
    # Every fourth year only; correct for 1901-2099, which covers two-digit TLE epochs.
    return year % 4 == 0


def days_to_mdhms(year: int, epoch_days: float) -> Tuple[int, int, int, int, float]:
    """
    Convert a day of the year to month, day, hour, minute and second.

    Args:
        year: Four-digit year
        epoch_days: Day of year with fractional day (1.0 is January 1, 0h)

    Returns:
        Tuple of (month, day, hour, minute, second)

    Raises:
        ValueError: If the day of year is past the end of the year
    """
    lmonth = _LEAP_MONTH_DAYS if is_leap_year(year) else _MONTH_DAYS

    dayofyr = math.floor(epoch_days)
    if dayofyr > sum(lmonth):
        raise ValueError(f"Day of year {epoch_days} is past the end of {year}")

    i = 1
    inttemp = 0
    while dayofyr > inttemp + lmonth[i - 1] and i < MONTH_SEARCH_LIMIT:
        inttemp += lmonth[i - 1]
        i += 1

    mon = i
    day = dayofyr - inttemp

    temp = (epoch_days - dayofyr) * 24.0
    hr = math.floor(temp)

    temp = (temp - hr) * 60.0
    minute = math.floor(temp)

    sec = (temp - minute) * 60.0

    return mon, day, hr, minute, sec


def gstime(jdut1: float) -> float:
    """
    Greenwich mean sidereal time (IAU-82).

    Args:
        jdut1: Julian date of UT1

    Returns:
        GMST in radians, wrapped into [0, 2pi)
    """
    tut1 = (jdut1 - J2000_JD) / 36525.0
    temp = (-6.2e-6 * tut1 * tut1 * tut1
            + 0.093104 * tut1 * tut1
            + (876600.0 * 3600 + 8640184.812866) * tut1
            + 67310.54841)  # seconds
    temp = math.fmod(temp * DEG2RAD / 240.0, TWOPI)  # 360 deg / 86400 s = 1 / 240

    if temp < 0.0:
        temp += TWOPI

    return temp


def gstime_from_date(year: int, mon: int, day: int, hr: int, minute: int, sec: float) -> float:
    """Greenwich mean sidereal time for calendar fields."""
    return gstime(jday(year, mon, day, hr, minute, sec).single())


def theta_g_jd(jd: float) -> float:
    """
    Greenwich mean sidereal time from a Julian date.

    Reference: The 1992 Astronomical Almanac, page B6.

    Args:
        jd: Julian date (UT)

    Returns:
        GMST in radians. Not wrapped; callers reduce it together with a longitude.
    """
    ut, _ = math.modf(jd + 0.5)
    jd = jd - ut
    tu = (jd - J2000_JD) / 36525.0
    gmst = 24110.54841 + tu * (8640184.812866 + tu * (0.093104 - tu * 6.2e-6))
    gmst = math.fmod(gmst + 86400.0 * 1.00273790934 * ut, 86400.0)
    return TWOPI * gmst / 86400.0
