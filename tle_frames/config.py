"""
tle-frames Configuration and Constants

This module contains the named constants and reference TLE data used
throughout the package.

Constants:
    DEFAULT_GRAVITY_MODEL: Gravity model used when a caller does not pick one.
        WGS-72 is the constant set SGP4 was fitted against (Vallado et al. 2006).
    DEFAULT_OPSMODE: SGP4 operation mode handed to the propagator ('i' improved,
        'a' AFSPC compatibility).
    SGP4_EPOCH_JD: Julian date of 1949 December 31 00:00 UT, the reference the
        SGP4 family measures its epoch from.
    EPOCH_PIVOT_YEAR: Two-digit epoch years below this value belong to the
        2000s, the rest to the 1900s.
    TLE_LINE_LENGTH: Exact column count of each TLE line.
    GEODETIC_ITERATIONS: Fixed number of oblate-Earth latitude refinements.
    MONTH_SEARCH_LIMIT: Upper bound on the month search loop of the
        day-of-year to calendar conversion.

Reference TLE Data:
    ISS element set used by the tests and as a worked example.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

from typing import Dict, Any

DEFAULT_GRAVITY_MODEL: str = "wgs72"
DEFAULT_OPSMODE: str = "i"

SGP4_EPOCH_JD: float = 2433281.5
EPOCH_PIVOT_YEAR: int = 57

TLE_LINE_LENGTH: int = 69

GEODETIC_ITERATIONS: int = 20
MONTH_SEARCH_LIMIT: int = 22

# ISS element set from 2023-09-16
REFERENCE_ISS_TLE: Dict[str, Any] = {
    'name': 'ISS (ZARYA)',
    'norad_id': 25544,
    'line1': '1 25544U 98067A   23259.57580000  .00012022  00000-0  21844-3 0  9995',
    'line2': '2 25544  51.6416 220.9944 0004263 122.0101 312.2755 15.49541986415598',
    'epoch': '2023-09-16T13:49:09.12Z',
    'mean_motion': 15.49541986,
    'inclination': 51.6416,
    'eccentricity': 0.0004263
}
