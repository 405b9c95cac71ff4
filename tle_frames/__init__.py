"""
tle-frames: TLE parsing, time systems and reference-frame conversions

This package turns NORAD two-line element sets into SGP4-ready orbital
elements and converts satellite and observer positions between the inertial
frame, the Earth-fixed frame and geodetic coordinates to produce look angles
for ground-station pointing.

Modules:
    gravity: WGS72OLD / WGS72 / WGS84 constant sets
    time_system: Julian dates, calendar conversion and sidereal time
    tle_parser: Fixed-column TLE parsing and unit conversion
    vectors: Frame-tagged position types
    conversions: ECI/ECEF/geodetic transforms and look angles
    satellite: SGP4 propagation of parsed elements (via the sgp4 library)

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

from tle_frames.conversions import (
    ecef_to_eci,
    eci_to_ecef,
    eci_to_lla,
    eci_to_look_angles,
    lat_long_deg,
    lla_to_eci,
)
from tle_frames.errors import (
    GravityModelError,
    LatitudeRangeError,
    LookAngleError,
    PropagationError,
    TLEChecksumError,
    TLEError,
    TLEFieldError,
    TLELengthError,
)
from tle_frames.gravity import WGS72, WGS72OLD, WGS84, GravityModel, get_gravity_model
from tle_frames.satellite import Satellite
from tle_frames.time_system import (
    JulianDate,
    days_to_mdhms,
    gstime,
    gstime_from_date,
    jday,
    theta_g_jd,
)
from tle_frames.tle_parser import OrbitalElements, TLEParser, compute_checksum, parse_tle
from tle_frames.vectors import ECEFVector, ECIVector, LatLong, LatLongAlt, LookAngles, Vector3

__version__ = "1.0.0"
