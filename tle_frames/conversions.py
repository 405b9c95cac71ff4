"""
Coordinate Transformations

Conversions between the inertial frame (ECI), the Earth-fixed frame (ECEF),
geodetic latitude/longitude/altitude and observer-relative look angles.

Frame conventions:
    - ECI/ECEF vectors are in km, angles in radians.
    - The sidereal angle passed to eci_to_ecef, ecef_to_eci and eci_to_lla
      comes from gstime. lla_to_eci and eci_to_look_angles compute their own
      angle from theta_g_jd.

References:
    Kelso, T.S. Orbital Coordinate Systems, Parts II and III.
        http://celestrak.com/columns/v02n02/ and /v02n03/
    The Astronomical Almanac (1992), page K11.
"""

import math
from typing import Tuple

from tle_frames.config import GEODETIC_ITERATIONS
from tle_frames.errors import LatitudeRangeError, LookAngleError
from tle_frames.gravity import GravityModel
from tle_frames.logging_config import get_logger
from tle_frames.time_system import TWOPI, theta_g_jd
from tle_frames.vectors import (
    ECEFVector,
    ECIVector,
    LatLong,
    LatLongAlt,
    LookAngles,
)

logger = get_logger(__name__)

# WGS-84 ellipsoid used for the geodetic solution
WGS84_SEMI_MAJOR_AXIS_KM = 6378.137
WGS84_SEMI_MINOR_AXIS_KM = 6356.7523142

# Earth gravitational parameter (km^3/s^2)
MU_EARTH = 398600.4418

# |cos(latitude)| below this is treated as a point on the polar axis
POLAR_AXIS_EPSILON = 1e-10


def _require_frame(vector, frame, operation):
    if not isinstance(vector, frame):
        raise TypeError(
            f"{operation} expects {frame.__name__}, got {type(vector).__name__}"
        )


def eci_to_ecef(eci: ECIVector, gmst: float) -> ECEFVector:
    """
    Rotate an inertial vector into the Earth-fixed frame.

    Reference: http://ccar.colorado.edu/ASEN5070/handouts/coordsys.doc

    Args:
        eci: Position in the inertial frame
        gmst: Greenwich sidereal angle (radians)

    Returns:
        The same position in the Earth-fixed frame
    """
    _require_frame(eci, ECIVector, "eci_to_ecef")
    cos_g = math.cos(gmst)
    sin_g = math.sin(gmst)
    return ECEFVector(
        eci.x * cos_g + eci.y * sin_g,
        eci.x * -sin_g + eci.y * cos_g,
        eci.z,
    )


def ecef_to_eci(ecef: ECEFVector, gmst: float) -> ECIVector:
    """Inverse of eci_to_ecef for the same sidereal angle."""
    _require_frame(ecef, ECEFVector, "ecef_to_eci")
    cos_g = math.cos(gmst)
    sin_g = math.sin(gmst)
    return ECIVector(
        ecef.x * cos_g - ecef.y * sin_g,
        ecef.x * sin_g + ecef.y * cos_g,
        ecef.z,
    )


def eci_to_lla(eci: ECIVector, gmst: float) -> Tuple[LatLongAlt, float]:
    """
    Geodetic latitude, longitude and altitude of an inertial position.

    Starts from the spherical-Earth solution and applies a fixed number of
    oblate-Earth latitude corrections (GEODETIC_ITERATIONS). The loop never
    exits early, so the result is identical for identical inputs.

    Reference: http://celestrak.com/columns/v02n03/

    Args:
        eci: Position in the inertial frame (km)
        gmst: Greenwich sidereal angle (radians)

    Returns:
        Tuple of (position, speed_km_s). Longitude is not wrapped. The speed
        is sqrt(mu / r), the circular-orbit speed at that radius, not the
        satellite's actual velocity.
    """
    _require_frame(eci, ECIVector, "eci_to_lla")
    a = WGS84_SEMI_MAJOR_AXIS_KM
    b = WGS84_SEMI_MINOR_AXIS_KM
    f = (a - b) / a
    e2 = (2 * f) - f ** 2

    sqx2y2 = math.sqrt(eci.x ** 2 + eci.y ** 2)

    # Spherical Earth
    longitude = math.atan2(eci.y, eci.x) - gmst
    latitude = math.atan2(eci.z, sqx2y2)

    # Oblate Earth
    c = 0.0
    for _ in range(GEODETIC_ITERATIONS):
        sin_lat = math.sin(latitude)
        c = 1 / math.sqrt(1 - e2 * (sin_lat * sin_lat))
        latitude = math.atan2(eci.z + (a * c * e2 * sin_lat), sqx2y2)

    cos_lat = math.cos(latitude)
    if abs(cos_lat) < POLAR_AXIS_EPSILON:
        # On the polar axis the equatorial projection carries no information
        altitude = abs(eci.z) / abs(math.sin(latitude)) - a * c * (1 - e2)
    else:
        altitude = (sqx2y2 / cos_lat) - (a * c)

    speed = math.sqrt(MU_EARTH / (altitude + WGS84_SEMI_MAJOR_AXIS_KM))

    return LatLongAlt(LatLong(latitude, longitude), altitude), speed


def lat_long_deg(rad: LatLong) -> LatLong:
    """
    Convert a latitude/longitude pair from radians to degrees.

    Longitude is wrapped into (-180, 180].

    Raises:
        LatitudeRangeError: If the latitude is outside [-pi/2, pi/2]
    """
    if rad.latitude < (-math.pi / 2) or rad.latitude > math.pi / 2:
        raise LatitudeRangeError(
            f"Latitude {rad.latitude} not within bounds -pi/2 to +pi/2"
        )

    longitude = math.fmod(rad.longitude / math.pi * 180, 360)
    if longitude > 180:
        longitude -= 360
    elif longitude <= -180:
        longitude += 360

    return LatLong(rad.latitude / math.pi * 180, longitude)


def lla_to_eci(observer: LatLongAlt, jd: float, gravity: GravityModel) -> ECIVector:
    """
    Inertial position of a point given in geodetic coordinates.

    Reference: The 1992 Astronomical Almanac, page K11.

    Args:
        observer: Geodetic position (radians, km)
        jd: Julian date of the instant
        gravity: Model supplying the equatorial radius and flattening

    Returns:
        Position in the inertial frame (km)
    """
    theta = math.fmod(theta_g_jd(jd) + observer.lat_long.longitude, TWOPI)
    lat_sin = math.sin(observer.lat_long.latitude)
    lat_cos = math.cos(observer.lat_long.latitude)
    f = gravity.f
    c = 1 / math.sqrt(1 + f * (f - 2) * lat_sin * lat_sin)
    sq = c * (1 - f) * (1 - f)
    achcp = (gravity.radiusearthkm * c + observer.altitude_km) * lat_cos

    return ECIVector(
        achcp * math.cos(theta),
        achcp * math.sin(theta),
        (gravity.radiusearthkm * sq + observer.altitude_km) * lat_sin,
    )


def eci_to_look_angles(eci_sat: ECIVector, observer: LatLongAlt, jd: float,
                       gravity: GravityModel) -> LookAngles:
    """
    Azimuth, elevation and range from an observer to a satellite.

    The range vector is rotated into the observer's South/East/Zenith frame.
    Azimuth is atan(-E/S), shifted by pi when S > 0 and then by 2pi when
    still negative. When S is exactly zero the azimuth takes the limit of
    that expression: due east or due west, or north when E is zero too.

    Reference: http://celestrak.com/columns/v02n02/

    Args:
        eci_sat: Satellite position in the inertial frame (km)
        observer: Observer geodetic position (radians, km)
        jd: Julian date the satellite position belongs to
        gravity: Model used to place the observer

    Returns:
        LookAngles for this (satellite, observer, instant) combination

    Raises:
        LookAngleError: If observer and satellite coincide
    """
    _require_frame(eci_sat, ECIVector, "eci_to_look_angles")
    theta = math.fmod(theta_g_jd(jd) + observer.lat_long.longitude, 2 * math.pi)
    obs_pos = lla_to_eci(observer, jd, gravity)

    rx = eci_sat.x - obs_pos.x
    ry = eci_sat.y - obs_pos.y
    rz = eci_sat.z - obs_pos.z

    rg = math.sqrt(rx * rx + ry * ry + rz * rz)
    if rg == 0.0:
        raise LookAngleError("Observer and satellite positions coincide; look angles are undefined")

    lat_sin = math.sin(observer.lat_long.latitude)
    lat_cos = math.cos(observer.lat_long.latitude)
    theta_sin = math.sin(theta)
    theta_cos = math.cos(theta)

    top_s = lat_sin * theta_cos * rx + lat_sin * theta_sin * ry - lat_cos * rz
    top_e = -theta_sin * rx + theta_cos * ry
    top_z = lat_cos * theta_cos * rx + lat_cos * theta_sin * ry + lat_sin * rz

    if top_s == 0.0:
        if top_e > 0.0:
            az = math.pi / 2
        elif top_e < 0.0:
            az = 3 * math.pi / 2
        else:
            az = 0.0
    else:
        az = math.atan(-top_e / top_s)
        if top_s > 0:
            az = az + math.pi
        if az < 0:
            az = az + 2 * math.pi

    el = math.asin(max(-1.0, min(1.0, top_z / rg)))

    return LookAngles(az, el, rg)
