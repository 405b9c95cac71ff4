"""
Position types shared by the parser, the propagator boundary and the
coordinate transforms.

Cartesian vectors carry their reference frame in their type: ECIVector for
the Earth-centered inertial frame (the TEME output of SGP4 is treated as
ECI) and ECEFVector for the Earth-fixed frame. The transforms check the
type of what they receive so a vector cannot silently be rotated twice.
"""

import math
from typing import NamedTuple, Tuple

import numpy as np

DEG2RAD = math.pi / 180.0
RAD2DEG = 180.0 / math.pi


class Vector3(NamedTuple):
    """Cartesian coordinates in kilometers (or km/s for velocities)."""

    x: float
    y: float
    z: float

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


class ECIVector(Vector3):
    """Vector in the Earth-centered inertial frame."""

    __slots__ = ()

    @classmethod
    def from_array(cls, values) -> "ECIVector":
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)


class ECEFVector(Vector3):
    """Vector in the Earth-centered Earth-fixed frame."""

    __slots__ = ()

    @classmethod
    def from_array(cls, values) -> "ECEFVector":
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)


class LatLong(NamedTuple):
    """Latitude and longitude, radians unless produced by lat_long_deg."""

    latitude: float
    longitude: float


class LatLongAlt(NamedTuple):
    """Geodetic position: latitude/longitude plus altitude above the ellipsoid in km."""

    lat_long: LatLong
    altitude_km: float

    @classmethod
    def from_degrees(cls, latitude_deg: float, longitude_deg: float,
                     altitude_km: float) -> "LatLongAlt":
        return cls(
            LatLong(DEG2RAD * latitude_deg, DEG2RAD * longitude_deg),
            altitude_km,
        )

    @property
    def latitude(self) -> float:
        return self.lat_long.latitude

    @property
    def longitude(self) -> float:
        return self.lat_long.longitude


class LookAngles(NamedTuple):
    """
    Observer-relative pointing to a satellite.

    Attributes:
        azimuth: Radians clockwise from north, in [0, 2pi)
        elevation: Radians above the local horizon
        range_km: Slant range in km
    """

    azimuth: float
    elevation: float
    range_km: float

    def to_degrees(self) -> Tuple[float, float, float]:
        """Return (azimuth_deg, elevation_deg, range_km)."""
        return self.azimuth * RAD2DEG, self.elevation * RAD2DEG, self.range_km
