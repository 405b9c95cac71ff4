"""
Earth Gravity Models

Constant sets that parameterize the SGP4 propagator and the ellipsoid used
by the observer transforms. Three models are recognized: WGS72OLD, WGS72
and WGS84.

WGS72OLD carries the historical literal xke; WGS72 and WGS84 derive it as
60 / sqrt(R^3 / mu). The two forms differ in the last digits and both are
kept as published.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import math
from typing import Dict, NamedTuple

from tle_frames.errors import GravityModelError
from tle_frames.logging_config import get_logger

logger = get_logger(__name__)


class GravityModel(NamedTuple):
    """
    Gravity model constants.

    Attributes:
        name: Lookup key of the model
        mu: Earth gravitational parameter (km^3/s^2)
        radiusearthkm: Earth equatorial radius (km)
        xke: Reciprocal of tumin (1/min in SGP4 units)
        tumin: Minutes per SGP4 time unit
        j2: Second zonal harmonic
        j3: Third zonal harmonic
        j4: Fourth zonal harmonic
        j3oj2: Ratio j3/j2
        f: Ellipsoid flattening
    """

    name: str
    mu: float
    radiusearthkm: float
    xke: float
    tumin: float
    j2: float
    j3: float
    j4: float
    j3oj2: float
    f: float


def _build(name: str, mu: float, radiusearthkm: float, xke: float,
           j2: float, j3: float, j4: float, f: float) -> GravityModel:
    return GravityModel(
        name=name,
        mu=mu,
        radiusearthkm=radiusearthkm,
        xke=xke,
        tumin=1.0 / xke,
        j2=j2,
        j3=j3,
        j4=j4,
        j3oj2=j3 / j2,
        f=f,
    )


WGS72OLD = _build(
    "wgs72old",
    mu=398600.79964,
    radiusearthkm=6378.135,
    xke=0.0743669161,
    j2=0.001082616,
    j3=-0.00000253881,
    j4=-0.00000165597,
    f=1 / 298.26,
)

WGS72 = _build(
    "wgs72",
    mu=398600.8,
    radiusearthkm=6378.135,
    xke=60.0 / math.sqrt(6378.135 * 6378.135 * 6378.135 / 398600.8),
    j2=0.001082616,
    j3=-0.00000253881,
    j4=-0.00000165597,
    f=1 / 298.26,
)

WGS84 = _build(
    "wgs84",
    mu=398600.5,
    radiusearthkm=6378.137,
    xke=60.0 / math.sqrt(6378.137 * 6378.137 * 6378.137 / 398600.5),
    j2=0.00108262998905,
    j3=-0.00000253215306,
    j4=-0.00000161098761,
    f=1 / 298.257223563,
)

GRAVITY_MODELS: Dict[str, GravityModel] = {
    "wgs72old": WGS72OLD,
    "wgs72": WGS72,
    "wgs84": WGS84,
}


def get_gravity_model(name: str) -> GravityModel:
    """
    Look up a gravity model by name.

    Args:
        name: One of "wgs72old", "wgs72" or "wgs84"

    Returns:
        The matching GravityModel

    Raises:
        GravityModelError: If the name is not a known model
    """
    try:
        return GRAVITY_MODELS[name]
    except (KeyError, TypeError):
        logger.error(f"Unknown gravity model requested: {name!r}")
        raise GravityModelError(name) from None
