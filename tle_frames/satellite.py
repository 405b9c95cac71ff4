"""
Satellite Propagation

Connects parsed TLE elements to the SGP4 propagator and to the coordinate
transforms.

The propagator itself is the sgp4 library (Vallado's reference code). It is
initialized with the elements produced by tle_parser and the epoch expressed
as days since JD 2433281.5, then stepped in minutes since that epoch. Its
output is TEME, which the transforms treat as the inertial frame.

Typical use:
    sat = Satellite.from_tle(line1, line2)
    station = LatLongAlt.from_degrees(40.0, -105.0, 1.6)
    angles = sat.look_angles(station, JulianDate.from_datetime(now))
"""

from datetime import datetime
from typing import Dict, Tuple

from sgp4.api import WGS72, WGS72OLD, WGS84, Satrec

from tle_frames.config import DEFAULT_GRAVITY_MODEL, DEFAULT_OPSMODE
from tle_frames.conversions import eci_to_lla, eci_to_look_angles
from tle_frames.errors import PropagationError
from tle_frames.logging_config import get_logger
from tle_frames.time_system import JulianDate, gstime
from tle_frames.tle_parser import OrbitalElements, TLEParser
from tle_frames.vectors import ECIVector, LatLongAlt, LookAngles

logger = get_logger(__name__)


# SGP4 error code meanings
SGP4_ERROR_CODES: Dict[int, str] = {
    0: "No error",
    1: "Mean eccentricity < 0.0 or > 1.0",
    2: "Mean motion < 0.0",
    3: "Perturbed eccentricity < 0.0 or > 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Epoch elements are sub-orbital",
    6: "Satellite has decayed",
}

# Gravity model name -> sgp4 library constant
SGP4_GRAVITY_CONSTANTS: Dict[str, int] = {
    "wgs72old": WGS72OLD,
    "wgs72": WGS72,
    "wgs84": WGS84,
}

VALID_OPSMODES = ("a", "i")


class Satellite:
    """
    A satellite initialized for SGP4 propagation.

    Holds the parsed OrbitalElements and the sgp4 Satrec built from them.
    """

    def __init__(self, elements: OrbitalElements, opsmode: str = DEFAULT_OPSMODE):
        """
        Initialize the propagator from parsed elements.

        Args:
            elements: Output of TLEParser.parse_tle
            opsmode: SGP4 operation mode, 'i' (improved) or 'a' (AFSPC)
        """
        if opsmode not in VALID_OPSMODES:
            raise ValueError(f"opsmode must be one of {VALID_OPSMODES}, got {opsmode!r}")

        self.elements = elements
        self.opsmode = opsmode
        self.satrec = Satrec()
        self.satrec.sgp4init(
            SGP4_GRAVITY_CONSTANTS[elements.gravity.name],
            opsmode,
            elements.satnum,
            elements.epoch_days_since_reference(),
            elements.bstar,
            elements.ndot,
            elements.nddot,
            elements.ecco,
            elements.argpo,
            elements.inclo,
            elements.mo,
            elements.no_kozai,
            elements.nodeo,
        )

        if self.satrec.error != 0:
            logger.warning(
                f"sgp4init reported error {self.satrec.error} for satellite {elements.satnum}"
            )
            raise PropagationError(
                self.satrec.error,
                SGP4_ERROR_CODES.get(self.satrec.error, f"Unknown error code {self.satrec.error}"),
                elements.satnum,
            )

        logger.debug(
            f"Initialized SGP4 for satellite {elements.satnum} "
            f"(model {elements.gravity.name}, opsmode {opsmode})"
        )

    @classmethod
    def from_tle(cls, line1: str, line2: str, gravity_model: str = DEFAULT_GRAVITY_MODEL,
                 opsmode: str = DEFAULT_OPSMODE) -> "Satellite":
        """Parse a TLE and initialize the propagator in one step."""
        elements = TLEParser(gravity_model).parse_tle(line1, line2)
        return cls(elements, opsmode)

    @property
    def satnum(self) -> int:
        return self.elements.satnum

    @property
    def epoch(self) -> JulianDate:
        return self.elements.jdsatepoch

    def propagate(self, tsince_minutes: float) -> Tuple[ECIVector, ECIVector]:
        """
        Propagate to a time offset from the element epoch.

        Args:
            tsince_minutes: Minutes since epoch, negative for earlier times

        Returns:
            Tuple of (position_km, velocity_km_s) in the inertial frame

        Raises:
            PropagationError: If SGP4 returns a non-zero error code
        """
        error, position, velocity = self.satrec.sgp4_tsince(tsince_minutes)

        if error != 0:
            message = SGP4_ERROR_CODES.get(error, f"Unknown error code {error}")
            logger.warning(
                f"SGP4 error {error} for satellite {self.satnum} at t={tsince_minutes} min: {message}"
            )
            raise PropagationError(error, message, self.satnum)

        return ECIVector.from_array(position), ECIVector.from_array(velocity)

    def propagate_jd(self, jd: JulianDate) -> Tuple[ECIVector, ECIVector]:
        """Propagate to an absolute Julian date."""
        return self.propagate(jd.minutes_since(self.epoch))

    def propagate_datetime(self, dt: datetime) -> Tuple[ECIVector, ECIVector]:
        """Propagate to a datetime (naive values are taken as UTC)."""
        return self.propagate_jd(JulianDate.from_datetime(dt))

    def ground_position(self, jd: JulianDate) -> Tuple[LatLongAlt, float]:
        """
        Sub-satellite geodetic position at a Julian date.

        Returns:
            Tuple of (position, circular_speed_km_s) as produced by eci_to_lla
        """
        position, _ = self.propagate_jd(jd)
        return eci_to_lla(position, gstime(jd.single()))

    def look_angles(self, observer: LatLongAlt, jd: JulianDate) -> LookAngles:
        """Azimuth, elevation and range from an observer at a Julian date."""
        position, _ = self.propagate_jd(jd)
        return eci_to_look_angles(position, observer, jd.single(), self.elements.gravity)
