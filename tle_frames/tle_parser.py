"""
TLE Parser Module

Parses NORAD Two-Line Element (TLE) sets into OrbitalElements ready for the
SGP4 propagator.

A TLE is a fixed-column format: every field sits at an exact column range,
decimal points are often implied, and the two second-order terms (nddot and
bstar) are packed as a signed five-digit mantissa followed by a signed
one-digit exponent, e.g. " 21844-3" for 0.21844e-3.

After parsing, the elements are converted to the units SGP4 works in:
    - mean motion and its derivatives from revolutions/day to radians/minute
    - inclination, RAAN, argument of perigee and mean anomaly to radians
and the epoch is resolved to a JulianDate.

Column layout (0-indexed, half-open):
    Line 1: catalog number [2,7), classification [7], designator [9,17),
            epoch year [18,20), epoch day [20,32), ndot [33,43),
            nddot [44,52), bstar [53,61), element set number [64,68),
            checksum [68]
    Line 2: inclination [8,16), RAAN [17,25), eccentricity [26,33),
            argument of perigee [34,42), mean anomaly [43,51),
            mean motion [52,63), revolution number [63,68), checksum [68]
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from tle_frames.config import DEFAULT_GRAVITY_MODEL, EPOCH_PIVOT_YEAR, SGP4_EPOCH_JD, TLE_LINE_LENGTH
from tle_frames.errors import TLEChecksumError, TLEFieldError, TLELengthError
from tle_frames.gravity import GravityModel, get_gravity_model
from tle_frames.logging_config import get_logger
from tle_frames.time_system import JulianDate, days_to_mdhms

logger = get_logger(__name__)

DEG2RAD = math.pi / 180.0
RAD2DEG = 180.0 / math.pi
XPDOTP = 1440.0 / (2.0 * math.pi)  # rev/day to rad/min

# Plain decimal or exponent notation; rejects nan, inf and digit separators
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_DIGITS = re.compile(r"\d+")


@dataclass
class OrbitalElements:
    """
    Mean orbital elements of one satellite, in SGP4 units once parsed.

    Angles are radians, no_kozai is radians/minute, ndot radians/minute^2 and
    nddot radians/minute^3. The record is handed to the propagator as is.
    """

    line1: str
    line2: str
    gravity: GravityModel
    satnum: int = 0
    classification: str = "U"
    intldesg: str = ""
    epochyr: int = 0
    epoch_year: int = 0
    epochdays: float = 0.0
    ndot: float = 0.0
    nddot: float = 0.0
    bstar: float = 0.0
    elnum: int = 0
    inclo: float = 0.0
    nodeo: float = 0.0
    ecco: float = 0.0
    argpo: float = 0.0
    mo: float = 0.0
    no_kozai: float = 0.0
    revnum: int = 0
    jdsatepoch: Optional[JulianDate] = None

    @property
    def inclination_deg(self) -> float:
        return self.inclo * RAD2DEG

    @property
    def raan_deg(self) -> float:
        return self.nodeo * RAD2DEG

    @property
    def arg_perigee_deg(self) -> float:
        return self.argpo * RAD2DEG

    @property
    def mean_anomaly_deg(self) -> float:
        return self.mo * RAD2DEG

    @property
    def mean_motion_rev_per_day(self) -> float:
        return self.no_kozai * XPDOTP

    def epoch_days_since_reference(self) -> float:
        """Epoch as days since JD 2433281.5, the form sgp4init expects."""
        return self.jdsatepoch.subtract(SGP4_EPOCH_JD)


def compute_checksum(line: str) -> int:
    """Modulo-10 TLE checksum: digits count their value, '-' counts 1."""
    checksum = 0
    for char in line[:68]:
        if char.isdigit():
            checksum += int(char)
        elif char == "-":
            checksum += 1
    return checksum % 10


def resolve_epoch_year(epochyr: int, pivot: int = EPOCH_PIVOT_YEAR) -> int:
    """Four-digit year for a two-digit TLE epoch year."""
    if epochyr < pivot:
        return epochyr + 2000
    return epochyr + 1900


def _float(text: str) -> float:
    text = text.replace(" ", "")
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"not a TLE decimal: {text!r}")
    return float(text)


def _int(text: str) -> int:
    text = text.strip()
    if not _DIGITS.fullmatch(text):
        raise ValueError(f"not a TLE integer: {text!r}")
    return int(text)


def _exponential(mantissa_sign: str, mantissa: str, exponent: str) -> float:
    # " 21844-3" -> ".21844e-3"
    return _float(mantissa_sign + "." + mantissa + "e" + exponent)


class TLEParser:
    """
    Parser for Two-Line Element (TLE) sets.

    Provides methods for:
    - Parsing TLE lines into OrbitalElements in SGP4 units
    - Resolving the two-digit epoch to a JulianDate
    - Computing and optionally verifying line checksums
    """

    def __init__(self, gravity_model: str = DEFAULT_GRAVITY_MODEL,
                 verify_checksum: bool = False, epoch_pivot: int = EPOCH_PIVOT_YEAR):
        """
        Initialize TLE parser.

        Args:
            gravity_model: Default gravity model name for parse_tle
            verify_checksum: Reject lines whose column 69 checksum does not match
            epoch_pivot: Two-digit years below this are placed in the 2000s
        """
        self.gravity_model = gravity_model
        self.verify_checksum = verify_checksum
        self.epoch_pivot = epoch_pivot

    def parse_tle(self, line1: str, line2: str,
                  gravity_model: Optional[str] = None) -> OrbitalElements:
        """
        Parse TLE lines into orbital elements.

        Fields are read in column order and the first failure aborts the
        parse; nothing is returned for a rejected TLE.

        Args:
            line1: First line of TLE (69 characters)
            line2: Second line of TLE (69 characters)
            gravity_model: Gravity model name, defaults to the parser's

        Returns:
            OrbitalElements converted to SGP4 units with a JulianDate epoch

        Raises:
            TLELengthError: If a line is not exactly 69 characters
            GravityModelError: If the gravity model name is unknown
            TLEFieldError: If a field cannot be parsed
            TLEChecksumError: If checksum verification is enabled and fails
        """
        for line_number, line in ((1, line1), (2, line2)):
            if len(line) != TLE_LINE_LENGTH:
                error = TLELengthError(line_number, len(line), TLE_LINE_LENGTH)
                logger.error(f"TLE parsing error: {error}")
                raise error

        if gravity_model is None:
            gravity_model = self.gravity_model
        gravity = get_gravity_model(gravity_model)

        if self.verify_checksum:
            self._check(line1, 1)
            self._check(line2, 2)

        sat = OrbitalElements(line1=line1, line2=line2, gravity=gravity)
        try:
            self._read_fields(sat)
        except TLEFieldError as e:
            logger.error(f"TLE parsing error: {e}")
            raise

        self._convert_units(sat)
        self._resolve_epoch(sat)

        logger.debug(
            f"Parsed TLE for satellite {sat.satnum} "
            f"(epoch {sat.epoch_year} day {sat.epochdays}, model {gravity.name})"
        )
        return sat

    def _read_fields(self, sat: OrbitalElements) -> None:
        line1, line2 = sat.line1, sat.line2

        # LINE 1
        sat.satnum = _field("catalog number", line1, 1, 2, 7, lambda: _int(line1[2:7]))
        sat.classification = line1[7].strip() or "U"
        sat.intldesg = line1[9:17].strip()
        sat.epochyr = _field("epoch year", line1, 1, 18, 20, lambda: _int(line1[18:20]))
        sat.epochdays = _field("epoch day", line1, 1, 20, 32, lambda: _float(line1[20:32]))

        # These three can be negative / positive
        sat.ndot = _field("ndot", line1, 1, 33, 43, lambda: _float(line1[33:43]))
        sat.nddot = _field(
            "nddot", line1, 1, 44, 52,
            lambda: _exponential(line1[44:45], line1[45:50], line1[50:52]),
        )
        sat.bstar = _field(
            "bstar", line1, 1, 53, 61,
            lambda: _exponential(line1[53:54], line1[54:59], line1[59:61]),
        )
        sat.elnum = _optional_int(line1[64:68])

        # LINE 2
        sat.inclo = _field("inclination", line2, 2, 8, 16, lambda: _float(line2[8:16]))
        sat.nodeo = _field("right ascension of node", line2, 2, 17, 25, lambda: _float(line2[17:25]))
        sat.ecco = _field("eccentricity", line2, 2, 26, 33, lambda: _float("." + line2[26:33]))
        sat.argpo = _field("argument of perigee", line2, 2, 34, 42, lambda: _float(line2[34:42]))
        sat.mo = _field("mean anomaly", line2, 2, 43, 51, lambda: _float(line2[43:51]))
        sat.no_kozai = _field("mean motion", line2, 2, 52, 63, lambda: _float(line2[52:63]))
        sat.revnum = _optional_int(line2[63:68])

    def _convert_units(self, sat: OrbitalElements) -> None:
        sat.no_kozai = sat.no_kozai / XPDOTP
        sat.ndot = sat.ndot / (XPDOTP * 1440.0)
        sat.nddot = sat.nddot / (XPDOTP * 1440.0 * 1440)

        sat.inclo = sat.inclo * DEG2RAD
        sat.nodeo = sat.nodeo * DEG2RAD
        sat.argpo = sat.argpo * DEG2RAD
        sat.mo = sat.mo * DEG2RAD

    def _resolve_epoch(self, sat: OrbitalElements) -> None:
        sat.epoch_year = resolve_epoch_year(sat.epochyr, self.epoch_pivot)
        try:
            mon, day, hr, minute, sec = days_to_mdhms(sat.epoch_year, sat.epochdays)
        except ValueError as e:
            logger.error(f"TLE parsing error: {e}")
            raise TLEFieldError("epoch day", 1, (20, 32), sat.line1[20:32]) from e
        sat.jdsatepoch = JulianDate.from_calendar(sat.epoch_year, mon, day, hr, minute, sec)

    def _check(self, line: str, line_number: int) -> None:
        expected = compute_checksum(line)
        found = line[68]
        if found != str(expected):
            logger.error(f"TLE checksum mismatch on line {line_number}")
            raise TLEChecksumError(line_number, expected, found)


def _field(name, line, line_number, start, end, convert):
    try:
        return convert()
    except ValueError as e:
        raise TLEFieldError(name, line_number, (start, end), line[start:end]) from e


def _optional_int(text: str) -> int:
    text = text.strip()
    return int(text) if text.isdigit() else 0


def parse_tle(line1: str, line2: str, gravity_model: str = DEFAULT_GRAVITY_MODEL) -> OrbitalElements:
    """Parse a TLE with default parser settings."""
    return TLEParser(gravity_model).parse_tle(line1, line2)
