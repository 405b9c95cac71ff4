"""
Exceptions raised by tle-frames.

Parsing and conversion problems subclass ValueError so callers that already
guard TLE handling with ``except ValueError`` keep working. Propagator
failures subclass RuntimeError.
"""

from typing import Tuple


class TLEError(ValueError):
    """Base class for structural and field problems in a TLE."""


class TLELengthError(TLEError):
    """A TLE line does not have the required number of columns."""

    def __init__(self, line_number: int, length: int, expected: int):
        self.line_number = line_number
        self.length = length
        self.expected = expected
        super().__init__(
            f"Line{line_number} length should be {expected} but was {length}"
        )


class TLEFieldError(TLEError):
    """A fixed-column TLE field could not be converted to a number."""

    def __init__(self, field: str, line_number: int, columns: Tuple[int, int], text: str):
        self.field = field
        self.line_number = line_number
        self.columns = columns
        self.text = text
        start, end = columns
        super().__init__(
            f"Error on parsing {field} from line{line_number}[{start}:{end}]: {text!r}"
        )


class TLEChecksumError(TLEError):
    """The modulo-10 checksum in column 69 does not match the line."""

    def __init__(self, line_number: int, expected: int, found: str):
        self.line_number = line_number
        self.expected = expected
        self.found = found
        super().__init__(
            f"Line{line_number} checksum should be {expected} but was {found!r}"
        )


class GravityModelError(ValueError):
    """Unknown gravity model name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is not a valid gravity model")


class LatitudeRangeError(ValueError):
    """Latitude outside [-pi/2, pi/2] radians."""


class LookAngleError(ValueError):
    """Look angles are undefined for the observer/satellite pair."""


class PropagationError(RuntimeError):
    """The SGP4 propagator returned a non-zero error code."""

    def __init__(self, error_code: int, message: str, satnum: int):
        self.error_code = error_code
        self.satnum = satnum
        super().__init__(f"SGP4 error {error_code} for satellite {satnum}: {message}")
