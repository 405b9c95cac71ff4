"""
Logging setup for tle-frames.

Modules log through get_logger(__name__). The package only attaches a
NullHandler to the "tle_frames" logger, so nothing is printed until an
application calls configure_logging (or sets up logging itself):

    configure_logging(logging.DEBUG, log_file="tracking.log")
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER = "tle_frames"


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Send records to stdout, and to log_file as well when one is given."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, handlers=handlers)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())
