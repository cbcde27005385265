"""Nearest-airport resolution over a fixed reference dataset."""
from __future__ import annotations

from .airports import AirportRecord, load_airports
from .errors import (
    AirportFinderError,
    CoordinateCollisionError,
    EmptyIndexError,
    InvalidCoordinateError,
    NoExactMatchError,
    ReferenceDataDecodeError,
    ReferenceDataIOError,
    ReferenceDataParseError,
)
from .finders import (
    FINDERS,
    AirportFinder,
    BruteForceAirportFinder,
    HashAirportFinder,
    KdTreeAirportFinder,
    build_finder,
)
from .projection import project

__all__ = [
    "AirportRecord",
    "load_airports",
    "project",
    "AirportFinder",
    "KdTreeAirportFinder",
    "HashAirportFinder",
    "BruteForceAirportFinder",
    "FINDERS",
    "build_finder",
    "AirportFinderError",
    "ReferenceDataIOError",
    "ReferenceDataParseError",
    "ReferenceDataDecodeError",
    "CoordinateCollisionError",
    "EmptyIndexError",
    "InvalidCoordinateError",
    "NoExactMatchError",
]
