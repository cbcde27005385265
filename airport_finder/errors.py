"""Error classifications raised by the loader and the finders."""
from __future__ import annotations

from typing import Optional

KDTREE_HINT = "use the kdtree finder for nearest-neighbour lookups"


class AirportFinderError(Exception):
    """Base class for reference data and finder failures."""
    pass


class ReferenceDataIOError(AirportFinderError):
    """Raised when the reference file cannot be opened or read."""
    pass


class ReferenceDataParseError(AirportFinderError):
    """Raised when the reference file cannot be tokenized into rows."""

    def __init__(self, message: str, row: Optional[int] = None):
        super().__init__(message)
        self.row = row


class ReferenceDataDecodeError(AirportFinderError):
    """Raised when a row's fields do not decode into the expected types."""

    def __init__(self, message: str, row: Optional[int] = None):
        super().__init__(message)
        self.row = row


class CoordinateCollisionError(AirportFinderError):
    def __init__(self, first: int, second: int):
        super().__init__(
            f"hash finder: airports at positions {first} and {second} share identical "
            f"coordinates; {KDTREE_HINT}"
        )
        self.first = first
        self.second = second


class EmptyIndexError(AirportFinderError):
    def __init__(self, strategy: str):
        super().__init__(f"{strategy} finder was built from zero airports")
        self.strategy = strategy


class NoExactMatchError(AirportFinderError):
    def __init__(self, lat: float, long: float):
        super().__init__(
            f"hash finder: no airport at exactly ({lat!r}, {long!r}); {KDTREE_HINT}"
        )
        self.lat = lat
        self.long = long


class InvalidCoordinateError(AirportFinderError):
    """Raised when a query coordinate is NaN or infinite."""

    def __init__(self, lat: float, long: float):
        super().__init__(f"query coordinate ({lat!r}, {long!r}) is not finite")
        self.lat = lat
        self.long = long
