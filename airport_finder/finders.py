"""Nearest-airport finder strategies.

Every finder answers ``closest_ind(lat, long)`` with the 0-based position of
an airport in the sequence it was built from. Positions are compared in
projected space (see ``projection``), and ties go to the lowest position.
Indexes are built once in the constructor and never modified afterwards.
"""
from __future__ import annotations

import abc
import logging
import struct
from typing import Dict, Iterable, List, Sequence, Tuple, Type

import numpy as np
from scipy.spatial import cKDTree

from .airports import AirportRecord
from .errors import CoordinateCollisionError, EmptyIndexError, NoExactMatchError
from .projection import check_coordinates, project, project_records, squared_distances

# cKDTree reports sqrt distances; widen the tie search so rounding never drops the best point.
_TIE_RTOL = 1e-9
_TIE_ATOL = 1e-12

logger = logging.getLogger(__name__)


class AirportFinder(abc.ABC):
    strategy = ""

    @classmethod
    def build(cls, airports: Sequence[AirportRecord]) -> "AirportFinder":
        finder = cls(airports)
        logger.debug("Built %s finder over %s airports", cls.strategy, len(finder))
        return finder

    @abc.abstractmethod
    def closest_ind(self, lat: float, long: float) -> int:
        """Return the sequence position of the airport nearest (lat, long)."""

    @abc.abstractmethod
    def __len__(self) -> int:
        pass


class KdTreeAirportFinder(AirportFinder):
    """k-d tree over projected points. The general-purpose finder."""
    strategy = "kdtree"

    def __init__(self, airports: Sequence[AirportRecord]):
        self._points = project_records(airports)
        self._tree = cKDTree(self._points) if len(self._points) else None

    def __len__(self) -> int:
        return len(self._points)

    def closest_ind(self, lat: float, long: float) -> int:
        if self._tree is None:
            raise EmptyIndexError(self.strategy)
        query = project(lat, long)
        distance, nearest = self._tree.query(query, k=1)
        radius = distance * (1 + _TIE_RTOL) + _TIE_ATOL
        candidates = np.sort(np.asarray(self._tree.query_ball_point(query, r=radius), dtype=np.intp))
        if not len(candidates):
            return int(nearest)
        distances = squared_distances(self._points[candidates], query)
        return int(candidates[np.argmin(distances)])


class HashAirportFinder(AirportFinder):
    """Exact coordinate lookup.

    Only succeeds when the query is bit-identical to a stored coordinate.
    This is not a nearest-neighbour search.
    """
    strategy = "hash"

    def __init__(self, airports: Sequence[AirportRecord]):
        self._positions: Dict[bytes, int] = {}
        for i, airport in enumerate(airports):
            check_coordinates(airport.latitude, airport.longitude)
            key = self.coordinate_key(airport.latitude, airport.longitude)
            existing = self._positions.setdefault(key, i)
            if existing != i:
                raise CoordinateCollisionError(existing, i)

    def __len__(self) -> int:
        return len(self._positions)

    @staticmethod
    def coordinate_key(lat: float, long: float) -> bytes:
        """16-byte key: big-endian IEEE-754 bits of lat followed by long."""
        return struct.pack(">dd", lat, long)

    def closest_ind(self, lat: float, long: float) -> int:
        if not self._positions:
            raise EmptyIndexError(self.strategy)
        check_coordinates(lat, long)
        try:
            return self._positions[self.coordinate_key(lat, long)]
        except KeyError:
            raise NoExactMatchError(lat, long) from None


class BruteForceAirportFinder(AirportFinder):
    """Linear scan. Used as the reference answer for the other strategies."""
    strategy = "brute"

    def __init__(self, airports: Sequence[AirportRecord]):
        self._points = project_records(airports)

    def __len__(self) -> int:
        return len(self._points)

    def closest_ind(self, lat: float, long: float) -> int:
        if not len(self._points):
            raise EmptyIndexError(self.strategy)
        # argmin returns the first minimum, so the lowest position wins ties
        return int(np.argmin(squared_distances(self._points, project(lat, long))))


FINDERS: Dict[str, Type[AirportFinder]] = {
    KdTreeAirportFinder.strategy: KdTreeAirportFinder,
    HashAirportFinder.strategy: HashAirportFinder,
    BruteForceAirportFinder.strategy: BruteForceAirportFinder,
}


def build_finder(strategy: str, airports: Sequence[AirportRecord]) -> AirportFinder:
    try:
        finder_cls = FINDERS[strategy]
    except KeyError:
        raise ValueError(f"Unknown finder strategy {strategy!r}, expected one of {sorted(FINDERS)}") from None
    return finder_cls.build(airports)


def validate_against_oracle(
    finder: AirportFinder,
    oracle: AirportFinder,
    queries: Iterable[Tuple[float, float]],
) -> List[Tuple[float, float, int, int]]:
    """Return (lat, long, finder answer, oracle answer) for every disagreement."""
    mismatches = []
    for lat, long in queries:
        got = finder.closest_ind(lat, long)
        expected = oracle.closest_ind(lat, long)
        if got != expected:
            logger.warning(
                "%s finder returned %s for (%s, %s), %s finder returned %s",
                finder.strategy, got, lat, long, oracle.strategy, expected,
            )
            mismatches.append((lat, long, got, expected))
    return mismatches
