"""Coordinate projection shared by every finder strategy.

Latitude and longitude are mapped onto a 3-vector and compared by squared
Euclidean distance. The latitude term is scaled by ``sin`` rather than the
usual ``cos``, so this is not a great-circle metric; "nearest" always means
nearest under this projection.
"""
from __future__ import annotations

import math
from typing import Iterable, Tuple

import numpy as np

from .airports import AirportRecord
from .errors import InvalidCoordinateError

Point = Tuple[float, float, float]


def check_coordinates(lat: float, long: float) -> None:
    if not (math.isfinite(lat) and math.isfinite(long)):
        raise InvalidCoordinateError(lat, long)


def project(lat: float, long: float) -> Point:
    check_coordinates(lat, long)
    la = math.radians(lat)
    lo = math.radians(long)
    return (math.cos(lo) * math.sin(la), math.sin(lo) * math.sin(la), math.cos(la))


def project_records(records: Iterable[AirportRecord]) -> np.ndarray:
    """Project every record, one row per record in sequence order."""
    points = [project(a.latitude, a.longitude) for a in records]
    return np.array(points, dtype=np.float64).reshape(-1, 3)


def squared_distances(points: np.ndarray, query: Point) -> np.ndarray:
    diff = points - np.asarray(query, dtype=np.float64)
    return (diff * diff).sum(axis=1)
