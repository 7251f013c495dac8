"""Great-circle helpers shared by every tactical analytic.

The kernel functions (``distance_m``, ``initial_bearing`` and friends) trust
their inputs; callers accepting positions from outside the engine validate
them first with :func:`validate_coordinates`.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import EARTH_RADIUS_KM, EARTH_RADIUS_M, LAYLINE_SEGMENTS
from .errors import InvalidInputError
from .models import LatLon
from .utils import normalize_angle, wrap_360

MetricArray = NDArray[np.float64]


def validate_coordinates(lat: float, lon: float) -> None:
    """Raise :class:`InvalidInputError` unless ``lat``/``lon`` are valid WGS84 degrees."""

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidInputError(f"Coordinates must be finite, got ({lat}, {lon})")
    if not -90.0 <= lat <= 90.0:
        raise InvalidInputError(f"Latitude {lat} outside [-90, 90]")
    if not -180.0 <= lon <= 180.0:
        raise InvalidInputError(f"Longitude {lon} outside [-180, 180]")


def _central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    sin = math.sin
    cos = math.cos
    radians = math.radians
    lat1_rad = radians(lat1)
    lat2_rad = radians(lat2)
    delta_lat = lat2_rad - lat1_rad
    delta_lon = radians(lon2 - lon1)
    sin_half_lat = sin(delta_lat / 2.0)
    sin_half_lon = sin(delta_lon / 2.0)
    a = sin_half_lat**2 + cos(lat1_rad) * cos(lat2_rad) * sin_half_lon**2
    # Rounding can push ``a`` a hair past 1 for antipodal points.
    a = min(max(a, 0.0), 1.0)
    return 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in metres."""

    return EARTH_RADIUS_M * _central_angle(lat1, lon1, lat2, lon2)


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometres (same formula, 6,371 km radius)."""

    return EARTH_RADIUS_KM * _central_angle(lat1, lon1, lat2, lon2)


def initial_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Forward azimuth from the first point to the second, degrees in [0, 360)."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_lon = math.radians(lon2 - lon1)
    y = math.sin(delta_lon) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
        delta_lon
    )
    return wrap_360(math.degrees(math.atan2(y, x)))


def destination_point(
    lat: float, lon: float, heading_deg: float, distance: float
) -> LatLon:
    """Point reached after travelling ``distance`` metres on ``heading_deg``."""

    angular = distance / EARTH_RADIUS_M
    bearing = math.radians(heading_deg)
    phi1 = math.radians(lat)
    lambda1 = math.radians(lon)
    sin_phi2 = math.sin(phi1) * math.cos(angular) + math.cos(phi1) * math.sin(
        angular
    ) * math.cos(bearing)
    phi2 = math.asin(min(max(sin_phi2, -1.0), 1.0))
    lambda2 = lambda1 + math.atan2(
        math.sin(bearing) * math.sin(angular) * math.cos(phi1),
        math.cos(angular) - math.sin(phi1) * math.sin(phi2),
    )
    return math.degrees(phi2), normalize_angle(math.degrees(lambda2))


def project(
    lat: float,
    lon: float,
    heading_deg: float,
    distance: float,
    steps: int = LAYLINE_SEGMENTS,
) -> Tuple[LatLon, ...]:
    """Return ``steps + 1`` points evenly spaced along a great-circle ray.

    The first point is the origin and the last lies ``distance`` metres away
    on the initial ``heading_deg``. Materialising the ray as a polyline lets
    map overlays follow the curved path instead of a rhumb line.
    """

    validate_coordinates(lat, lon)
    if steps < 1:
        raise InvalidInputError("steps must be at least 1")
    return tuple(
        destination_point(lat, lon, heading_deg, distance * i / steps)
        for i in range(steps + 1)
    )


def pairwise_distances_m(points: Sequence[LatLon]) -> MetricArray:
    """Haversine distance between each consecutive pair of points."""

    array = np.asarray(points, dtype=float)
    if array.ndim != 2 or array.shape[0] < 2:
        return np.zeros(0, dtype=float)
    if array.shape[1] != 2:
        raise ValueError("Expected a sequence of (lat, lon) pairs")
    lat = np.radians(array[:, 0])
    lon = np.radians(array[:, 1])
    delta_lat = np.diff(lat)
    delta_lon = np.diff(lon)
    a = (
        np.sin(delta_lat / 2.0) ** 2
        + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(delta_lon / 2.0) ** 2
    )
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_M * 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))


def track_distance_m(points: Sequence[LatLon]) -> float:
    """Summed haversine length of a polyline in metres."""

    return float(np.sum(pairwise_distances_m(points)))


__all__ = [
    "destination_point",
    "distance_km",
    "distance_m",
    "initial_bearing",
    "pairwise_distances_m",
    "project",
    "track_distance_m",
    "validate_coordinates",
]
