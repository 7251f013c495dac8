"""Layline projection from the boat's position given wind and tacking angle."""

from __future__ import annotations

import logging

from .config import (
    DEFAULT_TACKING_ANGLE_DEG,
    LAYLINE_PROJECTION_DISTANCE_M,
    LAYLINE_SEGMENTS,
    TACKING_ANGLE_BANDS,
    TACKING_ANGLE_STRONG_WIND_DEG,
)
from .geodesy import project, validate_coordinates
from .models import Layline, LaylinePair, Tack

_LOG = logging.getLogger(__name__)


def layline_headings(
    wind_direction: float, tacking_angle: float = DEFAULT_TACKING_ANGLE_DEG
) -> tuple[float, float]:
    """Return ``(port_heading, starboard_heading)`` in degrees [0, 360)."""

    port = (wind_direction + tacking_angle) % 360.0
    starboard = (wind_direction - tacking_angle + 360.0) % 360.0
    return port, starboard


def calculate_laylines(
    current_lat: float,
    current_lon: float,
    mark_lat: float,
    mark_lon: float,
    wind_direction: float,
    tacking_angle: float = DEFAULT_TACKING_ANGLE_DEG,
    distance_m: float = LAYLINE_PROJECTION_DISTANCE_M,
    steps: int = LAYLINE_SEGMENTS,
) -> LaylinePair:
    """Project port and starboard laylines from the current position.

    Both laylines are rays of fixed length starting at the boat; they are not
    clipped to, nor guaranteed to reach, the mark. The mark is validated so a
    bad mark fails as loudly as a bad boat position.
    """

    validate_coordinates(current_lat, current_lon)
    validate_coordinates(mark_lat, mark_lon)
    port_heading, starboard_heading = layline_headings(wind_direction, tacking_angle)
    _LOG.debug(
        "Projecting laylines wind=%.1f tacking=%.1f port=%.1f starboard=%.1f",
        wind_direction,
        tacking_angle,
        port_heading,
        starboard_heading,
    )
    port = Layline(
        points=project(current_lat, current_lon, port_heading, distance_m, steps),
        tack=Tack.PORT,
        heading_deg=port_heading,
    )
    starboard = Layline(
        points=project(current_lat, current_lon, starboard_heading, distance_m, steps),
        tack=Tack.STARBOARD,
        heading_deg=starboard_heading,
    )
    return LaylinePair(port=port, starboard=starboard)


def optimal_tacking_angle(wind_speed_kn: float) -> float:
    """Typical upwind tacking angle for a true wind speed in knots."""

    for upper_bound, angle in TACKING_ANGLE_BANDS:
        if wind_speed_kn < upper_bound:
            return angle
    return TACKING_ANGLE_STRONG_WIND_DEG


__all__ = ["calculate_laylines", "layline_headings", "optimal_tacking_angle"]
