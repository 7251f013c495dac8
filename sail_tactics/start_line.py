"""Start-line bias relative to the true wind direction."""

from __future__ import annotations

from .config import START_LINE_NEUTRAL_BAND_DEG
from .geodesy import initial_bearing, validate_coordinates
from .models import FavoredEnd, StartLineBias
from .utils import normalize_angle


def calculate_start_line_bias(
    pin_lat: float,
    pin_lon: float,
    boat_lat: float,
    boat_lon: float,
    wind_direction: float,
    *,
    neutral_band_deg: float = START_LINE_NEUTRAL_BAND_DEG,
) -> StartLineBias:
    """Return the line heading (pin to boat), bias and favoured end.

    ``bias_deg`` is the wind direction minus the line heading wrapped into
    [-180, 180). A bias strictly inside ``neutral_band_deg`` is neutral;
    otherwise a positive bias favours the pin end.
    """

    validate_coordinates(pin_lat, pin_lon)
    validate_coordinates(boat_lat, boat_lon)
    line_heading = initial_bearing(pin_lat, pin_lon, boat_lat, boat_lon)
    bias = normalize_angle(wind_direction - line_heading)
    return StartLineBias(
        line_heading_deg=line_heading,
        bias_deg=bias,
        favored_end=favored_end_for_bias(bias, neutral_band_deg=neutral_band_deg),
    )


def favored_end_for_bias(
    bias_deg: float, *, neutral_band_deg: float = START_LINE_NEUTRAL_BAND_DEG
) -> FavoredEnd:
    if abs(bias_deg) < neutral_band_deg:
        return FavoredEnd.NEUTRAL
    if bias_deg > 0:
        return FavoredEnd.PIN
    return FavoredEnd.BOAT


__all__ = ["calculate_start_line_bias", "favored_end_for_bias"]
