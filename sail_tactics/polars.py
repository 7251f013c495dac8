"""Polar tables and boat-speed performance scoring."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any, Mapping, Optional, Sequence, Tuple

from .config import POLAR_DEFAULT_PERFORMANCE_PCT, POLAR_INTERPOLATION_ENABLED
from .errors import InvalidInputError

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PolarTable:
    """Target boat speeds indexed as ``target[tws_index][twa_index]`` (knots)."""

    tws: Tuple[float, ...]
    twa: Tuple[float, ...]
    target: Tuple[Tuple[Optional[float], ...], ...]

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "PolarTable":
        """Build a table from a ``{"tws": [...], "twa": [...], "target": [[...]]}`` mapping.

        Rows may be ragged; missing cells score as an out-of-range lookup.
        """

        missing = [key for key in ("tws", "twa", "target") if key not in payload]
        if missing:
            raise InvalidInputError(
                f"Polar table missing required keys: {', '.join(missing)}"
            )
        try:
            tws = tuple(float(value) for value in payload["tws"])
            twa = tuple(float(value) for value in payload["twa"])
            target = tuple(
                tuple(_cell_value(value) for value in row) for row in payload["target"]
            )
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("Polar table contains non-numeric data") from exc
        if not tws or not twa:
            raise InvalidInputError("Polar table needs at least one tws and twa entry")
        return cls(tws=tws, twa=twa, target=target)

    def cell(self, tws_index: int, twa_index: int) -> float:
        """Target speed at a grid cell; 0 for missing or empty cells."""

        if tws_index >= len(self.target):
            return 0.0
        row = self.target[tws_index]
        if twa_index >= len(row):
            return 0.0
        return row[twa_index] or 0.0


def _cell_value(value: Any) -> Optional[float]:
    if value is None:
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def _ceiling_index(axis: Sequence[float], value: float) -> Optional[int]:
    return next((index for index, entry in enumerate(axis) if entry >= value), None)


def target_speed(
    table: PolarTable,
    wind_speed: float,
    wind_angle: float,
    *,
    interpolate: bool = POLAR_INTERPOLATION_ENABLED,
) -> float:
    """Look up the target boat speed for a wind speed and (absolute) angle.

    The reference lookup takes the first ``tws`` entry at or above the wind
    speed and the first ``twa`` entry at or above the angle, without
    interpolation. Readings beyond the table range yield 0. ``interpolate``
    opts into bilinear interpolation between the bracketing entries; it
    changes output values, so it stays off unless
    ``POLAR_INTERPOLATION_ENABLED`` is set. When any bracketing cell is empty
    the interpolated lookup falls back to the ceiling cell.
    """

    angle = abs(wind_angle)
    tws_index = _ceiling_index(table.tws, wind_speed)
    twa_index = _ceiling_index(table.twa, angle)
    if tws_index is None or twa_index is None:
        return 0.0
    ceiling = table.cell(tws_index, twa_index)
    if not interpolate:
        return ceiling

    tws_low, tws_weight = _bracket(table.tws, tws_index, wind_speed)
    twa_low, twa_weight = _bracket(table.twa, twa_index, angle)
    low_low = table.cell(tws_low, twa_low)
    low_high = table.cell(tws_low, twa_index)
    high_low = table.cell(tws_index, twa_low)
    if not (ceiling and low_low and low_high and high_low):
        return ceiling
    low_row = _lerp(low_low, low_high, twa_weight)
    high_row = _lerp(high_low, ceiling, twa_weight)
    return _lerp(low_row, high_row, tws_weight)


def _bracket(axis: Sequence[float], ceiling: int, value: float) -> Tuple[int, float]:
    """Return the lower bracket index and the weight of the ceiling entry."""

    if ceiling == 0:
        return 0, 1.0
    low = ceiling - 1
    span = axis[ceiling] - axis[low]
    if span <= 0:
        return low, 1.0
    weight = (value - axis[low]) / span
    return low, min(max(weight, 0.0), 1.0)


def _lerp(low: float, high: float, weight: float) -> float:
    return low + (high - low) * weight


def calculate_performance(
    actual_speed: float,
    wind_speed: float,
    wind_angle: float,
    polar: Optional[PolarTable | Mapping[str, Any]] = None,
    *,
    interpolate: bool = POLAR_INTERPOLATION_ENABLED,
) -> float:
    """Return actual speed as a percentage of the polar target speed.

    Without a polar table the session is assumed on target (100). A zero
    target, including out-of-range lookups, yields 0.
    """

    if polar is None:
        return POLAR_DEFAULT_PERFORMANCE_PCT
    table = polar if isinstance(polar, PolarTable) else PolarTable.from_mapping(polar)
    target = target_speed(table, wind_speed, wind_angle, interpolate=interpolate)
    if target == 0:
        _LOG.debug(
            "No polar target for tws=%.1f twa=%.1f; scoring 0", wind_speed, wind_angle
        )
        return 0.0
    return actual_speed / target * 100.0


__all__ = ["PolarTable", "calculate_performance", "target_speed"]
