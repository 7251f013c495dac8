"""General utility helpers shared across modules."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from .config import KNOTS_TO_MS


def format_duration(seconds: float) -> str:
    """Format seconds into a compact ``Xh Ym Zs`` string (``0s`` when empty)."""

    total = int(max(seconds, 0))
    hours, remainder = divmod(total, 3600)
    mins, sec = divmod(remainder, 60)
    parts = [
        f"{hours}h" if hours else "",
        f"{mins}m" if mins else "",
        f"{sec}s" if sec else "",
    ]
    return " ".join(part for part in parts if part) or "0s"


def normalize_angle(degrees: float) -> float:
    """Wrap an angle into the signed range [-180, 180)."""

    return ((degrees + 180.0) % 360.0) - 180.0


def wrap_360(degrees: float) -> float:
    """Wrap an angle into the compass range [0, 360)."""

    wrapped = degrees % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if wrapped == 360.0 else wrapped


def angular_difference(a_deg: float, b_deg: float) -> float:
    """Signed smallest difference ``a - b`` in degrees."""

    return normalize_angle(a_deg - b_deg)


def sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def seconds_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds()


def knots_to_ms(knots: float) -> float:
    return knots * KNOTS_TO_MS


def ms_to_knots(ms: float) -> float:
    """Convert metres/second to knots."""

    return ms * 1.94384


def km_to_nm(km: float) -> float:
    """Convert kilometres to nautical miles."""

    return km * 0.539957


def parse_iso_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 string (``Z`` suffix allowed); ``None`` when invalid."""

    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_utc_aware(dt: datetime) -> datetime:
    """Return ``dt`` as a timezone-aware UTC datetime (naive means UTC)."""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def coerce_optional_float(value: Any) -> float | None:
    """Return a finite float or ``None`` for blanks, junk and NaN."""

    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result
