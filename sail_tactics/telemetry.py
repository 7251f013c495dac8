"""Conversion of presentation-layer telemetry rows into typed samples."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Iterable, List, Mapping, Sequence

from .errors import InvalidInputError
from .geodesy import validate_coordinates
from .models import TelemetrySample
from .utils import coerce_optional_float, parse_iso_datetime, to_utc_aware, wrap_360

_LOG = logging.getLogger(__name__)

_OPTIONAL_FIELDS = ("hdg", "awa", "aws", "twa", "tws")


def sample_from_record(record: Mapping[str, Any]) -> TelemetrySample:
    """Build a :class:`TelemetrySample` from a dict row.

    The timestamp is read from ``ts`` (dashboard rows) or ``timestamp`` and
    may be an ISO-8601 string, a datetime or epoch seconds; it is normalised
    to UTC. Optional wind and heading fields that are absent, blank or
    non-numeric become ``None`` rather than zero.

    Raises:
        InvalidInputError: If the timestamp, position, speed or course is
            missing or invalid.
    """

    raw_ts = record.get("ts", record.get("timestamp"))
    timestamp = _coerce_timestamp(raw_ts)
    lat = coerce_optional_float(record.get("lat"))
    lon = coerce_optional_float(record.get("lon"))
    if lat is None or lon is None:
        raise InvalidInputError("Telemetry record requires numeric lat and lon")
    validate_coordinates(lat, lon)
    sog = coerce_optional_float(record.get("sog"))
    cog = coerce_optional_float(record.get("cog"))
    if sog is None or cog is None:
        raise InvalidInputError("Telemetry record requires numeric sog and cog")
    if sog < 0:
        raise InvalidInputError(f"Speed over ground must be >= 0, got {sog}")
    optional = {
        name: coerce_optional_float(record.get(name)) for name in _OPTIONAL_FIELDS
    }
    return TelemetrySample(
        timestamp=timestamp,
        lat=lat,
        lon=lon,
        sog=sog,
        cog=wrap_360(cog),
        **optional,
    )


def samples_from_records(
    records: Iterable[Mapping[str, Any]],
) -> List[TelemetrySample]:
    """Convert rows in order; the first invalid row aborts the batch."""

    samples = []
    for index, record in enumerate(records):
        try:
            samples.append(sample_from_record(record))
        except InvalidInputError as exc:
            raise InvalidInputError(
                f"Invalid telemetry record at index {index}: {exc}"
            ) from exc
    _LOG.debug("Parsed %d telemetry samples", len(samples))
    return samples


def ensure_time_ordered(samples: Sequence[TelemetrySample]) -> None:
    """Raise when timestamps decrease; equal timestamps are allowed.

    Naive and timezone-aware timestamps cannot be compared, so a stream
    mixing the two is rejected as well.
    """

    for index in range(1, len(samples)):
        if _is_aware(samples[index].timestamp) != _is_aware(
            samples[index - 1].timestamp
        ):
            raise InvalidInputError(
                f"Telemetry mixes naive and timezone-aware timestamps at index {index}"
            )
        if samples[index].timestamp < samples[index - 1].timestamp:
            raise InvalidInputError(
                f"Telemetry out of order at index {index}: "
                f"{samples[index].timestamp.isoformat()} < "
                f"{samples[index - 1].timestamp.isoformat()}"
            )


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def _coerce_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return to_utc_aware(value)
    if isinstance(value, str):
        parsed = parse_iso_datetime(value)
        if parsed is None:
            raise InvalidInputError(f"Unparseable telemetry timestamp: {value!r}")
        return to_utc_aware(parsed)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidInputError(f"Invalid epoch timestamp: {value!r}") from exc
    raise InvalidInputError("Telemetry record requires a timestamp")


__all__ = ["ensure_time_ordered", "sample_from_record", "samples_from_records"]
