"""Tests for converting dashboard rows into telemetry samples."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from sail_tactics.errors import InvalidInputError
from sail_tactics.telemetry import (
    ensure_time_ordered,
    sample_from_record,
    samples_from_records,
)


def _row(**overrides):
    row = {
        "ts": "2025-06-01T12:00:00Z",
        "lat": 50.5,
        "lon": -1.25,
        "sog": 6.2,
        "cog": 45.0,
    }
    row.update(overrides)
    return row


def test_minimal_row_leaves_wind_fields_unset() -> None:
    sample = sample_from_record(_row())
    assert sample.timestamp == datetime(2025, 6, 1, 12, tzinfo=timezone.utc)
    assert (sample.lat, sample.lon, sample.sog, sample.cog) == (50.5, -1.25, 6.2, 45.0)
    assert sample.hdg is None
    assert sample.twa is None
    assert sample.tws is None


def test_optional_fields_are_coerced() -> None:
    sample = sample_from_record(
        _row(hdg="47.5", twa=-38, tws="", awa="n/a", aws=float("nan"))
    )
    assert sample.hdg == 47.5
    assert sample.twa == -38.0
    assert sample.tws is None
    assert sample.awa is None
    assert sample.aws is None


def test_zero_wind_angle_is_kept_as_zero() -> None:
    assert sample_from_record(_row(twa=0)).twa == 0.0


@pytest.mark.parametrize(
    "ts",
    [
        "2025-06-01T14:00:00+02:00",
        datetime(2025, 6, 1, 12, 0, 0),
        datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc).timestamp(),
    ],
)
def test_timestamps_are_normalised_to_utc(ts) -> None:
    sample = sample_from_record(_row(ts=ts))
    assert sample.timestamp == datetime(2025, 6, 1, 12, tzinfo=timezone.utc)
    assert sample.timestamp.utcoffset() == timedelta(0)


def test_timestamp_key_is_accepted() -> None:
    row = _row()
    row["timestamp"] = row.pop("ts")
    assert sample_from_record(row).timestamp.year == 2025


def test_course_is_wrapped() -> None:
    assert sample_from_record(_row(cog=370.0)).cog == pytest.approx(10.0)
    assert sample_from_record(_row(cog=-90.0)).cog == pytest.approx(270.0)


@pytest.mark.parametrize(
    "overrides",
    [
        {"ts": None},
        {"ts": "yesterday"},
        {"ts": True},
        {"lat": None},
        {"lat": 90.5},
        {"lon": "west"},
        {"lon": -180.5},
        {"sog": -0.1},
        {"cog": None},
    ],
)
def test_invalid_rows_are_rejected(overrides) -> None:
    with pytest.raises(InvalidInputError):
        sample_from_record(_row(**overrides))


def test_batch_error_names_the_row() -> None:
    rows = [_row(), _row(ts="2025-06-01T12:00:01Z", lat=120.0)]
    with pytest.raises(InvalidInputError, match="index 1"):
        samples_from_records(rows)


def test_batch_preserves_order() -> None:
    rows = [_row(ts=f"2025-06-01T12:00:0{i}Z", sog=float(i)) for i in range(3)]
    samples = samples_from_records(rows)
    assert [s.sog for s in samples] == [0.0, 1.0, 2.0]


def test_time_order_check(sample_factory) -> None:
    ensure_time_ordered([sample_factory(0.0), sample_factory(0.0), sample_factory(1.0)])
    ensure_time_ordered([])
    with pytest.raises(InvalidInputError, match="index 2"):
        ensure_time_ordered(
            [sample_factory(0.0), sample_factory(5.0), sample_factory(4.0)]
        )


def test_mixed_naive_and_aware_timestamps_are_rejected(sample_factory) -> None:
    aware = sample_factory(0.0)
    naive = replace(sample_factory(5.0), timestamp=datetime(2025, 6, 1, 12, 0, 5))
    with pytest.raises(InvalidInputError, match="naive"):
        ensure_time_ordered([aware, naive])
