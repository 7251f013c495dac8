"""Tests for wind shift detection."""

from __future__ import annotations

import pytest

from sail_tactics.errors import InvalidInputError
from sail_tactics.models import ShiftKind
from sail_tactics.wind import detect_wind_shifts, true_wind_direction


def test_delta_equal_to_threshold_is_not_a_shift(twa_stream_factory) -> None:
    stream = twa_stream_factory([30.0] * 5 + [38.0])
    assert detect_wind_shifts(stream, threshold_deg=8.0) == []


def test_delta_just_above_threshold_is_a_shift(twa_stream_factory) -> None:
    stream = twa_stream_factory([30.0] * 5 + [38.01])
    shifts = detect_wind_shifts(stream, threshold_deg=8.0)
    assert len(shifts) == 1
    assert shifts[0].shift_deg == pytest.approx(8.01)
    assert shifts[0].timestamp == stream[5].timestamp


def test_positive_shift_is_lift_negative_is_header(twa_stream_factory) -> None:
    stream = twa_stream_factory([40.0] * 5 + [55.0, 25.0])
    shifts = detect_wind_shifts(stream, threshold_deg=10.0)
    assert [s.kind for s in shifts] == [ShiftKind.LIFT, ShiftKind.HEADER]
    assert [s.shift_deg for s in shifts] == [15.0, -15.0]
    assert shifts[0].direction == "right"
    assert shifts[1].direction == "left"
    assert shifts[1].twa_before == 40.0
    assert shifts[1].twa_after == 25.0


def test_compares_against_fixed_lag(twa_stream_factory) -> None:
    # Gradual drift: no adjacent pair differs by much, but five samples do.
    stream = twa_stream_factory([30.0, 33.0, 36.0, 39.0, 42.0, 45.0])
    shifts = detect_wind_shifts(stream, threshold_deg=10.0)
    assert len(shifts) == 1
    assert shifts[0].shift_deg == 15.0
    assert detect_wind_shifts(stream, threshold_deg=10.0, lag=1) == []


def test_short_stream_has_no_shifts(twa_stream_factory) -> None:
    assert detect_wind_shifts(twa_stream_factory([0.0, 50.0, -50.0, 50.0, -50.0])) == []
    assert detect_wind_shifts([]) == []


def test_missing_twa_skips_the_pair(twa_stream_factory) -> None:
    stream = twa_stream_factory([None, 30.0, 30.0, 30.0, 30.0, 60.0, None])
    assert detect_wind_shifts(stream, threshold_deg=10.0) == []


def test_tws_is_carried_on_the_event(twa_stream_factory) -> None:
    stream = twa_stream_factory([30.0] * 5 + [50.0], tws=12.0)
    shift = detect_wind_shifts(stream, threshold_deg=10.0)[0]
    assert shift.tws_before == 12.0
    assert shift.tws_after == 12.0


def test_time_based_lookback_handles_irregular_sampling(sample_factory) -> None:
    stream = [
        sample_factory(0.0, twa=30.0),
        sample_factory(2.0, twa=31.0),
        sample_factory(3.0, twa=45.0),
        sample_factory(30.0, twa=46.0),
        sample_factory(31.0, twa=60.0),
    ]
    shifts = detect_wind_shifts(stream, threshold_deg=10.0, lookback_s=10.0)
    # t=30 compares with t=3 (delta 1); t=31 compares with t=3 (delta 15).
    assert len(shifts) == 1
    assert shifts[0].timestamp == stream[4].timestamp
    assert shifts[0].shift_deg == 15.0


def test_time_based_lookback_skips_until_window_filled(sample_factory) -> None:
    stream = [sample_factory(0.0, twa=0.0), sample_factory(5.0, twa=40.0)]
    assert detect_wind_shifts(stream, threshold_deg=10.0, lookback_s=10.0) == []


def test_time_based_lookback_tolerates_duplicate_timestamps(sample_factory) -> None:
    stream = [
        sample_factory(0.0, twa=10.0),
        sample_factory(0.0, twa=12.0),
        sample_factory(10.0, twa=30.0),
    ]
    shifts = detect_wind_shifts(stream, threshold_deg=10.0, lookback_s=10.0)
    assert [s.shift_deg for s in shifts] == [18.0]


def test_invalid_lookback_parameters(twa_stream_factory) -> None:
    stream = twa_stream_factory([0.0] * 6)
    with pytest.raises(InvalidInputError):
        detect_wind_shifts(stream, lag=0)
    with pytest.raises(InvalidInputError):
        detect_wind_shifts(stream, lookback_s=0.0)


def test_true_wind_direction_prefers_compass_heading(sample_factory) -> None:
    assert true_wind_direction(sample_factory(cog=0.0, hdg=350.0, twa=20.0)) == 10.0
    assert true_wind_direction(sample_factory(cog=200.0, twa=-40.0)) == 160.0
    assert true_wind_direction(sample_factory(twa=None)) is None
