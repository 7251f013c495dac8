"""Tabular views of derived tactical values.

Pure functions that turn in-memory analysis results into DataFrames the
presentation layer can chart or tabulate directly. Columns use display
labels; units are part of the label.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import pandas as pd

from .models import ManeuverEvent, VmgResult, WindShiftEvent
from .services.session_analysis import SessionAnalysis

TIME_COL = "Time"
KIND_COL = "Type"
LAT_COL = "Lat"
LON_COL = "Lon"
EFFICIENCY_COL = "Efficiency (%)"
TIME_IN_IRONS_COL = "Time in Irons (s)"
LOST_DISTANCE_COL = "Lost Distance (m)"
HEADING_CHANGE_COL = "Heading Change (deg)"
SPEED_LOSS_COL = "Speed Loss (kn)"

MANEUVER_COLUMNS = [
    TIME_COL,
    KIND_COL,
    LAT_COL,
    LON_COL,
    EFFICIENCY_COL,
    TIME_IN_IRONS_COL,
    LOST_DISTANCE_COL,
    HEADING_CHANGE_COL,
    SPEED_LOSS_COL,
]

SHIFT_COL = "Shift (deg)"
DIRECTION_COL = "Direction"
TWA_BEFORE_COL = "TWA Before (deg)"
TWA_AFTER_COL = "TWA After (deg)"

SHIFT_COLUMNS = [
    TIME_COL,
    SHIFT_COL,
    KIND_COL,
    DIRECTION_COL,
    TWA_BEFORE_COL,
    TWA_AFTER_COL,
]

VMG_COL = "VMG (kn)"
VMG_UPWIND_COL = "VMG Upwind (kn)"
VMG_DOWNWIND_COL = "VMG Downwind (kn)"
TARGET_ANGLE_COL = "Target Angle (deg)"

VMG_COLUMNS = [TIME_COL, VMG_COL, VMG_UPWIND_COL, VMG_DOWNWIND_COL, TARGET_ANGLE_COL]

SUMMARY_METRIC_COL = "Metric"
SUMMARY_VALUE_COL = "Value"

__all__ = [
    "build_session_outputs",
    "maneuvers_frame",
    "vmg_frame",
    "wind_shifts_frame",
]


def maneuvers_frame(events: Iterable[ManeuverEvent]) -> pd.DataFrame:
    rows = [
        {
            TIME_COL: event.timestamp,
            KIND_COL: event.kind.value,
            LAT_COL: event.lat,
            LON_COL: event.lon,
            EFFICIENCY_COL: round(event.efficiency_pct, 1),
            TIME_IN_IRONS_COL: event.time_in_irons_s,
            LOST_DISTANCE_COL: round(event.lost_distance_m, 1),
            HEADING_CHANGE_COL: round(event.heading_change_deg, 1),
            SPEED_LOSS_COL: round(event.speed_loss_kn, 2),
        }
        for event in events
    ]
    return pd.DataFrame(rows, columns=MANEUVER_COLUMNS)


def wind_shifts_frame(shifts: Iterable[WindShiftEvent]) -> pd.DataFrame:
    rows = [
        {
            TIME_COL: shift.timestamp,
            SHIFT_COL: round(shift.shift_deg, 1),
            KIND_COL: shift.kind.value,
            DIRECTION_COL: shift.direction,
            TWA_BEFORE_COL: shift.twa_before,
            TWA_AFTER_COL: shift.twa_after,
        }
        for shift in shifts
    ]
    return pd.DataFrame(rows, columns=SHIFT_COLUMNS)


def vmg_frame(results: Iterable[VmgResult]) -> pd.DataFrame:
    rows = [
        {
            TIME_COL: result.timestamp,
            VMG_COL: result.vmg,
            VMG_UPWIND_COL: result.vmg_upwind,
            VMG_DOWNWIND_COL: result.vmg_downwind,
            TARGET_ANGLE_COL: result.target_angle,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=VMG_COLUMNS)


def _summary_frame(analysis: SessionAnalysis) -> pd.DataFrame:
    stats = analysis.stats
    maneuver_stats = analysis.maneuver_stats
    pattern = analysis.wind_pattern
    rows: List[Tuple[str, object]] = [
        ("Duration", stats.duration_label),
        ("Distance (km)", stats.distance_km),
        ("Avg Speed (kn)", stats.avg_speed_kn),
        ("Max Speed (kn)", stats.max_speed_kn),
        ("Points", stats.point_count),
        ("Maneuvers", maneuver_stats.total_maneuvers),
        ("Tacks", maneuver_stats.tacks),
        ("Gybes", maneuver_stats.gybes),
        ("Avg Tack Score", _rounded(maneuver_stats.avg_tack_score, 0)),
        ("Avg Tack Time (s)", _rounded(maneuver_stats.avg_tack_time_s, 1)),
        ("Wind Shifts", pattern.total_shifts_detected),
        ("Wind Pattern", pattern.dominant_pattern.value),
        ("Pattern Strength (%)", round(pattern.pattern_strength * 100)),
        ("Wind Stability", round(pattern.wind_stability_score)),
        ("Next Shift", pattern.next_shift_prediction.value),
        ("Prediction Confidence (%)", round(pattern.prediction_confidence * 100)),
    ]
    if analysis.start_line is not None:
        rows.append(("Favoured End", analysis.start_line.favored_end.value))
        rows.append(("Line Bias (deg)", round(analysis.start_line.bias_deg, 1)))
    if analysis.avg_performance_pct is not None:
        rows.append(("Avg Performance (%)", round(analysis.avg_performance_pct, 1)))
    return pd.DataFrame(rows, columns=[SUMMARY_METRIC_COL, SUMMARY_VALUE_COL])


def _rounded(value: float | None, digits: int) -> float | None:
    return round(value, digits) if value is not None else None


def build_session_outputs(
    analysis: SessionAnalysis, include_summary: bool = True
) -> List[Tuple[str, pd.DataFrame]]:
    """Return ``(name, DataFrame)`` tables for one analysed session.

    Empty maneuver or shift lists produce a single-row message table so the
    caller can render something meaningful.
    """

    outputs: List[Tuple[str, pd.DataFrame]] = []
    if analysis.maneuvers:
        outputs.append(("Maneuvers", maneuvers_frame(analysis.maneuvers)))
    else:
        outputs.append(
            ("Maneuvers", pd.DataFrame({"Message": ["No maneuvers detected."]}))
        )
    if analysis.wind_shifts:
        outputs.append(("Wind Shifts", wind_shifts_frame(analysis.wind_shifts)))
    else:
        outputs.append(
            ("Wind Shifts", pd.DataFrame({"Message": ["No wind shifts detected."]}))
        )
    if analysis.vmg:
        outputs.append(("VMG", vmg_frame(analysis.vmg)))
    if include_summary:
        outputs.append(("Summary", _summary_frame(analysis)))
    return outputs
