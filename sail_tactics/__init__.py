"""Tactical navigation analytics for sailing telemetry."""

from .errors import InvalidInputError, TacticsError
from .geodesy import distance_km, distance_m, initial_bearing, project
from .laylines import calculate_laylines, optimal_tacking_angle
from .maneuvers import detect_maneuvers, summarize_maneuvers
from .models import (
    FavoredEnd,
    Layline,
    LaylinePair,
    ManeuverEvent,
    ManeuverKind,
    ShiftKind,
    StartLineBias,
    Tack,
    TelemetrySample,
    VmgResult,
    WindPattern,
    WindPatternKind,
    WindShiftEvent,
)
from .polars import PolarTable, calculate_performance
from .start_line import calculate_start_line_bias
from .vmg import calculate_vmg
from .wind import PatternPolicy, classify_wind_pattern, detect_wind_shifts

__all__ = [
    "FavoredEnd",
    "InvalidInputError",
    "Layline",
    "LaylinePair",
    "ManeuverEvent",
    "ManeuverKind",
    "PatternPolicy",
    "PolarTable",
    "ShiftKind",
    "StartLineBias",
    "Tack",
    "TacticsError",
    "TelemetrySample",
    "VmgResult",
    "WindPattern",
    "WindPatternKind",
    "WindShiftEvent",
    "calculate_laylines",
    "calculate_performance",
    "calculate_start_line_bias",
    "calculate_vmg",
    "classify_wind_pattern",
    "detect_maneuvers",
    "detect_wind_shifts",
    "distance_km",
    "distance_m",
    "initial_bearing",
    "optimal_tacking_angle",
    "project",
    "summarize_maneuvers",
]
