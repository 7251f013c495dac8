"""Wind shift detection and session wind pattern analysis."""

from .patterns import (
    PatternPolicy,
    classify_wind_pattern,
    oscillation_period_min,
    predict_next_shift,
)
from .shifts import detect_wind_shifts, true_wind_direction

__all__ = [
    "PatternPolicy",
    "classify_wind_pattern",
    "detect_wind_shifts",
    "oscillation_period_min",
    "predict_next_shift",
    "true_wind_direction",
]
