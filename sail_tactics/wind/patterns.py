"""Session-level wind pattern classification and next-shift heuristic.

Classification is a set of statistics over the detected shift list rather
than a single formula:

* shift count and mean magnitude,
* the share of shifts going the dominant way (persistence),
* the share of consecutive shift pairs that flip direction (alternation).

The thresholds live in :class:`PatternPolicy` so they can be tuned and tested
independently; they materially change the outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Sequence

import numpy as np

from ..config import (
    WIND_PATTERN_OSCILLATION_MIN_ALTERNATION,
    WIND_PATTERN_PERSISTENT_MIN_FRACTION,
    WIND_PATTERN_STABLE_MAX_SHIFTS,
    WIND_PATTERN_UNSTABLE_MIN_MAGNITUDE_DEG,
    WIND_PREDICTION_CONFIDENCE_SCALE,
    WIND_STABILITY_SCALE_DEG,
)
from ..models import ShiftPrediction, WindPattern, WindPatternKind, WindShiftEvent
from ..utils import seconds_between

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class PatternPolicy:
    """Thresholds used by :func:`classify_wind_pattern`."""

    stable_max_shifts: int = WIND_PATTERN_STABLE_MAX_SHIFTS
    persistent_min_fraction: float = WIND_PATTERN_PERSISTENT_MIN_FRACTION
    oscillation_min_alternation: float = WIND_PATTERN_OSCILLATION_MIN_ALTERNATION
    unstable_min_magnitude_deg: float = WIND_PATTERN_UNSTABLE_MIN_MAGNITUDE_DEG
    stability_scale_deg: float = WIND_STABILITY_SCALE_DEG
    confidence_scale: float = WIND_PREDICTION_CONFIDENCE_SCALE


def classify_wind_pattern(
    shifts: Sequence[WindShiftEvent],
    policy: Optional[PatternPolicy] = None,
) -> WindPattern:
    """Classify a session's shifts as stable, oscillating, persistent or unstable.

    Rules are applied in order:

    1. No shifts, or at most ``stable_max_shifts`` of modest magnitude: stable.
    2. At least ``persistent_min_fraction`` of shifts in one direction:
       persistent right (positive shifts) or left.
    3. Mean magnitude at or above ``unstable_min_magnitude_deg``: unstable.
    4. Alternation at or above ``oscillation_min_alternation``: oscillating.
    5. Anything else: unstable.
    """

    policy = policy or PatternPolicy()
    count = len(shifts)
    if count == 0:
        return _build_pattern(WindPatternKind.STABLE, 1.0, shifts, 0.0, 100.0, policy)

    values = np.asarray([shift.shift_deg for shift in shifts], dtype=float)
    magnitudes = np.abs(values)
    avg_magnitude = float(np.mean(magnitudes))
    stability = 100.0 / (1.0 + float(np.sum(magnitudes)) / policy.stability_scale_deg)

    positives = int(np.count_nonzero(values > 0))
    negatives = count - positives
    dominant_fraction = max(positives, negatives) / count
    alternation = _alternation_ratio(values)

    if (
        count <= policy.stable_max_shifts
        and avg_magnitude < policy.unstable_min_magnitude_deg
    ):
        kind = WindPatternKind.STABLE
        strength = 1.0 - count / (policy.stable_max_shifts + 1)
    elif dominant_fraction >= policy.persistent_min_fraction:
        kind = (
            WindPatternKind.PERSISTENT_RIGHT
            if positives >= negatives
            else WindPatternKind.PERSISTENT_LEFT
        )
        strength = dominant_fraction
    elif avg_magnitude >= policy.unstable_min_magnitude_deg:
        kind = WindPatternKind.UNSTABLE
        strength = 1.0
    elif alternation >= policy.oscillation_min_alternation:
        kind = WindPatternKind.OSCILLATING
        strength = alternation
    else:
        kind = WindPatternKind.UNSTABLE
        strength = min(1.0, avg_magnitude / policy.unstable_min_magnitude_deg)

    _LOG.debug(
        "Wind pattern %s strength=%.2f shifts=%d avg=%.1f alternation=%.2f",
        kind.value,
        strength,
        count,
        avg_magnitude,
        alternation,
    )
    return _build_pattern(kind, strength, shifts, avg_magnitude, stability, policy)


def predict_next_shift(
    kind: WindPatternKind,
    strength: float,
    last_shift: Optional[WindShiftEvent] = None,
    *,
    confidence_scale: float = WIND_PREDICTION_CONFIDENCE_SCALE,
) -> tuple[ShiftPrediction, float]:
    """Naive advisory guess at the next shift and a capped confidence.

    Persistent wind keeps going the same way, oscillating wind swings back
    against the last shift, stable wind stays put. Unstable wind gets no call
    (``stable`` with zero confidence).
    """

    confidence = min(max(strength, 0.0), 1.0) * confidence_scale
    if kind is WindPatternKind.PERSISTENT_RIGHT:
        return ShiftPrediction.RIGHT, confidence
    if kind is WindPatternKind.PERSISTENT_LEFT:
        return ShiftPrediction.LEFT, confidence
    if kind is WindPatternKind.OSCILLATING and last_shift is not None:
        if last_shift.shift_deg > 0:
            return ShiftPrediction.LEFT, confidence
        return ShiftPrediction.RIGHT, confidence
    if kind is WindPatternKind.STABLE:
        return ShiftPrediction.STABLE, confidence
    return ShiftPrediction.STABLE, 0.0


def oscillation_period_min(shifts: Sequence[WindShiftEvent]) -> Optional[float]:
    """Mean full oscillation period in minutes, from direction reversals."""

    half_periods = [
        seconds_between(prev.timestamp, cur.timestamp)
        for prev, cur in zip(shifts, shifts[1:])
        if (prev.shift_deg > 0) != (cur.shift_deg > 0)
    ]
    if not half_periods:
        return None
    return 2.0 * float(np.mean(half_periods)) / 60.0


def _alternation_ratio(values: np.ndarray) -> float:
    if values.size < 2:
        return 0.0
    positive = values > 0
    flips = np.count_nonzero(positive[1:] != positive[:-1])
    return float(flips) / float(values.size - 1)


def _build_pattern(
    kind: WindPatternKind,
    strength: float,
    shifts: Sequence[WindShiftEvent],
    avg_magnitude: float,
    stability: float,
    policy: PatternPolicy,
) -> WindPattern:
    oscillating = kind is WindPatternKind.OSCILLATING
    prediction, confidence = predict_next_shift(
        kind,
        strength,
        shifts[-1] if shifts else None,
        confidence_scale=policy.confidence_scale,
    )
    return WindPattern(
        dominant_pattern=kind,
        pattern_strength=strength,
        total_shifts_detected=len(shifts),
        avg_shift_magnitude=avg_magnitude,
        wind_stability_score=stability,
        is_oscillating=oscillating,
        avg_oscillation_period_min=oscillation_period_min(shifts) if oscillating else None,
        next_shift_prediction=prediction,
        prediction_confidence=confidence,
    )


__all__ = [
    "PatternPolicy",
    "classify_wind_pattern",
    "oscillation_period_min",
    "predict_next_shift",
]
