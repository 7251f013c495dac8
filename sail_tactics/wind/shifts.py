"""Wind shift detection by comparing true wind angle against a look-back sample."""

from __future__ import annotations

import bisect
import logging
from typing import List, Optional, Sequence

from ..config import WIND_SHIFT_LAG_SAMPLES, WIND_SHIFT_THRESHOLD_DEG
from ..errors import InvalidInputError
from ..models import ShiftKind, TelemetrySample, WindShiftEvent
from ..utils import seconds_between, wrap_360

_LOG = logging.getLogger(__name__)


def detect_wind_shifts(
    samples: Sequence[TelemetrySample],
    threshold_deg: float = WIND_SHIFT_THRESHOLD_DEG,
    *,
    lag: int = WIND_SHIFT_LAG_SAMPLES,
    lookback_s: Optional[float] = None,
) -> List[WindShiftEvent]:
    """Return the shifts whose TWA change exceeds ``threshold_deg``.

    By default each sample is compared with the sample ``lag`` positions
    earlier, which ties the look-back to the sample rate. Passing
    ``lookback_s`` compares with the latest sample at or before
    ``timestamp - lookback_s`` instead. The comparison is strict: a change of
    exactly ``threshold_deg`` is not a shift. Pairs where either sample lacks
    ``twa`` are skipped.
    """

    if lookback_s is not None:
        if lookback_s <= 0:
            raise InvalidInputError("lookback_s must be positive")
        references = _time_references(samples, lookback_s)
    else:
        if lag < 1:
            raise InvalidInputError("lag must be at least 1 sample")
        references = [
            index - lag if index >= lag else None for index in range(len(samples))
        ]

    shifts: List[WindShiftEvent] = []
    for index, ref_index in enumerate(references):
        if ref_index is None:
            continue
        current = samples[index]
        previous = samples[ref_index]
        if current.twa is None or previous.twa is None:
            continue
        shift = current.twa - previous.twa
        if abs(shift) > threshold_deg:
            shifts.append(
                WindShiftEvent(
                    timestamp=current.timestamp,
                    shift_deg=shift,
                    kind=ShiftKind.LIFT if shift > 0 else ShiftKind.HEADER,
                    twa_before=previous.twa,
                    twa_after=current.twa,
                    tws_before=previous.tws,
                    tws_after=current.tws,
                )
            )
    _LOG.debug(
        "Detected %d wind shifts over %d samples (threshold=%.1f)",
        len(shifts),
        len(samples),
        threshold_deg,
    )
    return shifts


def _time_references(
    samples: Sequence[TelemetrySample], lookback_s: float
) -> List[Optional[int]]:
    """Index of the latest sample at least ``lookback_s`` older than each sample."""

    if not samples:
        return []
    origin = samples[0].timestamp
    offsets = [seconds_between(origin, sample.timestamp) for sample in samples]
    references: List[Optional[int]] = []
    for offset in offsets:
        ref = bisect.bisect_right(offsets, offset - lookback_s) - 1
        references.append(ref if ref >= 0 else None)
    return references


def true_wind_direction(sample: TelemetrySample) -> Optional[float]:
    """True wind direction (degrees, [0, 360)) implied by heading and ``twa``.

    Uses compass heading when present, otherwise course over ground.
    """

    if sample.twa is None:
        return None
    heading = sample.hdg if sample.hdg is not None else sample.cog
    return wrap_360(heading + sample.twa)


__all__ = ["detect_wind_shifts", "true_wind_direction"]
