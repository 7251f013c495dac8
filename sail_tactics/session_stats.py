"""Track summary statistics for a telemetry stream."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import numpy as np

from .geodesy import track_distance_m
from .models import SessionStats, TelemetrySample
from .utils import seconds_between


def calculate_session_stats(
    samples: Sequence[TelemetrySample],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> SessionStats:
    """Return distance, speed and duration figures for ``samples``.

    ``start``/``end`` default to the first and last sample timestamps so a
    session record with explicit bounds can override them. Distance is
    rounded to 2 decimals (km) and speeds to 1 decimal (knots).
    """

    if not samples:
        return SessionStats(
            duration_s=0.0,
            distance_km=0.0,
            avg_speed_kn=0.0,
            max_speed_kn=0.0,
            point_count=0,
        )

    distance_km = track_distance_m([(s.lat, s.lon) for s in samples]) / 1000.0
    speeds = np.asarray([s.sog for s in samples], dtype=float)
    start_ts = start or samples[0].timestamp
    end_ts = end or samples[-1].timestamp
    return SessionStats(
        duration_s=max(seconds_between(start_ts, end_ts), 0.0),
        distance_km=round(distance_km, 2),
        avg_speed_kn=round(float(np.mean(speeds)), 1),
        max_speed_kn=round(float(np.max(speeds)), 1),
        point_count=len(samples),
    )


__all__ = ["calculate_session_stats"]
