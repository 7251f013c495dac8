"""Tack/gybe detection and efficiency scoring over a telemetry stream."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .config import GYBE_HEADING_CHANGE_DEG, KNOTS_TO_MS
from .geodesy import distance_m
from .models import ManeuverEvent, ManeuverKind, ManeuverStats, TelemetrySample
from .utils import angular_difference, seconds_between, sign

_LOG = logging.getLogger(__name__)


def detect_maneuvers(
    samples: Sequence[TelemetrySample],
    *,
    gybe_heading_change_deg: float = GYBE_HEADING_CHANGE_DEG,
) -> List[ManeuverEvent]:
    """Return one :class:`ManeuverEvent` per change of wind side, in input order.

    Only adjacent samples are compared: a maneuver is declared when the sign
    of ``twa`` differs between ``samples[i - 1]`` and ``samples[i]``. A pair
    is skipped when either ``twa`` is missing or exactly 0 (head to wind has
    no side), so a sensor gap never bridges into a maneuver.
    """

    events: List[ManeuverEvent] = []
    for previous, current in zip(samples, samples[1:]):
        if not previous.twa or not current.twa:
            continue
        if sign(previous.twa) != sign(current.twa):
            events.append(
                score_maneuver(
                    previous,
                    current,
                    gybe_heading_change_deg=gybe_heading_change_deg,
                )
            )
    _LOG.debug("Detected %d maneuvers over %d samples", len(events), len(samples))
    return events


def score_maneuver(
    before: TelemetrySample,
    after: TelemetrySample,
    *,
    gybe_heading_change_deg: float = GYBE_HEADING_CHANGE_DEG,
) -> ManeuverEvent:
    """Score the crossing between two fixes on opposite wind sides.

    Efficiency compares the distance actually covered with the distance the
    boat would have sailed at its mean speed. When no distance was expected
    (zero speed or duplicate timestamps) the efficiency is 0.
    """

    time_in_irons_s = seconds_between(before.timestamp, after.timestamp)
    expected_m = (before.sog + after.sog) / 2.0 * KNOTS_TO_MS * time_in_irons_s
    actual_m = distance_m(before.lat, before.lon, after.lat, after.lon)
    if expected_m == 0:
        efficiency = 0.0
    else:
        efficiency = max(0.0, min(100.0, actual_m / expected_m * 100.0))

    heading_change = _heading_change(before, after)
    kind = (
        ManeuverKind.GYBE
        if heading_change >= gybe_heading_change_deg
        else ManeuverKind.TACK
    )
    return ManeuverEvent(
        timestamp=after.timestamp,
        lat=after.lat,
        lon=after.lon,
        lost_distance_m=expected_m - actual_m,
        time_in_irons_s=time_in_irons_s,
        efficiency_pct=efficiency,
        kind=kind,
        heading_change_deg=heading_change,
        speed_loss_kn=before.sog - after.sog,
    )


def _heading_change(before: TelemetrySample, after: TelemetrySample) -> float:
    if before.hdg is not None and after.hdg is not None:
        return abs(angular_difference(after.hdg, before.hdg))
    return abs(angular_difference(after.cog, before.cog))


def summarize_maneuvers(events: Iterable[ManeuverEvent]) -> ManeuverStats:
    """Aggregate counts and tack scores for display alongside the event list."""

    items = list(events)
    tacks = [event for event in items if event.kind is ManeuverKind.TACK]
    gybes = len(items) - len(tacks)
    if tacks:
        avg_score: Optional[float] = sum(t.efficiency_pct for t in tacks) / len(tacks)
        avg_time: Optional[float] = sum(t.time_in_irons_s for t in tacks) / len(tacks)
        best: Optional[ManeuverEvent] = max(tacks, key=lambda t: t.efficiency_pct)
    else:
        avg_score = avg_time = best = None
    return ManeuverStats(
        total_maneuvers=len(items),
        tacks=len(tacks),
        gybes=gybes,
        avg_tack_score=avg_score,
        avg_tack_time_s=avg_time,
        best_tack=best,
    )


__all__ = ["detect_maneuvers", "score_maneuver", "summarize_maneuvers"]
