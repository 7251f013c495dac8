"""Whole-session tactical analysis.

``analyze_session`` runs every analytic over one telemetry stream. The
analytics share no state, so ``SessionAnalysisService`` can fan independent
sessions out over a thread pool without any synchronisation. Nothing is
retried here; re-running after new telemetry arrives is the caller's call.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import logging
import statistics
from typing import Dict, Hashable, List, Mapping, Optional, Sequence

from ..config import (
    DEFAULT_TACKING_ANGLE_DEG,
    GYBE_HEADING_CHANGE_DEG,
    LAYLINE_PROJECTION_DISTANCE_M,
    MAX_WORKERS,
    POLAR_INTERPOLATION_ENABLED,
    WIND_SHIFT_LAG_SAMPLES,
    WIND_SHIFT_LOOKBACK_S,
    WIND_SHIFT_THRESHOLD_DEG,
)
from ..errors import InvalidInputError
from ..laylines import calculate_laylines
from ..maneuvers import detect_maneuvers, summarize_maneuvers
from ..models import (
    LatLon,
    LaylinePair,
    ManeuverEvent,
    ManeuverStats,
    SessionStats,
    StartLineBias,
    TelemetrySample,
    VmgResult,
    WindPattern,
    WindShiftEvent,
)
from ..polars import PolarTable, calculate_performance
from ..session_stats import calculate_session_stats
from ..start_line import calculate_start_line_bias
from ..telemetry import ensure_time_ordered
from ..vmg import vmg_series
from ..wind import (
    PatternPolicy,
    classify_wind_pattern,
    detect_wind_shifts,
    true_wind_direction,
)


@dataclass(slots=True)
class AnalysisParameters:
    """Scalar inputs for a session analysis.

    ``wind_direction`` falls back to the direction implied by the last sample
    with ``twa`` when omitted. Laylines need a ``mark``; start-line bias
    needs both ``pin`` and ``committee_boat``; VMG needs a target heading.
    """

    wind_direction: Optional[float] = None
    target_heading_deg: Optional[float] = None
    mark: Optional[LatLon] = None
    pin: Optional[LatLon] = None
    committee_boat: Optional[LatLon] = None
    tacking_angle_deg: float = DEFAULT_TACKING_ANGLE_DEG
    layline_distance_m: float = LAYLINE_PROJECTION_DISTANCE_M
    shift_threshold_deg: float = WIND_SHIFT_THRESHOLD_DEG
    shift_lag_samples: int = WIND_SHIFT_LAG_SAMPLES
    shift_lookback_s: Optional[float] = (
        WIND_SHIFT_LOOKBACK_S if WIND_SHIFT_LOOKBACK_S > 0 else None
    )
    gybe_heading_change_deg: float = GYBE_HEADING_CHANGE_DEG
    pattern_policy: PatternPolicy = field(default_factory=PatternPolicy)
    polar: Optional[PolarTable] = None
    interpolate_polar: bool = POLAR_INTERPOLATION_ENABLED


@dataclass(slots=True)
class SessionAnalysis:
    stats: SessionStats
    maneuvers: List[ManeuverEvent]
    maneuver_stats: ManeuverStats
    wind_shifts: List[WindShiftEvent]
    wind_pattern: WindPattern
    vmg: List[VmgResult] = field(default_factory=list)
    wind_direction: Optional[float] = None
    laylines: Optional[LaylinePair] = None
    start_line: Optional[StartLineBias] = None
    avg_performance_pct: Optional[float] = None


def analyze_session(
    samples: Sequence[TelemetrySample],
    params: Optional[AnalysisParameters] = None,
) -> SessionAnalysis:
    """Run every tactical analytic over a time-ordered telemetry stream.

    Raises:
        InvalidInputError: If timestamps decrease or a supplied position is
            out of range.
    """

    params = params or AnalysisParameters()
    ensure_time_ordered(samples)

    maneuvers = detect_maneuvers(
        samples, gybe_heading_change_deg=params.gybe_heading_change_deg
    )
    shifts = detect_wind_shifts(
        samples,
        params.shift_threshold_deg,
        lag=params.shift_lag_samples,
        lookback_s=params.shift_lookback_s,
    )
    wind_direction = params.wind_direction
    if wind_direction is None:
        wind_direction = _latest_wind_direction(samples)

    analysis = SessionAnalysis(
        stats=calculate_session_stats(samples),
        maneuvers=maneuvers,
        maneuver_stats=summarize_maneuvers(maneuvers),
        wind_shifts=shifts,
        wind_pattern=classify_wind_pattern(shifts, params.pattern_policy),
        wind_direction=wind_direction,
    )
    if params.target_heading_deg is not None:
        analysis.vmg = vmg_series(samples, params.target_heading_deg)
    if wind_direction is not None and params.mark is not None and samples:
        last = samples[-1]
        analysis.laylines = calculate_laylines(
            last.lat,
            last.lon,
            params.mark[0],
            params.mark[1],
            wind_direction,
            tacking_angle=params.tacking_angle_deg,
            distance_m=params.layline_distance_m,
        )
    if (
        wind_direction is not None
        and params.pin is not None
        and params.committee_boat is not None
    ):
        analysis.start_line = calculate_start_line_bias(
            params.pin[0],
            params.pin[1],
            params.committee_boat[0],
            params.committee_boat[1],
            wind_direction,
        )
    analysis.avg_performance_pct = _average_performance(samples, params)
    return analysis


def _latest_wind_direction(samples: Sequence[TelemetrySample]) -> Optional[float]:
    for sample in reversed(samples):
        direction = true_wind_direction(sample)
        if direction is not None:
            return direction
    return None


def _average_performance(
    samples: Sequence[TelemetrySample], params: AnalysisParameters
) -> Optional[float]:
    """Mean polar performance over samples carrying both ``tws`` and ``twa``."""

    scores = [
        calculate_performance(
            sample.sog,
            sample.tws,
            sample.twa,
            params.polar,
            interpolate=params.interpolate_polar,
        )
        for sample in samples
        if sample.tws is not None and sample.twa is not None
    ]
    if not scores:
        return None
    return statistics.fmean(scores)


@dataclass(slots=True)
class SessionAnalysisServiceConfig:
    max_workers: int = MAX_WORKERS
    logger: logging.Logger | None = None


@dataclass(slots=True)
class BatchAnalysis:
    """Per-session results plus the sessions rejected for invalid input."""

    results: Dict[Hashable, SessionAnalysis] = field(default_factory=dict)
    failures: Dict[Hashable, str] = field(default_factory=dict)


class SessionAnalysisService:
    def __init__(self, config: SessionAnalysisServiceConfig | None = None):
        self.config = config or SessionAnalysisServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def process(
        self,
        sessions: Mapping[Hashable, Sequence[TelemetrySample]],
        params: Optional[AnalysisParameters] = None,
    ) -> BatchAnalysis:
        """Analyse independent sessions in parallel.

        Sessions rejected with :class:`InvalidInputError` are reported in
        ``failures`` without stopping the batch; any other exception is a bug
        and propagates.
        """

        batch = BatchAnalysis()
        if not sessions:
            return batch
        workers = max(1, min(self.config.max_workers, len(sessions)))
        self._log.info(
            "Analysing %d sessions with %d workers", len(sessions), workers
        )
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_map = {
                executor.submit(analyze_session, samples, params): key
                for key, samples in sessions.items()
            }
            for future in as_completed(future_map):
                key = future_map[future]
                try:
                    batch.results[key] = future.result()
                except InvalidInputError as exc:
                    self._log.warning("Skipping session=%s: %s", key, exc)
                    batch.failures[key] = str(exc)
        return batch


__all__ = [
    "AnalysisParameters",
    "BatchAnalysis",
    "SessionAnalysis",
    "SessionAnalysisService",
    "SessionAnalysisServiceConfig",
    "analyze_session",
]
