"""Global pytest fixtures & helpers.

Adds project root to path and provides factory helpers for telemetry
streams so the analytics tests share one way of building samples.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from sail_tactics.models import TelemetrySample

BASE_TIME = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
# One metre of latitude in degrees on the 6,371 km sphere.
DEG_PER_M = 1.0 / 111_194.92664455873


# --- Factory helpers -------------------------------------------------
def make_sample(
    offset_s: float = 0.0,
    *,
    lat: float = 50.0,
    lon: float = -1.0,
    sog: float = 6.0,
    cog: float = 0.0,
    hdg: Optional[float] = None,
    twa: Optional[float] = None,
    tws: Optional[float] = None,
) -> TelemetrySample:
    return TelemetrySample(
        timestamp=BASE_TIME + timedelta(seconds=offset_s),
        lat=lat,
        lon=lon,
        sog=sog,
        cog=cog,
        hdg=hdg,
        twa=twa,
        tws=tws,
    )


def make_twa_stream(
    twas: Sequence[Optional[float]],
    *,
    spacing_s: float = 1.0,
    sog: float = 6.0,
    tws: Optional[float] = None,
) -> list[TelemetrySample]:
    """Stream heading north at ``sog`` with one sample per ``spacing_s``."""

    step_m = sog * 0.514444 * spacing_s
    return [
        make_sample(
            index * spacing_s,
            lat=50.0 + index * step_m * DEG_PER_M,
            sog=sog,
            twa=twa,
            tws=tws,
        )
        for index, twa in enumerate(twas)
    ]


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def tack_stream():
    """The ``[-20, -5, 5, 20]`` one-second scenario with a single tack."""

    return make_twa_stream([-20.0, -5.0, 5.0, 20.0])


@pytest.fixture
def polar_payload():
    return {
        "tws": [6.0, 10.0, 14.0],
        "twa": [45.0, 90.0, 135.0],
        "target": [
            [5.0, 6.0, 5.5],
            [6.0, 7.0, 6.5],
            [7.0, 8.0, 7.5],
        ],
    }


@pytest.fixture
def base_time():
    return BASE_TIME


@pytest.fixture
def sample_factory():
    return make_sample


@pytest.fixture
def twa_stream_factory():
    return make_twa_stream


@pytest.fixture
def metres_north():
    """Latitude offset (degrees) for a distance in metres."""

    def _offset(metres: float) -> float:
        return metres * DEG_PER_M

    return _offset
