"""Velocity made good toward a target bearing and along the wind axis."""

from __future__ import annotations

import math
from typing import Iterable, List

from .config import VMG_TARGET_ANGLE_DOWNWIND_DEG, VMG_TARGET_ANGLE_UPWIND_DEG
from .models import TelemetrySample, VmgResult
from .utils import angular_difference


def calculate_vmg(
    sample: TelemetrySample,
    target_heading_deg: float,
    *,
    upwind_target_deg: float = VMG_TARGET_ANGLE_UPWIND_DEG,
    downwind_target_deg: float = VMG_TARGET_ANGLE_DOWNWIND_DEG,
) -> VmgResult:
    """Return VMG figures for a single fix.

    ``vmg`` is the signed speed component along ``target_heading_deg``
    (positive when closing). The wind-axis components need ``twa``; without
    it both are 0 and ``target_angle`` falls back to the downwind default.
    The target angles are tunable heuristics standing in for polar optima.
    """

    offset = angular_difference(sample.cog, target_heading_deg)
    vmg = sample.sog * math.cos(math.radians(offset))

    twa = sample.twa
    vmg_upwind = 0.0
    vmg_downwind = 0.0
    upwind = twa is not None and abs(twa) < 90.0
    if twa is not None:
        if abs(twa) < 90.0:
            vmg_upwind = sample.sog * math.cos(math.radians(twa))
        elif abs(twa) > 90.0:
            vmg_downwind = sample.sog * math.cos(math.radians(180.0 - abs(twa)))

    return VmgResult(
        timestamp=sample.timestamp,
        vmg=vmg,
        vmg_upwind=vmg_upwind,
        vmg_downwind=vmg_downwind,
        target_angle=upwind_target_deg if upwind else downwind_target_deg,
    )


def vmg_series(
    samples: Iterable[TelemetrySample], target_heading_deg: float
) -> List[VmgResult]:
    """Apply :func:`calculate_vmg` to every sample of a stream."""

    return [calculate_vmg(sample, target_heading_deg) for sample in samples]


__all__ = ["calculate_vmg", "vmg_series"]
