"""Central configuration for the tactical analytics engine.

All values are constants imported by the rest of the package and used as
defaults for explicit function parameters. Adjust as needed for your boat or
venue; each value can also be overridden through environment variables
(optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Geodesy
# ---------------------------------------------------------------------------
# Mean Earth radius used by the haversine formula.
EARTH_RADIUS_M = 6_371_000.0
EARTH_RADIUS_KM = 6_371.0

# Knots to metres per second.
KNOTS_TO_MS = 0.514444


# ---------------------------------------------------------------------------
# VMG
# ---------------------------------------------------------------------------
# Target true wind angles standing in for boat-specific polar optima. These
# are tunable defaults, not physical constants.
VMG_TARGET_ANGLE_UPWIND_DEG = _env_float("VMG_TARGET_ANGLE_UPWIND_DEG", 42.0)
VMG_TARGET_ANGLE_DOWNWIND_DEG = _env_float("VMG_TARGET_ANGLE_DOWNWIND_DEG", 145.0)


# ---------------------------------------------------------------------------
# Laylines
# ---------------------------------------------------------------------------
# Angle between heading and true wind direction sailed upwind.
DEFAULT_TACKING_ANGLE_DEG = _env_float("DEFAULT_TACKING_ANGLE_DEG", 42.0)

# Length (metres) of each projected layline ray.
LAYLINE_PROJECTION_DISTANCE_M = _env_float("LAYLINE_PROJECTION_DISTANCE_M", 500.0)

# Number of segments per layline polyline (points = segments + 1).
LAYLINE_SEGMENTS = _env_int("LAYLINE_SEGMENTS", 50)

# Optimal tacking angle bands keyed by upper wind speed bound (knots).
TACKING_ANGLE_BANDS = [
    (8.0, 45.0),  # light air
    (12.0, 42.0),  # medium
    (18.0, 38.0),  # fresh
]
TACKING_ANGLE_STRONG_WIND_DEG = 35.0


# ---------------------------------------------------------------------------
# Maneuvers
# ---------------------------------------------------------------------------
# Heading change (degrees) at or above which a wind-side crossing is scored
# as a gybe rather than a tack.
GYBE_HEADING_CHANGE_DEG = _env_float("GYBE_HEADING_CHANGE_DEG", 120.0)


# ---------------------------------------------------------------------------
# Wind shifts
# ---------------------------------------------------------------------------
# A shift registers when |delta twa| is strictly greater than this value.
WIND_SHIFT_THRESHOLD_DEG = _env_float("WIND_SHIFT_THRESHOLD_DEG", 10.0)

# Fixed-index look-back used when no time-based look-back is requested.
WIND_SHIFT_LAG_SAMPLES = _env_int("WIND_SHIFT_LAG_SAMPLES", 5)

# Optional time-based look-back (seconds). Set to 0 to keep the index lag.
WIND_SHIFT_LOOKBACK_S = _env_float("WIND_SHIFT_LOOKBACK_S", 0.0)


# ---------------------------------------------------------------------------
# Wind pattern classification policy
# ---------------------------------------------------------------------------
# Sessions with at most this many shifts (and modest magnitude) are stable.
WIND_PATTERN_STABLE_MAX_SHIFTS = _env_int("WIND_PATTERN_STABLE_MAX_SHIFTS", 1)

# Share of shifts in one direction needed to call the pattern persistent.
WIND_PATTERN_PERSISTENT_MIN_FRACTION = _env_float(
    "WIND_PATTERN_PERSISTENT_MIN_FRACTION", 0.75
)

# Share of consecutive shift pairs that must flip direction to oscillate.
WIND_PATTERN_OSCILLATION_MIN_ALTERNATION = _env_float(
    "WIND_PATTERN_OSCILLATION_MIN_ALTERNATION", 0.6
)

# Mean shift magnitude (degrees) above which non-persistent wind is unstable.
WIND_PATTERN_UNSTABLE_MIN_MAGNITUDE_DEG = _env_float(
    "WIND_PATTERN_UNSTABLE_MIN_MAGNITUDE_DEG", 25.0
)

# Scale (degrees) used to turn cumulative shift magnitude into a 0-100 score.
WIND_STABILITY_SCALE_DEG = _env_float("WIND_STABILITY_SCALE_DEG", 100.0)

# Next-shift prediction is advisory; confidence never exceeds this factor.
WIND_PREDICTION_CONFIDENCE_SCALE = _env_float(
    "WIND_PREDICTION_CONFIDENCE_SCALE", 0.6
)


# ---------------------------------------------------------------------------
# Start line
# ---------------------------------------------------------------------------
# |bias| strictly below this value means neither end is favoured.
START_LINE_NEUTRAL_BAND_DEG = _env_float("START_LINE_NEUTRAL_BAND_DEG", 5.0)


# ---------------------------------------------------------------------------
# Polar performance
# ---------------------------------------------------------------------------
# Returned when no polar table is supplied (assume on target).
POLAR_DEFAULT_PERFORMANCE_PCT = 100.0

# Bilinear polar interpolation is an opt-in behaviour change.
POLAR_INTERPOLATION_ENABLED = _env_bool("POLAR_INTERPOLATION_ENABLED", False)


# ---------------------------------------------------------------------------
# Performance tuning
# ---------------------------------------------------------------------------
# Threads used when analysing independent sessions in parallel.
MAX_WORKERS = _env_int("SAIL_TACTICS_MAX_WORKERS", 4)
