"""Central error types used across the engine."""

from __future__ import annotations


class TacticsError(RuntimeError):
    """Base error for tactical analytics failures."""


class InvalidInputError(TacticsError, ValueError):
    """Raised when caller-supplied input violates a documented contract.

    Examples are coordinates outside the WGS84 range, telemetry streams that
    go backwards in time, or malformed polar tables.
    """


__all__ = [
    "InvalidInputError",
    "TacticsError",
]
