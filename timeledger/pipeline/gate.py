"""Logging-session gate on unlogged time.

Gate Rules:
    Unlogged hours <= threshold → READY    (a logging session may start)
    Unlogged hours > threshold  → BLOCKED  (post a devlog first)
Hours are compared at 2-decimal precision, as they are displayed.
Default threshold is 4 hours.
"""

import enum

from timeledger.config import settings

SECONDS_PER_HOUR = 3600.0


class GateStatus(str, enum.Enum):
    READY = "READY"
    BLOCKED = "BLOCKED"


def compute_logging_gate(
    unlogged_seconds: float,
    threshold_hours: float | None = None,
) -> tuple[float, GateStatus]:
    """Convert unlogged seconds to hours and decide the gate status.

    Returns:
        (unlogged_hours, gate_status)
    """
    if threshold_hours is None:
        threshold_hours = settings.logging_gate_hours

    hours = unlogged_seconds / SECONDS_PER_HOUR
    status = GateStatus.BLOCKED if round(hours, 2) > threshold_hours else GateStatus.READY
    return hours, status
