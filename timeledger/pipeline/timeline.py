"""Timeline rows for contributor and reviewer views.

Hours are derived here from the engine's seconds and rounded for display
only; nothing computed here is fed back into attribution.
"""

from dataclasses import dataclass
from datetime import datetime

from timeledger.pipeline.attribution import Attribution
from timeledger.pipeline.gate import SECONDS_PER_HOUR
from timeledger.sources.base import CheckpointKind


@dataclass(frozen=True)
class TimelineEntry:
    label: str
    kind: CheckpointKind | None  # None → unposted time row
    occurred_at: datetime | None
    hours_since_previous: float
    cumulative_hours: float
    checkpoint_id: str | None = None


def seconds_to_hours(seconds: float, ndigits: int = 1) -> float:
    return round(seconds / SECONDS_PER_HOUR, ndigits)


def format_hours(seconds: float, ndigits: int = 2) -> str:
    """Fixed-point hours string, e.g. 5400 → '1.50'."""
    return f"{seconds / SECONDS_PER_HOUR:.{ndigits}f}"


def release_label(index: int) -> str:
    """0 → 'Release 1.0', 1 → 'Release 1.1', ..."""
    return f"Release 1.{index}"


def build_timeline(attribution: Attribution, ndigits: int = 1) -> list[TimelineEntry]:
    """One row per checkpoint, plus an unposted row when trailing time is positive."""
    entries = []
    releases_seen = 0

    for bucket in attribution.buckets:
        checkpoint = bucket.checkpoint
        if checkpoint.kind == CheckpointKind.SHIP_RELEASE:
            label = release_label(releases_seen)
            releases_seen += 1
        else:
            label = "Devlog"

        entries.append(
            TimelineEntry(
                label=label,
                kind=checkpoint.kind,
                occurred_at=checkpoint.occurred_at_datetime,
                hours_since_previous=seconds_to_hours(bucket.delta_seconds, ndigits),
                cumulative_hours=seconds_to_hours(bucket.cumulative_seconds, ndigits),
                checkpoint_id=checkpoint.id,
            )
        )

    trailing = attribution.trailing
    if trailing.delta_seconds > 0:
        entries.append(
            TimelineEntry(
                label="Unposted",
                kind=None,
                occurred_at=None,
                hours_since_previous=seconds_to_hours(trailing.delta_seconds, ndigits),
                cumulative_hours=seconds_to_hours(attribution.total_seconds, ndigits),
            )
        )
    return entries
