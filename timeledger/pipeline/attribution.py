"""Span-to-checkpoint attribution.

Partitions tracked time into one bucket per checkpoint plus a trailing
"unlogged" bucket:

    delta(c_i)  = Σ duration(s)  for s.end_time ∈ (c_{i-1}.occurred_at, c_i.occurred_at]
    trailing    = Σ duration(s)  for s.end_time > c_last.occurred_at
    cumulative_i = delta(c_1) + ... + delta(c_i)

Every span lands in exactly one bucket, so the bucket deltas plus the
trailing delta always equal the total tracked time. All values are seconds.
"""

import math
from dataclasses import dataclass
from typing import Iterable

from timeledger.sources.base import KIND_RANK, CheckpointEvent, TimeSpan


@dataclass(frozen=True)
class AttributionBucket:
    checkpoint: CheckpointEvent | None  # None → trailing / unlogged
    delta_seconds: float
    # Trailing bucket repeats the logged total; its delta is never folded in
    cumulative_seconds: float


@dataclass(frozen=True)
class Attribution:
    buckets: list[AttributionBucket]
    trailing: AttributionBucket

    @property
    def logged_seconds(self) -> float:
        return self.buckets[-1].cumulative_seconds if self.buckets else 0.0

    @property
    def total_seconds(self) -> float:
        return self.logged_seconds + self.trailing.delta_seconds


def checkpoint_order(checkpoint: CheckpointEvent) -> tuple[float, int]:
    """Sort key: timestamp, then devlogs ahead of releases at the same instant."""
    return checkpoint.occurred_at, KIND_RANK[checkpoint.kind]


def attribute(
    spans: Iterable[TimeSpan],
    checkpoints: Iterable[CheckpointEvent],
) -> Attribution:
    """Attribute every span to the first checkpoint at or after its end time.

    Args:
        spans: Decoded spans from every project of one app, any order.
        checkpoints: Dated devlogs and releases for the same app, any order.

    Returns:
        Attribution with one bucket per checkpoint in timeline order and a
        trailing bucket holding spans that end after the last checkpoint.
    """
    ordered_checkpoints = sorted(checkpoints, key=checkpoint_order)
    ordered_spans = sorted(spans, key=lambda span: span.end_time)

    buckets: list[AttributionBucket] = []
    cursor = 0
    cumulative = 0.0

    for checkpoint in ordered_checkpoints:
        # Spans at or before the previous boundary were consumed already
        durations = []
        while cursor < len(ordered_spans) and ordered_spans[cursor].end_time <= checkpoint.occurred_at:
            durations.append(ordered_spans[cursor].duration_seconds)
            cursor += 1

        delta = math.fsum(durations)
        cumulative += delta
        buckets.append(
            AttributionBucket(
                checkpoint=checkpoint,
                delta_seconds=delta,
                cumulative_seconds=cumulative,
            )
        )

    trailing_delta = math.fsum(span.duration_seconds for span in ordered_spans[cursor:])
    trailing = AttributionBucket(
        checkpoint=None,
        delta_seconds=trailing_delta,
        cumulative_seconds=cumulative,
    )
    return Attribution(buckets=buckets, trailing=trailing)
