"""Aggregation layer: spans + checkpoints → attribution, per app.

Every call recomputes from current source data; nothing is cached and no
state is shared between apps or between calls.
"""

import asyncio
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from timeledger.db.store import RecordStore
from timeledger.pipeline.attribution import Attribution, attribute
from timeledger.pipeline.gate import SECONDS_PER_HOUR
from timeledger.pipeline.timeline import format_hours
from timeledger.sources.base import BaseSpanSource, CheckpointKind, TimeSpan
from timeledger.sources.checkpoints import CheckpointSourceAdapter
from timeledger.sources.hackatime import HackatimeSpanSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppAttribution:
    """Attribution result for one (identity, app) plus source counters."""

    identity: str
    app_name: str
    attribution: Attribution
    span_count: int
    devlog_count: int
    ship_count: int
    project_names: list[str] = field(default_factory=list)
    # Tracked seconds per provider project, in project order
    project_seconds: dict[str, float] = field(default_factory=dict)

    @property
    def checkpoint_count(self) -> int:
        return self.devlog_count + self.ship_count

    @property
    def unlogged_seconds(self) -> float:
        return self.attribution.trailing.delta_seconds

    @property
    def unlogged_hours(self) -> float:
        return self.unlogged_seconds / SECONDS_PER_HOUR

    @property
    def total_seconds(self) -> float:
        return self.attribution.total_seconds

    @property
    def last_checkpoint_at(self) -> datetime | None:
        if not self.attribution.buckets:
            return None
        return self.attribution.buckets[-1].checkpoint.occurred_at_datetime

    def to_dict(self) -> dict[str, Any]:
        last = self.last_checkpoint_at
        return {
            "unloggedSeconds": self.unlogged_seconds,
            "unloggedHours": format_hours(self.unlogged_seconds),
            "lastPostOrShip": last.astimezone(timezone.utc).isoformat() if last else None,
            "totalSeconds": self.total_seconds,
            "totalHours": format_hours(self.total_seconds, ndigits=1),
            "totalSpans": self.span_count,
            "totalPosts": self.devlog_count,
            "totalShips": self.ship_count,
            "buckets": [
                {
                    "checkpointId": bucket.checkpoint.id,
                    "kind": bucket.checkpoint.kind.value,
                    "occurredAt": bucket.checkpoint.occurred_at_datetime.isoformat(),
                    "deltaSeconds": bucket.delta_seconds,
                    "cumulativeSeconds": bucket.cumulative_seconds,
                }
                for bucket in self.attribution.buckets
            ],
            "projects": [
                {"name": name, "totalSeconds": seconds}
                for name, seconds in self.project_seconds.items()
            ],
        }


class AttributionService:
    def __init__(
        self,
        store: RecordStore | None = None,
        span_source: BaseSpanSource | None = None,
        checkpoint_adapter: CheckpointSourceAdapter | None = None,
    ):
        self.store = store or RecordStore()
        self.span_source = span_source or HackatimeSpanSource()
        self.checkpoint_adapter = checkpoint_adapter or CheckpointSourceAdapter(self.store)

    async def compute_attribution(self, identity: str, app_name: str) -> AppAttribution:
        """Single-app mode.

        Raises:
            IdentityNotFound: the contributor does not exist.
            AppNotFound: the app does not exist.
        """
        await self.store.get_contributor(identity)
        await self.store.get_app(app_name, identity=identity)
        return await self._compute_for_app(identity, app_name)

    async def compute_attribution_for_all_apps(self, identity: str) -> dict[str, AppAttribution]:
        """Multi-app mode: every app the contributor is a member of.

        Raises:
            IdentityNotFound: the contributor does not exist.
        """
        await self.store.get_contributor(identity)
        app_names = await self.store.list_member_apps(identity)
        logger.debug("Computing attribution for %d app(s) of %s", len(app_names), identity)

        results = await asyncio.gather(
            *(self._compute_for_app(identity, name) for name in app_names)
        )
        return dict(zip(app_names, results))

    async def _compute_for_app(self, identity: str, app_name: str) -> AppAttribution:
        project_names = await self.store.list_project_names(identity, app_name)

        spans, checkpoints = await asyncio.gather(
            self.span_source.fetch_all(identity, project_names),
            self.checkpoint_adapter.fetch(identity, app_name),
        )

        result = attribute(spans, checkpoints)
        devlog_count = sum(1 for c in checkpoints if c.kind == CheckpointKind.DEVLOG)

        logger.info(
            "%s/%s: %d span(s), %d checkpoint(s), %.0fs unlogged",
            identity,
            app_name,
            len(spans),
            len(checkpoints),
            result.trailing.delta_seconds,
        )
        return AppAttribution(
            identity=identity,
            app_name=app_name,
            attribution=result,
            span_count=len(spans),
            devlog_count=devlog_count,
            ship_count=len(checkpoints) - devlog_count,
            project_names=project_names,
            project_seconds=_seconds_by_project(project_names, spans),
        )


async def compute_attribution(identity: str, app_name: str) -> AppAttribution:
    """Single-app attribution using the default store and provider."""
    return await AttributionService().compute_attribution(identity, app_name)


async def compute_attribution_for_all_apps(identity: str) -> dict[str, AppAttribution]:
    """Multi-app attribution using the default store and provider."""
    return await AttributionService().compute_attribution_for_all_apps(identity)


def _seconds_by_project(project_names: list[str], spans: list[TimeSpan]) -> dict[str, float]:
    totals = {name: [] for name in project_names}
    for span in spans:
        totals.setdefault(span.source_project, []).append(span.duration_seconds)
    return {name: math.fsum(durations) for name, durations in totals.items()}
