"""Devlog post checkpoint source.

Store: ``devlogs`` table, keyed by (contributor identity, app name)
Timestamp: ``created_at``; undated posts are excluded
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from timeledger.db.store import RecordStore
from timeledger.errors import SourceUnavailable
from timeledger.sources.base import (
    BaseCheckpointSource,
    CheckpointEvent,
    CheckpointKind,
    to_epoch_seconds,
)
from timeledger.sources.registry import register

logger = logging.getLogger(__name__)


@register("devlog")
class DevlogSource(BaseCheckpointSource):
    source_name = "Devlog posts"
    kind = CheckpointKind.DEVLOG

    def __init__(self, store: RecordStore):
        self.store = store

    async def fetch(self, identity: str, app_name: str) -> list[CheckpointEvent]:
        try:
            rows = await self.store.list_devlogs(identity, app_name)
        except SQLAlchemyError as exc:
            raise SourceUnavailable(self.source_name, repr(exc)) from exc

        events = []
        skipped = 0
        for row in rows:
            if row.created_at is None:
                skipped += 1
                continue
            events.append(
                CheckpointEvent(
                    id=f"devlog:{row.id}",
                    kind=self.kind,
                    occurred_at=to_epoch_seconds(row.created_at),
                    payload={
                        "content": row.content,
                        "review_status": row.review_status or "pending",
                        "approved_hours": row.approved_hours,
                    },
                )
            )

        if skipped:
            logger.info("Excluded %d undated devlog(s) for %s/%s", skipped, identity, app_name)
        return events
