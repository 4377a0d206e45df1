"""Ship release checkpoint source.

Store: ``ship_releases`` table, keyed by (contributor identity, app name)
Timestamp: ``created_at``; undated releases are excluded
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


@register("ship")
class ShipReleaseSource(BaseCheckpointSource):
    source_name = "Ship releases"
    kind = CheckpointKind.SHIP_RELEASE

    def __init__(self, store: RecordStore):
        self.store = store

    async def fetch(self, identity: str, app_name: str) -> list[CheckpointEvent]:
        try:
            rows = await self.store.list_ships(identity, app_name)
        except SQLAlchemyError as exc:
            raise SourceUnavailable(self.source_name, repr(exc)) from exc

        events = []
        skipped = 0
        for row in rows:
            if row.created_at is None:
                skipped += 1
                continue
            links = {
                key: url
                for key, url in (("code_url", row.code_url), ("playable_url", row.playable_url))
                if url
            }
            events.append(
                CheckpointEvent(
                    id=f"ship:{row.id}",
                    kind=self.kind,
                    occurred_at=to_epoch_seconds(row.created_at),
                    payload={"change_summary": row.change_summary, "links": links},
                )
            )

        if skipped:
            logger.info("Excluded %d undated release(s) for %s/%s", skipped, identity, app_name)
        return events
