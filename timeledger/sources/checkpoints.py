"""Merge every registered checkpoint source into one event list."""

import asyncio
import logging

# Import source modules so they register themselves
import timeledger.sources.devlogs  # noqa: F401
import timeledger.sources.ships  # noqa: F401

from timeledger.db.store import RecordStore
from timeledger.errors import SourceUnavailable
from timeledger.sources.base import BaseCheckpointSource, CheckpointEvent
from timeledger.sources.registry import get_source, list_sources

logger = logging.getLogger(__name__)


class CheckpointSourceAdapter:
    """Fetch devlogs and releases for (identity, app) as CheckpointEvents."""

    def __init__(self, store: RecordStore, source_names: list[str] | None = None):
        names = source_names if source_names is not None else list_sources()
        self.sources: list[BaseCheckpointSource] = [get_source(name)(store) for name in names]

    async def fetch(self, identity: str, app_name: str) -> list[CheckpointEvent]:
        batches = await asyncio.gather(
            *(self._fetch_one(source, identity, app_name) for source in self.sources)
        )
        return [event for batch in batches for event in batch]

    async def _fetch_one(
        self, source: BaseCheckpointSource, identity: str, app_name: str
    ) -> list[CheckpointEvent]:
        try:
            return await source.fetch(identity, app_name)
        except SourceUnavailable as exc:
            logger.warning("%s; treating as empty for %s/%s", exc, identity, app_name)
            return []
