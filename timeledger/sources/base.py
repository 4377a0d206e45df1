"""Base interfaces and record shapes for span and checkpoint sources."""

import asyncio
import enum
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from timeledger.errors import InvalidInput

logger = logging.getLogger(__name__)


class CheckpointKind(str, enum.Enum):
    DEVLOG = "devlog"
    SHIP_RELEASE = "ship"


# Order among checkpoints sharing one timestamp
KIND_RANK = {
    CheckpointKind.DEVLOG: 0,
    CheckpointKind.SHIP_RELEASE: 1,
}


@dataclass(frozen=True)
class TimeSpan:
    """One provider-reported interval of tracked work."""

    source_project: str
    end_time: float
    duration_seconds: float
    start_time: float | None = None


@dataclass(frozen=True)
class CheckpointEvent:
    """A devlog post or ship release, normalized to one shape."""

    id: str
    kind: CheckpointKind
    occurred_at: float  # epoch seconds
    payload: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def occurred_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.occurred_at, tz=timezone.utc)


def to_epoch_seconds(value: datetime) -> float:
    """Convert a datetime to epoch seconds, reading naive values as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def decode_seconds(raw: Any, *, field_name: str) -> float:
    """Decode a provider seconds value into a non-negative float.

    The provider has been seen to send plain numbers, one-element arrays and
    numeric strings for the same field.
    """
    if isinstance(raw, bool):
        raise InvalidInput(f"{field_name}: boolean is not a number")
    if isinstance(raw, (list, tuple)):
        if len(raw) != 1:
            raise InvalidInput(f"{field_name}: expected one element, got {len(raw)}")
        return decode_seconds(raw[0], field_name=field_name)
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            raise InvalidInput(f"{field_name}: integer out of range") from None
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            raise InvalidInput(f"{field_name}: {raw!r} is not numeric") from None
    else:
        raise InvalidInput(f"{field_name}: unsupported type {type(raw).__name__}")

    if not math.isfinite(value) or value < 0:
        raise InvalidInput(f"{field_name}: {value} out of range")
    return value


class BaseSpanSource(ABC):
    """Abstract base for heartbeat span providers."""

    source_name: str
    concurrency: int = 8
    timeout_seconds: float | None = None

    @abstractmethod
    async def fetch(self, identity: str, project_name: str) -> list[TimeSpan]:
        """Fetch every span for one (identity, project).

        Provider failures must come back as an empty list, never raise.
        """
        ...

    async def fetch_all(self, identity: str, project_names: list[str]) -> list[TimeSpan]:
        """Fetch every project concurrently and concatenate in project order.

        A project whose fetch times out contributes no spans.
        """
        if not project_names:
            return []

        limit = asyncio.Semaphore(max(1, self.concurrency))

        async def _bounded(project_name: str) -> list[TimeSpan]:
            async with limit:
                try:
                    return await asyncio.wait_for(
                        self.fetch(identity, project_name), timeout=self.timeout_seconds
                    )
                except asyncio.TimeoutError:
                    logger.warning(
                        "%s: fetch for project %s timed out; treating as empty",
                        self.source_name,
                        project_name,
                    )
                    return []

        batches = await asyncio.gather(*(_bounded(name) for name in project_names))
        return [span for batch in batches for span in batch]


class BaseCheckpointSource(ABC):
    """Abstract base for checkpoint (devlog / release) sources."""

    source_name: str
    kind: CheckpointKind

    @abstractmethod
    async def fetch(self, identity: str, app_name: str) -> list[CheckpointEvent]:
        """Fetch checkpoints for one (identity, app), skipping undated records."""
        ...
