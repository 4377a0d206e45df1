"""Test devlog and release checkpoint sources against the record store."""

import asyncio

from sqlalchemy.exc import OperationalError

from timeledger.sources.base import CheckpointKind
from timeledger.sources.checkpoints import CheckpointSourceAdapter
from timeledger.sources.devlogs import DevlogSource
from timeledger.sources.registry import get_source, list_sources
from timeledger.sources.ships import ShipReleaseSource

IDENTITY = "U0TEST01"


def test_sources_register_themselves():
    assert list_sources() == ["devlog", "ship"]
    assert get_source("devlog") is DevlogSource
    assert get_source("ship") is ShipReleaseSource


def test_devlogs_skip_undated_posts(store):
    events = asyncio.run(DevlogSource(store).fetch(IDENTITY, "Garden"))
    assert len(events) == 1
    event = events[0]
    assert event.kind == CheckpointKind.DEVLOG
    assert event.occurred_at == 150
    assert event.id.startswith("devlog:")
    assert event.payload["content"] == "first"
    assert event.payload["review_status"] == "pending"


def test_ships_carry_links(store):
    events = asyncio.run(ShipReleaseSource(store).fetch(IDENTITY, "Garden"))
    assert [e.occurred_at for e in events] == [250]
    assert events[0].payload["change_summary"] == "v1"
    assert events[0].payload["links"] == {"code_url": "https://example.dev/garden"}


def test_adapter_merges_both_kinds(store):
    events = asyncio.run(CheckpointSourceAdapter(store).fetch(IDENTITY, "Garden"))
    assert sorted((e.kind.value, e.occurred_at) for e in events) == [("devlog", 150), ("ship", 250)]


def test_adapter_only_returns_own_checkpoints(store):
    events = asyncio.run(CheckpointSourceAdapter(store).fetch(IDENTITY, "Comet"))
    assert [e.occurred_at for e in events] == [1000]


def test_adapter_treats_failing_source_as_empty(store, monkeypatch):
    async def broken(identity, app_name):
        raise OperationalError("select", {}, Exception("database is locked"))

    monkeypatch.setattr(store, "list_ships", broken)
    events = asyncio.run(CheckpointSourceAdapter(store).fetch(IDENTITY, "Garden"))
    assert [e.kind for e in events] == [CheckpointKind.DEVLOG]


def test_adapter_with_selected_sources(store):
    events = asyncio.run(CheckpointSourceAdapter(store, source_names=["ship"]).fetch(IDENTITY, "Garden"))
    assert [e.kind for e in events] == [CheckpointKind.SHIP_RELEASE]
