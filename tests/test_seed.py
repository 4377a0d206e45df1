"""Test the demo seed against a fresh record store."""

import asyncio

from timeledger.db.engine import make_sessionmaker
from timeledger.db.models import Base
from timeledger.db.seed import DEMO_IDENTITY, seed_demo
from timeledger.db.store import RecordStore


def seeded_store(tmp_path, runs: int = 1) -> RecordStore:
    sessionmaker = make_sessionmaker(f"sqlite+aiosqlite:///{(tmp_path / 'demo.db').as_posix()}")

    async def _setup():
        async with sessionmaker() as session:
            connection = await session.connection()
            await connection.run_sync(Base.metadata.create_all)
            await session.commit()
        for _ in range(runs):
            async with sessionmaker() as session:
                await seed_demo(session)

    asyncio.run(_setup())
    return RecordStore(sessionmaker)


def test_seed_creates_demo_apps(tmp_path):
    store = seeded_store(tmp_path)
    assert asyncio.run(store.list_member_apps(DEMO_IDENTITY)) == ["Lanternfish", "Sprout"]
    assert asyncio.run(store.list_project_names(DEMO_IDENTITY, "Sprout")) == ["sprout-web", "sprout-api"]
    assert len(asyncio.run(store.list_devlogs(DEMO_IDENTITY, "Sprout"))) == 3
    assert len(asyncio.run(store.list_ships(DEMO_IDENTITY, "Sprout"))) == 1


def test_seed_is_idempotent(tmp_path):
    store = seeded_store(tmp_path, runs=2)
    assert len(asyncio.run(store.list_devlogs(DEMO_IDENTITY, "Lanternfish"))) == 1
