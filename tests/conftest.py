import asyncio
from datetime import datetime, timezone

import pytest

from timeledger.db.models import App, Base, Contributor, Devlog, ProviderProject, ShipRelease
from timeledger.db.engine import make_sessionmaker
from timeledger.db.store import RecordStore

IDENTITY = "U0TEST01"


def ts(epoch: int) -> datetime:
    return datetime.fromtimestamp(epoch, tz=timezone.utc)


async def _build(sessionmaker) -> None:
    async with sessionmaker() as session:
        connection = await session.connection()
        await connection.run_sync(Base.metadata.create_all)

        alice = Contributor(identity=IDENTITY, handle="alice", email="alice@example.dev")
        bob = Contributor(identity="U0TEST02", handle="bob")
        garden = App(name="Garden", members=[alice])
        comet = App(name="Comet", members=[alice, bob])
        orphan = App(name="Orphan", members=[bob])
        session.add_all([alice, bob, garden, comet, orphan])
        await session.flush()

        session.add_all(
            [
                ProviderProject(contributor_id=alice.id, app_id=garden.id, name="garden-web"),
                ProviderProject(contributor_id=alice.id, app_id=garden.id, name="garden-api"),
                ProviderProject(contributor_id=alice.id, app_id=garden.id, name=None),
                ProviderProject(contributor_id=alice.id, app_id=comet.id, name="comet"),
                ProviderProject(contributor_id=bob.id, app_id=comet.id, name="comet-bob"),
                Devlog(contributor_id=alice.id, app_id=garden.id, created_at=ts(150), content="first"),
                Devlog(contributor_id=alice.id, app_id=garden.id, created_at=None, content="undated"),
                ShipRelease(
                    contributor_id=alice.id,
                    app_id=garden.id,
                    created_at=ts(250),
                    change_summary="v1",
                    code_url="https://example.dev/garden",
                ),
                Devlog(contributor_id=alice.id, app_id=comet.id, created_at=ts(1000), content="c"),
                Devlog(contributor_id=bob.id, app_id=comet.id, created_at=ts(10), content="bob's"),
            ]
        )
        await session.commit()


@pytest.fixture
def store(tmp_path) -> RecordStore:
    """Record store on a temporary SQLite file.

    Alice (U0TEST01) is a member of Garden and Comet; Bob of Comet and Orphan.
    Garden: projects garden-web, garden-api; devlog at t=150, undated devlog,
    release at t=250. Comet: Alice's devlog at t=1000, Bob's devlog at t=10.
    """
    sessionmaker = make_sessionmaker(f"sqlite+aiosqlite:///{(tmp_path / 'store.db').as_posix()}")
    asyncio.run(_build(sessionmaker))
    return RecordStore(sessionmaker)
