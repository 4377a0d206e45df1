"""Seed the record store with a demo contributor, two apps and their checkpoints."""

import asyncio
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from timeledger.db.models import App, Contributor, Devlog, ProviderProject, ShipRelease


DEMO_IDENTITY = "U0DEMO42"

# ── Demo neighborhood: one contributor, two apps ─────────────────────────────

DEMO_APPS = [
    {
        "name": "Sprout",
        "projects": ["sprout-web", "sprout-api"],
        "devlogs": [
            (datetime(2025, 6, 2, 18, 30, tzinfo=timezone.utc), "Got the garden grid rendering."),
            (datetime(2025, 6, 9, 21, 0, tzinfo=timezone.utc), "Watering schedule API."),
            (None, "Draft post that never got a timestamp."),
        ],
        "ships": [
            (
                datetime(2025, 6, 12, 16, 0, tzinfo=timezone.utc),
                "First playable release.",
                "https://github.com/example/sprout",
                "https://sprout.example.dev",
            ),
        ],
    },
    {
        "name": "Lanternfish",
        "projects": ["lanternfish"],
        "devlogs": [
            (datetime(2025, 6, 5, 12, 0, tzinfo=timezone.utc), "Shader experiments."),
        ],
        "ships": [],
    },
]


async def seed_demo(session: AsyncSession) -> None:
    """Create the demo contributor, apps, provider projects and checkpoints."""

    # Check if already seeded
    result = await session.execute(
        select(Contributor).where(Contributor.identity == DEMO_IDENTITY)
    )
    if result.scalar_one_or_none():
        print(f"Contributor {DEMO_IDENTITY} already exists, skipping seed.")
        return

    contributor = Contributor(identity=DEMO_IDENTITY, handle="demo", email="demo@example.dev")
    session.add(contributor)
    await session.flush()  # Get contributor.id

    for app_data in DEMO_APPS:
        app = App(name=app_data["name"], members=[contributor])
        session.add(app)
        await session.flush()

        for project_name in app_data["projects"]:
            session.add(
                ProviderProject(contributor_id=contributor.id, app_id=app.id, name=project_name)
            )
        for created_at, content in app_data["devlogs"]:
            session.add(
                Devlog(
                    contributor_id=contributor.id,
                    app_id=app.id,
                    created_at=created_at,
                    content=content,
                    review_status="pending",
                )
            )
        for created_at, summary, code_url, playable_url in app_data["ships"]:
            session.add(
                ShipRelease(
                    contributor_id=contributor.id,
                    app_id=app.id,
                    created_at=created_at,
                    change_summary=summary,
                    code_url=code_url,
                    playable_url=playable_url,
                )
            )

    await session.commit()
    print(f"Seeded {DEMO_IDENTITY} with {len(DEMO_APPS)} apps.")


async def main() -> None:
    from timeledger.db.session import async_session

    async with async_session() as session:
        await seed_demo(session)


if __name__ == "__main__":
    asyncio.run(main())
