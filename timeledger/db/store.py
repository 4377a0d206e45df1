"""Read-only queries against the contributor/app record store."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from timeledger.db.models import App, Contributor, Devlog, ProviderProject, ShipRelease
from timeledger.errors import AppNotFound, IdentityNotFound


class RecordStore:
    """Query contributors, apps, provider projects, devlogs and releases.

    Every method opens its own session so concurrent callers never share one.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession] | None = None):
        if sessionmaker is None:
            from timeledger.db.session import async_session

            sessionmaker = async_session
        self.sessionmaker = sessionmaker

    async def get_contributor(self, identity: str) -> Contributor:
        async with self.sessionmaker() as session:
            result = await session.execute(
                select(Contributor).where(Contributor.identity == identity)
            )
            contributor = result.scalar_one_or_none()
        if contributor is None:
            raise IdentityNotFound(identity)
        return contributor

    async def get_app(self, app_name: str, identity: str | None = None) -> App:
        async with self.sessionmaker() as session:
            result = await session.execute(select(App).where(App.name == app_name))
            app = result.scalar_one_or_none()
        if app is None:
            raise AppNotFound(app_name, identity=identity)
        return app

    async def list_member_apps(self, identity: str) -> list[str]:
        """Names of every app the contributor is a member of, sorted."""
        async with self.sessionmaker() as session:
            result = await session.execute(
                select(App.name)
                .join(App.members)
                .where(Contributor.identity == identity)
                .order_by(App.name)
            )
            return list(result.scalars().all())

    async def list_project_names(self, identity: str, app_name: str) -> list[str]:
        """Provider project names tied to (identity, app), skipping unnamed ones."""
        async with self.sessionmaker() as session:
            result = await session.execute(
                select(ProviderProject.name)
                .join(ProviderProject.contributor)
                .join(ProviderProject.app)
                .where(Contributor.identity == identity)
                .where(App.name == app_name)
                .order_by(ProviderProject.id)
            )
            return [name for name in result.scalars().all() if name]

    async def list_devlogs(self, identity: str, app_name: str) -> list[Devlog]:
        async with self.sessionmaker() as session:
            result = await session.execute(
                select(Devlog)
                .join(Contributor, Devlog.contributor_id == Contributor.id)
                .join(App, Devlog.app_id == App.id)
                .where(Contributor.identity == identity)
                .where(App.name == app_name)
                .order_by(Devlog.id)
            )
            return list(result.scalars().all())

    async def list_ships(self, identity: str, app_name: str) -> list[ShipRelease]:
        async with self.sessionmaker() as session:
            result = await session.execute(
                select(ShipRelease)
                .join(Contributor, ShipRelease.contributor_id == Contributor.id)
                .join(App, ShipRelease.app_id == App.id)
                .where(Contributor.identity == identity)
                .where(App.name == app_name)
                .order_by(ShipRelease.id)
            )
            return list(result.scalars().all())
