from sqlalchemy import pool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


def get_async_engine_options(database_url: str) -> dict:
    options: dict = {"echo": False}

    if database_url.startswith("postgresql+asyncpg") and "pooler.supabase.com" in database_url:
        options["poolclass"] = pool.NullPool
        options["connect_args"] = {"statement_cache_size": 0}
    elif database_url.startswith("sqlite+aiosqlite"):
        # aiosqlite connections are bound to the loop that opened them
        options["poolclass"] = pool.NullPool

    return options


def make_sessionmaker(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Build an engine and sessionmaker for an explicit database URL."""
    engine = create_async_engine(database_url, **get_async_engine_options(database_url))
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
