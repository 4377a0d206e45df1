"""Create the record-store schema and load demo records in one command.

Modes:
- Default: uses DATABASE_URL (Postgres via asyncpg)
- Local: SQLite mode (`--local`) for offline development
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bootstrap timeledger record store")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Use local SQLite DB (offline dev mode)",
    )
    parser.add_argument(
        "--sqlite-path",
        default="timeledger_local.db",
        help="SQLite file path used with --local (default: timeledger_local.db)",
    )
    return parser.parse_args()


def configure_local_database(sqlite_path: str) -> Path:
    db_path = Path(sqlite_path).resolve()
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{db_path.as_posix()}"
    return db_path


def run_schema_create() -> None:
    from sqlalchemy.ext.asyncio import create_async_engine

    from timeledger.config import settings
    from timeledger.db.engine import get_async_engine_options
    from timeledger.db.models import Base

    async def _create() -> None:
        engine = create_async_engine(
            settings.database_url, **get_async_engine_options(settings.database_url)
        )
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(_create())


def run_seed() -> None:
    from timeledger.db.seed import main as seed_main

    asyncio.run(seed_main())


if __name__ == "__main__":
    args = parse_args()
    try:
        if args.local:
            db_path = configure_local_database(args.sqlite_path)
            print(f"Using local SQLite DB: {db_path}")
        run_schema_create()
        run_seed()
        print("Database bootstrap complete.")
    except Exception as exc:
        print(f"Database bootstrap failed: {exc}")
        raise
