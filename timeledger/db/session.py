from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from timeledger.config import settings
from timeledger.db.engine import get_async_engine_options

engine = create_async_engine(settings.database_url, **get_async_engine_options(settings.database_url))
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
