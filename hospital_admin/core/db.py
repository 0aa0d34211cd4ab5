from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from .base import Base

def make_engine(dsn: str) -> AsyncEngine:
    return create_async_engine(dsn, pool_pre_ping=True)

def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def init_models(engine: AsyncEngine):
    # The overlay owns a single key/value table; no migrations for it.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
