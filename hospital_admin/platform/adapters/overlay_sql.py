import asyncio
import logging
from sqlalchemy import JSON, String, select, delete
from sqlalchemy.orm import Mapped, mapped_column
from hospital_admin.core.base import Base, TimestampedMixin
from hospital_admin.core.db import make_engine, make_sessionmaker, init_models
from hospital_admin.platform.ports.durable_overlay import DurableOverlayPort

log = logging.getLogger("overlay.sql")

class OverlayEntry(Base, TimestampedMixin):
    __tablename__ = "overlay_entry"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON)

class SqlDurableOverlay(DurableOverlayPort):
    """Key/value rows in a single table; SQLite (aiosqlite) by default."""

    def __init__(self, dsn: str):
        self.dsn = dsn
        self.engine = None
        self.sessions = None
        # SQLite allows one writer at a time
        self._write_lock = asyncio.Lock()

    async def open(self) -> None:
        if self.engine is not None:
            return
        self.engine = make_engine(self.dsn)
        self.sessions = make_sessionmaker(self.engine)
        await init_models(self.engine)
        log.info("SQL overlay ready dsn=%s", self.dsn)

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
        self.engine = None
        self.sessions = None

    async def get(self, key: str) -> dict | None:
        async with self.sessions() as session:
            obj = await session.get(OverlayEntry, key)
            return obj.value if obj else None

    async def put(self, key: str, value: dict) -> None:
        async with self._write_lock:
            async with self.sessions() as session:
                obj = await session.get(OverlayEntry, key)
                if obj:
                    obj.value = value
                else:
                    session.add(OverlayEntry(key=key, value=value))
                await session.commit()

    async def delete(self, key: str) -> None:
        async with self._write_lock:
            async with self.sessions() as session:
                await session.execute(delete(OverlayEntry).where(OverlayEntry.key == key))
                await session.commit()

    async def keys(self, prefix: str = "") -> list[str]:
        async with self.sessions() as session:
            q = select(OverlayEntry.key).order_by(OverlayEntry.key.asc())
            if prefix:
                q = q.where(OverlayEntry.key.startswith(prefix, autoescape=True))
            res = await session.execute(q)
            return list(res.scalars().all())
