import json
import logging
from redis import asyncio as aioredis
from hospital_admin.platform.ports.durable_overlay import DurableOverlayPort

log = logging.getLogger("overlay.redis")

class RedisDurableOverlay(DurableOverlayPort):
    def __init__(self, url: str, namespace: str = "hospital-admin"):
        self.url = url
        self.namespace = namespace
        self.redis = None

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def open(self) -> None:
        """Connect to Redis (called when the store opens)."""
        if self.redis is None:
            self.redis = await aioredis.from_url(self.url, encoding="utf-8", decode_responses=True)

    async def close(self) -> None:
        if self.redis:
            await self.redis.aclose()
        self.redis = None

    async def get(self, key: str) -> dict | None:
        data = await self.redis.get(self._key(key))
        if data:
            return json.loads(data)
        return None

    async def put(self, key: str, value: dict) -> None:
        await self.redis.set(self._key(key), json.dumps(value))

    async def delete(self, key: str) -> None:
        await self.redis.delete(self._key(key))

    async def keys(self, prefix: str = "") -> list[str]:
        strip = len(self.namespace) + 1
        found = [k[strip:] async for k in self.redis.scan_iter(match=f"{self._key(prefix)}*")]
        return sorted(found)
