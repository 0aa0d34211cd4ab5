import copy
import logging
from hospital_admin.core.errors import OverlayWriteError
from hospital_admin.platform.ports.durable_overlay import DurableOverlayPort
from hospital_admin.store.collection import KeyedLocks

log = logging.getLogger(__name__)

def overlay_key(entity: str, entity_id, subkey: str) -> str:
    return f"{entity}:{entity_id}:{subkey}"

class DurableOverlay:
    """
    Read-through / write-through tier in front of a DurableOverlayPort.

    Reads prefer the durable record, then the in-memory copy, then the
    caller's default. Writes hit the durable slot first and only then the
    in-memory copy, so memory is never ahead of storage; a failed durable
    write raises OverlayWriteError.
    """

    def __init__(self, port: DurableOverlayPort, locks: KeyedLocks | None = None):
        self.port = port
        self.locks = locks if locks is not None else KeyedLocks()
        self.memory: dict[str, dict] = {}

    async def open(self) -> None:
        await self.port.open()

    async def close(self) -> None:
        await self.port.close()

    async def read(self, key: str, default: dict | None = None) -> dict | None:
        durable = await self.port.get(key)
        if durable is not None:
            self.memory[key] = durable
            return copy.deepcopy(durable)
        if key in self.memory:
            return copy.deepcopy(self.memory[key])
        return copy.deepcopy(default) if default is not None else None

    async def _put(self, key: str, value: dict) -> None:
        try:
            await self.port.put(key, value)
        except Exception as e:
            log.exception(f"Durable write failed for {key}")
            raise OverlayWriteError(f"Could not persist {key}") from e
        self.memory[key] = copy.deepcopy(value)

    async def write(self, key: str, value: dict) -> dict:
        async with self.locks.hold("overlay", key):
            await self._put(key, value)
        return copy.deepcopy(value)

    async def merge(self, key: str, partial: dict, default: dict | None = None) -> dict:
        """Shallow-merge ``partial`` onto the current record and write it through."""
        async with self.locks.hold("overlay", key):
            current = await self.read(key, default) or {}
            current.update(copy.deepcopy(partial))
            await self._put(key, current)
            return copy.deepcopy(current)

    async def remove(self, key: str) -> bool:
        async with self.locks.hold("overlay", key):
            existed = key in self.memory or (await self.port.get(key)) is not None
            try:
                await self.port.delete(key)
            except Exception as e:
                log.exception(f"Durable delete failed for {key}")
                raise OverlayWriteError(f"Could not delete {key}") from e
            self.memory.pop(key, None)
            return existed

    async def keys(self, prefix: str = "") -> list[str]:
        durable = set(await self.port.keys(prefix))
        return sorted(durable | {k for k in self.memory if k.startswith(prefix)})
