import copy
from hospital_admin.platform.ports.durable_overlay import DurableOverlayPort

class MemoryDurableOverlay(DurableOverlayPort):
    """Process-local stand-in; survives store re-creation but not a restart."""

    def __init__(self):
        self.data: dict[str, dict] = {}

    async def open(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def get(self, key: str) -> dict | None:
        value = self.data.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def put(self, key: str, value: dict) -> None:
        self.data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self.data if k.startswith(prefix))
