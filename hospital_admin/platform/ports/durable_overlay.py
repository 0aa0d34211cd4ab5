from typing import Protocol, runtime_checkable

@runtime_checkable
class DurableOverlayPort(Protocol):
    async def open(self) -> None: ...
    async def close(self) -> None: ...
    async def get(self, key: str) -> dict | None: ...
    async def put(self, key: str, value: dict) -> None: ...
    async def delete(self, key: str) -> None: ...
    async def keys(self, prefix: str = "") -> list[str]: ...
