import json
import logging
from hospital_admin.platform.ports.event_bus import EventBusPort

log = logging.getLogger("bus.noop")

class NoopEventBus(EventBusPort):
    def __init__(self):
        self.published: list[dict] = []

    async def publish(self, topic: str, key: str, value: dict, headers: dict | None = None) -> None:
        self.published.append({"topic": topic, "key": key, "value": value, "headers": headers or {}})
        log.info(f"[NOOP BUS] topic={topic} key={key} value={json.dumps(value, default=str)} headers={headers or {}}")

    async def close(self) -> None:
        return None
