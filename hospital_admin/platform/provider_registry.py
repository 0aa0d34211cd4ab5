from hospital_admin.core.config import Settings, settings as default_settings
from hospital_admin.platform.ports.durable_overlay import DurableOverlayPort
from hospital_admin.platform.adapters.overlay_sql import SqlDurableOverlay
from hospital_admin.platform.adapters.overlay_redis import RedisDurableOverlay
from hospital_admin.platform.adapters.overlay_memory import MemoryDurableOverlay
from hospital_admin.platform.ports.event_bus import EventBusPort
from hospital_admin.platform.adapters.bus_noop import NoopEventBus
from hospital_admin.platform.adapters.bus_redis import RedisEventBus

class ProviderRegistry:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings

    def durable_overlay(self) -> DurableOverlayPort:
        prov = self.settings.OVERLAY_PROVIDER
        if prov == "redis":
            if not self.settings.REDIS_URL:
                raise RuntimeError("REDIS_URL not configured")
            return RedisDurableOverlay(self.settings.REDIS_URL, self.settings.REDIS_OVERLAY_PREFIX)
        if prov == "memory":
            return MemoryDurableOverlay()
        return SqlDurableOverlay(self.settings.OVERLAY_DSN)

    def event_bus(self) -> EventBusPort:
        prov = (self.settings.EVENT_BUS_PROVIDER or "noop").lower()
        if prov == "redis":
            return RedisEventBus(self.settings)
        return NoopEventBus()
