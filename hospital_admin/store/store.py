import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Callable, Coroutine
from hospital_admin.core.config import Settings, settings as default_settings
from hospital_admin.platform.ports.durable_overlay import DurableOverlayPort
from hospital_admin.platform.ports.event_bus import EventBusPort
from hospital_admin.platform.provider_registry import ProviderRegistry
from hospital_admin.store import seed as demo
from hospital_admin.store.collection import Collection, KeyedLocks
from hospital_admin.store.overlay import DurableOverlay

log = logging.getLogger(__name__)

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class ResourceStore:
    """
    Owns every collection, the durable overlay and the event bus.

    One instance per app (or per test). Memory-tier state lives on the
    instance and is rebuilt from the seed on construction; anything written
    through ``overlay`` survives as long as the durable backend does.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        overlay_port: DurableOverlayPort | None = None,
        bus: EventBusPort | None = None,
        seed: bool | None = None,
        clock: Callable[[], datetime] | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or default_settings
        registry = ProviderRegistry(self.settings)
        self.locks = KeyedLocks()
        self.overlay = DurableOverlay(overlay_port or registry.durable_overlay(), self.locks)
        self.bus = bus or registry.event_bus()
        self.clock = clock or _utcnow
        self.rng = rng or random.Random()
        self._tasks: set[asyncio.Task] = set()

        self.hospitals = Collection("hospital", id_type=str)
        self.patients = Collection("patient")
        self.clinicians = Collection("clinician")
        self.staff_roles = Collection("staff role", id_type=str)
        self.appointments = Collection("appointment")
        self.templates = Collection("template")
        self.outbound_queue = Collection("outbound message")
        self.notifications = Collection("notification")

        # per-parent sub-records, memory tier only
        self.patient_billing: dict[int, dict] = {}
        self.health_records: dict[int, dict] = {}
        self.staff_documents: dict[int, list[dict]] = {}

        if self.settings.SEED_DEMO_DATA if seed is None else seed:
            demo.seed_demo_data(self)

    def today(self):
        return self.clock().date()

    def now_iso(self) -> str:
        return self.clock().isoformat()

    async def delay(self, ms: float) -> None:
        scale = self.settings.SIMULATED_LATENCY_SCALE
        if scale > 0 and ms > 0:
            await asyncio.sleep(ms * scale / 1000)

    def spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for background work spawned so far."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def publish(self, topic: str, key, value: dict) -> None:
        try:
            await self.bus.publish(topic, str(key), value)
        except Exception:
            # events are advisory; the write they describe already happened
            log.exception(f"Failed to publish {topic} for {key}")

    async def open(self) -> None:
        await self.overlay.open()
        log.info(f"Resource store open: {len(self.patients)} patients, {len(self.clinicians)} clinicians")

    async def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        await self.overlay.close()
        await self.bus.close()
