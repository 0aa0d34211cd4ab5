import random
from datetime import datetime, timedelta, timezone

import pytest

from hospital_admin.core.config import settings as base_settings
from hospital_admin.platform.adapters.bus_noop import NoopEventBus
from hospital_admin.platform.adapters.overlay_memory import MemoryDurableOverlay
from hospital_admin.store.store import ResourceStore

START = datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

class Clock:
    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)

@pytest.fixture
def settings():
    return base_settings.model_copy(update={
        "SIMULATED_LATENCY_SCALE": 0,
        "OVERLAY_PROVIDER": "memory",
        "EVENT_BUS_PROVIDER": "noop",
    })

@pytest.fixture
def clock():
    return Clock()

@pytest.fixture
def overlay_port():
    return MemoryDurableOverlay()

@pytest.fixture
def bus():
    return NoopEventBus()

@pytest.fixture
def make_store(settings, clock, overlay_port, bus):
    def _make(**kwargs):
        kwargs.setdefault("overlay_port", overlay_port)
        kwargs.setdefault("bus", bus)
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("rng", random.Random(7))
        return ResourceStore(settings, **kwargs)
    return _make

@pytest.fixture
def store(make_store):
    return make_store()
