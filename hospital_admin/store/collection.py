import asyncio
import copy
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterable
from hospital_admin.core.errors import NotFound

# Filter kinds, applied in this order
EXACT, SEARCH, RANGE = 0, 1, 2

@dataclass(frozen=True)
class Filter:
    kind: int
    test: Callable[[dict], bool]
    label: str = ""

def exact(field: str, value: Any) -> Filter:
    return Filter(EXACT, lambda r: r.get(field) == value, f"{field}={value}")

def matches(label: str, test: Callable[[dict], bool]) -> Filter:
    return Filter(EXACT, test, label)

def search(fields: Iterable[str], text: str) -> Filter:
    needle = text.lower()
    fields = tuple(fields)

    def test(r: dict) -> bool:
        for f in fields:
            v = r.get(f)
            if v is not None and needle in str(v).lower():
                return True
        return False
    return Filter(SEARCH, test, f"search={text}")

def in_range(field: str, start=None, end=None, key: Callable[[Any], Any] | None = None) -> Filter:
    conv = key or (lambda v: v)
    lo = conv(start) if start is not None else None
    hi = conv(end) if end is not None else None

    def test(r: dict) -> bool:
        v = r.get(field)
        if v is None:
            return False
        v = conv(v)
        if lo is not None and v < lo:
            return False
        if hi is not None and v > hi:
            return False
        return True
    return Filter(RANGE, test, f"{field} in [{start}, {end}]")

def sort_records(records: list[dict], sort: str | None) -> list[dict]:
    if not sort:
        return records
    reverse = sort.startswith("-")
    field = sort.lstrip("-+")
    present = [r for r in records if r.get(field) is not None]
    missing = [r for r in records if r.get(field) is None]
    present.sort(key=lambda r: (str(type(r[field])), r[field]), reverse=reverse)
    return present + missing


class KeyedLocks:
    """One asyncio.Lock per composite key; serialises work on the same entity."""

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        # holders plus waiters per key; the lock is dropped when this reaches zero
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, *parts):
        key = ":".join(str(p) for p in parts)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]


class Collection:
    """
    Insertion-ordered records of one entity type.

    Mutators never await, so each call is atomic on the event loop: two
    concurrent creates can never observe the same next id. Multi-step
    read-modify-write sequences that await in between must hold a KeyedLocks
    key for the entity.
    """

    def __init__(self, name: str, *, id_type: type = int):
        self.name = name
        self.id_type = id_type
        self._items: dict[Any, dict] = {}
        self._high_water = 0

    def key(self, record_id) -> Any:
        """Canonical form of an id as stored, e.g. "02" -> 2; NotFound if it cannot be one."""
        try:
            return self.id_type(record_id)
        except (TypeError, ValueError):
            raise NotFound(f"{self.name} {record_id!r} not found")

    def _numeric(self, key) -> int:
        try:
            return int(key)
        except (TypeError, ValueError):
            return 0

    def seed(self, records: Iterable[dict]) -> None:
        for r in records:
            key = self.key(r["id"])
            self._items[key] = copy.deepcopy({**r, "id": key})
            self._high_water = max(self._high_water, self._numeric(key))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, record_id) -> bool:
        try:
            return self.key(record_id) in self._items
        except NotFound:
            return False

    def all(self) -> list[dict]:
        return [copy.deepcopy(r) for r in self._items.values()]

    def find(self, record_id) -> dict | None:
        try:
            r = self._items.get(self.key(record_id))
        except NotFound:
            return None
        return copy.deepcopy(r) if r is not None else None

    def list(self, filters: Iterable[Filter] = (), sort: str | None = None) -> list[dict]:
        ordered = sorted(filters, key=lambda f: f.kind)
        out = []
        for r in self._items.values():
            if all(f.test(r) for f in ordered):
                out.append(copy.deepcopy(r))
        return sort_records(out, sort)

    def get(self, record_id) -> dict:
        r = self.find(record_id)
        if r is None:
            raise NotFound(f"{self.name} {record_id!r} not found")
        return r

    def next_id(self) -> Any:
        self._high_water = max([self._high_water, *(self._numeric(k) for k in self._items)]) + 1
        return self.id_type(self._high_water)

    def create(self, payload: dict | Callable[[Any, int], dict]) -> dict:
        """Assign the next id and insert. A callable payload receives (new_id, prior_count)."""
        new_id = self.next_id()
        record = payload(new_id, len(self._items)) if callable(payload) else dict(payload)
        record["id"] = new_id
        self._items[new_id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    def update(self, record_id, partial: dict) -> dict:
        key = self.key(record_id)
        current = self._items.get(key)
        if current is None:
            raise NotFound(f"{self.name} {record_id!r} not found")
        # shallow merge; None is stored as a value, not treated as "clear"
        changes = {k: copy.deepcopy(v) for k, v in partial.items() if k != "id"}
        current.update(changes)
        return copy.deepcopy(current)

    def delete(self, record_id) -> dict:
        key = self.key(record_id)
        if key not in self._items:
            raise NotFound(f"{self.name} {record_id!r} not found")
        return self._items.pop(key)
