import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable
from urllib.parse import parse_qsl, urlsplit

log = logging.getLogger(__name__)

@dataclass
class Request:
    method: str
    path: str
    query: dict[str, str] = field(default_factory=dict)
    body: Any = None
    params: dict[str, str] = field(default_factory=dict)

    def arg(self, name: str, default=None):
        value = self.query.get(name)
        return default if value in (None, "") else value

    def int_arg(self, name: str, default: int | None = None) -> int | None:
        value = self.arg(name)
        try:
            return int(value) if value is not None else default
        except ValueError:
            return default

@dataclass(frozen=True)
class Unrouted:
    """Returned, never raised, when no route accepts (method, path)."""
    method: str
    path: str

    def __bool__(self) -> bool:
        return False

@dataclass(frozen=True)
class FilePayload:
    """Opaque download body; its bytes are a formatting concern of the caller."""
    filename: str
    media_type: str
    content: bytes

Handler = Callable[..., Awaitable[Any]]

def split_path(path: str) -> list[str]:
    return [s for s in path.split("/") if s]

def _is_var(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")

@dataclass
class Route:
    methods: frozenset[str]
    pattern: str
    handler: Handler
    segments: list[str] = field(init=False)

    def __post_init__(self):
        self.segments = split_path(self.pattern)

    @property
    def rank(self) -> tuple[int, int, int]:
        """Sort key; lower is tried first."""
        prefix = 0
        for s in self.segments:
            if _is_var(s):
                break
            prefix += 1
        literals = sum(1 for s in self.segments if not _is_var(s))
        last_var = 1 if self.segments and _is_var(self.segments[-1]) else 0
        return (-prefix, -literals, last_var)

    def match(self, method: str, parts: list[str]) -> dict[str, str] | None:
        if method not in self.methods or len(parts) != len(self.segments):
            return None
        params = {}
        for seg, part in zip(self.segments, parts):
            if _is_var(seg):
                params[seg[1:-1]] = part
            elif seg != part:
                return None
        return params


class RouteGroup:
    """Collects routes for one domain module; mounted into a RouteTable."""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix.rstrip("/")
        self.routes: list[Route] = []

    def route(self, methods: Iterable[str], pattern: str):
        def decorator(fn: Handler) -> Handler:
            self.routes.append(Route(frozenset(m.upper() for m in methods), self.prefix + pattern, fn))
            return fn
        return decorator

    def get(self, pattern: str):
        return self.route(["GET"], pattern)

    def post(self, pattern: str):
        return self.route(["POST"], pattern)

    def put(self, pattern: str):
        return self.route(["PUT"], pattern)

    def delete(self, pattern: str):
        return self.route(["DELETE"], pattern)

    def update(self, pattern: str):
        return self.route(["PUT", "PATCH"], pattern)


class RouteTable:
    def __init__(self):
        self._routes: list[Route] = []
        self._ordered: list[Route] | None = None

    def include(self, group: RouteGroup) -> None:
        self._routes.extend(group.routes)
        self._ordered = None

    def add(self, methods: Iterable[str], pattern: str, handler: Handler) -> Route:
        r = Route(frozenset(m.upper() for m in methods), pattern, handler)
        self._routes.append(r)
        self._ordered = None
        return r

    @property
    def routes(self) -> list[Route]:
        if self._ordered is None:
            # sorted() is stable, so equal ranks keep registration order
            self._ordered = sorted(self._routes, key=lambda r: r.rank)
        return self._ordered

    def resolve(self, method: str, path: str) -> tuple[Route, dict[str, str]] | Unrouted:
        method = method.upper()
        parts = split_path(path)
        for r in self.routes:
            params = r.match(method, parts)
            if params is not None:
                return r, params
        return Unrouted(method, path)


class Dispatcher:
    """Turns a logical (method, path, query, body) request into a handler call."""

    def __init__(self, table: RouteTable, store, prefix: str = "/api"):
        self.table = table
        self.store = store
        self.prefix = prefix.rstrip("/")

    def _strip(self, path: str) -> str:
        if self.prefix and (path == self.prefix or path.startswith(self.prefix + "/")):
            path = path[len(self.prefix):]
        return path or "/"

    async def dispatch(self, method: str, path: str, query: dict | None = None, body: Any = None):
        url = urlsplit(path)
        path = self._strip(url.path)
        q = dict(parse_qsl(url.query, keep_blank_values=True))
        q.update({k: str(v) for k, v in (query or {}).items() if v is not None})

        resolved = self.table.resolve(method, path)
        if isinstance(resolved, Unrouted):
            log.info(f"Unrouted: {method.upper()} {path}")
            return resolved
        route, params = resolved
        start = time.time()
        req = Request(method=method.upper(), path=path, query=q, body=body, params=params)
        try:
            return await route.handler(req, self.store)
        finally:
            log.info(f"Routed: {req.method} {path} -> {route.pattern} ({(time.time() - start) * 1000:.2f}ms)")
