"""Server-side session storage.

A session is identified by an opaque random id sent to the browser as a
cookie. Everything else (authenticated user, CSRF token) stays on the server
in a pluggable backend: an in-process dict for development and tests, or
Redis when several workers share sessions.
"""

import json
import logging
import secrets
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

import redis

from minicms.config import Settings

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated user as cached in the session."""

    id: int
    name: str


@dataclass
class SessionContext:
    """Explicit per-request session state, passed to every service that needs it."""

    session_id: str
    user_id: int | None = None
    user_name: str | None = None
    csrf_token: str | None = None
    # set when the id changed and the cookie has to be (re)sent
    is_new: bool = field(default=False, compare=False)
    destroyed: bool = field(default=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "csrf_token": self.csrf_token,
        }


class SessionBackend(Protocol):
    """Key/value storage for session payloads."""

    def get(self, session_id: str) -> dict[str, Any] | None: ...

    def set(self, session_id: str, data: dict[str, Any], ttl_seconds: int) -> None: ...

    def delete(self, session_id: str) -> None: ...


class MemorySessionBackend:
    """In-process backend. Only valid for a single worker."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._items: dict[str, tuple[float, dict[str, Any]]] = {}

    def get(self, session_id: str) -> dict[str, Any] | None:
        with self._lock:
            item = self._items.get(session_id)
            if item is None:
                return None
            expires_at, data = item
            if expires_at <= self._clock():
                del self._items[session_id]
                return None
            return dict(data)

    def set(self, session_id: str, data: dict[str, Any], ttl_seconds: int) -> None:
        with self._lock:
            now = self._clock()
            expired = [key for key, (expires_at, _) in self._items.items() if expires_at <= now]
            for key in expired:
                del self._items[key]
            self._items[session_id] = (now + ttl_seconds, dict(data))

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._items.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class RedisSessionBackend:
    """Redis backend storing JSON payloads with an expiry."""

    def __init__(self, client: redis.Redis, prefix: str = "session:") -> None:
        self.client = client
        self.prefix = prefix

    def _key(self, session_id: str) -> str:
        return f"{self.prefix}{session_id}"

    def get(self, session_id: str) -> dict[str, Any] | None:
        raw = self.client.get(self._key(session_id))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable session payload for {self._key(session_id)}")
            return None

    def set(self, session_id: str, data: dict[str, Any], ttl_seconds: int) -> None:
        self.client.set(self._key(session_id), json.dumps(data), ex=ttl_seconds)

    def delete(self, session_id: str) -> None:
        self.client.delete(self._key(session_id))


class SessionStore:
    """Lifecycle operations on sessions.

    Each session is only mutated by the request presenting its id. Two
    concurrent requests on the same id are last-writer-wins.
    """

    def __init__(self, backend: SessionBackend, max_age_seconds: int = 28800) -> None:
        self.backend = backend
        self.max_age_seconds = max_age_seconds

    def create(self) -> SessionContext:
        """Allocate a new anonymous session. It is stored on its first save."""
        return SessionContext(session_id=new_session_id(), is_new=True)

    def load(self, session_id: str | None) -> SessionContext | None:
        """Resolve a cookie value. Unknown, expired or destroyed ids give None."""
        if not session_id:
            return None
        data = self.backend.get(session_id)
        if data is None:
            return None
        return SessionContext(
            session_id=session_id,
            user_id=data.get("user_id"),
            user_name=data.get("user_name"),
            csrf_token=data.get("csrf_token"),
        )

    def save(self, ctx: SessionContext) -> None:
        if ctx.destroyed:
            return
        self.backend.set(ctx.session_id, ctx.to_dict(), self.max_age_seconds)

    def regenerate(self, ctx: SessionContext) -> SessionContext:
        """Move the session to a fresh id and delete the old one."""
        old_id = ctx.session_id
        ctx.session_id = new_session_id()
        ctx.is_new = True
        self.save(ctx)
        self.backend.delete(old_id)
        return ctx

    def authenticate(self, ctx: SessionContext, user_id: int, user_name: str) -> None:
        ctx.user_id = user_id
        ctx.user_name = user_name
        self.save(ctx)

    def is_authenticated(self, ctx: SessionContext | None) -> bool:
        return ctx is not None and not ctx.destroyed and ctx.user_id is not None

    def current_user(self, ctx: SessionContext | None) -> CurrentUser | None:
        if not self.is_authenticated(ctx):
            return None
        return CurrentUser(id=ctx.user_id, name=ctx.user_name or "")

    def destroy(self, ctx: SessionContext) -> None:
        """Drop all session state. The old id resolves to nothing afterwards."""
        self.backend.delete(ctx.session_id)
        ctx.user_id = None
        ctx.user_name = None
        ctx.csrf_token = None
        ctx.destroyed = True


def build_session_store(settings: Settings) -> SessionStore:
    """Create the session store selected by SESSION_BACKEND."""
    if settings.session_backend == "redis":
        backend: SessionBackend = RedisSessionBackend(redis.from_url(settings.redis_url))
    elif settings.session_backend == "memory":
        backend = MemorySessionBackend()
    else:
        raise ValueError(f"Unknown session backend: {settings.session_backend}")
    logger.info(f"Using {settings.session_backend} session backend")
    return SessionStore(backend, max_age_seconds=settings.session_max_age_seconds)
