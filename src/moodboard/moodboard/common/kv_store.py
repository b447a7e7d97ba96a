from __future__ import annotations

import json
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

import redis


class KeyValueStore(Protocol):
    """Ephemeral key-value storage with per-key expiry.

    Values must be JSON-serialisable so the in-memory store and a shared
    cache behave the same.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        raise NotImplementedError

    def expire(self, key: str) -> None:
        """Drop the key immediately."""

        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    """Per-process store; expired entries are dropped lazily on access and on purge()."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._data: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            expires_at, value = item
            if self._clock() >= expires_at:
                del self._data[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._data[key] = (self._clock() + float(ttl_seconds), value)

    def expire(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def purge(self) -> int:
        now = self._clock()
        with self._lock:
            stale = [k for k, (expires_at, _) in self._data.items() if now >= expires_at]
            for k in stale:
                del self._data[k]
        return len(stale)


class RedisKeyValueStore(KeyValueStore):
    """Shared store for multi-process deployments (JSON values, SET ... EX)."""

    def __init__(self, client: Any, *, prefix: str = "moodboard:"):
        self._redis = client
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str, *, prefix: str = "moodboard:") -> "RedisKeyValueStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Optional[Any]:
        raw = self._redis.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return None

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        # Redis EX takes whole seconds; PX keeps sub-second TTLs exact.
        self._redis.set(self._key(key), json.dumps(value), px=max(1, int(float(ttl_seconds) * 1000)))

    def expire(self, key: str) -> None:
        self._redis.delete(self._key(key))


def build_kv_store(backend: str, *, redis_url: Optional[str] = None) -> KeyValueStore:
    backend = (backend or "memory").strip().lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "redis":
        if not redis_url:
            raise ValueError("REDIS_URL is required when TYPING_STORE=redis")
        return RedisKeyValueStore.from_url(redis_url)
    raise ValueError(f"Unknown key-value store backend: {backend!r}")
