import threading
import time
from collections.abc import Callable
from typing import Protocol

import redis

from catalog.exceptions.cache_exceptions import CacheBackendError

__all__ = [
    "CacheBackend",
    "MemoryCacheBackend",
    "RedisCacheBackend",
]


class CacheBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, ttl: int) -> None: ...

    def delete_namespace(self, namespace: str) -> int: ...


def _in_namespace(key: str, namespace: str) -> bool:
    return key == namespace or key.startswith(f"{namespace}:")


class MemoryCacheBackend:
    """Process-local cache with per-entry expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, ttl: int) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[key] = (now + ttl, value)

    def _purge_expired(self, now: float) -> None:
        # Caller holds the lock
        expired = [
            key for key, (expires_at, _) in self._entries.items() if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]

    def delete_namespace(self, namespace: str) -> int:
        with self._lock:
            keys = [key for key in self._entries if _in_namespace(key, namespace)]
            for key in keys:
                del self._entries[key]
            return len(keys)


class RedisCacheBackend:
    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url_parts(
        cls,
        *,
        host: str,
        port: int,
        password: str | None,
        db: int,
    ) -> "RedisCacheBackend":
        client = redis.Redis(
            host=host,
            port=port,
            password=password,
            db=db,
            decode_responses=True,
            socket_timeout=2,
            socket_connect_timeout=2,
        )
        return cls(client)

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)  # type: ignore[return-value]
        except redis.RedisError as e:
            raise CacheBackendError(f"Redis GET {key} failed: {e}") from e

    def set(self, key: str, value: str, ttl: int) -> None:
        try:
            self._client.set(key, value, ex=ttl)
        except redis.RedisError as e:
            raise CacheBackendError(f"Redis SET {key} failed: {e}") from e

    def delete_namespace(self, namespace: str) -> int:
        try:
            keys = [namespace, *self._client.scan_iter(match=f"{namespace}:*")]
            return int(self._client.delete(*keys))  # type: ignore[arg-type]
        except redis.RedisError as e:
            raise CacheBackendError(
                f"Redis delete of namespace {namespace} failed: {e}"
            ) from e
