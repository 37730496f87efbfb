from collections.abc import Mapping
from enum import Enum
from logging import getLogger
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from catalog.core.cache import CacheBackend, MemoryCacheBackend, RedisCacheBackend
from catalog.core.config import Settings
from catalog.core.enums import CacheNamespace, CacheTier, EntityKind
from catalog.exceptions.cache_exceptions import CacheBackendError

__all__ = [
    "MOVIE_NAMESPACES",
    "INVALIDATION_GRAPH",
    "NAMESPACE_TIERS",
    "build_cache_key",
    "CacheService",
]

M = TypeVar("M", bound=BaseModel)

MOVIE_NAMESPACES: tuple[CacheNamespace, ...] = (
    CacheNamespace.MOVIES_ALL,
    CacheNamespace.MOVIES_BY_GENRE,
    CacheNamespace.MOVIES_BY_DIRECTOR,
    CacheNamespace.MOVIES_POPULAR,
    CacheNamespace.MOVIES_SEARCH,
)

# Namespaces that hold stale data once an entity of the given kind changes.
# Movie listings embed genre and director data, so those cascade into movies.
INVALIDATION_GRAPH: Mapping[EntityKind, tuple[CacheNamespace, ...]] = {
    EntityKind.MOVIE: MOVIE_NAMESPACES,
    EntityKind.GENRE: (CacheNamespace.GENRES_ALL, *MOVIE_NAMESPACES),
    EntityKind.DIRECTOR: (CacheNamespace.DIRECTORS_ALL, *MOVIE_NAMESPACES),
}

NAMESPACE_TIERS: Mapping[CacheNamespace, CacheTier] = {
    CacheNamespace.MOVIES_ALL: CacheTier.SHORT,
    CacheNamespace.MOVIES_BY_GENRE: CacheTier.SHORT,
    CacheNamespace.MOVIES_BY_DIRECTOR: CacheTier.SHORT,
    CacheNamespace.MOVIES_SEARCH: CacheTier.SHORT,
    CacheNamespace.MOVIES_POPULAR: CacheTier.MEDIUM,
    CacheNamespace.GENRES_ALL: CacheTier.LONG,
    CacheNamespace.DIRECTORS_ALL: CacheTier.LONG,
}

logger = getLogger(__name__)


def build_cache_key(
    namespace: CacheNamespace | str,
    params: Mapping[str, Any] | None = None,
) -> str:
    """
    Build the key of a cache entry. Parameters are sorted by name so that the
    same parameter set always maps to the same key; None and empty values are
    left out.

    Examples:
        >>> build_cache_key(CacheNamespace.MOVIES_ALL, {"page": 1, "limit": 10})
        'movies:all:limit:10|page:1'
        >>> build_cache_key(CacheNamespace.GENRES_ALL)
        'genres:all'
    """
    base = namespace.value if isinstance(namespace, CacheNamespace) else namespace
    active = {
        name: value
        for name, value in (params or {}).items()
        if value is not None and value != ""
    }
    if not active:
        return base

    param_string = "|".join(
        f"{name}:{_format_param(active[name])}" for name in sorted(active)
    )
    return f"{base}:{param_string}"


def _format_param(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class CacheService:
    """
    Key-value cache in front of the listing queries.

    Backend failures never reach the caller: reads degrade to a miss, writes
    and invalidations are logged and skipped.
    """

    def __init__(self, backend: CacheBackend, ttls: Mapping[CacheTier, int]):
        self.backend = backend
        self.ttls = dict(ttls)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheService":
        backend: CacheBackend
        if settings.CACHE_BACKEND == "redis":
            backend = RedisCacheBackend.from_url_parts(
                host=settings.REDIS_HOST,
                port=settings.REDIS_PORT,
                password=settings.REDIS_PASSWORD,
                db=settings.REDIS_DB,
            )
            logger.info(
                "Using redis cache at %s:%s", settings.REDIS_HOST, settings.REDIS_PORT
            )
        else:
            backend = MemoryCacheBackend()
            logger.info("Using in-memory cache")
        return cls(
            backend,
            {
                CacheTier.SHORT: settings.CACHE_TTL_SHORT,
                CacheTier.MEDIUM: settings.CACHE_TTL_MEDIUM,
                CacheTier.LONG: settings.CACHE_TTL_LONG,
            },
        )

    def ttl_for(self, namespace: CacheNamespace) -> int:
        return self.ttls[NAMESPACE_TIERS[namespace]]

    def get(
        self,
        namespace: CacheNamespace,
        params: Mapping[str, Any] | None = None,
    ) -> str | None:
        key = build_cache_key(namespace, params)
        try:
            value = self.backend.get(key)
        except CacheBackendError:
            logger.warning("Cache read failed for %s, treating as miss", key, exc_info=True)
            return None
        logger.debug("Cache %s for %s", "hit" if value is not None else "miss", key)
        return value

    def set(
        self,
        namespace: CacheNamespace,
        value: str,
        ttl: int | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        key = build_cache_key(namespace, params)
        try:
            self.backend.set(key, value, ttl if ttl is not None else self.ttl_for(namespace))
        except CacheBackendError:
            logger.warning("Cache write failed for %s", key, exc_info=True)

    def get_model(
        self,
        namespace: CacheNamespace,
        model_type: type[M],
        params: Mapping[str, Any] | None = None,
    ) -> M | None:
        cached = self.get(namespace, params)
        if cached is None:
            return None
        try:
            return model_type.model_validate_json(cached)
        except PydanticValidationError:
            logger.warning(
                "Discarding unreadable cache entry for %s",
                build_cache_key(namespace, params),
            )
            return None

    def set_model(
        self,
        namespace: CacheNamespace,
        model: BaseModel,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        self.set(namespace, model.model_dump_json(), params=params)

    def invalidate_namespace(self, namespace: CacheNamespace) -> None:
        try:
            removed = self.backend.delete_namespace(namespace.value)
        except CacheBackendError:
            logger.warning(
                "Cache invalidation failed for %s, entries expire with their TTL",
                namespace.value,
                exc_info=True,
            )
            return
        logger.debug("Invalidated %s cache entries in %s", removed, namespace.value)

    def invalidate(self, entity: EntityKind) -> None:
        """Clear every namespace that depends on the given entity kind."""
        for namespace in INVALIDATION_GRAPH[entity]:
            self.invalidate_namespace(namespace)
