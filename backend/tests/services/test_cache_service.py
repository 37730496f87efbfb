import pytest
from pytest_mock import MockerFixture

from catalog.core.cache import MemoryCacheBackend
from catalog.core.enums import CacheNamespace, CacheTier, EntityKind, SortOrder
from catalog.exceptions.cache_exceptions import CacheBackendError
from catalog.schemas.page import GenresPage
from catalog.services.cache import (
    INVALIDATION_GRAPH,
    MOVIE_NAMESPACES,
    NAMESPACE_TIERS,
    CacheService,
    build_cache_key,
)

TTLS = {CacheTier.SHORT: 300, CacheTier.MEDIUM: 900, CacheTier.LONG: 3600}


def test_build_cache_key_without_params():
    assert build_cache_key(CacheNamespace.GENRES_ALL) == "genres:all"
    assert build_cache_key(CacheNamespace.GENRES_ALL, {}) == "genres:all"


def test_build_cache_key_is_order_independent():
    first = build_cache_key(
        CacheNamespace.MOVIES_SEARCH, {"page": 1, "limit": 10, "search": "heat"}
    )
    second = build_cache_key(
        CacheNamespace.MOVIES_SEARCH, {"search": "heat", "limit": 10, "page": 1}
    )

    assert first == second == "movies:search:limit:10|page:1|search:heat"


def test_build_cache_key_skips_empty_params():
    key = build_cache_key(
        CacheNamespace.MOVIES_ALL,
        {"page": 2, "search": None, "genre": "", "order": SortOrder.ASC},
    )

    assert key == "movies:all:order:ASC|page:2"


def test_every_namespace_has_a_tier():
    assert set(NAMESPACE_TIERS) == set(CacheNamespace)
    assert NAMESPACE_TIERS[CacheNamespace.GENRES_ALL] == CacheTier.LONG
    assert NAMESPACE_TIERS[CacheNamespace.MOVIES_POPULAR] == CacheTier.MEDIUM
    assert NAMESPACE_TIERS[CacheNamespace.MOVIES_ALL] == CacheTier.SHORT


def test_invalidation_graph_cascades_into_movies():
    assert set(INVALIDATION_GRAPH[EntityKind.MOVIE]) == set(MOVIE_NAMESPACES)
    assert set(INVALIDATION_GRAPH[EntityKind.GENRE]) == {
        CacheNamespace.GENRES_ALL,
        *MOVIE_NAMESPACES,
    }
    assert set(INVALIDATION_GRAPH[EntityKind.DIRECTOR]) == {
        CacheNamespace.DIRECTORS_ALL,
        *MOVIE_NAMESPACES,
    }
    # Every namespace is cleared by at least one kind of write
    covered = {ns for namespaces in INVALIDATION_GRAPH.values() for ns in namespaces}
    assert covered == set(CacheNamespace)


def test_set_uses_tier_ttl(mocker: MockerFixture):
    backend = mocker.MagicMock()
    cache = CacheService(backend, TTLS)

    cache.set(CacheNamespace.MOVIES_POPULAR, "x")
    cache.set(CacheNamespace.DIRECTORS_ALL, "y", params={"page": 1})
    cache.set(CacheNamespace.MOVIES_ALL, "z", ttl=5)

    assert backend.set.call_args_list == [
        mocker.call("movies:popular", "x", 900),
        mocker.call("directors:all:page:1", "y", 3600),
        mocker.call("movies:all", "z", 5),
    ]


def test_get_treats_backend_failure_as_miss(mocker: MockerFixture):
    backend = mocker.MagicMock()
    backend.get.side_effect = CacheBackendError("down")
    cache = CacheService(backend, TTLS)

    assert cache.get(CacheNamespace.MOVIES_ALL, {"page": 1}) is None


def test_set_and_invalidate_swallow_backend_failures(mocker: MockerFixture):
    backend = mocker.MagicMock()
    backend.set.side_effect = CacheBackendError("down")
    backend.delete_namespace.side_effect = CacheBackendError("down")
    cache = CacheService(backend, TTLS)

    cache.set(CacheNamespace.MOVIES_ALL, "x")
    cache.invalidate(EntityKind.GENRE)

    assert backend.delete_namespace.call_count == len(INVALIDATION_GRAPH[EntityKind.GENRE])


def test_model_round_trip_and_unreadable_entry():
    backend = MemoryCacheBackend()
    cache = CacheService(backend, TTLS)
    page = GenresPage(data=[], total=0, page=1, limit=10)

    cache.set_model(CacheNamespace.GENRES_ALL, page, {"page": 1})
    assert cache.get_model(CacheNamespace.GENRES_ALL, GenresPage, {"page": 1}) == page

    backend.set("genres:all:page:2", "not json", 60)
    assert cache.get_model(CacheNamespace.GENRES_ALL, GenresPage, {"page": 2}) is None


@pytest.mark.parametrize("entity", list(EntityKind))
def test_invalidate_clears_dependent_namespaces(entity: EntityKind):
    cache = CacheService(MemoryCacheBackend(), TTLS)
    for namespace in CacheNamespace:
        cache.set(namespace, "cached", params={"page": 1})

    cache.invalidate(entity)

    for namespace in CacheNamespace:
        value = cache.get(namespace, {"page": 1})
        if namespace in INVALIDATION_GRAPH[entity]:
            assert value is None
        else:
            assert value == "cached"
