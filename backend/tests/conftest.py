from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from catalog.api.deps import get_cache_service, get_db, get_upload_service
from catalog.core.cache import MemoryCacheBackend
from catalog.core.db import init_db
from catalog.core.enums import CacheTier
from catalog.core.storage import LocalBackend, UploadConfig
from catalog.main import app
from catalog.services.cache import CacheService
from catalog.services.uploads import UploadService

from .fixtures.factories import *  # noqa: F403

MAX_TEST_UPLOAD_SIZE = 5 * 1024 * 1024


@pytest.fixture(scope="function")
def db_engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function", autouse=True)
def db_transaction(db_engine: Engine) -> Generator[Session, None, None]:
    session = Session(db_engine)

    def override_get_db() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db

    yield session

    session.close()
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def cache_service() -> CacheService:
    cache = CacheService(
        MemoryCacheBackend(),
        {CacheTier.SHORT: 300, CacheTier.MEDIUM: 900, CacheTier.LONG: 3600},
    )
    app.dependency_overrides[get_cache_service] = lambda: cache
    return cache


@pytest.fixture(scope="function")
def poster_dir(tmp_path: Path) -> Path:
    return tmp_path / "posters"


@pytest.fixture(scope="function")
def upload_service(poster_dir: Path) -> UploadService:
    uploads = UploadService(
        UploadConfig(
            backend=LocalBackend(directory=poster_dir, public_path="/uploads/posters"),
            max_file_size=MAX_TEST_UPLOAD_SIZE,
        )
    )
    app.dependency_overrides[get_upload_service] = lambda: uploads
    return uploads


@pytest.fixture(scope="function")
def client(
    cache_service: CacheService, upload_service: UploadService
) -> TestClient:
    # No context manager: the lifespan would set up the production database
    return TestClient(app)
