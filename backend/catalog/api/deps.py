from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from catalog.core.config import settings
from catalog.core.db import engine
from catalog.core.storage import upload_config_from_settings
from catalog.services.cache import CacheService
from catalog.services.uploads import UploadService


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@lru_cache
def get_cache_service() -> CacheService:
    return CacheService.from_settings(settings)


@lru_cache
def get_upload_service() -> UploadService:
    return UploadService(upload_config_from_settings(settings))


SessionDep = Annotated[Session, Depends(get_db)]
CacheDep = Annotated[CacheService, Depends(get_cache_service)]
UploadDep = Annotated[UploadService, Depends(get_upload_service)]
