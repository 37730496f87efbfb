from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from catalog.api.deps import get_db_context
from catalog.api.main import api_router
from catalog.core.config import settings
from catalog.core.db import engine, init_db
from catalog.exceptions.handlers import register_exception_handlers
from catalog.logging_.logger import setup_logger
from catalog.services.seed import seed_catalog


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger = setup_logger()
    init_db(engine)
    if settings.SEED_ON_STARTUP:
        with get_db_context() as session:
            seed_catalog(session=session)
    logger.info(f"{settings.PROJECT_NAME} started in {settings.ENVIRONMENT} mode")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

register_exception_handlers(app)

if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).strip("/") for origin in settings.CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.API_V1_STR)

# Local posters are served from disk, object storage URLs point elsewhere
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=Path(settings.UPLOAD_DIR), check_dir=False),
    name="posters",
)
