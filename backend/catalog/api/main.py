from fastapi import APIRouter

from catalog.api.routes import directors, genres, movies, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(movies.router)
api_router.include_router(genres.router)
api_router.include_router(directors.router)
