from fastapi import APIRouter

from movieshelf.api.routes import (
    movies,
    user_movies,
    utils,
)

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(movies.router)
api_router.include_router(user_movies.router)
