from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from movieshelf.api.main import api_router
from movieshelf.core.config import settings
from movieshelf.core.db import engine, init_db
from movieshelf.exceptions.handlers import register_exception_handlers
from movieshelf.logging_ import setup_logger
from movieshelf.omdb.client import create_http_session

logger = setup_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if engine.dialect.name == "sqlite":
        with Session(engine) as session:
            init_db(session)
    app.state.http_session = create_http_session()
    logger.info(f"{settings.PROJECT_NAME} started")
    try:
        yield
    finally:
        await app.state.http_session.close()
        logger.info(f"{settings.PROJECT_NAME} stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"name": settings.PROJECT_NAME, "version": settings.VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("movieshelf.main:app", host="0.0.0.0", port=4000)
