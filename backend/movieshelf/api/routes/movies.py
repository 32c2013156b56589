from typing import Any

from fastapi import APIRouter, Query

from movieshelf.api.deps import HttpSessionDep, SessionDep
from movieshelf.schemas.movie import MovieSummary
from movieshelf.services import movies as movies_service

router = APIRouter(tags=["movies"])


@router.get("/search", response_model=list[MovieSummary])
async def search_movies(
    session: SessionDep,
    http_session: HttpSessionDep,
    query: str = Query(""),
    username: str | None = Query(None),
) -> list[MovieSummary]:
    return await movies_service.search_movies(
        session=session,
        http_session=http_session,
        query=query,
        username=username,
    )


@router.get("/movie/{id}")
async def read_movie(
    *,
    http_session: HttpSessionDep,
    id: str,
) -> dict[str, Any]:
    return await movies_service.get_movie_detail(
        http_session=http_session,
        movie_id=id,
    )
