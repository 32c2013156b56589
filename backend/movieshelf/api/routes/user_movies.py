from fastapi import APIRouter, Query

from movieshelf.api.deps import SessionDep
from movieshelf.schemas.message import SuccessResponse
from movieshelf.schemas.user_movie import (
    UserMovieDeleteRequest,
    UserMoviePublic,
    UserMovieRequest,
)
from movieshelf.services import user_movies as user_movies_service

router = APIRouter(prefix="/user-movies", tags=["user-movies"])


@router.get("", response_model=list[UserMoviePublic])
def read_user_movies(
    session: SessionDep,
    username: str | None = Query(None),
) -> list[UserMoviePublic]:
    return user_movies_service.get_user_movies(session=session, username=username)


@router.post("", response_model=SuccessResponse)
def add_user_movie(
    session: SessionDep,
    body: UserMovieRequest | None = None,
) -> SuccessResponse:
    body = body or UserMovieRequest()
    user_movies_service.add_user_movie(
        session=session,
        username=body.username,
        movie=body.movie,
    )
    return SuccessResponse()


@router.put("", response_model=SuccessResponse)
def update_user_movie(
    session: SessionDep,
    body: UserMovieRequest | None = None,
) -> SuccessResponse:
    body = body or UserMovieRequest()
    user_movies_service.update_user_movie(
        session=session,
        username=body.username,
        movie=body.movie,
    )
    return SuccessResponse()


@router.delete("", response_model=SuccessResponse)
def remove_user_movie(
    session: SessionDep,
    body: UserMovieDeleteRequest | None = None,
) -> SuccessResponse:
    body = body or UserMovieDeleteRequest()
    user_movies_service.remove_user_movie(
        session=session,
        username=body.username,
        movie_id=body.movie_id,
    )
    return SuccessResponse()
