from logging import getLogger

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from movieshelf.crud import movie as movies_crud
from movieshelf.crud import user as users_crud
from movieshelf.crud import user_movie as user_movies_crud
from movieshelf.exceptions.base import DatabaseError, MissingFieldsError
from movieshelf.models.movie import MovieCreate
from movieshelf.schemas.user_movie import MoviePayload, UserMoviePublic

logger = getLogger(__name__)


def _require_username(username: str | None) -> str:
    if not username:
        raise MissingFieldsError(["username"])
    return username


def _require_movie(username: str | None, movie: MoviePayload | None) -> tuple[str, MoviePayload]:
    if not username or movie is None or not movie.id:
        raise MissingFieldsError(["username", "movie"])
    return username, movie


def _to_movie_create(movie: MoviePayload) -> MovieCreate:
    return MovieCreate(
        id=movie.id or "",
        title=movie.title or "",
        year=movie.year or "",
        runtime=movie.runtime or "N/A",
        genre=movie.genre or "N/A",
        director=movie.director or "N/A",
        poster=movie.poster or "",
    )


def add_user_movie(
    *,
    session: Session,
    username: str | None,
    movie: MoviePayload | None,
) -> None:
    """
    Record a movie in a user's list: store (or refresh) the movie and upsert
    the user's link with its favorite flag, in one transaction.

    Parameters:
        session (Session): Database session.
        username (str | None): The user's name; the user is created if new.
        movie (MoviePayload | None): The movie, which must carry an id.
    Raises:
        MissingFieldsError: If the username or movie id is missing.
        DatabaseError: If any statement fails.
    """
    username, movie = _require_movie(username, movie)
    try:
        user = users_crud.get_or_create_user(session=session, username=username)
        movies_crud.upsert_movie(session=session, movie_create=_to_movie_create(movie))
        user_movies_crud.upsert_user_movie(
            session=session,
            user_id=user.id,  # type: ignore[arg-type]
            movie_id=movie.id,  # type: ignore[arg-type]
            is_favorite=bool(movie.is_favorite),
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to add movie {movie.id} for {username}", exc_info=e)
        raise DatabaseError() from e


def get_user_movies(*, session: Session, username: str | None) -> list[UserMoviePublic]:
    """
    List every movie the user has a link row for.

    Raises:
        MissingFieldsError: If the username is missing.
        DatabaseError: If any statement fails.
    """
    username = _require_username(username)
    try:
        user = users_crud.get_or_create_user(session=session, username=username)
        rows = user_movies_crud.get_user_movies(
            session=session,
            user_id=user.id,  # type: ignore[arg-type]
        )
        # Built before the commit, which expires the loaded movies.
        user_movies = [
            UserMoviePublic(**movie.model_dump(), is_favorite=is_favorite)
            for movie, is_favorite in rows
        ]
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to list movies for {username}", exc_info=e)
        raise DatabaseError() from e

    return user_movies


def update_user_movie(
    *,
    session: Session,
    username: str | None,
    movie: MoviePayload | None,
) -> None:
    """
    Overwrite a stored movie's fields and the user's favorite flag. Rows that
    do not exist are left alone; this is not an error.

    Raises:
        MissingFieldsError: If the username or movie id is missing.
        DatabaseError: If any statement fails.
    """
    username, movie = _require_movie(username, movie)
    try:
        user = users_crud.get_or_create_user(session=session, username=username)
        movies_updated = movies_crud.update_movie(
            session=session,
            movie_create=_to_movie_create(movie),
        )
        links_updated = user_movies_crud.update_user_movie(
            session=session,
            user_id=user.id,  # type: ignore[arg-type]
            movie_id=movie.id,  # type: ignore[arg-type]
            is_favorite=bool(movie.is_favorite),
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to update movie {movie.id} for {username}", exc_info=e)
        raise DatabaseError() from e

    if not movies_updated or not links_updated:
        logger.debug(
            f"Update for {username}/{movie.id} touched "
            f"{movies_updated} movie and {links_updated} link rows"
        )


def remove_user_movie(
    *,
    session: Session,
    username: str | None,
    movie_id: str | None,
) -> None:
    """
    Remove a movie from a user's list. The movie itself stays stored and a
    missing link is not an error.

    Raises:
        MissingFieldsError: If the username or movie id is missing.
        DatabaseError: If any statement fails.
    """
    if not username or not movie_id:
        raise MissingFieldsError(["username", "movieId"])
    try:
        user = users_crud.get_or_create_user(session=session, username=username)
        user_movies_crud.delete_user_movie(
            session=session,
            user_id=user.id,  # type: ignore[arg-type]
            movie_id=movie_id,
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to remove movie {movie_id} for {username}", exc_info=e)
        raise DatabaseError() from e
