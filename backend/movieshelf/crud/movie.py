from collections.abc import Sequence

from sqlalchemy import update
from sqlmodel import Session, col, select

from movieshelf.crud.utils import dialect_insert
from movieshelf.models.movie import Movie, MovieCreate
from movieshelf.models.user import User
from movieshelf.models.user_movie import UserMovie
from movieshelf.schemas.movie import StoredMovie

DESCRIPTIVE_FIELDS = ("title", "year", "runtime", "genre", "director", "poster")


def get_movie_by_id(*, session: Session, id: str) -> Movie | None:
    """
    Retrieve a movie by its IMDb identifier.

    Parameters:
        session (Session): The database session.
        id (str): The identifier of the movie to retrieve.
    Returns:
        Movie | None: The movie object if found, otherwise None.
    """
    return session.get(Movie, id)


def get_movies_with_user_overlay(
    *,
    session: Session,
    movie_ids: Sequence[str],
    username: str | None = None,
) -> list[StoredMovie]:
    """
    Retrieve every stored movie among `movie_ids` in one query. When a username
    is given, each row carries that user's favorite flag and whether the user
    has a link row for it.

    Parameters:
        session (Session): The database session.
        movie_ids (Sequence[str]): Candidate identifiers.
        username (str | None): User whose links are overlaid.
    Returns:
        list[StoredMovie]: The stored movies, in no particular order.
    """
    if not movie_ids:
        return []
    stmt = select(Movie).where(col(Movie.id).in_(movie_ids))
    movies = list(session.exec(stmt).all())

    if not username or not movies:
        return [StoredMovie.model_validate(movie.model_dump()) for movie in movies]

    link_stmt = (
        select(UserMovie)
        .join(User, col(User.id) == col(UserMovie.user_id))
        .where(
            col(User.username) == username,
            col(UserMovie.movie_id).in_(movie_ids),
        )
    )
    links = {link.movie_id: link for link in session.exec(link_stmt).all()}

    return [
        StoredMovie.model_validate(
            {
                **movie.model_dump(),
                "is_favorite": movie.id in links and links[movie.id].is_favorite,
                "has_user_changes": movie.id in links,
            }
        )
        for movie in movies
    ]


def upsert_movie(*, session: Session, movie_create: MovieCreate) -> None:
    """
    Insert a movie, or overwrite its descriptive fields if the identifier is
    already stored. Does not commit.

    Parameters:
        session (Session): The database session.
        movie_create (MovieCreate): The movie data to store.
    """
    insert = dialect_insert(session)
    stmt = insert(Movie).values(**movie_create.model_dump())
    stmt = stmt.on_conflict_do_update(
        index_elements=["id"],
        set_={field: getattr(stmt.excluded, field) for field in DESCRIPTIVE_FIELDS},
    )
    session.execute(stmt)


def update_movie(*, session: Session, movie_create: MovieCreate) -> int:
    """
    Overwrite the descriptive fields of a stored movie. A missing movie is not
    an error. Does not commit.

    Returns:
        int: The number of rows updated (0 or 1).
    """
    values = movie_create.model_dump(include=set(DESCRIPTIVE_FIELDS))
    stmt = update(Movie).where(col(Movie.id) == movie_create.id).values(**values)
    result = session.execute(stmt)
    return result.rowcount  # type: ignore[attr-defined]
