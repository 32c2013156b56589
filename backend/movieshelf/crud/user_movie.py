from sqlalchemy import delete, update
from sqlmodel import Session, col, select

from movieshelf.crud.utils import dialect_insert
from movieshelf.models.movie import Movie
from movieshelf.models.user_movie import UserMovie

# Core table, keyed by the real column names ("isFavorite").
user_movies_table = UserMovie.__table__  # type: ignore[attr-defined]


def get_user_movies(*, session: Session, user_id: int) -> list[tuple[Movie, bool]]:
    """
    Get every movie the user has a link row for, with the link's favorite flag.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the user.
    Returns:
        list[tuple[Movie, bool]]: (movie, is_favorite) pairs.
    """
    stmt = (
        select(Movie, UserMovie.is_favorite)
        .join(UserMovie, col(UserMovie.movie_id) == col(Movie.id))
        .where(col(UserMovie.user_id) == user_id)
    )
    return [(movie, bool(is_favorite)) for movie, is_favorite in session.exec(stmt).all()]


def upsert_user_movie(
    *,
    session: Session,
    user_id: int,
    movie_id: str,
    is_favorite: bool,
) -> None:
    """Insert the link, or overwrite its favorite flag if it exists. Does not commit."""
    insert = dialect_insert(session)
    stmt = insert(user_movies_table).values(
        {"user_id": user_id, "movie_id": movie_id, "isFavorite": is_favorite}
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "movie_id"],
        set_={"isFavorite": stmt.excluded["isFavorite"]},
    )
    session.execute(stmt)


def update_user_movie(
    *,
    session: Session,
    user_id: int,
    movie_id: str,
    is_favorite: bool,
) -> int:
    """Overwrite the favorite flag of an existing link. Returns the rows updated."""
    stmt = (
        update(user_movies_table)
        .where(
            user_movies_table.c.user_id == user_id,
            user_movies_table.c.movie_id == movie_id,
        )
        .values({"isFavorite": is_favorite})
    )
    result = session.execute(stmt)
    return result.rowcount  # type: ignore[attr-defined]


def delete_user_movie(*, session: Session, user_id: int, movie_id: str) -> int:
    """Delete the link if present. Returns the rows deleted."""
    stmt = delete(user_movies_table).where(
        user_movies_table.c.user_id == user_id,
        user_movies_table.c.movie_id == movie_id,
    )
    result = session.execute(stmt)
    return result.rowcount  # type: ignore[attr-defined]
