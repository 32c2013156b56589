from sqlalchemy import Boolean
from sqlmodel import Column, Field, SQLModel

__all__ = [
    "UserMovie",
]


class UserMovie(SQLModel, table=True):
    __tablename__ = "user_movies"  # type: ignore[assignment]

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    movie_id: str = Field(foreign_key="movies.id", primary_key=True)
    # Column name is quoted camelCase in the shared schema.
    is_favorite: bool = Field(
        default=False,
        sa_column=Column("isFavorite", Boolean, nullable=False, default=False),
    )
