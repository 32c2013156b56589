from sqlmodel import Field, SQLModel

__all__ = [
    "MovieBase",
    "MovieCreate",
    "Movie",
]


# Shared properties
class MovieBase(SQLModel):
    id: str = Field(primary_key=True, max_length=32)
    title: str = ""
    year: str = ""
    runtime: str = "N/A"
    genre: str = "N/A"
    director: str = "N/A"
    poster: str = ""


# Properties to receive on movie creation or update
class MovieCreate(MovieBase):
    pass


# Database model
class Movie(MovieBase, table=True):
    __tablename__ = "movies"  # type: ignore[assignment]
