from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "MoviePayload",
    "UserMovieRequest",
    "UserMovieDeleteRequest",
    "UserMoviePublic",
]


# Required fields are optional here so that a missing one surfaces as a 400
# naming the field instead of a validation error.
class MoviePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str | None = None
    title: str | None = None
    year: str | None = None
    runtime: str | None = None
    genre: str | None = None
    director: str | None = None
    poster: str | None = None
    is_favorite: bool | None = Field(default=None, alias="isFavorite")


class UserMovieRequest(BaseModel):
    username: str | None = None
    movie: MoviePayload | None = None


class UserMovieDeleteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    movie_id: str | None = Field(default=None, alias="movieId")


class UserMoviePublic(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    year: str
    runtime: str
    genre: str
    director: str
    poster: str
    is_favorite: bool = Field(alias="isFavorite")
