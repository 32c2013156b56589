from pydantic import BaseModel, ConfigDict, Field

from movieshelf.models.movie import MovieBase

__all__ = [
    "StoredMovie",
    "MovieSummary",
]


class StoredMovie(MovieBase):
    """A datastore movie row, overlaid with one user's link when requested."""

    is_favorite: bool = False
    has_user_changes: bool = False


class MovieSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    year: str = ""
    runtime: str = "N/A"
    genre: str = "N/A"
    director: str = "N/A"
    is_favorite: bool = Field(default=False, alias="isFavorite")
    poster: str = ""
