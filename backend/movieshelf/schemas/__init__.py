from .message import SuccessResponse
from .movie import MovieSummary, StoredMovie
from .user_movie import (
    MoviePayload,
    UserMovieDeleteRequest,
    UserMoviePublic,
    UserMovieRequest,
)

__all__ = [
    "SuccessResponse",
    "MovieSummary",
    "StoredMovie",
    "MoviePayload",
    "UserMovieDeleteRequest",
    "UserMoviePublic",
    "UserMovieRequest",
]
