from .movie import Movie, MovieBase, MovieCreate
from .user import User
from .user_movie import UserMovie

__all__ = [
    "Movie",
    "MovieBase",
    "MovieCreate",
    "User",
    "UserMovie",
]
