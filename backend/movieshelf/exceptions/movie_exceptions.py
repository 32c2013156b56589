from fastapi import status

from .base import AppError


class MovieNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, movie_id: str):
        self.movie_id = movie_id
        super().__init__("Movie not found")


class MovieSearchFailed(AppError):
    detail = "OMDB request failed"
