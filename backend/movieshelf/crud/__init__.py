from .movie import (
    get_movie_by_id,
    get_movies_with_user_overlay,
    update_movie,
    upsert_movie,
)
from .user import get_or_create_user
from .user_movie import (
    delete_user_movie,
    get_user_movies,
    update_user_movie,
    upsert_user_movie,
)
