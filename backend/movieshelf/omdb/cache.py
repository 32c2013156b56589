from collections import OrderedDict
from threading import Lock

from movieshelf.omdb.client import OmdbMovie
from movieshelf.omdb.config import OMDB_CACHE_MAX_ENTRIES


class MovieDetailCache:
    """
    Process-wide LRU mapping of IMDb identifier to the last resolved detail
    record. Records for an identifier are treated as immutable once fetched,
    so concurrent writers simply overwrite each other.
    """

    def __init__(self, max_entries: int):
        self.max_entries = max_entries
        self._entries: OrderedDict[str, OmdbMovie] = OrderedDict()
        self._lock = Lock()

    def get(self, movie_id: str) -> tuple[bool, OmdbMovie | None]:
        with self._lock:
            if movie_id not in self._entries:
                return False, None
            self._entries.move_to_end(movie_id)
            return True, self._entries[movie_id]

    def set(self, movie_id: str, movie: OmdbMovie) -> None:
        with self._lock:
            self._entries[movie_id] = movie
            self._entries.move_to_end(movie_id)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, movie_id: object) -> bool:
        with self._lock:
            return movie_id in self._entries


movie_detail_cache = MovieDetailCache(OMDB_CACHE_MAX_ENTRIES)


def get_memory_movie_detail(movie_id: str) -> tuple[bool, OmdbMovie | None]:
    return movie_detail_cache.get(movie_id)


def set_memory_movie_detail(movie_id: str, movie: OmdbMovie) -> None:
    movie_detail_cache.set(movie_id, movie)


def reset_movie_detail_cache() -> None:
    """Drop every memoized detail record."""
    movie_detail_cache.clear()


__all__ = [
    "MovieDetailCache",
    "movie_detail_cache",
    "get_memory_movie_detail",
    "set_memory_movie_detail",
    "reset_movie_detail_cache",
]
