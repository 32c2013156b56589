"""OMDb endpoint, credential and tuning values."""

from movieshelf.core.config import settings

OMDB_API_KEY: str = settings.OMDB_API_KEY
OMDB_BASE_URL: str = settings.OMDB_BASE_URL
OMDB_TIMEOUT_SECONDS: float = settings.OMDB_TIMEOUT_SECONDS
OMDB_MAX_CONCURRENCY: int = max(1, settings.OMDB_MAX_CONCURRENCY)
OMDB_CACHE_MAX_ENTRIES: int = max(1, settings.OMDB_CACHE_MAX_ENTRIES)

# Seed searches used when a search request carries no query.
DEFAULT_SEARCHES: tuple[str, ...] = ("Avengers", "Batman")
ORIGINAL_IMDB_ID: str = "tt3896198"

# OMDb reports missing values with this literal.
NOT_AVAILABLE = "N/A"
