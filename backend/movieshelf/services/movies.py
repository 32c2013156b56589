import asyncio

import aiohttp
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from movieshelf.api.deps import get_db_context
from movieshelf.crud import movie as movies_crud
from movieshelf.exceptions.movie_exceptions import MovieNotFoundError, MovieSearchFailed
from movieshelf.models.movie import Movie
from movieshelf.omdb import cache as omdb_cache
from movieshelf.omdb import client as omdb_client
from movieshelf.omdb.config import DEFAULT_SEARCHES, NOT_AVAILABLE, ORIGINAL_IMDB_ID
from movieshelf.omdb.limiter import gather_limited
from movieshelf.omdb.logger import logger
from movieshelf.schemas.movie import MovieSummary, StoredMovie


def _movie_to_omdb_shape(movie: Movie) -> omdb_client.OmdbMovie:
    """Convert a stored movie into the OMDb detail shape used downstream."""
    return {
        "imdbID": movie.id,
        "Title": movie.title or "",
        "Year": movie.year or "",
        "Runtime": movie.runtime or NOT_AVAILABLE,
        "Genre": movie.genre or NOT_AVAILABLE,
        "Director": movie.director or NOT_AVAILABLE,
        "Poster": movie.poster or "",
        "Response": "True",
    }


def _load_stored_movie(movie_id: str) -> omdb_client.OmdbMovie | None:
    """Load a persisted movie by identifier, already in OMDb shape."""
    with get_db_context() as session:
        movie = movies_crud.get_movie_by_id(session=session, id=movie_id)
        if movie is None:
            return None
        return _movie_to_omdb_shape(movie)


def _poster_or_blank(poster: str | None) -> str:
    if not poster or poster == NOT_AVAILABLE:
        return ""
    return poster


async def resolve_movie_detail(
    *,
    http_session: aiohttp.ClientSession,
    movie_id: str,
) -> omdb_client.OmdbMovie | None:
    """
    Resolve a movie's detail record from the memory cache, then the database,
    then OMDb. The first hit is cached. Returns None if every source misses or
    the OMDb call fails.
    """
    cache_hit, cached = omdb_cache.get_memory_movie_detail(movie_id)
    if cache_hit:
        return cached

    try:
        stored = await asyncio.to_thread(_load_stored_movie, movie_id)
    except SQLAlchemyError as e:
        logger.warning(f"Database not available, skipping DB lookup: {e}")
        stored = None
    if stored is not None:
        omdb_cache.set_memory_movie_detail(movie_id, stored)
        return stored

    try:
        detail = await omdb_client.fetch_movie_detail(
            session=http_session,
            movie_id=movie_id,
        )
    except omdb_client.OmdbRequestError as e:
        logger.warning(f"Failed to fetch movie {movie_id}: {e}")
        return None
    if detail is None:
        return None

    omdb_cache.set_memory_movie_detail(movie_id, detail)
    return detail


async def get_movie_detail(
    *,
    http_session: aiohttp.ClientSession,
    movie_id: str,
) -> omdb_client.OmdbMovie:
    """
    Get a single movie's detail record in OMDb shape.

    Raises:
        MovieNotFoundError: If no source knows the identifier.
    """
    detail = await resolve_movie_detail(http_session=http_session, movie_id=movie_id)
    if detail is None:
        raise MovieNotFoundError(movie_id)
    return detail


async def resolve_movie_details(
    *,
    http_session: aiohttp.ClientSession,
    movie_ids: list[str],
) -> list[omdb_client.OmdbMovie]:
    """Resolve many identifiers with capped parallelism, dropping misses."""
    return await gather_limited(
        [
            lambda movie_id=movie_id: resolve_movie_detail(
                http_session=http_session,
                movie_id=movie_id,
            )
            for movie_id in movie_ids
        ]
    )


async def collect_candidate_ids(
    *,
    http_session: aiohttp.ClientSession,
    query: str,
) -> list[str]:
    """
    Gather candidate identifiers for a search, deduplicated in first-seen
    order. An empty query runs the seed searches instead; failing seed
    searches are skipped.

    Raises:
        MovieSearchFailed: If an explicit query's search fails.
    """
    query = query.strip()
    movie_ids: list[str] = []

    if query:
        try:
            movie_ids = await omdb_client.search_movie_ids(
                session=http_session,
                title=query,
            )
        except omdb_client.OmdbRequestError as e:
            logger.error(f"Error fetching movies for '{query}': {e}")
            raise MovieSearchFailed() from e
    else:
        for seed in DEFAULT_SEARCHES:
            try:
                movie_ids.extend(
                    await omdb_client.search_movie_ids(session=http_session, title=seed)
                )
            except omdb_client.OmdbRequestError as e:
                logger.warning(f'Failed to fetch search for "{seed}": {e}')
        movie_ids.append(ORIGINAL_IMDB_ID)

    return list(dict.fromkeys(movie_ids))


def _load_known_movies(
    *,
    session: Session,
    movie_ids: list[str],
    username: str | None,
) -> list[StoredMovie]:
    try:
        return movies_crud.get_movies_with_user_overlay(
            session=session,
            movie_ids=movie_ids,
            username=username,
        )
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning(f"Database not available, skipping DB lookup: {e}")
        return []


def _summary_from_stored(stored: StoredMovie) -> MovieSummary:
    return MovieSummary(
        id=stored.id,
        title=stored.title or "",
        year=stored.year or "",
        runtime=stored.runtime or NOT_AVAILABLE,
        genre=stored.genre or NOT_AVAILABLE,
        director=stored.director or NOT_AVAILABLE,
        is_favorite=stored.is_favorite,
        poster=_poster_or_blank(stored.poster),
    )


def _summary_from_fetched(
    fetched: omdb_client.OmdbMovie,
    *,
    is_favorite: bool,
) -> MovieSummary:
    return MovieSummary(
        id=fetched["imdbID"],
        title=fetched.get("Title") or "",
        year=fetched.get("Year") or "",
        runtime=fetched.get("Runtime") or NOT_AVAILABLE,
        genre=fetched.get("Genre") or NOT_AVAILABLE,
        director=fetched.get("Director") or NOT_AVAILABLE,
        is_favorite=is_favorite,
        poster=_poster_or_blank(fetched.get("Poster")),
    )


def merge_movie_sources(
    *,
    movie_ids: list[str],
    stored_movies: dict[str, StoredMovie],
    fetched_movies: dict[str, omdb_client.OmdbMovie],
) -> list[MovieSummary]:
    """
    Build one summary per candidate identifier, in candidate order.

    A stored movie with user changes wins outright. Otherwise a fetched record
    is used, carrying the stored favorite flag if the movie is stored. A stored
    movie with no fetched record is used as is. Identifiers neither source
    knows are dropped.
    """
    summaries: list[MovieSummary] = []
    for movie_id in movie_ids:
        stored = stored_movies.get(movie_id)
        fetched = fetched_movies.get(movie_id)

        if stored is not None and stored.has_user_changes:
            summaries.append(_summary_from_stored(stored))
        elif fetched is not None:
            summaries.append(
                _summary_from_fetched(
                    fetched,
                    is_favorite=stored.is_favorite if stored is not None else False,
                )
            )
        elif stored is not None:
            summaries.append(_summary_from_stored(stored))
    return summaries


async def search_movies(
    *,
    session: Session,
    http_session: aiohttp.ClientSession,
    query: str = "",
    username: str | None = None,
) -> list[MovieSummary]:
    """
    Search movies by title (or the seed searches when `query` is empty),
    combining stored movies and the user's overrides with OMDb details.

    Parameters:
        session (Session): Database session.
        http_session (aiohttp.ClientSession): Shared OMDb HTTP session.
        query (str): Free-text title query.
        username (str | None): User whose favorites are overlaid.
    Returns:
        list[MovieSummary]: Summaries in candidate order.
    Raises:
        MovieSearchFailed: If an explicit query's search fails.
    """
    movie_ids = await collect_candidate_ids(http_session=http_session, query=query)

    stored = await asyncio.to_thread(
        _load_known_movies,
        session=session,
        movie_ids=movie_ids,
        username=username or None,
    )
    stored_movies = {movie.id: movie for movie in stored}

    missing_ids = [movie_id for movie_id in movie_ids if movie_id not in stored_movies]
    fetched = await resolve_movie_details(http_session=http_session, movie_ids=missing_ids)
    fetched_movies = {movie["imdbID"]: movie for movie in fetched}

    return merge_movie_sources(
        movie_ids=movie_ids,
        stored_movies=stored_movies,
        fetched_movies=fetched_movies,
    )
