import asyncio
from collections.abc import Mapping
from typing import Any

import aiohttp

from movieshelf.omdb.config import OMDB_API_KEY, OMDB_BASE_URL, OMDB_TIMEOUT_SECONDS
from movieshelf.omdb.logger import logger

OmdbMovie = dict[str, Any]


class OmdbRequestError(Exception):
    """Raised when an OMDb call fails at the transport or payload level."""


def create_http_session() -> aiohttp.ClientSession:
    """Build the shared session used for every OMDb call."""
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=OMDB_TIMEOUT_SECONDS),
    )


async def _get_json_async(
    *,
    session: aiohttp.ClientSession,
    params: Mapping[str, str],
) -> dict[str, Any]:
    """Execute an OMDb GET request and return the JSON object payload."""
    query = {**params, "apikey": OMDB_API_KEY}
    try:
        async with session.get(OMDB_BASE_URL, params=query) as response:
            response.raise_for_status()
            payload = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        raise OmdbRequestError(f"OMDb request failed for {dict(params)}: {e}") from e
    if not isinstance(payload, dict):
        raise OmdbRequestError(f"Unexpected OMDb payload for {dict(params)}.")
    return payload


async def search_movie_ids(
    *,
    session: aiohttp.ClientSession,
    title: str,
) -> list[str]:
    """
    Search OMDb by title and return the matching IMDb identifiers in response
    order. A search without matches yields an empty list.

    Raises:
        OmdbRequestError: If the request itself fails.
    """
    payload = await _get_json_async(session=session, params={"s": title})
    results = payload.get("Search") or []
    if not isinstance(results, list):
        return []
    movie_ids = [
        item["imdbID"]
        for item in results
        if isinstance(item, dict) and item.get("imdbID")
    ]
    logger.debug(f"OMDb search '{title}' returned {len(movie_ids)} results")
    return movie_ids


async def fetch_movie_detail(
    *,
    session: aiohttp.ClientSession,
    movie_id: str,
) -> OmdbMovie | None:
    """
    Fetch a single OMDb detail record. Returns None when OMDb does not know
    the identifier.

    Raises:
        OmdbRequestError: If the request itself fails.
    """
    payload = await _get_json_async(
        session=session,
        params={"i": movie_id, "plot": "short"},
    )
    if not payload.get("imdbID"):
        return None
    return payload


__all__ = [
    "OmdbMovie",
    "OmdbRequestError",
    "create_http_session",
    "fetch_movie_detail",
    "search_movie_ids",
]
