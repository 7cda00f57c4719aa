# movie_bot/services/selector.py

from typing import Any, Protocol

from ..config import DEFAULT_MIN_RATING, DEFAULT_MIN_YEAR, logger
from ..errors import StoreUnavailable
from ..models import MovieRecord


class SamplingStore(Protocol):
    async def sample_one(self, filter: dict[str, Any]) -> dict[str, Any] | None: ...


def build_candidate_filter(min_rating: str, min_year: str) -> dict[str, Any]:
    """
    Builds the store filter for eligible movies.

    Both fields are stored as strings, so the comparison is the store's
    string ordering: "10" sorts before "9".
    """
    return {
        "rating": {"$gte": min_rating},
        "year": {"$gte": min_year},
    }


async def select_random_candidate(
    store: SamplingStore,
    min_rating: str = DEFAULT_MIN_RATING,
    min_year: str = DEFAULT_MIN_YEAR,
) -> MovieRecord | None:
    """
    Returns one movie chosen uniformly at random among those with
    rating >= min_rating and year >= min_year, or None if there are none.

    Raises StoreUnavailable if the store cannot be queried.
    """
    candidate_filter = build_candidate_filter(min_rating, min_year)
    try:
        document = await store.sample_one(candidate_filter)
    except StoreUnavailable as e:
        logger.error(f"[SELECTOR] Could not sample a movie from the store: {e}")
        raise

    if document is None:
        logger.info(
            f"[SELECTOR] No movie matches rating >= '{min_rating}' and year >= '{min_year}'."
        )
        return None

    record = MovieRecord.from_document(document)
    logger.info(f"[SELECTOR] Picked '{record.title}' ({record.year}).")
    return record
