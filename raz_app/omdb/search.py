"""
================================================================================
Raz - Search Orchestrator
================================================================================
Turns a committed query into a SearchOutcome:

  1. Queries shorter than MIN_QUERY_LENGTH never reach the network.
  2. The raw search page is fetched through the shared RequestCache, keyed by
     the literal query text (so "Batman" and "batman" are separate entries).
  3. Response "False" is a valid empty answer (NO_RESULTS), never a failure.
  4. Otherwise rows are bucketed by Type into movies / serieses / episodes.
  5. Transport and parse errors become a FAILURE outcome; nothing is raised.

Outcomes are published in completion order. A slow earlier query that
finishes after a newer one overwrites ``outcome``; callers that need
last-query-wins must compare ``outcome.query`` themselves.
================================================================================
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..cache import RequestCache, request_cache
from .client import OmdbClient
from .errors import ParseError, error_code
from .models import ContentKind, ContentSummary, DetailKey, SearchBuckets, SearchOutcome

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2

SearchListener = Callable[[SearchOutcome], None]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_searchable(query: Optional[str]) -> bool:
    if query is None or len(query) < MIN_QUERY_LENGTH:
        return False
    # Detail cache keys use the separator; a query holding it could shadow one
    return DetailKey.KEY_SEPARATOR not in query


def parse_total_results(value: Any) -> int:
    """Read OMDb's string ``totalResults`` ("3", "1234") as an int."""
    match = _LEADING_INT.match(str(value)) if value is not None else None
    if not match:
        raise ParseError(f"Unreadable totalResults: {value!r}")
    return int(match.group(1))


def classify(results: Iterable[Dict[str, Any]]) -> SearchBuckets:
    """
    Partition search rows by kind, preserving input order within each bucket.

    Anything that is neither a movie nor a series lands in episodes.
    """
    movies: List[ContentSummary] = []
    serieses: List[ContentSummary] = []
    episodes: List[ContentSummary] = []

    for row in results:
        item = ContentSummary.from_api(row)
        if item.kind == ContentKind.SERIES:
            serieses.append(item)
        elif item.kind == ContentKind.MOVIE:
            movies.append(item)
        else:
            episodes.append(item)

    return SearchBuckets(
        movies=tuple(movies),
        serieses=tuple(serieses),
        episodes=tuple(episodes),
    )


class SearchOrchestrator:
    """Fetch, classify and publish search outcomes for committed queries."""

    def __init__(self, client: OmdbClient, cache: Optional[RequestCache] = None):
        self.client = client
        self.cache = cache if cache is not None else request_cache
        self.outcome: Optional[SearchOutcome] = None
        self._listeners: List[SearchListener] = []

    def subscribe(self, listener: SearchListener) -> Callable[[], None]:
        """Call ``listener`` with every completed outcome. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def search(self, query: str) -> Optional[SearchOutcome]:
        """
        Run ``query`` and return its outcome.

        Returns None, without touching the cache or the network, when the
        query is too short to search (or holds a control separator).
        """
        if not is_searchable(query):
            logger.debug(f"Skipping unsearchable query {query!r}")
            return None

        try:
            body = await self.cache.get(query, lambda: self.client.search(query))
            outcome = self._interpret(query, body)
        except Exception as e:
            logger.warning(f"Search for {query!r} failed: {e}")
            outcome = SearchOutcome.failed(query, str(e) or e.__class__.__name__, error_code(e))

        self._publish(outcome)
        return outcome

    async def search_person(self, name: str) -> Optional[SearchOutcome]:
        """Search for a director or writer picked from a detail record."""
        return await self.search(name)

    def _interpret(self, query: str, body: Dict[str, Any]) -> SearchOutcome:
        if body.get("Response") == "False":
            return SearchOutcome.empty(query, api_message=body.get("Error"))

        rows = body.get("Search")
        if not isinstance(rows, list):
            raise ParseError("Search response has no result list")

        total = parse_total_results(body.get("totalResults"))
        return SearchOutcome.results(query, total, classify(rows))

    def _publish(self, outcome: SearchOutcome) -> None:
        self.outcome = outcome
        for listener in list(self._listeners):
            listener(outcome)
