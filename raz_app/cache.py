"""
================================================================================
Raz - Request Cache
================================================================================
Compute-once-per-key memoization for async OMDb requests.

The first ``get`` for a key invokes the producer and stores the resulting task;
every later ``get`` for that key (pending or settled) shares the same task, so
N concurrent callers produce exactly one network call.

Entries are created synchronously inside ``get``, before the caller can yield
to the event loop, which is what makes the fan-in safe without locks. All
callers must therefore share one event loop.

Defaults reproduce the observed behavior: unbounded, no expiry, and a failed
entry is kept (the key keeps answering with the same failure). Both can be
changed per instance:

    cache = RequestCache(max_entries=500, retain_failures=False)
================================================================================
"""

import asyncio
import logging
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestCache:
    """In-memory single-flight cache keyed by opaque strings."""

    def __init__(self, max_entries: Optional[int] = None, retain_failures: bool = True):
        """
        Args:
            max_entries: Evict least-recently-used entries beyond this many
                (None = unbounded)
            retain_failures: Keep rejected entries; when False a failed key is
                forgotten as soon as it settles and the next get retries it
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be a positive integer or None")
        self.max_entries = max_entries
        self.retain_failures = retain_failures
        self._entries: "OrderedDict[str, asyncio.Future]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, key: str, producer: Callable[[], Awaitable[T]]) -> Awaitable[T]:
        """
        Return the shared computation for ``key``, starting it if unseen.

        Must be called while an event loop is running. The returned awaitable
        is shielded: cancelling one waiter does not cancel the computation the
        other waiters share.
        """
        entry = self._entries.get(key)
        if entry is not None:
            self._hits += 1
            self._entries.move_to_end(key)
            logger.debug(f"Request cache hit: {key!r}")
            return asyncio.shield(entry)

        self._misses += 1
        logger.debug(f"Request cache miss: {key!r}")
        entry = asyncio.ensure_future(producer())
        self._entries[key] = entry
        entry.add_done_callback(lambda done: self._on_settled(key, done))
        self._evict_overflow()
        return asyncio.shield(entry)

    def _on_settled(self, key: str, entry: asyncio.Future) -> None:
        if entry.cancelled():
            exc: Optional[BaseException] = asyncio.CancelledError()
        else:
            exc = entry.exception()
        if exc is None:
            return

        logger.warning(f"Request cache producer failed for {key!r}: {exc}")
        # Only drop the entry we stored; the key may already hold a newer one
        if not self.retain_failures and self._entries.get(key) is entry:
            del self._entries[key]

    def _evict_overflow(self) -> None:
        if self.max_entries is None:
            return
        while len(self._entries) > self.max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            logger.debug(f"Request cache evicted {evicted_key!r}")

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Forget all entries and reset statistics. Pending work keeps running."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> Dict[str, Any]:
        total_requests = self._hits + self._misses
        hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            'size': len(self._entries),
            'max_entries': self.max_entries,
            'retain_failures': self.retain_failures,
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': round(hit_rate, 2)
        }


# Process-wide default instance
request_cache = RequestCache()
