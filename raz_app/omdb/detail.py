"""
================================================================================
Raz - Detail Orchestrator
================================================================================
Loads one full OMDb record at a time and exposes it as an observable
DetailRequestState:

    Idle -> Loading -> Success | Failure

Opening a different key while a load is in flight moves the state straight
back to Loading and makes the earlier load stale. Stale loads still run to
completion (the HTTP request is never aborted and its result still lands in
the request cache) but their result is dropped instead of applied, so a slow
answer for key A can never overwrite the state for a later key B.
================================================================================
"""

import asyncio
import logging
from typing import Callable, List, Optional, Union

from ..cache import RequestCache, request_cache
from .client import OmdbClient
from .errors import ApiLogicalError, error_code
from .models import ContentDetail, ContentKind, DetailKey, DetailRequestState

logger = logging.getLogger(__name__)

StateListener = Callable[[DetailRequestState], None]


class DetailOrchestrator:
    """Last-key-wins loader for full content records."""

    def __init__(self, client: OmdbClient, cache: Optional[RequestCache] = None):
        self.client = client
        self.cache = cache if cache is not None else request_cache
        self.state = DetailRequestState.idle()
        self._token = 0
        self._task: "Optional[asyncio.Task]" = None
        self._listeners: List[StateListener] = []

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` on every applied state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def open(self, kind: Union[ContentKind, str], external_id: str) -> "asyncio.Task":
        """
        Start loading ``(kind, external_id)`` and return the loading task.

        Must be called with an event loop running. The state switches to
        Loading before this returns. Reopening the key that is already
        current returns the existing task while it is still running; a settled
        key is loaded again so a failure evicted from the cache can retry.
        """
        key = DetailKey(ContentKind.parse(kind), external_id)
        if self._task is not None and not self._task.done() and self.state.key == key:
            return self._task

        self._token += 1
        token = self._token
        self._set_state(DetailRequestState.loading(key))
        self._task = asyncio.get_running_loop().create_task(self._load(token, key))
        return self._task

    def close(self) -> None:
        """Stop observing the current key; any in-flight load becomes stale."""
        self._token += 1
        self._task = None
        if self.state.key is not None:
            self._set_state(DetailRequestState.idle())

    async def wait(self) -> DetailRequestState:
        """Wait until the current key has settled and return the state."""
        while self._task is not None and not self._task.done():
            await asyncio.shield(self._task)
        return self.state

    async def _load(self, token: int, key: DetailKey) -> Optional[DetailRequestState]:
        try:
            body = await self.cache.get(
                key.cache_key,
                lambda: self.client.fetch_detail(key.external_id, key.kind),
            )
            if body.get("Error"):
                raise ApiLogicalError(str(body["Error"]))
            next_state = DetailRequestState.success(key, ContentDetail.from_api(body))
        except Exception as e:
            next_state = DetailRequestState.failure(key, str(e) or e.__class__.__name__, error_code(e))

        if token != self._token:
            logger.debug(f"Discarding stale {next_state.status.value} result for {key}")
            return None

        if next_state.reason:
            logger.info(f"Detail load for {key} failed: {next_state.reason}")
        self._set_state(next_state)
        return next_state

    def _set_state(self, state: DetailRequestState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)
