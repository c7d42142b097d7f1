"""
Run coroutines from sync Flask views on one shared event loop.

Flask views are sync, but the OMDb layer is async and the request cache
stores tasks that belong to a single loop. A per-request loop would strand
those tasks, so all OMDb work is submitted to one long-lived loop running
in a daemon thread.
"""

import asyncio
import logging
import threading
from typing import Any, Coroutine, Optional

logger = logging.getLogger(__name__)


class AsyncRunner:
    """Owns a background event loop thread."""

    def __init__(self, name: str = "raz-async"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Get the loop, starting the thread on first use."""
        with self._lock:
            if self._loop is None or self._loop.is_closed():
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._loop.run_forever,
                    name=self.name,
                    daemon=True,
                )
                self._thread.start()
                logger.debug(f"Started event loop thread {self.name}")
            return self._loop

    def run(self, coro: Coroutine[Any, Any, Any], timeout: Optional[float] = None) -> Any:
        """Run ``coro`` on the background loop and block for its result."""
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return future.result(timeout)

    def stop(self) -> None:
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout=5)
        loop.close()
