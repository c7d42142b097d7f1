"""
Per-application services.

One OmdbClient, one RequestCache, one SearchOrchestrator and one background
event loop per Flask app, created lazily from ``app.config`` and kept in
``app.extensions['raz']``.
"""

from dataclasses import dataclass
from typing import Optional

from flask import Flask, current_app

from .async_runner import AsyncRunner
from .cache import RequestCache
from .log import log
from .omdb import DetailOrchestrator, OmdbClient, SearchOrchestrator

EXTENSION_KEY = 'raz'


@dataclass
class RazServices:
    client: OmdbClient
    cache: RequestCache
    search: SearchOrchestrator
    runner: AsyncRunner

    def new_detail(self) -> DetailOrchestrator:
        """Detail orchestrator for one request, sharing this app's cache."""
        return DetailOrchestrator(self.client, self.cache)

    def shutdown(self) -> None:
        try:
            self.runner.run(self.client.close(), timeout=5)
        finally:
            self.runner.stop()


def init_services(app: Flask) -> RazServices:
    """Build the services for ``app`` from its config."""
    client = OmdbClient(
        api_key=app.config.get('OMDB_API_KEY'),
        base_url=app.config.get('OMDB_BASE_URL') or 'https://www.omdbapi.com/',
        timeout=app.config.get('OMDB_TIMEOUT'),
        transport=app.config.get('OMDB_TRANSPORT'),
    )
    cache = RequestCache(
        max_entries=app.config.get('REQUEST_CACHE_MAX_ENTRIES'),
        retain_failures=app.config.get('REQUEST_CACHE_RETAIN_FAILURES', True),
    )
    services = RazServices(
        client=client,
        cache=cache,
        search=SearchOrchestrator(client, cache),
        runner=AsyncRunner(),
    )
    app.extensions[EXTENSION_KEY] = services

    if not client.has_api_key:
        log("⚠️ OMDB_API_KEY is not set - every OMDb request will fail")
    return services


def get_services(app: Optional[Flask] = None) -> RazServices:
    app = app or current_app
    services = app.extensions.get(EXTENSION_KEY)
    if services is None:
        services = init_services(app)
    return services
