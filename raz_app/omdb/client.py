"""
================================================================================
Raz - OMDb Client
================================================================================
Async REST client for the OMDb API (https://www.omdbapi.com/).

Two endpoints, both plain GETs against the API root:
  - ?apikey=KEY&s=QUERY            search page
  - ?apikey=KEY&i=IMDB_ID&type=K   full record

The client only moves bytes and decodes JSON. It does not interpret
``Response``/``Error``; the orchestrators do. It never retries: a failed
attempt is reported once and the request cache remembers it.
================================================================================
"""

import os
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import OmdbConfigError, ParseError, TransportError

logger = logging.getLogger(__name__)

OMDB_BASE_URL = "https://www.omdbapi.com/"


class OmdbClient:
    """Thin httpx wrapper around the two OMDb endpoints."""

    # Request timeout (seconds); a timeout surfaces as TransportError
    timeout: float = 10.0

    user_agent: str = "Raz/1.0"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = OMDB_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: OMDb key; defaults to the OMDB_API_KEY environment variable
            base_url: API root
            timeout: Override the class default timeout
            transport: Custom httpx transport (tests pass httpx.MockTransport)
        """
        self.api_key = api_key if api_key is not None else os.environ.get("OMDB_API_KEY")
        self.base_url = base_url
        if timeout is not None:
            self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    'User-Agent': self.user_agent,
                    'Accept': 'application/json'
                }
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, params: Dict[str, str]) -> Dict[str, Any]:
        """
        GET the API root with ``params`` and return the decoded JSON object.

        Raises:
            OmdbConfigError: No API key configured
            TransportError: Network failure or non-2xx status
            ParseError: Body is not a JSON object
        """
        if not self.api_key:
            raise OmdbConfigError("OMDB_API_KEY is not configured")

        client = await self._get_client()
        try:
            response = await client.get(
                self.base_url,
                params={"apikey": self.api_key, **params},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"OMDb returned HTTP {status} for {params}")
            raise TransportError(f"OMDb request failed with HTTP {status}", status_code=status) from e
        except httpx.RequestError as e:
            logger.warning(f"OMDb request error for {params}: {e!r}")
            raise TransportError(str(e) or e.__class__.__name__) from e

        try:
            body = response.json()
        except ValueError as e:
            raise ParseError(f"OMDb returned malformed JSON: {e}") from e

        if not isinstance(body, dict):
            raise ParseError(f"OMDb returned {type(body).__name__}, expected an object")
        return body

    async def search(self, query: str) -> Dict[str, Any]:
        """Fetch the search page for ``query``."""
        return await self._request({"s": query})

    async def fetch_detail(self, external_id: str, kind: str) -> Dict[str, Any]:
        """Fetch the full record for an IMDb id of the given kind."""
        return await self._request({"i": external_id, "type": str(getattr(kind, "value", kind))})

    def __repr__(self):
        return f"<{self.__class__.__name__}(base_url='{self.base_url}', api_key={'set' if self.api_key else 'missing'})>"
