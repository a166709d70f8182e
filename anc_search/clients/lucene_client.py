"""couchdb-lucene client for full-text queries over data records."""

import logging
from typing import Any, Protocol

import httpx

from anc_search.models.query import FtiRequest

logger = logging.getLogger(__name__)


class SearchEngineError(Exception):
    """Raised when the full-text search engine fails to answer a query."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class SearchEngine(Protocol):
    """Anything that can answer a full-text request with a raw response."""

    async def search(self, request: FtiRequest) -> dict[str, Any] | None: ...


class LuceneClient:
    """Async client for the couchdb-lucene ``_fti`` endpoint.

    The client does not retry. Timeouts are enforced by the underlying
    HTTP transport.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5984",
        database: str = "medic",
        design_doc: str = "medic",
        index: str = "data_records",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: CouchDB server URL
            database: Database holding the data records
            design_doc: Design document declaring the index
            index: Full-text index name
            timeout: Request timeout in seconds
            http_client: Pre-built HTTP client (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.database = database
        self.design_doc = design_doc
        self.index = index
        self.timeout = timeout
        self.client = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
        )

    @property
    def path(self) -> str:
        """Request path of the full-text index."""
        return f"/{self.database}/_fti/_design/{self.design_doc}/{self.index}"

    async def search(self, request: FtiRequest) -> dict[str, Any] | None:
        """Run a full-text query.

        Args:
            request: Engine request

        Returns:
            Decoded JSON response, or None if the engine sent no body

        Raises:
            SearchEngineError: On HTTP error status or transport failure
        """
        logger.debug(f"FTI query on '{self.index}': {request.q[:200]}")
        try:
            response = await self.client.get(self.path, params=request.to_params())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SearchEngineError(
                f"Search engine returned {e.response.status_code}: {e.response.text[:200]}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise SearchEngineError(f"Search engine request failed: {e}") from e

        if not response.content:
            return None
        return response.json()

    async def close(self):
        """Close the client connection."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
