"""Unit tests for the couchdb-lucene client."""

import httpx
import pytest

from anc_search.clients.lucene_client import LuceneClient, SearchEngineError
from anc_search.models.query import FtiRequest


def _client(handler) -> LuceneClient:
    http_client = httpx.AsyncClient(
        base_url="http://couch:5984",
        transport=httpx.MockTransport(handler),
    )
    return LuceneClient(base_url="http://couch:5984", http_client=http_client)


@pytest.mark.asyncio
async def test_search_sends_request_params():
    """Test the index path and query parameters."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"total_rows": 1, "rows": [{"id": "abc"}]})

    async with _client(handler) as client:
        response = await client.search(
            FtiRequest(q="form:V AND patient_id:(a)", include_docs=True, limit=10)
        )

    assert response == {"total_rows": 1, "rows": [{"id": "abc"}]}
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/medic/_fti/_design/medic/data_records"
    assert request.url.params["q"] == "form:V AND patient_id:(a)"
    assert request.url.params["include_docs"] == "true"
    assert request.url.params["limit"] == "10"
    assert "sort" not in request.url.params


@pytest.mark.asyncio
async def test_search_empty_body_returns_none():
    """Test that an empty response body is reported as no response."""
    async with _client(lambda request: httpx.Response(200)) as client:
        assert await client.search(FtiRequest(q="form:V")) is None


@pytest.mark.asyncio
async def test_search_http_error():
    """Test that error statuses raise SearchEngineError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="index error")

    async with _client(handler) as client:
        with pytest.raises(SearchEngineError) as exc_info:
            await client.search(FtiRequest(q="form:V"))

    assert exc_info.value.status_code == 500
    assert "index error" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_search_transport_error():
    """Test that connection failures raise SearchEngineError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(SearchEngineError) as exc_info:
            await client.search(FtiRequest(q="form:V"))

    assert exc_info.value.status_code is None
    assert "connection refused" in str(exc_info.value)


@pytest.mark.asyncio
async def test_custom_index_path():
    client = LuceneClient(database="anc", design_doc="kujua", index="reports")
    try:
        assert client.path == "/anc/_fti/_design/kujua/reports"
    finally:
        await client.close()
