"""Pytest configuration and shared fixtures."""

import re
from datetime import UTC, datetime

import pytest

from anc_search import config
from anc_search.models.forms import DEFAULT_FORM_CODES, FormCodeMap
from anc_search.models.query import FtiRequest
from anc_search.retrieval.chunked_search import ChunkedSearchExecutor
from anc_search.services.record_query_service import RecordQueryService

FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)

_PATIENT_FILTER = re.compile(r"patient_id:\(([^)]*)\)")


def queried_patient_ids(query: str) -> list[str]:
    """Patient ids OR-ed into a query, in query order."""
    match = _PATIENT_FILTER.search(query)
    if not match:
        return []
    return match.group(1).split(" OR ")


def make_row(patient_id: str, form: str = "V", doc_id: str | None = None) -> dict:
    """Raw engine row with an included document."""
    doc_id = doc_id or f"{form}-{patient_id}"
    return {
        "id": doc_id,
        "score": 1.0,
        "doc": {"_id": doc_id, "patient_id": patient_id, "form": form},
    }


class FakeSearchEngine:
    """In-memory search engine recording every request.

    Serves rows from ``docs_by_form``, keyed by form code, filtered by
    the patient ids in the query when present.
    """

    def __init__(self, docs_by_form: dict[str, list[dict]] | None = None):
        self.docs_by_form = docs_by_form or {}
        self.requests: list[FtiRequest] = []
        self.fail_on_call: int | None = None
        self.error: Exception = RuntimeError("engine down")

    async def search(self, request: FtiRequest) -> dict | None:
        self.requests.append(request)
        if self.fail_on_call is not None and len(self.requests) == self.fail_on_call:
            raise self.error

        rows = []
        for form, form_rows in self.docs_by_form.items():
            if f"form:{form}" in request.q or f'"{form}"' in request.q:
                rows.extend(form_rows)
        patient_ids = queried_patient_ids(request.q)
        if patient_ids:
            rows = [row for row in rows if row["doc"]["patient_id"] in patient_ids]
        return {"total_rows": len(rows), "rows": rows}

    @property
    def queries(self) -> list[str]:
        return [request.q for request in self.requests]


@pytest.fixture
def engine():
    """Fake search engine with no documents."""
    return FakeSearchEngine()


@pytest.fixture
def form_codes():
    """Default form code table."""
    return FormCodeMap(codes=DEFAULT_FORM_CODES)


@pytest.fixture
def record_queries(engine, form_codes):
    """Record query service over the fake engine with a chunk size of 2."""
    executor = ChunkedSearchExecutor(engine, conditional_limit=2)
    return RecordQueryService(executor, form_codes, clock=lambda: FIXED_NOW)


@pytest.fixture
def reset_settings():
    """Drop the cached global settings after the test."""
    yield
    config._settings = None
