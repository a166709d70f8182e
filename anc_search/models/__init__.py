"""Pydantic models for the ANC record search layer."""

from anc_search.models.forms import (
    DEFAULT_FORM_CODES,
    FormCodeMap,
    FormCodeNotConfiguredError,
)
from anc_search.models.metrics import EstimatedDueDate, WeeksPregnant
from anc_search.models.query import FtiRequest, QueryOptions
from anc_search.models.record import PatientRecord
from anc_search.models.search import SearchResult, SearchRow

__all__ = [
    # Form codes
    "DEFAULT_FORM_CODES",
    "FormCodeMap",
    "FormCodeNotConfiguredError",
    # Query models
    "QueryOptions",
    "FtiRequest",
    # Record and result models
    "PatientRecord",
    "SearchRow",
    "SearchResult",
    # Derived metrics
    "WeeksPregnant",
    "EstimatedDueDate",
]
