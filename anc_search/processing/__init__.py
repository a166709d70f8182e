"""Derived metrics computed from individual records."""

from anc_search.processing.pregnancy import get_edd, get_weeks_pregnant

__all__ = [
    "get_edd",
    "get_weeks_pregnant",
]
