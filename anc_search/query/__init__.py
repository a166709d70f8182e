"""Query text construction."""

from anc_search.query.formatting import (
    and_query,
    any_form_filter,
    district_filter,
    form_filter,
    format_date,
    format_date_range,
    patient_id_filter,
)

__all__ = [
    "and_query",
    "any_form_filter",
    "district_filter",
    "form_filter",
    "format_date",
    "format_date_range",
    "patient_id_filter",
]
