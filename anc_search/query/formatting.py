"""Lucene query fragment builders."""

from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta


def format_date(value: date | datetime) -> str:
    """Normalize a date to its UTC day as ``YYYY-MM-DD``.

    Naive datetimes are taken as local time. Plain dates are used as-is.
    """
    if isinstance(value, datetime):
        value = value.astimezone(UTC).date()
    return value.isoformat()


def format_date_range(field: str, start: date | datetime, end: date | datetime) -> str:
    """Build an inclusive date range filter.

    Lucene excludes the upper bound, so the range ends on the day after
    ``end``.
    """
    if isinstance(end, datetime):
        end = end.astimezone(UTC).date()
    return f"{field}<date>:[{format_date(start)} TO {format_date(end + timedelta(days=1))}]"


def form_filter(code: str) -> str:
    return f"form:{code}"


def any_form_filter(codes: Iterable[str]) -> str:
    """Match any of the given form codes."""
    return "form:(" + " OR ".join(f'"{code}"' for code in codes) + ")"


def district_filter(district: str) -> str:
    return f'district:"{district}"'


def patient_id_filter(patient_ids: Iterable[str]) -> str:
    return "patient_id:(" + " OR ".join(patient_ids) + ")"


def and_query(*fragments: str | None) -> str:
    """Join the non-empty fragments with AND."""
    return " AND ".join(fragment for fragment in fragments if fragment)
