"""Gestational age and due date estimates for a single record."""

from datetime import UTC, datetime, timedelta

from anc_search.models.metrics import EstimatedDueDate, WeeksPregnant
from anc_search.models.record import PatientRecord

# Registration form that only carries a reported date, no LMP
REPORTED_DATE_REGISTRATION_FORM = "R"

# Conception is about two weeks after the LMP
LMP_OFFSET_WEEKS = 2

REPORTED_DATE_EDD_WEEKS = 40
LMP_EDD_WEEKS = 42

_WEEK = timedelta(weeks=1)


def _whole_weeks(start: datetime, end: datetime) -> int:
    """Whole weeks from start to end, truncated toward zero."""
    return int((end - start) / _WEEK)


def get_weeks_pregnant(
    record: PatientRecord,
    now: datetime | None = None,
    reported_date_form: str = REPORTED_DATE_REGISTRATION_FORM,
) -> WeeksPregnant:
    """Weeks pregnant as of ``now`` (naive values are taken as UTC).

    Reported-date registrations give an approximate figure. LMP based
    records subtract the two week LMP offset.
    """
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    if record.form == reported_date_form:
        return WeeksPregnant(
            number=_whole_weeks(record.reported_date, now),
            approximate=True,
        )
    return WeeksPregnant(number=_whole_weeks(record.lmp_date, now) - LMP_OFFSET_WEEKS)


def get_edd(
    record: PatientRecord,
    reported_date_form: str = REPORTED_DATE_REGISTRATION_FORM,
) -> EstimatedDueDate:
    """Estimated due date of the pregnancy."""
    if record.form == reported_date_form:
        return EstimatedDueDate(
            date=record.reported_date + timedelta(weeks=REPORTED_DATE_EDD_WEEKS),
            approximate=True,
        )
    return EstimatedDueDate(date=record.lmp_date + timedelta(weeks=LMP_EDD_WEEKS))
