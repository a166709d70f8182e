"""Named ANC record queries built on the chunked search executor."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from anc_search.logging_config import get_logger
from anc_search.models.forms import (
    DELIVERY,
    FLAG,
    REGISTRATION,
    REGISTRATION_LMP,
    VISIT,
    FormCodeMap,
)
from anc_search.models.query import QueryOptions
from anc_search.models.record import PatientRecord
from anc_search.models.search import SearchResult
from anc_search.query.formatting import (
    and_query,
    any_form_filter,
    district_filter,
    form_filter,
    format_date_range,
)
from anc_search.retrieval.chunked_search import ChunkedSearchExecutor

logger = get_logger(__name__)

DEFAULT_MAX_WEEKS_PREGNANT = 42
DEFAULT_MIN_WEEKS_PREGNANT = 0

# Registrations at least this far along are due or overdue
BIRTH_MIN_WEEKS_PREGNANT = 42
BIRTH_MAX_WEEKS_PREGNANT = 10000

# Visits reported shortly after "now" still count
VISIT_LOOKAHEAD = timedelta(days=2)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RecordQueryService:
    """Registrations, deliveries, visits and risk flags as search queries.

    Each query fixes the form codes and date semantics of one kind of ANC
    record and delegates execution to a ChunkedSearchExecutor, so patient
    id filters of any size are supported.
    """

    def __init__(
        self,
        executor: ChunkedSearchExecutor,
        form_codes: FormCodeMap,
        clock: Callable[[], datetime] | None = None,
        max_weeks_pregnant: int = DEFAULT_MAX_WEEKS_PREGNANT,
        min_weeks_pregnant: int = DEFAULT_MIN_WEEKS_PREGNANT,
    ):
        """Initialize the service.

        Args:
            executor: Executor used for every query
            form_codes: Logical form name to form code table
            clock: Returns the current aware datetime (for testing)
            max_weeks_pregnant: Default registration window upper bound
            min_weeks_pregnant: Default registration window lower bound
        """
        self.executor = executor
        self.form_codes = form_codes
        self.clock = clock or _utcnow
        self.max_weeks_pregnant = max_weeks_pregnant
        self.min_weeks_pregnant = min_weeks_pregnant

    def get_form_code(self, name: str) -> str:
        """Look up a form code.

        Raises:
            FormCodeNotConfiguredError: If the form is not configured
        """
        return self.form_codes.code_for(name)

    async def fti(self, options: QueryOptions) -> SearchResult:
        """Run a raw full-text query without patient id chunking."""
        return await self.executor.fti(options)

    async def get_all_registrations(self, options: QueryOptions) -> SearchResult:
        """Error-free registrations with an expected date in a window.

        Without an explicit start and end date the window is
        ``[now - max_weeks_pregnant, now - min_weeks_pregnant]``.
        """
        start_date, end_date = options.start_date, options.end_date
        if not start_date or not end_date:
            now = self.clock()
            max_weeks = options.max_weeks_pregnant or self.max_weeks_pregnant
            min_weeks = options.min_weeks_pregnant or self.min_weeks_pregnant
            start_date = now - timedelta(weeks=max_weeks)
            end_date = now - timedelta(weeks=min_weeks)

        query = and_query(
            "errors<int>:0",
            any_form_filter(
                [self.get_form_code(REGISTRATION), self.get_form_code(REGISTRATION_LMP)]
            ),
            format_date_range("expected_date", start_date, end_date),
            district_filter(options.district) if options.district else None,
        )
        return await self.executor.fti_with_patient_ids(
            QueryOptions(q=query, patient_ids=options.patient_ids, include_docs=True)
        )

    async def get_deliveries(self, options: QueryOptions | None = None) -> SearchResult:
        """Delivery reports, optionally by reported date range and district."""
        if options is None:
            options = QueryOptions()

        date_range = None
        if options.start_date and options.end_date:
            date_range = format_date_range(
                "reported_date", options.start_date, options.end_date
            )
        query = and_query(
            form_filter(self.get_form_code(DELIVERY)),
            date_range,
            district_filter(options.district) if options.district else None,
        )
        return await self.executor.fti_with_patient_ids(options.model_copy(update={"q": query}))

    async def get_visits(self, options: QueryOptions | None = None) -> SearchResult:
        """Visit reports for the given patients.

        Visits are never listed without a patient filter. When a start date
        is given the range ends at ``end_date``, or two days from now.
        """
        if not options or not options.patient_ids:
            return SearchResult.empty()

        date_range = None
        if options.start_date:
            end_date = options.end_date or self.clock() + VISIT_LOOKAHEAD
            date_range = format_date_range("reported_date", options.start_date, end_date)
        query = and_query(form_filter(self.get_form_code(VISIT)), date_range)
        return await self.executor.fti_with_patient_ids(
            QueryOptions(q=query, include_docs=True, patient_ids=options.patient_ids)
        )

    async def get_high_risk(self, options: QueryOptions | None = None) -> SearchResult:
        """Risk flag reports for the given patients."""
        if not options or not options.patient_ids:
            return SearchResult.empty()

        return await self.executor.fti_with_patient_ids(
            options.model_copy(
                update={"q": form_filter(self.get_form_code(FLAG)), "include_docs": True}
            )
        )

    async def get_birth_patient_ids(self, options: QueryOptions | None = None) -> list[str]:
        """Patients who are due, overdue, or have delivered.

        Returns:
            Deduplicated patient ids, delivered patients first
        """
        if options is None:
            options = QueryOptions()
        options = options.model_copy(
            update={
                "min_weeks_pregnant": BIRTH_MIN_WEEKS_PREGNANT,
                "max_weeks_pregnant": options.max_weeks_pregnant or BIRTH_MAX_WEEKS_PREGNANT,
            }
        )

        registrations = await self.get_all_registrations(options)
        deliveries = await self.get_deliveries(options.model_copy(update={"include_docs": True}))

        patient_ids = dict.fromkeys(deliveries.patient_ids())
        patient_ids.update(dict.fromkeys(registrations.patient_ids()))
        logger.info(
            f"Birth patients: {len(deliveries.rows)} deliveries + "
            f"{len(registrations.rows)} registrations → {len(patient_ids)} patients"
        )
        return list(patient_ids)

    async def reject_deliveries(self, records: list[PatientRecord]) -> list[PatientRecord]:
        """Drop the records of patients who have a delivery report.

        Deliveries are queried for exactly the records' patient ids on
        every call.
        """
        if not records:
            return []

        deliveries = await self.get_deliveries(
            QueryOptions(
                patient_ids=[record.patient_id for record in records if record.patient_id],
                include_docs=True,
            )
        )
        delivered = set(deliveries.patient_ids())
        return [record for record in records if record.patient_id not in delivered]
