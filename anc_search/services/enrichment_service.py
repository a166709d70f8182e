"""Annotates patient records with data joined from related reports."""

from collections import Counter

from anc_search.logging_config import get_logger
from anc_search.models.query import QueryOptions
from anc_search.models.record import PatientRecord
from anc_search.services.record_query_service import RecordQueryService

logger = get_logger(__name__)


def _patient_ids(records: list[PatientRecord]) -> list[str]:
    return [record.patient_id for record in records if record.patient_id]


class EnrichmentService:
    """Joins visits and risk flags onto patient records by patient id.

    Records are annotated in place and returned in the same order; none
    are added or removed.
    """

    def __init__(self, record_queries: RecordQueryService):
        self.record_queries = record_queries

    async def inject_visits(self, records: list[PatientRecord]) -> list[PatientRecord]:
        """Set ``visits`` on every record to its number of visit reports."""
        visits = await self.record_queries.get_visits(
            QueryOptions(patient_ids=_patient_ids(records))
        )
        counts = Counter(visits.patient_ids())
        for record in records:
            record.visits = counts.get(record.patient_id, 0)

        logger.debug(f"Injected {len(visits.rows)} visits into {len(records)} records")
        return records

    async def inject_risk(self, records: list[PatientRecord]) -> list[PatientRecord]:
        """Mark records with a risk flag report as high risk.

        Only ``True`` is ever written; records without a flag keep their
        current value.
        """
        risks = await self.record_queries.get_high_risk(
            QueryOptions(patient_ids=_patient_ids(records))
        )
        for patient_id in risks.patient_ids():
            record = next((r for r in records if r.patient_id == patient_id), None)
            if record is not None:
                record.high_risk = True

        logger.debug(f"Injected {len(risks.rows)} risk flags into {len(records)} records")
        return records
