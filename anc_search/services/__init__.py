"""Service layer for record queries and enrichment."""

from anc_search.services.enrichment_service import EnrichmentService
from anc_search.services.record_query_service import RecordQueryService

__all__ = [
    "EnrichmentService",
    "RecordQueryService",
]
