"""Query and aggregation layer for antenatal care records."""

from dataclasses import dataclass

from anc_search.clients.lucene_client import LuceneClient
from anc_search.config import Settings, get_settings
from anc_search.retrieval.chunked_search import ChunkedSearchExecutor
from anc_search.services.enrichment_service import EnrichmentService
from anc_search.services.record_query_service import RecordQueryService

__version__ = "0.1.0"


@dataclass
class RecordServices:
    """Wired services sharing one search engine client."""

    client: LuceneClient
    record_queries: RecordQueryService
    enrichment: EnrichmentService

    async def close(self) -> None:
        await self.client.close()


def create_record_services(settings: Settings | None = None) -> RecordServices:
    """Build the search client and services from settings.

    Args:
        settings: Settings to use; defaults to the global settings

    Returns:
        RecordServices whose client must be closed by the caller
    """
    settings = settings or get_settings()

    client = LuceneClient(
        base_url=settings.couchdb_url,
        database=settings.couchdb_database,
        design_doc=settings.fti_design_doc,
        index=settings.fti_index,
        timeout=settings.request_timeout,
    )
    executor = ChunkedSearchExecutor(
        client,
        conditional_limit=settings.lucene_conditional_limit,
    )
    record_queries = RecordQueryService(
        executor,
        settings.form_code_map(),
        max_weeks_pregnant=settings.max_weeks_pregnant,
        min_weeks_pregnant=settings.min_weeks_pregnant,
    )
    return RecordServices(
        client=client,
        record_queries=record_queries,
        enrichment=EnrichmentService(record_queries),
    )


__all__ = [
    "RecordServices",
    "create_record_services",
]
