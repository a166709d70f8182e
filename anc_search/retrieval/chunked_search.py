"""Full-text search with patient id filters split across clause limits."""

import logging
from collections.abc import Sequence
from typing import TypeVar

from anc_search.clients.lucene_client import SearchEngine
from anc_search.logging_config import log_progress
from anc_search.models.query import FtiRequest, QueryOptions
from anc_search.models.search import SearchResult
from anc_search.query.formatting import and_query, patient_id_filter

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Lucene allows a maximum of 1024 boolean conditions per query
DEFAULT_CONDITIONAL_LIMIT = 1000


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into contiguous chunks of at most ``size``."""
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


class ChunkedSearchExecutor:
    """Runs full-text queries, OR-ing patient ids in clause-limited chunks.

    Chunk queries run one after another and their results are merged in
    chunk order. The first failing chunk aborts the whole call.
    """

    def __init__(
        self,
        engine: SearchEngine,
        conditional_limit: int = DEFAULT_CONDITIONAL_LIMIT,
    ):
        """Initialize the executor.

        Args:
            engine: Full-text search engine client
            conditional_limit: Maximum patient ids per underlying query

        Raises:
            ValueError: If conditional_limit is less than 1
        """
        if conditional_limit < 1:
            raise ValueError("conditional_limit must be at least 1")
        self.engine = engine
        self.conditional_limit = conditional_limit

    async def fti(self, options: QueryOptions) -> SearchResult:
        """Run a single query as-is.

        Args:
            options: Query options; only q, sort, include_docs and limit are sent

        Returns:
            SearchResult, never missing total_rows or rows
        """
        request = FtiRequest(
            q=options.q,
            sort=options.sort,
            include_docs=options.include_docs,
            limit=options.limit,
        )
        response = await self.engine.search(request)
        return SearchResult.from_response(response)

    async def fti_with_patient_ids(self, options: QueryOptions) -> SearchResult:
        """Run a query restricted to ``options.patient_ids``.

        Without a patient id filter the query runs unchanged. An empty
        filter returns an empty result without touching the engine.

        Args:
            options: Query options

        Returns:
            Merged SearchResult across all chunks
        """
        if options.patient_ids is None:
            return await self.fti(options)
        if not options.patient_ids:
            return SearchResult.empty()

        chunks = chunk(options.patient_ids, self.conditional_limit)

        merged = SearchResult.empty()
        for i, ids in enumerate(chunks, 1):
            chunk_options = QueryOptions(
                q=and_query(options.q, patient_id_filter(ids)),
                include_docs=options.include_docs,
            )
            result = await self.fti(chunk_options)
            merged = merged.merge(result)
            log_progress(
                logger,
                "Patient id chunks",
                i,
                len(chunks),
                level=logging.DEBUG,
                ids=len(ids),
                rows=len(result.rows),
            )

        logger.info(
            f"Chunked search: {len(options.patient_ids)} patient ids in "
            f"{len(chunks)} chunk(s) → {merged.total_rows} total rows"
        )
        return merged
