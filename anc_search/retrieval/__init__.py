"""Search execution components."""

from anc_search.retrieval.chunked_search import (
    DEFAULT_CONDITIONAL_LIMIT,
    ChunkedSearchExecutor,
    chunk,
)

__all__ = [
    "DEFAULT_CONDITIONAL_LIMIT",
    "ChunkedSearchExecutor",
    "chunk",
]
