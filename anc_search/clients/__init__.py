"""Clients for external services."""

from anc_search.clients.lucene_client import LuceneClient, SearchEngine, SearchEngineError

__all__ = [
    "LuceneClient",
    "SearchEngine",
    "SearchEngineError",
]
