"""Search package for crawlrank.

This package contains the query engine with its TF-IDF, cosine and
cosine+PageRank ranking strategies, and the service layer that turns ranked
URLs into displayable results.
"""

from crawlrank.search.engine import QueryEngine, cosine_similarity
from crawlrank.search.service import Service
from crawlrank.search.types import RankingStrategy, SearchResponse, SearchResult

__all__ = [
    "QueryEngine",
    "RankingStrategy",
    "SearchResponse",
    "SearchResult",
    "Service",
    "cosine_similarity",
]
