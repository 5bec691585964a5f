"""Type definitions for search results and related data structures."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class RankingStrategy(str, Enum):
    """How documents are scored against a query."""

    TFIDF = "tfidf"
    """Sum of the query tokens' TF-IDF weights per document."""

    COSINE = "cosine"
    """Cosine similarity between query vector and document vector."""

    COSINE_PAGERANK = "cosine-pagerank"
    """Max-scaled cosine similarity plus max-scaled PageRank."""


class SearchResult(BaseModel):
    """A ranked document as shown to the user."""

    url: str
    """URL of the document."""

    title: Optional[str] = None
    """Title from the forward index, if the document is in it."""

    score: float
    """Score under the strategy used for the search."""

    pagerank: Optional[float] = None
    """PageRank of the document, if a ranker was available."""

    snippet: Optional[str] = None
    """Beginning of the document body, if the document is in the forward index."""


class SearchResponse(BaseModel):
    """Response of a search through the service layer."""

    query: str
    """The original query string."""

    strategy: RankingStrategy
    """Strategy the results were ranked by."""

    results: list[SearchResult]
    """Results in descending score order."""

    count: int
    """Number of results returned."""

    processing_time_ms: Optional[int] = None
    """Time spent ranking, in milliseconds."""
