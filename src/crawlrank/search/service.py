"""Service layer for search operations."""

import time

from crawlrank.errors import InvalidArgumentError
from crawlrank.index import Document, ForwardIndex, LinkGraphRanker
from crawlrank.search.engine import QueryEngine, ScoredDocument
from crawlrank.search.types import RankingStrategy, SearchResponse, SearchResult

_SNIPPET_LENGTH = 200


def _snippet(body: str) -> str:
    if len(body) <= _SNIPPET_LENGTH:
        return body
    return body[:_SNIPPET_LENGTH].rsplit(" ", 1)[0] + "..."


class Service:
    """Service wrapper for search operations.

    Runs a ranking strategy and decorates the ranked URLs with titles from the
    forward index and PageRank values from the ranker.
    """

    def __init__(
        self,
        engine: QueryEngine,
        forward_index: ForwardIndex | None = None,
        ranker: LinkGraphRanker | None = None,
    ):
        """Initialize the search service.

        Args:
            engine: QueryEngine over a finished index.
            forward_index: Source of result titles. Optional.
            ranker: Ranker with computed PageRank. Required for the
                cosine-pagerank strategy.
        """
        self.engine = engine
        self.forward_index = forward_index
        self.ranker = ranker

    def search(
        self,
        query: str,
        strategy: RankingStrategy = RankingStrategy.COSINE_PAGERANK,
        limit: int | None = None,
        weights: dict[str, float] | None = None,
    ) -> SearchResponse:
        """Search the index.

        Args:
            query: Search query string.
            strategy: Ranking strategy to apply.
            limit: Maximum number of results to return; None returns all.
            weights: Optional per-word query weights for the cosine strategies.

        Returns:
            SearchResponse containing results and metadata.

        Raises:
            InvalidArgumentError: If cosine-pagerank is requested without a
                ranker.
        """
        start_time = time.time()

        ranked = self._rank(query, RankingStrategy(strategy), weights)
        if limit is not None:
            ranked = ranked[:limit]
        results = [self._to_search_result(url, score) for url, score in ranked]

        processing_time_ms = int((time.time() - start_time) * 1000)

        return SearchResponse(
            query=query,
            strategy=strategy,
            results=results,
            count=len(results),
            processing_time_ms=processing_time_ms,
        )

    def get_by_url(self, url: str) -> Document | None:
        """Retrieve an indexed document by URL.

        Returns:
            The Document if found, None otherwise.
        """
        if self.forward_index is None:
            return None
        return self.forward_index.get_site(url)

    def _rank(
        self,
        query: str,
        strategy: RankingStrategy,
        weights: dict[str, float] | None,
    ) -> list[ScoredDocument]:
        if strategy is RankingStrategy.TFIDF:
            return self.engine.search_tf_idf(query)
        if strategy is RankingStrategy.COSINE:
            return self.engine.search_cosine(query, weights)
        if self.ranker is None:
            raise InvalidArgumentError(
                "cosine-pagerank search needs a LinkGraphRanker", component="Service"
            )
        return self.engine.search_cosine_pagerank(query, self.ranker, weights)

    def _to_search_result(self, url: str, score: float) -> SearchResult:
        document = self.get_by_url(url)
        pagerank = self.ranker.get_page_rank_of(url) if self.ranker else None
        return SearchResult(
            url=url,
            title=document.title if document else None,
            score=score,
            pagerank=pagerank,
            snippet=_snippet(document.body) if document and document.body else None,
        )
