"""Query ranking over a TF-IDF term-document index.

This module provides the three ranking strategies: TF-IDF sums, cosine
similarity, and cosine similarity blended with PageRank. Every strategy
returns ``(url, score)`` pairs sorted by descending score, with ties broken
by ascending URL, and returns an empty list when nothing matches.
"""

import logging
from typing import Mapping, Sequence

import numpy as np

from crawlrank.index import LinkGraphRanker, TermDocumentIndex

logger = logging.getLogger(__name__)

ScoredDocument = tuple[str, float]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equally long vectors.

    Returns 0.0 when either vector has zero length instead of dividing by
    zero.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def cosine_similarity_normalized(a: Sequence[float], b: Sequence[float]) -> float:
    """Similarity against a unit-length document vector: a plain dot product."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return float(np.dot(a, b))


def _ranked(scores: Mapping[str, float]) -> list[ScoredDocument]:
    return sorted(scores.items(), key=lambda item: (-item[1], item[0]))


class QueryEngine:
    """Ranks the documents of a TermDocumentIndex against free-text queries.

    The index should be finished before searching; an unfinished index ranks
    by raw term frequency.
    """

    def __init__(self, index: TermDocumentIndex):
        """Initialize the engine.

        Args:
            index: The index to search. It is shared, not copied.
        """
        self.index = index

    def search_tf_idf(self, query: str) -> list[ScoredDocument]:
        """Rank documents by the sum of the query tokens' TF-IDF weights.

        Documents whose sum is zero are left out. Only meaningful on an index
        that has not been normalized.

        Args:
            query: Free-text query.

        Returns:
            (url, score) pairs in descending score order.
        """
        tokens = self.index.query_tokens(query)
        if not tokens:
            return []

        scores: dict[str, float] = {}
        for url in self.index.document_ids:
            score = self.index.tf_idf_sum_of(url, tokens)
            if score == 0.0:
                continue
            scores[url] = score
        return _ranked(scores)

    def query_weights(
        self, tokens: Sequence[str], weights: Mapping[str, float] | None = None
    ) -> dict[str, float]:
        """Weight each distinct query token so that the weights sum to one.

        Args:
            tokens: Normalized query tokens.
            weights: Optional raw weights keyed by word. Keys go through the
                query pipeline; tokens without an entry weigh 1.0.

        Returns:
            Normalized weight per distinct token. If the raw weights sum to
            zero every token gets an equal share.
        """
        distinct = list(dict.fromkeys(tokens))
        if not distinct:
            return {}

        normalized_keys: dict[str, float] = {}
        for word, weight in (weights or {}).items():
            for token in self.index.query_tokens(word):
                normalized_keys[token] = weight

        raw = {token: normalized_keys.get(token, 1.0) for token in distinct}
        total = sum(raw.values())
        if total == 0.0:
            return {token: 1.0 / len(distinct) for token in distinct}
        return {token: weight / total for token, weight in raw.items()}

    def search_cosine(
        self, query: str, weights: Mapping[str, float] | None = None
    ) -> list[ScoredDocument]:
        """Rank documents by cosine similarity to the weighted query vector.

        On a normalized index the similarity is the plain dot product of the
        query vector and the unit-length document row. Documents with zero
        similarity are left out.

        Args:
            query: Free-text query.
            weights: Optional per-word weights, see query_weights().

        Returns:
            (url, similarity) pairs in descending order.
        """
        tokens = self.index.query_tokens(query)
        if not tokens:
            return []

        query_vector = self.index.query_vector_for(
            tokens, self.query_weights(tokens, weights)
        )
        similarity_of = (
            cosine_similarity_normalized
            if self.index.is_normalized
            else cosine_similarity
        )

        scores: dict[str, float] = {}
        for url in self.index.document_ids:
            similarity = similarity_of(query_vector, self.index.vector_of(url))
            if similarity == 0.0:
                continue
            scores[url] = similarity
        return _ranked(scores)

    def search_cosine_pagerank(
        self,
        query: str,
        ranker: LinkGraphRanker,
        weights: Mapping[str, float] | None = None,
    ) -> list[ScoredDocument]:
        """Rank by cosine similarity combined with PageRank.

        Both signals are divided by their maximum over the cosine results and
        added, so scores range from 0 to 2. The ranker must already have
        computed its ranks.

        Args:
            query: Free-text query.
            ranker: Ranker holding converged PageRank values.
            weights: Optional per-word weights, see query_weights().

        Returns:
            (url, combined score) pairs in descending order.
        """
        cosine_results = self.search_cosine(query, weights)
        if not cosine_results:
            return []

        page_ranks = {
            url: ranker.get_page_rank_of(url) or 0.0 for url, _ in cosine_results
        }
        max_similarity = max(similarity for _, similarity in cosine_results)
        max_page_rank = max(page_ranks.values())
        if max_page_rank <= 0.0:
            logger.warning(
                "No PageRank available for the results; ranking by similarity"
            )

        combined: dict[str, float] = {}
        for url, similarity in cosine_results:
            score = similarity / max_similarity
            if max_page_rank > 0.0:
                score += page_ranks[url] / max_page_rank
            combined[url] = score
        return _ranked(combined)
