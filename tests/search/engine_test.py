"""Tests for the query engine and its ranking strategies.

The corpus mirrors a three-page site: /home mentions cats and dogs, /cats is
mostly about cats and /dogs mostly about dogs.
"""

import math

import numpy as np
import pytest

from crawlrank.index import LinkGraphRanker, TermDocumentIndex
from crawlrank.search import QueryEngine, cosine_similarity

HOME = "http://site.test/home"
CATS = "http://site.test/cats"
DOGS = "http://site.test/dogs"


def _build_index(normalize: bool) -> TermDocumentIndex:
    index = TermDocumentIndex()
    index.add_document(HOME, "Home", ["Welcome"], "Cats and dogs live here.")
    index.add_document(CATS, "Cats", [], "Cats purr. Cats sleep.")
    index.add_document(DOGS, "Dogs", [], "Dogs bark loudly.")
    index.finish()
    if normalize:
        index.normalize()
    return index


@pytest.fixture
def engine() -> QueryEngine:
    return QueryEngine(_build_index(normalize=False))


@pytest.fixture
def normalized_engine() -> QueryEngine:
    return QueryEngine(_build_index(normalize=True))


@pytest.fixture
def ranker() -> LinkGraphRanker:
    ranker = LinkGraphRanker()
    ranker.add_links(HOME, [CATS, DOGS])
    ranker.add_links(CATS, [HOME, DOGS])
    ranker.add_links(DOGS, [HOME])
    ranker.calc_page_ranks()
    return ranker


class TestCosineSimilarity:
    """Tests for the cosine_similarity function."""

    def test_identical_vectors(self):
        """Test identical vectors are fully similar."""
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(
            1.0, abs=1e-4
        )

    def test_orthogonal_vectors(self):
        """Test orthogonal vectors share nothing."""
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_known_value(self):
        """Test a hand-computed similarity."""
        assert cosine_similarity([1.0, 2.0], [2.0, 1.0]) == pytest.approx(0.8)

    def test_symmetry(self):
        """Test sim(a, b) equals sim(b, a)."""
        a, b = [0.3, 0.0, 1.2], [0.5, 0.4, 0.1]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_zero_vector(self):
        """Test a zero vector gives zero instead of NaN."""
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0


class TestSearchTfIdf:
    """Tests for TF-IDF sum ranking."""

    def test_ranking(self, engine):
        """Test scores are summed TF-IDF weights, highest first."""
        results = engine.search_tf_idf("cats")
        assert [url for url, _ in results] == [CATS, HOME]
        assert results[0][1] == pytest.approx(3 / 5 * math.log(1.5))
        assert results[1][1] == pytest.approx(1 / 7 * math.log(1.5))

    def test_multi_token_query(self, engine):
        """Test every query token contributes."""
        results = dict(engine.search_tf_idf("purr bark"))
        assert results[CATS] == pytest.approx(1 / 5 * math.log(3))
        assert results[DOGS] == pytest.approx(1 / 4 * math.log(3))
        assert HOME not in results

    def test_no_match(self, engine):
        """Test unknown tokens give no results."""
        assert engine.search_tf_idf("zebra") == []

    def test_stopword_query(self, engine):
        """Test a query of only stopwords gives no results."""
        assert engine.search_tf_idf("the and") == []

    def test_common_tokens_score_nothing(self, cat_dog_index):
        """Test tokens found in every document rank nothing."""
        assert QueryEngine(cat_dog_index).search_tf_idf("cat dog") == []


class TestSearchCosine:
    """Tests for cosine similarity ranking."""

    def test_ranking(self, engine):
        """Test the page about cats beats the page mentioning them."""
        results = engine.search_cosine("cats")
        assert [url for url, _ in results] == [CATS, HOME]
        for _, similarity in results:
            assert 0.0 < similarity <= 1.0

    def test_normalized_index_scales_by_query_length(
        self, engine, normalized_engine
    ):
        """Test the dot-product shortcut is the full cosine times the query norm.

        Query vectors are weighted to sum to one, not to unit length, so the
        shortcut keeps the ranking but not the absolute similarity.
        """
        tokens = engine.index.query_tokens("cats purr")
        query_vector = engine.index.query_vector_for(
            tokens, engine.query_weights(tokens)
        )
        query_norm = np.linalg.norm(query_vector)
        assert query_norm == pytest.approx(math.sqrt(0.5))

        full_results = engine.search_cosine("cats purr")
        shortcut_results = normalized_engine.search_cosine("cats purr")
        assert [url for url, _ in shortcut_results] == [
            url for url, _ in full_results
        ]

        full = dict(full_results)
        shortcut = dict(shortcut_results)
        for url, similarity in full.items():
            assert shortcut[url] == pytest.approx(similarity * query_norm)

    def test_zero_weight_drops_token(self, engine):
        """Test a token weighted zero does not influence the ranking."""
        weighted = engine.search_cosine("cats bark", weights={"bark": 0.0})
        unweighted = engine.search_cosine("cats")
        assert [url for url, _ in weighted] == [url for url, _ in unweighted]
        for (_, a), (_, b) in zip(weighted, unweighted):
            assert a == pytest.approx(b)

    def test_no_match(self, engine):
        """Test an unknown query gives an empty list."""
        assert engine.search_cosine("zebra") == []
        assert engine.search_cosine("") == []

    def test_ties_broken_by_url(self):
        """Test equal scores come out in ascending URL order."""
        index = TermDocumentIndex()
        index.add_document("http://y.test/", body="kiwi")
        index.add_document("http://x.test/", body="kiwi")
        index.add_document("http://z.test/", body="fig")
        index.finish()
        results = QueryEngine(index).search_cosine("kiwi")
        assert [url for url, _ in results] == ["http://x.test/", "http://y.test/"]
        assert results[0][1] == pytest.approx(results[1][1])


class TestQueryWeights:
    """Tests for query weight normalization."""

    def test_default_weights(self, engine):
        """Test distinct tokens share the weight equally."""
        weights = engine.query_weights(["cats", "cats", "purr"])
        assert weights == {"cats": pytest.approx(0.5), "purr": pytest.approx(0.5)}

    def test_custom_weights_are_normalized(self, engine):
        """Test supplied weights are scaled to sum to one."""
        weights = engine.query_weights(["cats", "purr"], {"Cats": 3.0})
        assert weights["cats"] == pytest.approx(0.75)
        assert weights["purr"] == pytest.approx(0.25)

    def test_zero_sum_falls_back_to_equal_split(self, engine):
        """Test all-zero weights become an equal split."""
        weights = engine.query_weights(["cats", "purr"], {"cats": 0.0, "purr": 0.0})
        assert weights == {"cats": 0.5, "purr": 0.5}

    def test_no_tokens(self, engine):
        """Test an empty query has no weights."""
        assert engine.query_weights([]) == {}


class TestSearchCosinePageRank:
    """Tests for the combined cosine and PageRank ranking."""

    def test_best_match_scores_one_plus_relative_rank(self, engine, ranker):
        """Test the most similar page scores 1 + pageRank / maxPageRank."""
        results = engine.search_cosine_pagerank("cats", ranker)
        assert [url for url, _ in results] == [CATS, HOME]

        max_page_rank = max(ranker.get_page_rank_of(url) for url in (CATS, HOME))
        expected = 1 + ranker.get_page_rank_of(CATS) / max_page_rank
        assert results[0][1] == pytest.approx(expected)

    def test_scores_within_range(self, engine, ranker):
        """Test combined scores range from 0 to 2."""
        for _, score in engine.search_cosine_pagerank("cats dogs", ranker):
            assert 0.0 < score <= 2.0

    def test_highest_ranked_page_gets_full_rank_share(self, engine, ranker):
        """Test the best-linked result adds exactly 1 to its scaled similarity."""
        similarity = dict(engine.search_cosine("dogs"))
        combined = dict(engine.search_cosine_pagerank("dogs", ranker))
        assert similarity[DOGS] > similarity[HOME]
        assert combined[HOME] == pytest.approx(
            similarity[HOME] / similarity[DOGS] + 1.0
        )

    def test_without_page_ranks(self, engine):
        """Test a ranker without ranks falls back to similarity alone."""
        results = engine.search_cosine_pagerank("cats", LinkGraphRanker())
        assert results[0] == (CATS, pytest.approx(1.0))

    def test_no_match(self, engine, ranker):
        """Test an unknown query gives an empty list."""
        assert engine.search_cosine_pagerank("zebra", ranker) == []
