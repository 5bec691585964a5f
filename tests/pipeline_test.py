"""End-to-end tests for building a search index from seed URLs."""

import pytest

from crawlrank.errors import FetchFatalError, SeedNotConfiguredError
from crawlrank.pipeline import build_search_index
from crawlrank.search import RankingStrategy

pytestmark = pytest.mark.integration

CATS = "http://intranet.test/cats"
DOGS = "http://intranet.test/dogs"


class TestBuildSearchIndex:
    """Tests for the build_search_index pipeline."""

    async def test_builds_every_component(self, fake_fetcher, home_url):
        """Test crawl, TF-IDF, normalization and PageRank all run."""
        search_index = await build_search_index([home_url], fetcher=fake_fetcher)

        assert search_index.crawler.sites_crawled == 3
        assert search_index.forward_index.site_count == 3
        assert search_index.term_index.is_finished
        assert search_index.term_index.is_normalized
        assert search_index.ranker.converged

        ranks = search_index.ranker.get_page_rank_map()
        assert max(ranks, key=ranks.get) == home_url
        assert sum(ranks.values()) == pytest.approx(1.0, abs=1e-3)

    async def test_search_after_build(self, fake_fetcher, home_url):
        """Test the built service answers queries."""
        search_index = await build_search_index([home_url], fetcher=fake_fetcher)

        response = search_index.service.search("cats")

        assert [result.url for result in response.results] == [CATS, home_url]
        assert response.results[0].title == "Cats"
        assert response.results[0].snippet == "Cats purr. Cats sleep."

    async def test_unnormalized_build_for_tf_idf(self, fake_fetcher, home_url):
        """Test TF-IDF sums on an index built without normalization."""
        search_index = await build_search_index(
            [home_url], fetcher=fake_fetcher, normalize=False
        )

        response = search_index.service.search("bark", strategy=RankingStrategy.TFIDF)

        assert not search_index.term_index.is_normalized
        assert [result.url for result in response.results] == [DOGS]

    async def test_site_limit(self, fake_fetcher, home_url):
        """Test the site limit reaches the crawler."""
        search_index = await build_search_index(
            [home_url], fetcher=fake_fetcher, site_limit=1
        )

        assert search_index.term_index.site_count == 1
        # Links of the one crawled page still enter the link graph.
        assert search_index.ranker.page_count == 3

    async def test_no_seeds(self, fake_fetcher):
        """Test building without seeds fails."""
        with pytest.raises(SeedNotConfiguredError):
            await build_search_index([], fetcher=fake_fetcher)

    async def test_fatal_fetch_aborts(self, make_fetcher, home_url):
        """Test a fatal fetch error propagates out of the pipeline."""
        with pytest.raises(FetchFatalError):
            await build_search_index(
                [home_url], fetcher=make_fetcher(fatal={CATS})
            )
