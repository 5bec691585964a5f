"""Shared test fixtures and configuration for the crawlrank test suite."""

import pytest

from crawlrank.crawl import FetchedPage
from crawlrank.errors import FetchFatalError, FetchTransientError
from crawlrank.index import ForwardIndex, LinkGraphRanker, TermDocumentIndex

BASE = "http://intranet.test"


class FakeFetcher:
    """In-memory fetcher serving a fixed set of pages.

    URLs listed in ``transient`` or ``fatal`` raise the matching fetch error;
    any other URL without a page fails transiently like a 404 would.
    """

    def __init__(
        self,
        pages: dict[str, FetchedPage],
        transient: set[str] | None = None,
        fatal: set[str] | None = None,
    ):
        self.pages = pages
        self.transient = transient or set()
        self.fatal = fatal or set()
        self.requested: list[str] = []

    async def fetch(self, url: str) -> FetchedPage:
        self.requested.append(url)
        if url in self.fatal:
            raise FetchFatalError(f"cannot fetch {url}", "FakeFetcher")
        if url in self.transient or url not in self.pages:
            raise FetchTransientError(f"HTTP 404 for {url}", "FakeFetcher")
        return self.pages[url]


def _page(path: str, title: str, body: str, links: list[str], headings=()):
    return FetchedPage(
        url=f"{BASE}{path}",
        title=title,
        headings=list(headings),
        body=body,
        links=[f"{BASE}{link}" for link in links],
    )


@pytest.fixture
def intranet_pages() -> dict[str, FetchedPage]:
    """Four pages; /birds links to /home but nothing links to /birds.

    Returns:
        Pages keyed by URL.
    """
    pages = [
        _page(
            "/home",
            "Home",
            "Cats and dogs live here.",
            ["/cats", "/dogs"],
            headings=["Welcome"],
        ),
        _page("/cats", "Cats", "Cats purr. Cats sleep.", ["/home", "/dogs"]),
        _page("/dogs", "Dogs", "Dogs bark loudly.", ["/home"]),
        _page("/birds", "Birds", "Birds sing.", ["/home"]),
    ]
    return {page.url: page for page in pages}


@pytest.fixture
def fake_fetcher(intranet_pages) -> FakeFetcher:
    """Fetcher serving the intranet pages."""
    return FakeFetcher(intranet_pages)


@pytest.fixture
def make_fetcher(intranet_pages):
    """Factory for fetchers over the intranet with injected failures."""

    def factory(transient=None, fatal=None) -> FakeFetcher:
        return FakeFetcher(intranet_pages, transient=transient, fatal=fatal)

    return factory


@pytest.fixture
def home_url() -> str:
    return f"{BASE}/home"


@pytest.fixture
def cat_dog_index() -> TermDocumentIndex:
    """Finished index over two documents sharing every term.

    Every token occurs in every document, so every TF-IDF weight is zero.
    """
    index = TermDocumentIndex(forward_index=ForwardIndex())
    index.add_document("http://a.test/", body="cat dog")
    index.add_document("http://b.test/", body="dog cat cat")
    index.finish()
    return index


@pytest.fixture
def cycle_ranker() -> LinkGraphRanker:
    """Ranker over the three-page cycle a -> b -> c -> a."""
    ranker = LinkGraphRanker()
    ranker.add_links("a", ["b"])
    ranker.add_links("b", ["c"])
    ranker.add_links("c", ["a"])
    return ranker
