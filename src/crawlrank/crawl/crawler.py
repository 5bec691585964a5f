"""Breadth-first crawler feeding the forward index, term index and ranker."""

import logging
from typing import Iterable

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
)

from crawlrank.config import Config
from crawlrank.crawl.fetcher import FetchedPage, Fetcher, HttpFetcher
from crawlrank.crawl.frontier import CrawlFrontier
from crawlrank.errors import FetchTransientError, SeedNotConfiguredError
from crawlrank.index import Document, ForwardIndex, LinkGraphRanker, TermDocumentIndex

logger = logging.getLogger(__name__)


class Crawler:
    """Crawls a link graph from a set of seed URLs.

    The indices are injected and optional; every crawled page is handed to
    each attached one. A crawl ends when the site limit is reached or the
    frontier runs dry.
    """

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        forward_index: ForwardIndex | None = None,
        term_index: TermDocumentIndex | None = None,
        ranker: LinkGraphRanker | None = None,
    ):
        """Initialize the crawler.

        Args:
            fetcher: Page fetcher. Defaults to a new HttpFetcher.
            forward_index: Receives a Document per crawled page.
            term_index: Indexes the text of each crawled page.
            ranker: Receives the outbound links of each crawled page.
        """
        self.fetcher = fetcher or HttpFetcher()
        self.forward_index = forward_index
        self.term_index = term_index
        self.ranker = ranker

        self.frontier: CrawlFrontier | None = None
        self.sites_crawled: int = 0
        self.links_found: int = 0
        self.skipped: list[str] = []

    def set_seed(self, seed_urls: Iterable[str]) -> None:
        """Start a fresh frontier from the given seed URLs."""
        self.frontier = CrawlFrontier()
        for url in seed_urls:
            self.frontier.enqueue(url)

    async def crawl(
        self, site_limit: int = Config.SITE_LIMIT, show_progress: bool = False
    ) -> int:
        """Crawl breadth-first from the seed.

        Pages that fail transiently are logged and skipped; fatal fetch errors
        propagate and end the crawl.

        Args:
            site_limit: Maximum number of pages to crawl.
            show_progress: Render a Rich progress bar.

        Returns:
            Number of pages crawled.

        Raises:
            SeedNotConfiguredError: If no seed URL was set.
            FetchFatalError: If a fetch fails fatally.
        """
        if self.frontier is None or self.frontier.seen_count == 0:
            raise SeedNotConfiguredError("crawl started without a seed", "Crawler")

        self.sites_crawled = 0
        self.links_found = 0
        self.skipped = []
        logger.info(
            f"Starting crawl from {self.frontier.size} seed URLs "
            f"with site limit {site_limit}"
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            disable=not show_progress,
        ) as progress:
            task = progress.add_task("Crawling", total=site_limit)

            while self.sites_crawled < site_limit and not self.frontier.is_empty():
                url = self.frontier.dequeue()
                try:
                    page = await self.fetcher.fetch(url)
                except FetchTransientError as e:
                    logger.warning(f"Skipping {url}: {e}")
                    self.skipped.append(url)
                    continue

                self._record(url, page)
                progress.update(task, advance=1)

        logger.info(
            f"Crawled {self.sites_crawled} pages, found {self.links_found} links, "
            f"skipped {len(self.skipped)}"
        )
        return self.sites_crawled

    def _record(self, url: str, page: FetchedPage) -> None:
        self.sites_crawled += 1
        self.links_found += len(page.links)

        if self.forward_index is not None:
            self.forward_index.add_site(
                Document(
                    url=url, title=page.title, headings=page.headings, body=page.body
                )
            )
        if self.term_index is not None:
            self.term_index.add_document(url, page.title, page.headings, page.body)
        if self.ranker is not None:
            self.ranker.add_links(url, page.links)

        for link in page.links:
            self.frontier.enqueue(link)
