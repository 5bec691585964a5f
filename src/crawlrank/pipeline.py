"""End-to-end build of a searchable index from a set of seed URLs.

The pipeline wires the components together in the order they depend on each
other:

1. Crawl from the seeds, feeding the forward index, term index and ranker
2. Finish the term index (TF to TF-IDF)
3. Optionally normalize the document vectors
4. Compute PageRank over the discovered link graph
5. Wrap everything in a search Service
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from crawlrank.config import Config
from crawlrank.crawl import Crawler, Fetcher
from crawlrank.index import ForwardIndex, LinkGraphRanker, TermDocumentIndex
from crawlrank.search import QueryEngine, Service

logger = logging.getLogger(__name__)


@dataclass
class SearchIndex:
    """Everything produced by a pipeline run."""

    forward_index: ForwardIndex
    term_index: TermDocumentIndex
    ranker: LinkGraphRanker
    crawler: Crawler
    service: Service


async def build_search_index(
    seed_urls: Iterable[str],
    fetcher: Fetcher | None = None,
    site_limit: int = Config.SITE_LIMIT,
    normalize: bool = True,
    damping_factor: float = Config.DAMPING_FACTOR,
    max_iterations: int = Config.MAX_ITERATIONS,
    show_progress: bool = False,
    verbose: bool = False,
) -> SearchIndex:
    """Crawl from seed_urls and build every index needed for searching.

    Args:
        seed_urls: URLs the crawl starts from.
        fetcher: Page fetcher. Defaults to an HttpFetcher.
        site_limit: Maximum number of pages to crawl.
        normalize: Scale document vectors to unit length. Leave off for
            TF-IDF sum searches.
        damping_factor: PageRank damping factor.
        max_iterations: PageRank iteration cap.
        show_progress: Render a progress bar while crawling.
        verbose: Log per-iteration PageRank values.

    Returns:
        The built indices and a Service over them.

    Raises:
        SeedNotConfiguredError: If seed_urls is empty.
        FetchFatalError: If a fetch fails fatally during the crawl.
    """
    forward_index = ForwardIndex()
    term_index = TermDocumentIndex(forward_index=forward_index)
    ranker = LinkGraphRanker()
    crawler = Crawler(
        fetcher=fetcher,
        forward_index=forward_index,
        term_index=term_index,
        ranker=ranker,
    )

    logger.info("Step 1: Crawling")
    crawler.set_seed(seed_urls)
    await crawler.crawl(site_limit=site_limit, show_progress=show_progress)

    logger.info("Step 2: Computing TF-IDF weights")
    term_index.finish()

    if normalize:
        logger.info("Step 3: Normalizing document vectors")
        term_index.normalize()

    logger.info("Step 4: Calculating PageRank")
    ranker.calc_page_ranks(
        max_iterations=max_iterations,
        damping_factor=damping_factor,
        verbose=verbose,
    )

    service = Service(QueryEngine(term_index), forward_index, ranker)
    logger.info(
        f"Search index ready: {term_index.site_count} documents, "
        f"{term_index.token_count} tokens, {ranker.page_count} pages in link graph"
    )
    return SearchIndex(
        forward_index=forward_index,
        term_index=term_index,
        ranker=ranker,
        crawler=crawler,
        service=service,
    )
