"""Command-Line Interface for crawlrank.

Provides commands to crawl a set of seed URLs and search the crawled pages,
or to inspect the PageRank of the discovered link graph.
"""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from crawlrank.cli.display import display_page_ranks, display_search_results
from crawlrank.config import Config
from crawlrank.crawl import HttpFetcher, load_seed_manifest
from crawlrank.errors import CrawlRankError
from crawlrank.pipeline import SearchIndex, build_search_index
from crawlrank.search import RankingStrategy
from crawlrank.util import setup_logging

app = typer.Typer(
    name="crawlrank",
    help="Crawl a small web, index it and search it with TF-IDF and PageRank.",
    add_completion=False,
    rich_markup_mode="markdown",
)

_EXIT_WORD = "exit"


def _get_console(use_stderr: bool = False) -> Console:
    """Create a Rich console for output.

    Args:
        use_stderr: Print to stderr instead of stdout.

    Returns:
        A new Console.
    """
    return Console(stderr=use_stderr)


def _resolve_seeds(
    seed_urls: list[str] | None, seed_file: Path | None
) -> list[str]:
    """Combine seed URLs given on the command line with those of a manifest.

    Raises:
        typer.Exit: If no seed URL was given at all.
    """
    seeds = list(seed_urls or [])
    if seed_file is not None:
        try:
            seeds.extend(load_seed_manifest(seed_file).seed_urls)
        except CrawlRankError as e:
            _get_console(use_stderr=True).print(f"[bold red]Error: {e}[/bold red]")
            raise typer.Exit(code=1)
    if not seeds:
        _get_console(use_stderr=True).print(
            "[bold red]No seed URLs given.[/bold red]\n"
            "Pass URLs as arguments or use the --seed-file option."
        )
        raise typer.Exit(code=1)
    return seeds


async def _build_async(
    seeds: list[str],
    site_limit: int,
    normalize: bool,
    verbose: bool = False,
) -> SearchIndex:
    """Crawl and index, turning crawl failures into a CLI exit."""
    try:
        return await build_search_index(
            seeds,
            fetcher=HttpFetcher(),
            site_limit=site_limit,
            normalize=normalize,
            show_progress=True,
            verbose=verbose,
        )
    except CrawlRankError as e:
        _get_console(use_stderr=True).print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1)


async def _search_async(
    seeds: list[str],
    query: str | None,
    strategy: RankingStrategy,
    limit: int,
    site_limit: int,
) -> None:
    """Build the index, then answer one query or prompt until 'exit'."""
    console = _get_console()
    search_index = await _build_async(
        seeds,
        site_limit=site_limit,
        normalize=strategy is not RankingStrategy.TFIDF,
    )
    console.print(
        f"Indexed {search_index.term_index.site_count} pages "
        f"({search_index.term_index.token_count} tokens)."
    )

    if query is not None:
        response = search_index.service.search(query, strategy=strategy, limit=limit)
        display_search_results(response, display_limit=limit, console=console)
        return

    while True:
        current = typer.prompt(f"Search (type '{_EXIT_WORD}' to quit)")
        if current.strip().lower() == _EXIT_WORD:
            break
        response = search_index.service.search(current, strategy=strategy, limit=limit)
        display_search_results(response, display_limit=limit, console=console)


@app.command("search")
def search_command(
    seed_urls: Optional[List[str]] = typer.Argument(
        None, help="URLs to start crawling from."
    ),
    query: Optional[str] = typer.Option(
        None,
        "--query",
        "-q",
        help="Query to run. Without it, queries are read interactively.",
    ),
    seed_file: Optional[Path] = typer.Option(
        None, "--seed-file", help="JSON seed manifest with a 'Seed-URLs' list."
    ),
    strategy: RankingStrategy = typer.Option(
        RankingStrategy.COSINE_PAGERANK,
        "--strategy",
        "-s",
        help="Ranking strategy.",
        case_sensitive=False,
    ),
    limit: int = typer.Option(
        Config.DEFAULT_RESULT_LIMIT,
        "--limit",
        "-n",
        help="Number of search results to display.",
    ),
    site_limit: int = typer.Option(
        Config.SITE_LIMIT, "--site-limit", help="Maximum number of pages to crawl."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
):
    """Crawl from the seed URLs, then search the crawled pages."""
    setup_logging(verbose)
    seeds = _resolve_seeds(seed_urls, seed_file)
    asyncio.run(
        _search_async(
            seeds,
            query=query,
            strategy=strategy,
            limit=limit,
            site_limit=site_limit,
        )
    )


@app.command("ranks")
def ranks_command(
    seed_urls: Optional[List[str]] = typer.Argument(
        None, help="URLs to start crawling from."
    ),
    seed_file: Optional[Path] = typer.Option(
        None, "--seed-file", help="JSON seed manifest with a 'Seed-URLs' list."
    ),
    site_limit: int = typer.Option(
        Config.MAP_SITE_LIMIT,
        "--site-limit",
        help="Maximum number of pages to crawl.",
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", help="Number of pages to display."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log PageRank after every iteration."
    ),
):
    """Crawl from the seed URLs and print the PageRank of every page found."""
    setup_logging(verbose)
    seeds = _resolve_seeds(seed_urls, seed_file)
    search_index = asyncio.run(
        _build_async(seeds, site_limit=site_limit, normalize=False, verbose=verbose)
    )

    ranker = search_index.ranker
    page_ranks = ranker.get_page_rank_map()
    display_page_ranks(
        page_ranks,
        inbound_counts={url: len(ranker.inbound_links_of(url)) for url in page_ranks},
        display_limit=limit,
        console=_get_console(),
    )


if __name__ == "__main__":
    app()
