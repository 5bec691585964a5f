"""Crawling package for crawlrank: frontier, fetcher, crawler and seeds."""

from crawlrank.crawl.crawler import Crawler
from crawlrank.crawl.fetcher import FetchedPage, Fetcher, HttpFetcher, parse_html
from crawlrank.crawl.frontier import CrawlFrontier
from crawlrank.crawl.seeds import SeedManifest, load_seed_manifest

__all__ = [
    "CrawlFrontier",
    "Crawler",
    "FetchedPage",
    "Fetcher",
    "HttpFetcher",
    "SeedManifest",
    "load_seed_manifest",
    "parse_html",
]
