"""crawlrank: a small crawling, indexing and ranking search engine."""

__version__ = "0.1.0"
