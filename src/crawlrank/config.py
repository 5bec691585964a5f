# src/crawlrank/config.py

"""Centralized configuration for crawlrank.

This module provides the crawl, indexing and ranking constants used throughout
the application. A few of them can be overridden with environment variables.
"""

import os


class Config:
    """Application-wide configuration settings."""

    SITE_LIMIT: int = int(os.getenv("CRAWLRANK_SITE_LIMIT", "1024"))
    """Maximum number of pages fetched by a single crawl.

    Can be overridden with CRAWLRANK_SITE_LIMIT environment variable.
    Default: 1024
    """

    MAP_SITE_LIMIT: int = 16
    """Smaller site limit used when only a sketch of the link graph is needed."""

    DAMPING_FACTOR: float = 0.85
    """Fraction of rank propagated along links in each PageRank iteration."""

    MAX_ITERATIONS: int = 100_000
    """Upper bound on PageRank iterations when the ranks do not converge."""

    CONVERGENCE_THRESHOLD: float = 1e-4
    """PageRank stops once no page's rank changes by more than this value."""

    HTTP_TIMEOUT: float = float(os.getenv("CRAWLRANK_HTTP_TIMEOUT", "10.0"))
    """Timeout for a single page fetch, in seconds.

    Can be overridden with CRAWLRANK_HTTP_TIMEOUT environment variable.
    """

    USER_AGENT: str = os.getenv("CRAWLRANK_USER_AGENT", "crawlrank/0.1")
    """User-Agent header sent with every page request.

    Can be overridden with CRAWLRANK_USER_AGENT environment variable.
    """

    DEFAULT_RESULT_LIMIT: int = 10
    """Number of search results shown by the CLI unless told otherwise."""
