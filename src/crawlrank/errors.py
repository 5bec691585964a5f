"""Typed failures raised by crawlrank components.

Each error carries the name of the component that raised it so that callers
further up (the crawl loop, the CLI) can report where a failure originated.
"""


class CrawlRankError(Exception):
    """Base class for all crawlrank errors."""

    def __init__(self, message: str, component: str = "crawlrank"):
        """Initialize the error.

        Args:
            message: Human readable description of the failure.
            component: Name of the component that raised the error.
        """
        super().__init__(message)
        self.message = message
        self.component = component

    def __str__(self) -> str:
        return f"{self.component}: {self.message}"


class InvalidArgumentError(CrawlRankError, ValueError):
    """A missing (None) value was passed where a value is required."""


class EmptyCollectionError(CrawlRankError, IndexError):
    """An element was requested from an empty collection."""


class SeedNotConfiguredError(CrawlRankError, RuntimeError):
    """A crawl was started without any seed URL."""


class FetchTransientError(CrawlRankError):
    """A page could not be fetched; the crawl skips it and continues."""


class FetchFatalError(CrawlRankError):
    """A fetch failed in a way that aborts the whole crawl."""


class IndexStateError(CrawlRankError, RuntimeError):
    """An index operation was called in the wrong lifecycle phase."""
