"""Forward index: URL-keyed display metadata for crawled pages."""

import logging

from crawlrank.index.document import Document

logger = logging.getLogger(__name__)


class ForwardIndex:
    """Maps URLs to the Document shown for them in search results."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}

    def add_site(self, document: Document) -> None:
        """Add a document. A URL that is already indexed is ignored."""
        if document.url in self._documents:
            return
        self._documents[document.url] = document

    def add_vector(self, url: str, term_counts: dict[str, int]) -> None:
        """Attach token counts to an already indexed document.

        Args:
            url: URL of the document.
            term_counts: Occurrences per indexed token.
        """
        document = self._documents.get(url)
        if document is None:
            logger.debug(f"Ignoring term vector for unindexed URL {url}")
            return
        document.term_counts = dict(term_counts)

    def get_site(self, url: str) -> Document | None:
        return self._documents.get(url)

    def title_of(self, url: str) -> str | None:
        """Title of the document at url, or None if it is not indexed."""
        document = self._documents.get(url)
        return document.title if document is not None else None

    @property
    def site_count(self) -> int:
        return len(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, url: object) -> bool:
        return url in self._documents

    @property
    def urls(self) -> list[str]:
        """Indexed URLs in ascending order."""
        return sorted(self._documents)
