"""Page fetching and HTML parsing for the crawler.

``HttpFetcher`` downloads a page with httpx and ``parse_html`` turns it into a
``FetchedPage``. Failures are split into transient ones, which the crawl loop
skips, and fatal ones, which abort the crawl.
"""

import logging
from typing import Protocol
from urllib.parse import urldefrag, urljoin, urlparse

import httpx
from bs4 import BeautifulSoup
from pydantic import BaseModel, Field

from crawlrank.config import Config
from crawlrank.errors import FetchFatalError, FetchTransientError

logger = logging.getLogger(__name__)

_COMPONENT = "HttpFetcher"
_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


class FetchedPage(BaseModel):
    """Content and outbound links of a fetched page."""

    url: str
    """URL the page was requested from."""

    title: str = ""
    """Text of the <title> element."""

    headings: list[str] = Field(default_factory=list)
    """Heading texts (h1 to h6) in document order."""

    body: str = ""
    """Visible body text without the headings."""

    links: list[str] = Field(default_factory=list)
    """Absolute http(s) link targets in document order, duplicates kept."""


class Fetcher(Protocol):
    """Anything the crawler can fetch pages with."""

    async def fetch(self, url: str) -> FetchedPage: ...


def parse_html(url: str, html: str) -> FetchedPage:
    """Extract title, headings, body text and links from an HTML page.

    Args:
        url: URL of the page, used to resolve relative links.
        html: Raw HTML.

    Returns:
        The parsed page.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    title = soup.title.get_text(" ", strip=True) if soup.title else ""
    if soup.title:
        soup.title.decompose()

    heading_tags = soup.find_all(_HEADING_TAGS)
    headings = [tag.get_text(" ", strip=True) for tag in heading_tags]

    links = []
    for anchor in soup.find_all("a", href=True):
        link, _ = urldefrag(urljoin(url, anchor["href"].strip()))
        if urlparse(link).scheme in ("http", "https"):
            links.append(link)

    for tag in heading_tags:
        tag.decompose()
    container = soup.body if soup.body is not None else soup
    body = container.get_text(" ", strip=True)

    return FetchedPage(url=url, title=title, headings=headings, body=body, links=links)


class HttpFetcher:
    """Async HTTP fetcher for crawl pages.

    Makes a single attempt per URL; there are no retries.
    """

    def __init__(
        self,
        timeout: float = Config.HTTP_TIMEOUT,
        user_agent: str = Config.USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the fetcher.

        Args:
            timeout: Timeout for each request in seconds.
            user_agent: User-Agent header value.
            transport: Optional httpx transport, e.g. a MockTransport in tests.
        """
        self.timeout: float = timeout
        self._headers: dict = {"User-Agent": user_agent}
        self._transport = transport

    async def fetch(self, url: str) -> FetchedPage:
        """Fetch and parse a page.

        Args:
            url: Absolute URL of the page.

        Returns:
            The parsed page.

        Raises:
            FetchTransientError: On HTTP error status, network errors or a
                non-HTML response.
            FetchFatalError: On a malformed URL or a local I/O error.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise FetchFatalError(f"malformed URL {url!r}: {e}", _COMPONENT) from e
        except httpx.HTTPStatusError as e:
            raise FetchTransientError(
                f"HTTP {e.response.status_code} for {url}", _COMPONENT
            ) from e
        except httpx.RequestError as e:
            raise FetchTransientError(f"could not reach {url}: {e}", _COMPONENT) from e
        except OSError as e:
            raise FetchFatalError(
                f"I/O error while fetching {url}: {e}", _COMPONENT
            ) from e

        content_type = response.headers.get("content-type", "")
        if content_type and "html" not in content_type:
            raise FetchTransientError(
                f"{url} is not an HTML page ({content_type})", _COMPONENT
            )

        logger.debug(f"Fetched {url} ({len(response.content)} bytes)")
        return parse_html(url, response.text)
