"""Crawl frontier: a FIFO queue that accepts every URL at most once."""

import threading
from collections import deque

from crawlrank.errors import EmptyCollectionError
from crawlrank.util import OrderedSet


class CrawlFrontier:
    """Discovered-but-unvisited URLs in first-in, first-out order.

    A URL is marked as seen the first time it is enqueued and stays seen for
    the lifetime of the frontier, even after it has been dequeued. This keeps
    a crawl over a cyclic link graph finite. One lock guards the seen set and
    the queue together so the frontier may be shared by concurrent fetchers.
    """

    def __init__(self) -> None:
        self._seen: OrderedSet[str] = OrderedSet()
        self._queue: deque[str] = deque()
        self._lock = threading.Lock()

    def enqueue(self, url: str) -> bool:
        """Append a URL to the tail unless it has been seen before.

        Args:
            url: The URL to schedule.

        Returns:
            True if the URL was added, False if it had already been seen.
        """
        with self._lock:
            if self._seen.contains(url):
                return False
            self._seen.insert(url)
            self._queue.append(url)
            return True

    def dequeue(self) -> str:
        """Remove and return the oldest queued URL.

        Raises:
            EmptyCollectionError: If no URL is waiting.
        """
        with self._lock:
            if not self._queue:
                raise EmptyCollectionError(
                    "dequeue from an empty frontier", component="CrawlFrontier"
                )
            return self._queue.popleft()

    def has_seen(self, url: str) -> bool:
        with self._lock:
            return self._seen.contains(url)

    @property
    def size(self) -> int:
        """Number of URLs waiting to be dequeued."""
        with self._lock:
            return len(self._queue)

    @property
    def seen_count(self) -> int:
        with self._lock:
            return len(self._seen)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._queue

    def __len__(self) -> int:
        return self.size

    def snapshot(self) -> list[str]:
        """Return the waiting URLs in FIFO order without removing them."""
        with self._lock:
            return list(self._queue)
