"""Incrementally growing term-document matrix with TF-IDF weighting.

Each indexed document owns one matrix row and each distinct token one column.
Cells hold the raw term frequency while documents are being added. Once the
crawl is over, ``finish()`` turns every cell into TF x ln(N / df) and the
optional ``normalize()`` scales every row to unit length so that cosine
similarity against a row reduces to a dot product.
"""

import logging
import math
import threading
from typing import Iterable, Mapping

import numpy as np

from crawlrank.errors import IndexStateError, InvalidArgumentError
from crawlrank.index.document import DocumentStats
from crawlrank.index.forward import ForwardIndex
from crawlrank.index.text import (
    Normalizer,
    RegexNormalizer,
    document_text,
    index_tokens,
)

logger = logging.getLogger(__name__)

_COMPONENT = "TermDocumentIndex"


def _grown_capacity(current: int, required: int) -> int:
    capacity = max(current, 16)
    while capacity < required:
        capacity *= 2
    return capacity


class TermDocumentIndex:
    """Term-document matrix over crawled pages.

    The matrix only ever grows. A new document appends a zero-filled row; a
    new token appends a column that reads 0 for every earlier document. The
    backing array is over-allocated and doubled when full, so the zero padding
    of existing rows comes for free.
    """

    def __init__(
        self,
        forward_index: ForwardIndex | None = None,
        normalizer: Normalizer | None = None,
    ):
        """Initialize an empty index.

        Args:
            forward_index: Forward index that receives each document's token
                counts. Optional.
            normalizer: Tokenizer used for documents and queries. Defaults to
                RegexNormalizer.
        """
        self.forward_index = forward_index
        self.normalizer: Normalizer = normalizer or RegexNormalizer()

        self._document_index: dict[str, int] = {}
        self._token_index: dict[str, int] = {}
        self._docs_per_token: list[int] = []
        self._document_tokens: dict[str, frozenset[str]] = {}
        self._buffer: np.ndarray = np.zeros((0, 0), dtype=np.float64)

        self._finished = False
        self._normalized = False
        self._lock = threading.Lock()

    @property
    def matrix(self) -> np.ndarray:
        """View of the used part of the matrix, one row per document."""
        return self._buffer[: len(self._document_index), : len(self._token_index)]

    @property
    def total_doc_count(self) -> int:
        return len(self._document_index)

    @property
    def site_count(self) -> int:
        return len(self._document_index)

    @property
    def token_count(self) -> int:
        return len(self._token_index)

    @property
    def document_ids(self) -> list[str]:
        """Indexed URLs in ascending order."""
        return sorted(self._document_index)

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def is_normalized(self) -> bool:
        return self._normalized

    def __len__(self) -> int:
        return len(self._document_index)

    def add_document(
        self,
        url: str,
        title: str = "",
        headings: Iterable[str] = (),
        body: str = "",
    ) -> bool:
        """Index one page.

        Every non-punctuation token counts towards the page's token total;
        stopwords are then dropped and each remaining distinct token gets its
        term frequency written into the page's row.

        Args:
            url: URL of the page; pages are only indexed once per URL.
            title: Page title.
            headings: Page headings in document order.
            body: Page body text.

        Returns:
            True if the page was indexed, False if the URL was already known.

        Raises:
            InvalidArgumentError: If url is None.
            IndexStateError: If the index has already been finished.
        """
        if url is None:
            raise InvalidArgumentError(
                "tried to index a document without URL", _COMPONENT
            )

        with self._lock:
            if self._finished:
                raise IndexStateError(
                    f"cannot add {url} after finish() was called", _COMPONENT
                )
            if url in self._document_index:
                return False

            text = document_text(title, headings, body)
            stats = DocumentStats.from_tokens(self.normalizer.normalize(text))
            words = stats.words()

            row = len(self._document_index)
            new_tokens = [word for word in words if word not in self._token_index]
            self._reserve(row + 1, len(self._token_index) + len(new_tokens))

            self._document_index[url] = row
            for token in new_tokens:
                self._token_index[token] = len(self._docs_per_token)
                self._docs_per_token.append(0)

            for word in words:
                column = self._token_index[word]
                self._buffer[row, column] = stats.tf_of(word)
                self._docs_per_token[column] += 1
            self._document_tokens[url] = frozenset(words)

        logger.debug(
            f"Indexed {url}: {stats.total} tokens, {len(words)} distinct terms, "
            f"{len(new_tokens)} new"
        )
        if self.forward_index is not None:
            self.forward_index.add_vector(url, stats.vector())
        return True

    def _reserve(self, rows: int, columns: int) -> None:
        capacity_rows, capacity_columns = self._buffer.shape
        if rows <= capacity_rows and columns <= capacity_columns:
            return
        grown = np.zeros(
            (
                _grown_capacity(capacity_rows, rows),
                _grown_capacity(capacity_columns, columns),
            ),
            dtype=np.float64,
        )
        grown[:capacity_rows, :capacity_columns] = self._buffer
        self._buffer = grown

    def finish(self) -> None:
        """Convert every cell from TF to TF x ln(N / df).

        Call exactly once, after the last document and before TF-IDF or cosine
        searches. Searching an unfinished index silently ranks by raw TF.

        Raises:
            IndexStateError: If the index was already finished.
        """
        with self._lock:
            if self._finished:
                raise IndexStateError("finish() was already called", _COMPONENT)
            matrix = self.matrix
            if matrix.size:
                document_frequency = np.asarray(self._docs_per_token, dtype=np.float64)
                matrix *= np.log(self.total_doc_count / document_frequency)
            self._finished = True
        logger.info(
            f"Finished index with {self.site_count} documents and "
            f"{self.token_count} tokens"
        )

    def normalize(self) -> None:
        """Scale every document row to unit L2 length, in place.

        This cannot be undone: afterwards TF-IDF magnitudes are no longer
        comparable across documents and cosine searches use a plain dot
        product. Rows without any weight stay all-zero.

        Raises:
            IndexStateError: If called before finish() or more than once.
        """
        with self._lock:
            if not self._finished:
                raise IndexStateError("normalize() requires finish() first", _COMPONENT)
            if self._normalized:
                raise IndexStateError("normalize() was already called", _COMPONENT)
            matrix = self.matrix
            norms = np.linalg.norm(matrix, axis=1)
            weighted = norms > 0
            matrix[weighted] /= norms[weighted, np.newaxis]
            self._normalized = True
        logger.info("Normalized document vectors")

    def query_tokens(self, text: str) -> list[str]:
        """Run text through the same pipeline as documents, minus counting."""
        return index_tokens(text, self.normalizer)

    def contains_token(self, token: str) -> bool:
        return token in self._token_index

    def contains_document(self, url: str) -> bool:
        return url in self._document_index

    def tf_idf_of(self, token: str, url: str) -> float | None:
        """Matrix cell for token in the document at url.

        Returns:
            The TF-IDF weight (raw TF before finish()), or None if either the
            token or the document is unknown.
        """
        column = self._token_index.get(token)
        row = self._document_index.get(url)
        if column is None or row is None:
            return None
        return float(self._buffer[row, column])

    def doc_has_token(self, token: str, url: str) -> bool:
        """Check whether the document at url contained token when indexed."""
        return token in self._document_tokens.get(url, frozenset())

    def tf_idf_sum_of(self, url: str, tokens: Iterable[str]) -> float:
        """Sum of the cells for tokens in the document at url.

        Unknown tokens contribute nothing; repeated tokens count repeatedly.
        """
        row = self._document_index.get(url)
        if row is None:
            return 0.0
        total = 0.0
        for token in tokens:
            column = self._token_index.get(token)
            if column is None:
                continue
            total += float(self._buffer[row, column])
        return total

    def vector_of(self, url: str) -> np.ndarray | None:
        """Copy of the document's row, or None if url is not indexed."""
        row = self._document_index.get(url)
        if row is None:
            return None
        return self._buffer[row, : self.token_count].copy()

    def query_vector_for(
        self, tokens: Iterable[str], weights: Mapping[str, float]
    ) -> np.ndarray:
        """Build a query vector in the index's token space.

        Args:
            tokens: Normalized query tokens.
            weights: Weight per token; tokens without a weight get 0.0.

        Returns:
            A vector with one entry per indexed token.
        """
        vector = np.zeros(self.token_count, dtype=np.float64)
        for token in tokens:
            column = self._token_index.get(token)
            if column is None:
                continue
            vector[column] = weights.get(token, 0.0)
        return vector

    def idf_of(self, token: str) -> float | None:
        """ln(N / df) for token, or None if it is unknown."""
        column = self._token_index.get(token)
        if column is None:
            return None
        return math.log(self.total_doc_count / self._docs_per_token[column])
