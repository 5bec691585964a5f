"""Document models and per-document term statistics."""

from typing import Iterable

from pydantic import BaseModel, Field

from crawlrank.index.text import is_punctuation, is_stopword


class Document(BaseModel):
    """A crawled page as kept by the forward index.

    Identity is the URL.
    """

    url: str
    """Absolute URL of the page; unique key."""

    title: str = ""
    """Contents of the page's <title> element."""

    headings: list[str] = Field(default_factory=list)
    """Heading texts in document order."""

    body: str = ""
    """Visible body text."""

    term_counts: dict[str, int] = Field(default_factory=dict)
    """Occurrences of each indexed token, filled in by the term index."""


class DocumentStats:
    """Term counts and term frequencies of a single document.

    The total counts every non-punctuation token, stopwords included, while
    only non-stopwords get a count of their own.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._total: int = 0

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "DocumentStats":
        """Build statistics from a normalized token sequence.

        Args:
            tokens: Normalized tokens, punctuation and stopwords included.

        Returns:
            The filled statistics.
        """
        stats = cls()
        for token in tokens:
            if is_punctuation(token):
                continue
            stats.increment_total()
            if is_stopword(token):
                continue
            stats.increment_count(token)
        return stats

    @property
    def total(self) -> int:
        return self._total

    def increment_total(self) -> None:
        self._total += 1

    def increment_count(self, word: str) -> None:
        self._counts[word] = self._counts.get(word, 0) + 1

    def count_of(self, word: str) -> int:
        return self._counts.get(word, 0)

    def tf_of(self, word: str) -> float:
        """Term frequency: count of word divided by the token total.

        Returns 0.0 for an empty document or an unknown word.
        """
        if self._total == 0:
            return 0.0
        return self._counts.get(word, 0) / self._total

    def words(self) -> list[str]:
        """Counted words in ascending order."""
        return sorted(self._counts)

    def vector(self) -> dict[str, int]:
        """Word counts keyed in ascending word order."""
        return {word: self._counts[word] for word in sorted(self._counts)}
