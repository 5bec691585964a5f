"""Text normalization shared by documents and queries.

Tokenization itself is pluggable through the ``Normalizer`` protocol. The
stopword and punctuation filters are fixed here and applied by the index, not
by the normalizer, so documents and queries always land in the same token
space whatever normalizer is plugged in.
"""

import re
from typing import Iterable, Protocol

STOPWORDS: frozenset[str] = frozenset(
    {
        "'s", "a", "about", "above", "after", "again", "against", "all", "am",
        "an", "and", "any", "are", "as", "at", "be", "because", "been",
        "before", "being", "below", "between", "both", "but", "by", "can",
        "did", "do", "does", "doing", "don", "down", "during", "each", "few",
        "for", "from", "further", "had", "has", "have", "having", "he", "her",
        "here", "hers", "herself", "him", "himself", "his", "how", "i", "if",
        "in", "into", "is", "it", "its", "itself", "just", "me", "more",
        "most", "my", "myself", "no", "nor", "not", "now", "of", "off", "on",
        "once", "only", "or", "other", "our", "ours", "ourselves", "out",
        "over", "own", "s", "same", "she", "should", "so", "some", "such",
        "t", "than", "that", "the", "their", "theirs", "them", "themselves",
        "then", "there", "these", "they", "this", "those", "through", "to",
        "too", "under", "until", "up", "very", "was", "we", "were", "what",
        "when", "where", "which", "while", "who", "whom", "why", "will",
        "with", "you", "your", "yours", "yourself", "yourselves",
    }
)
"""English stopwords removed from documents and queries after normalization."""

PUNCTUATION: frozenset[str] = frozenset(
    {
        ":", ",", ".", "!", "|", "&", "'", "[", "]", "?", "-", "–", "_",
        "/", "\\", "{", "}", "@", "^", "(", ")", "<", ">", '"', "%", "©",
        "—", "$",
    }
)
"""Punctuation tokens; these do not count towards a document's token total."""

_TOKEN_PATTERN = re.compile(r"'\w+|\w+|[^\w\s]")


class Normalizer(Protocol):
    """Turns raw text into a sequence of lowercase (possibly lemmatized) tokens."""

    def normalize(self, text: str) -> list[str]: ...


class RegexNormalizer:
    """Default normalizer: lowercases and splits words, clitics and punctuation.

    ``"The cat's toy."`` becomes ``["the", "cat", "'s", "toy", "."]``. No
    lemmatization is applied.
    """

    def normalize(self, text: str) -> list[str]:
        return _TOKEN_PATTERN.findall(text.lower())


def is_punctuation(token: str) -> bool:
    return token in PUNCTUATION


def is_stopword(token: str) -> bool:
    return token in STOPWORDS


def document_text(title: str, headings: Iterable[str], body: str) -> str:
    """Concatenate a page's title, headings and body into one lowercase string.

    Parts are joined with a space so words at part boundaries stay separate.
    """
    parts = [title, *headings, body]
    return " ".join(part for part in parts if part).lower()


def index_tokens(text: str, normalizer: Normalizer) -> list[str]:
    """Normalize text and drop punctuation and stopwords.

    Duplicates and their order are preserved.

    Args:
        text: Raw text, e.g. a search query.
        normalizer: The tokenizer used by the index.

    Returns:
        The surviving tokens.
    """
    return [
        token
        for token in normalizer.normalize(text.lower())
        if not is_punctuation(token) and not is_stopword(token)
    ]
