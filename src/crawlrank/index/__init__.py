"""Indexing package for crawlrank.

Holds the forward index, the TF-IDF term-document matrix, the text pipeline
shared by documents and queries, and the PageRank link-graph ranker.
"""

from crawlrank.index.document import Document, DocumentStats
from crawlrank.index.forward import ForwardIndex
from crawlrank.index.pagerank import LinkGraphRanker
from crawlrank.index.term_index import TermDocumentIndex
from crawlrank.index.text import Normalizer, RegexNormalizer

__all__ = [
    "Document",
    "DocumentStats",
    "ForwardIndex",
    "LinkGraphRanker",
    "Normalizer",
    "RegexNormalizer",
    "TermDocumentIndex",
]
