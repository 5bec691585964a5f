"""Tests for per-document term statistics and the forward index."""

import pytest

from crawlrank.index import Document, DocumentStats, ForwardIndex


class TestDocumentStats:
    """Tests for counting and term frequency."""

    def test_from_tokens(self):
        """Test stopwords count towards the total but get no count."""
        stats = DocumentStats.from_tokens(["the", "cat", ",", "the", "cat", "sat"])
        assert stats.total == 5
        assert stats.count_of("cat") == 2
        assert stats.count_of("the") == 0
        assert stats.tf_of("cat") == pytest.approx(2 / 5)
        assert stats.words() == ["cat", "sat"]

    def test_tf_of_unknown_word(self):
        """Test an unknown word has frequency zero."""
        stats = DocumentStats.from_tokens(["cat"])
        assert stats.tf_of("dog") == 0.0

    def test_empty_document(self):
        """Test an empty document has no frequencies."""
        stats = DocumentStats()
        assert stats.total == 0
        assert stats.tf_of("cat") == 0.0
        assert stats.vector() == {}

    def test_manual_increments(self):
        """Test the increment helpers."""
        stats = DocumentStats()
        stats.increment_total()
        stats.increment_total()
        stats.increment_count("dog")
        assert stats.tf_of("dog") == 0.5

    def test_vector_is_sorted(self):
        """Test vector keys come out in ascending order."""
        stats = DocumentStats.from_tokens(["zebra", "apple", "mango", "apple"])
        assert list(stats.vector()) == ["apple", "mango", "zebra"]
        assert stats.vector()["apple"] == 2


class TestForwardIndex:
    """Tests for the forward index."""

    def test_add_and_get(self):
        """Test documents are stored by URL."""
        index = ForwardIndex()
        index.add_site(Document(url="http://a.test/", title="A"))
        assert index.get_site("http://a.test/").title == "A"
        assert index.title_of("http://a.test/") == "A"
        assert "http://a.test/" in index
        assert index.site_count == 1

    def test_duplicate_url_ignored(self):
        """Test the first document for a URL wins."""
        index = ForwardIndex()
        index.add_site(Document(url="http://a.test/", title="First"))
        index.add_site(Document(url="http://a.test/", title="Second"))
        assert index.title_of("http://a.test/") == "First"
        assert len(index) == 1

    def test_unknown_url(self):
        """Test lookups of unknown URLs."""
        index = ForwardIndex()
        assert index.get_site("http://missing/") is None
        assert index.title_of("http://missing/") is None

    def test_add_vector(self):
        """Test term counts attach to a known document only."""
        index = ForwardIndex()
        index.add_site(Document(url="http://a.test/"))
        index.add_vector("http://a.test/", {"cat": 2})
        index.add_vector("http://missing/", {"dog": 1})
        assert index.get_site("http://a.test/").term_counts == {"cat": 2}
        assert "http://missing/" not in index

    def test_urls_sorted(self):
        """Test urls are listed in ascending order."""
        index = ForwardIndex()
        for url in ["http://c/", "http://a/", "http://b/"]:
            index.add_site(Document(url=url))
        assert index.urls == ["http://a/", "http://b/", "http://c/"]
