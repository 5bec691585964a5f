"""Shared utilities for crawlrank."""

from crawlrank.util.logging import setup_logging
from crawlrank.util.ordered_set import OrderedSet

__all__ = ["OrderedSet", "setup_logging"]
