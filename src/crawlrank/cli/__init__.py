"""Command-line interface for crawlrank."""
