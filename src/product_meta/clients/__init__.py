"""API clients for external services."""

from .image_search import ImageSearchClient
from .page_scraper import PageScraper

__all__ = ["ImageSearchClient", "PageScraper"]
