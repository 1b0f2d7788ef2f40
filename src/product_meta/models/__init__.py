"""Data models."""

from .metadata import ProductMetadata
from .search import SearchAttempt, SearchQuery, SearchStrategy
from .url_components import UrlComponents

__all__ = ["ProductMetadata", "SearchAttempt", "SearchQuery", "SearchStrategy", "UrlComponents"]
