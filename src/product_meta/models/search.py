"""Search query models."""

from dataclasses import dataclass
from enum import Enum


class SearchStrategy(Enum):
    """How the primary image-search query was built, highest priority first."""

    AMAZON_ASIN = "amazon_asin"
    KNOWN_TITLE = "known_title"
    DOMAIN_HEURISTIC = "domain_heuristic"
    RAW_URL = "raw_url"


@dataclass(frozen=True)
class SearchQuery:
    """Primary query plus the domain/name used for progressive simplification."""

    query: str
    strategy: SearchStrategy
    fallback_domain: str | None = None
    fallback_name: str | None = None


@dataclass(frozen=True)
class SearchAttempt:
    """One image-search request and what came of it."""

    query: str
    image_url: str | None = None
    error: str | None = None  # why nothing was found

    @property
    def found(self) -> bool:
        return bool(self.image_url)
