"""Search query strategy - pick the image-search query for a product URL."""

import logging
import re
from typing import Callable

from ..models.search import SearchQuery, SearchStrategy
from ..models.url_components import UrlComponents
from ..utils import is_blank
from . import url_heuristics

logger = logging.getLogger(__name__)

# Common Amazon URL shapes:
#   https://www.amazon.com/dp/B08N5WRWNW
#   https://www.amazon.com/gp/product/B08N5WRWNW
#   https://www.amazon.com/Product-Title/dp/B08N5WRWNW
#   https://a.co/d/B08N5WRWNW
ASIN_PATTERNS = [
    re.compile(r"/dp/([A-Z0-9]{10})", re.IGNORECASE),
    re.compile(r"/gp/product/([A-Z0-9]{10})", re.IGNORECASE),
    re.compile(r"/d/([A-Z0-9]{10})", re.IGNORECASE),
    re.compile(r"ASIN=([A-Z0-9]{10})", re.IGNORECASE),
]


def extract_amazon_asin(url: str | None) -> str | None:
    """Amazon's 10-character product id, or None for non-Amazon URLs."""
    if is_blank(url) or "amazon" not in url.lower():
        return None

    for pattern in ASIN_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


Evaluator = Callable[[str | None, str | None, UrlComponents], str | None]


def _amazon_asin(url: str | None, title: str | None, components: UrlComponents) -> str | None:
    asin = extract_amazon_asin(url)
    return f"Amazon {asin}" if asin else None


def _known_title(url: str | None, title: str | None, components: UrlComponents) -> str | None:
    return None if is_blank(title) else title


def _domain_heuristic(url: str | None, title: str | None, components: UrlComponents) -> str | None:
    return None if components.is_empty else components.to_query()


def _raw_url(url: str | None, title: str | None, components: UrlComponents) -> str | None:
    return None if is_blank(url) else url


class QueryStrategyResolver:
    """
    Build the primary image-search query from a URL and an optional known title.

    Strategies are tried in priority order and the first that yields a query wins:
    1. Amazon ASIN (most accurate for Amazon)
    2. Known title (site-provided metadata)
    3. Domain + product name parsed from the URL
    4. The URL itself (last resort)

    Fallback domain/name for progressive simplification are attached whenever the
    URL heuristics succeed, whichever strategy produced the primary query.
    """

    STRATEGIES: list[tuple[SearchStrategy, Evaluator]] = [
        (SearchStrategy.AMAZON_ASIN, _amazon_asin),
        (SearchStrategy.KNOWN_TITLE, _known_title),
        (SearchStrategy.DOMAIN_HEURISTIC, _domain_heuristic),
        (SearchStrategy.RAW_URL, _raw_url),
    ]

    def build_query(self, url: str | None, known_title: str | None = None) -> SearchQuery | None:
        """Return the chosen SearchQuery, or None when no strategy applies."""
        components = url_heuristics.extract(url) if not is_blank(url) else UrlComponents.empty()

        for strategy, evaluate in self.STRATEGIES:
            query = evaluate(url, known_title, components)
            if query:
                logger.info(f"Using {strategy.value} search: {query}")
                return SearchQuery(
                    query=query,
                    strategy=strategy,
                    fallback_domain=components.domain,
                    fallback_name=components.product_name,
                )

        logger.info("No search strategy applies")
        return None
