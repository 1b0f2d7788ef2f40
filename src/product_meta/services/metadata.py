"""Metadata resolution - page scrape first, image search when the page has no image."""

import logging
from dataclasses import replace

from ..clients.image_search import ImageSearchClient
from ..clients.page_scraper import PageScraper
from ..models.metadata import ProductMetadata
from .query_strategy import QueryStrategyResolver

logger = logging.getLogger(__name__)


class MetadataResolver:
    """Resolve a representative image, title and description for a product URL."""

    def __init__(
        self,
        scraper: PageScraper,
        search_client: ImageSearchClient,
        query_resolver: QueryStrategyResolver | None = None,
    ):
        self.scraper = scraper
        self.search_client = search_client
        self.query_resolver = query_resolver or QueryStrategyResolver()

    def resolve(self, url: str, title: str | None = None) -> ProductMetadata:
        """
        Resolve metadata for a product.

        Args:
            url: Product page URL
            title: Title already known for the product (e.g. entered by the user)

        Returns:
            ProductMetadata; failures are reported in error_message, never raised
        """
        # 1. Scrape the product page (OpenGraph / Twitter / <title>)
        scraped = self.scraper.fetch(url)
        image_url = scraped.image_url
        search_error = None

        # 2. No image on the page: image search with progressive simplification
        if not image_url:
            logger.info("No image on page, falling back to image search")
            image_url, search_error = self._search_image(url, title or scraped.title)

        # 3. success iff an image or a title was found; scrape error wins over search error
        result = replace(scraped, image_url=image_url or None, success=False, error_message=None)
        if result.has_content:
            result = replace(result, success=True)
        else:
            result = replace(result, error_message=scraped.error_message or search_error)

        logger.info(f"Resolved: success={result.success}, image_url={result.image_url}")
        return result

    def _search_image(self, url: str, title: str | None) -> tuple[str | None, str | None]:
        """Returns (image_url, error) from the search fallback."""
        query = self.query_resolver.build_query(url, title)
        if query is None:
            return None, "No search query could be built"

        attempts = self.search_client.search_attempts(
            query.query, query.fallback_domain, query.fallback_name
        )
        last = attempts[-1]
        return last.image_url, last.error
