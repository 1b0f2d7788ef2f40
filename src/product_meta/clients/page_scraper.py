"""Product page scraper - OpenGraph/Twitter metadata from the product page itself."""

import logging
import re
from decimal import Decimal, InvalidOperation

import requests
from bs4 import BeautifulSoup

from ..config import SearchConfig
from ..errors import (
    HttpStatusError,
    MetadataError,
    ParseError,
    RequestTimeout,
    RetryExhausted,
    TransportError,
)
from ..models.metadata import ProductMetadata
from ..retry import RetryPolicy
from ..utils import is_blank

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

PRICE_META_PROPERTIES = ["product:price:amount", "og:price:amount", "price"]
JSON_LD_PRICE_RES = [
    re.compile(r"\"price\"\s*:\s*[\"']?(\d+\.?\d{0,2})[\"']?"),
    re.compile(r"\"lowPrice\"\s*:\s*[\"']?(\d+\.?\d{0,2})[\"']?"),
]
TEXT_PRICE_RE = re.compile(r"[$€£¥]\s*(\d{1,6}(?:[.,]\d{2})?)")


class PageScraper:
    """Fetch a product page and read its image, title and description tags."""

    def __init__(
        self,
        config: SearchConfig,
        session: requests.Session | None = None,
        retry: RetryPolicy | None = None,
    ):
        self.timeout = config.page_timeout
        self.extract_price = config.extract_price
        self.session = session or requests.Session()
        self.retry = retry or RetryPolicy(
            max_attempts=config.max_attempts,
            retry_on=(TransportError, HttpStatusError),
        )

    def _get_headers(self) -> dict:
        return {"User-Agent": USER_AGENT}

    def _download(self, url: str) -> str:
        """GET the page. Returns HTML text."""
        try:
            response = self.session.get(url, headers=self._get_headers(), timeout=self.timeout)
        except requests.Timeout as e:
            raise RequestTimeout(str(e)) from e
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(response.status_code, url)
        return response.text

    def fetch(self, url: str) -> ProductMetadata:
        """
        Scrape metadata for a product URL.

        Never raises: fetch and parse failures come back as success=False with
        an error_message naming the failure.
        """
        if is_blank(url):
            return ProductMetadata(error_message="URL is empty")

        logger.info(f"Fetching metadata for URL: {url}")
        try:
            html = self.retry.execute(lambda: self._download(url), f"page fetch {url}")
            result = self.parse(html)
        except RetryExhausted as e:
            return self._failure(e.last_error)
        except MetadataError as e:
            return self._failure(e)
        except Exception as e:
            logger.exception(f"Unexpected error fetching metadata for {url}")
            return ProductMetadata(error_message=f"Unexpected error: {e}")

        logger.info(f"Fetched metadata: title={result.title}, image_url={result.image_url}")
        return result

    def parse(self, html: str) -> ProductMetadata:
        """Read metadata tags out of an HTML document."""
        try:
            soup = BeautifulSoup(html, "html.parser")
        except Exception as e:
            raise ParseError(str(e)) from e

        image_url = _meta_property(soup, "og:image") or _meta_property(soup, "twitter:image")
        title = (
            _meta_property(soup, "og:title")
            or _meta_property(soup, "twitter:title")
            or _document_title(soup)
        )
        description = (
            _meta_property(soup, "og:description")
            or _meta_property(soup, "twitter:description")
            or _meta_name(soup, "description")
        )
        price = extract_price(soup) if self.extract_price else None

        # A page without tags is not an error; success just stays False
        return ProductMetadata(
            image_url=image_url,
            price=price,
            title=title,
            description=description,
            success=bool(image_url) or bool(title),
        )

    def _failure(self, error: BaseException) -> ProductMetadata:
        if isinstance(error, RequestTimeout):
            message = "Request timed out"
        elif isinstance(error, (HttpStatusError, TransportError)):
            message = f"HTTP error: {error}"
        elif isinstance(error, ParseError):
            message = f"Parse error: {error}"
        else:
            message = f"Unexpected error: {error}"
        logger.warning(f"Error fetching metadata: {message}")
        return ProductMetadata(error_message=message)


def _meta_property(soup: BeautifulSoup, prop: str) -> str | None:
    node = soup.find("meta", attrs={"property": prop})
    if node is None:
        return None
    return node.get("content") or None


def _meta_name(soup: BeautifulSoup, name: str) -> str | None:
    node = soup.find("meta", attrs={"name": name})
    if node is None:
        return None
    return node.get("content") or None


def _document_title(soup: BeautifulSoup) -> str | None:
    if soup.title is None:
        return None
    return soup.title.get_text().strip() or None


def _to_decimal(value: str) -> Decimal | None:
    try:
        return Decimal(value)
    except InvalidOperation:
        return None


def extract_price(soup: BeautifulSoup) -> Decimal | None:
    """
    Best-effort product price.

    Looks at price meta tags, then schema.org itemprop, then JSON-LD, then the
    first currency-symbol amount in the visible text.
    """
    price_str = None
    for prop in PRICE_META_PROPERTIES:
        price_str = _meta_property(soup, prop)
        if price_str:
            break

    if not price_str:
        node = soup.find("meta", attrs={"itemprop": "price"})
        price_str = node.get("content") if node else None

    if not price_str:
        price_str = _json_ld_price(soup)

    if price_str:
        clean = re.sub(r"[^\d.,]", "", price_str).replace(",", "")
        price = _to_decimal(clean) if clean else None
        if price is not None:
            return price

    match = TEXT_PRICE_RE.search(soup.get_text())
    if match:
        return _to_decimal(match.group(1).replace(",", "."))
    return None


def _json_ld_price(soup: BeautifulSoup) -> str | None:
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        text = script.string or script.get_text()
        for pattern in JSON_LD_PRICE_RES:
            match = pattern.search(text)
            if match:
                return match.group(1)
    return None
