"""Google Custom Search image client."""

import logging

import requests

from ..config import SearchConfig
from ..errors import (
    HttpStatusError,
    MetadataError,
    NoResultError,
    ParseError,
    RequestTimeout,
    RetryExhausted,
    TransportError,
)
from ..models.search import SearchAttempt
from ..retry import RetryPolicy
from ..utils import first_words

logger = logging.getLogger(__name__)

# Names longer than this get one more, shorter fallback query
SHORT_NAME_WORDS = 4


class ImageSearchClient:
    """Look up product images via the Google Custom Search JSON API."""

    API_URL = "https://www.googleapis.com/customsearch/v1"

    def __init__(
        self,
        config: SearchConfig,
        session: requests.Session | None = None,
        retry: RetryPolicy | None = None,
    ):
        self.api_key = config.api_key
        self.search_engine_id = config.search_engine_id
        self.timeout = config.search_timeout
        self.session = session or requests.Session()
        self.retry = retry or RetryPolicy(
            max_attempts=config.max_attempts,
            retry_on=(TransportError, HttpStatusError),
        )

    def _get_params(self, query: str) -> dict:
        return {
            "key": self.api_key,
            "cx": self.search_engine_id,
            "q": query,
            "searchType": "image",
            "num": 1,
        }

    def _request(self, query: str) -> dict:
        """One search request. Returns the decoded JSON body."""
        try:
            response = self.session.get(self.API_URL, params=self._get_params(query), timeout=self.timeout)
        except requests.Timeout as e:
            raise RequestTimeout(f"Search request timed out: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Search request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(response.status_code, self.API_URL)

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Invalid search response JSON: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(f"Unexpected search response: {type(data).__name__}")
        return data

    def _first_link(self, query: str, data: dict) -> str:
        """First result's image link, or NoResultError."""
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ParseError(f"Unexpected 'items' in search response: {type(items).__name__}")
        if items and isinstance(items[0], dict) and items[0].get("link"):
            return items[0]["link"]

        info = data.get("searchInformation")
        total = info.get("totalResults", "0") if isinstance(info, dict) else "0"
        raise NoResultError(f"No image results for query (total: {total}): {query}")

    def attempt(self, query: str) -> SearchAttempt:
        """
        Run one query and report the outcome.

        Transport and status failures are retried by the policy. Every failure
        (including an exhausted retry) ends up in SearchAttempt.error.
        """
        try:
            data = self.retry.execute(lambda: self._request(query), f"image search '{query}'")
            link = self._first_link(query, data)
        except NoResultError as e:
            logger.info(str(e))
            return SearchAttempt(query=query, error=str(e))
        except RetryExhausted as e:
            logger.warning(f"Error executing image search for '{query}': {e.last_error}")
            return SearchAttempt(query=query, error=f"Search error: {e.last_error}")
        except MetadataError as e:
            logger.warning(f"Error executing image search for '{query}': {e}")
            return SearchAttempt(query=query, error=f"Search error: {e}")

        logger.info(f"Found image for query: {query}")
        return SearchAttempt(query=query, image_url=link)

    def search(self, query: str) -> str | None:
        """Return the first image URL for query, or None."""
        return self.attempt(query).image_url

    def search_attempts(
        self,
        primary_query: str,
        fallback_domain: str | None = None,
        fallback_name: str | None = None,
    ) -> list[SearchAttempt]:
        """
        Try progressively simpler queries until one finds an image.

        1. primary_query
        2. "{domain} {name}" (drops product id and query params)
        3. "{domain} {first 4 words of name}" when the name is longer than that

        Returns every attempt made, in order; the last one holds the image if any.
        """
        attempts = [self.attempt(primary_query)]
        if attempts[-1].found or not (fallback_domain and fallback_name):
            return attempts

        simplified = f"{fallback_domain} {fallback_name}"
        logger.info(f"Initial search failed. Trying simplified query: {simplified}")
        attempts.append(self.attempt(simplified))
        if attempts[-1].found:
            return attempts

        if len(fallback_name.split(" ")) > SHORT_NAME_WORDS:
            shortened = f"{fallback_domain} {first_words(fallback_name, SHORT_NAME_WORDS)}"
            logger.info(f"Simplified search failed. Trying shortened query: {shortened}")
            attempts.append(self.attempt(shortened))

        return attempts

    def search_with_fallback(
        self,
        primary_query: str,
        fallback_domain: str | None = None,
        fallback_name: str | None = None,
    ) -> str | None:
        """First image URL found by the progressive fallback, or None."""
        return self.search_attempts(primary_query, fallback_domain, fallback_name)[-1].image_url

    def test_connection(self) -> bool:
        """Check that the API key and search engine id are accepted."""
        try:
            self._request("test")
            return True
        except MetadataError as e:
            logger.warning(f"Image search connection test failed: {e}")
            return False
