"""Shared fixtures: fake HTTP sessions and a test configuration."""

import json

import pytest

from product_meta.config import SearchConfig
from product_meta.errors import HttpStatusError, TransportError
from product_meta.retry import RetryPolicy


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", json_data=None):
        self.status_code = status_code
        self.text = text if json_data is None else json.dumps(json_data)
        self._json_data = json_data

    def json(self):
        if self._json_data is not None:
            return self._json_data
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; `responder(url, params)` decides each reply."""

    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        result = self.responder(url, params)
        if isinstance(result, BaseException):
            raise result
        return result

    @property
    def queries(self) -> list[str]:
        return [call["params"]["q"] for call in self.calls]


def search_response(link: str | None = None, total: str = "0") -> FakeResponse:
    if link:
        return FakeResponse(json_data={"items": [{"link": link}], "searchInformation": {"totalResults": "1"}})
    return FakeResponse(json_data={"searchInformation": {"totalResults": total}})


@pytest.fixture
def config() -> SearchConfig:
    return SearchConfig(api_key="test-key", search_engine_id="test-cx")


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def retry(sleeps) -> RetryPolicy:
    """Retry policy that records delays instead of sleeping."""
    return RetryPolicy(max_attempts=3, retry_on=(TransportError, HttpStatusError), sleep=sleeps.append)
