import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()

# API Keys and Config - loaded from .env
GOOGLE_CUSTOM_SEARCH_API_KEY = os.getenv("GOOGLE_CUSTOM_SEARCH_API_KEY")
GOOGLE_CREDENTIALS_FILE = os.getenv("GOOGLE_CREDENTIALS_FILE", "app_client_secret.json")
GOOGLE_SEARCH_ENGINE_ID = os.getenv("GOOGLE_SEARCH_ENGINE_ID")

# Networking
PAGE_FETCH_TIMEOUT = float(os.getenv("PAGE_FETCH_TIMEOUT", "10"))
SEARCH_TIMEOUT = float(os.getenv("SEARCH_TIMEOUT", "10"))
RETRY_MAX_ATTEMPTS = int(os.getenv("RETRY_MAX_ATTEMPTS", "3"))

# Price scraping stays off until a structured price source exists
EXTRACT_PRICE = os.getenv("EXTRACT_PRICE", "").lower() in ("1", "true", "yes")

# Key name inside the credential file
CREDENTIALS_API_KEY_FIELD = "google_custom_search_api_key"


@dataclass(frozen=True)
class SearchConfig:
    """Everything the pipeline needs at construction time."""

    api_key: str
    search_engine_id: str
    page_timeout: float = 10.0
    search_timeout: float = 10.0
    max_attempts: int = 3
    extract_price: bool = False

    def __repr__(self) -> str:
        return (
            f"SearchConfig(api_key='***', search_engine_id={self.search_engine_id!r}, "
            f"page_timeout={self.page_timeout}, search_timeout={self.search_timeout}, "
            f"max_attempts={self.max_attempts}, extract_price={self.extract_price})"
        )


def read_api_key(credentials_file: str | Path) -> str:
    """Read the custom search API key from the JSON credential file."""
    path = Path(credentials_file)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"Credential file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read credential file {path}: {e}")

    api_key = data.get(CREDENTIALS_API_KEY_FIELD) if isinstance(data, dict) else None
    if not api_key:
        raise ConfigError(f"'{CREDENTIALS_API_KEY_FIELD}' missing from {path}")
    return api_key


def load_search_config() -> SearchConfig:
    """
    Build the pipeline configuration from the environment.

    The API key comes from GOOGLE_CUSTOM_SEARCH_API_KEY if set, otherwise from
    the credential file. Raises ConfigError if anything required is missing.
    """
    api_key = GOOGLE_CUSTOM_SEARCH_API_KEY or read_api_key(GOOGLE_CREDENTIALS_FILE)
    if not GOOGLE_SEARCH_ENGINE_ID:
        raise ConfigError("GOOGLE_SEARCH_ENGINE_ID must be set in .env")

    return SearchConfig(
        api_key=api_key,
        search_engine_id=GOOGLE_SEARCH_ENGINE_ID,
        page_timeout=PAGE_FETCH_TIMEOUT,
        search_timeout=SEARCH_TIMEOUT,
        max_attempts=RETRY_MAX_ATTEMPTS,
        extract_price=EXTRACT_PRICE,
    )
