"""AWS Lambda handler for product metadata resolution."""

import json

from ..clients import ImageSearchClient, PageScraper
from ..config import SearchConfig, load_search_config
from ..errors import ConfigError
from ..services import MetadataResolver


def build_resolver(config: SearchConfig) -> MetadataResolver:
    """Wire the scraper and image search client for one configuration."""
    return MetadataResolver(
        scraper=PageScraper(config),
        search_client=ImageSearchClient(config),
    )


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def handler(event, context, resolver: MetadataResolver | None = None):
    """
    AWS Lambda handler - triggered by SQS or HTTP.

    Input payload:
    {
        "url": "https://www.nordstrom.com/s/straw-shoulder-bag/8461451",
        "title": "Straw Shoulder Bag"
    }

    Output: ProductMetadata as JSON. success=false is still a 200.
    """
    # Handle SQS event format
    try:
        if "Records" in event:
            body = json.loads(event["Records"][0]["body"])
        else:
            body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError:
        return _response(400, {"error": "Invalid JSON body"})

    if not isinstance(body, dict):
        return _response(400, {"error": "Request body must be a JSON object"})

    # Validate required field
    url = body.get("url")
    if url is not None and not isinstance(url, str):
        return _response(400, {"error": "'url' must be a string"})
    url = (url or "").strip()
    if not url:
        return _response(400, {"error": "Missing 'url' field"})

    title = body.get("title")
    if not isinstance(title, str):
        title = None

    if resolver is None:
        try:
            resolver = build_resolver(load_search_config())
        except ConfigError as e:
            print(f"Configuration error: {e}", flush=True)
            return _response(500, {"error": str(e)})

    print(f"Resolving metadata for: {url}", flush=True)
    metadata = resolver.resolve(url, title or None)
    print(f"Resolved: success={metadata.success}, image_url={metadata.image_url}", flush=True)

    return _response(200, metadata.to_dict())
