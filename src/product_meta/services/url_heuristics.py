"""URL heuristics - pull brand, product name, id and variant params out of a product URL."""

import logging
import re
from urllib.parse import unquote, urlparse

from ..models.url_components import UrlComponents
from ..utils import slug_to_name

logger = logging.getLogger(__name__)

# Product-related query params worth searching on (everything else is tracking noise)
RELEVANT_PARAMS = frozenset({"color", "colour", "size", "style", "sku", "skuid", "variant", "option"})

# Path prefixes that never name a product
NOISE_SEGMENTS = frozenset({"s", "p", "item", "listing", "product"})

PRODUCT_ID_RE = re.compile(r"^(?:\d+|prod\d+)$", re.IGNORECASE)
NUMERIC_RE = re.compile(r"^\d+$")


def extract(url: str) -> UrlComponents:
    """
    Parse a product URL into domain, product name, product id and query params.

    Examples:
        nordstrom.com/s/straw-shoulder-bag/8461451
            -> ("nordstrom", "straw shoulder bag", "8461451", [])
        shop.lululemon.com/.../pace-breaker-short/prod11400110?color=71300
            -> ("lululemon", "pace breaker short", "prod11400110", [])

    Never raises; returns UrlComponents.empty() when no product slug is found.
    """
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Could not parse URL {url!r}: {e}")
        return UrlComponents.empty()

    if not host:
        return UrlComponents.empty()

    slug, product_id = _find_slug_and_id(parsed.path)
    product_name = slug_to_name(slug) if slug else ""
    if not product_name:
        return UrlComponents.empty()

    return UrlComponents(
        domain=extract_domain(host),
        product_name=product_name,
        product_id=product_id,
        query_params=tuple(extract_query_params(parsed.query)),
    )


def extract_domain(host: str) -> str:
    """
    Brand token of a host name.

    www.nordstrom.com -> "nordstrom", shop.lululemon.com -> "lululemon"
    """
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]

    labels = host.split(".")
    if len(labels) >= 2:
        return labels[-2]
    return labels[0]


def extract_query_params(query: str) -> list[str]:
    """Whitelisted params as "key value" strings, in URL order."""
    params = []
    if not query:
        return params

    for pair in query.split("&"):
        parts = pair.split("=")
        if len(parts) != 2:
            continue

        key = parts[0].lower()
        if key not in RELEVANT_PARAMS or not parts[1].strip():
            continue

        value = unquote(parts[1])

        # color=71300 is an internal code, skuId=2597045 identifies the product
        is_identifier = "sku" in key or "id" in key
        if NUMERIC_RE.match(value) and not is_identifier:
            logger.debug(f"Skipping numeric {key} parameter: {value}")
            continue

        params.append(f"{key} {value}")

    return params


def _is_product_id(segment: str) -> bool:
    return bool(PRODUCT_ID_RE.match(segment))


def _find_slug_and_id(path: str) -> tuple[str | None, str | None]:
    """Longest dashed slug in the path plus the product id seen alongside it."""
    segments = [s for s in path.split("/") if s]
    slug = None
    product_id = None

    for i, segment in enumerate(segments):
        if len(segment) <= 2 or segment.lower() in NOISE_SEGMENTS:
            continue

        if _is_product_id(segment):
            product_id = segment
            continue

        if segment.startswith(("-", "_", "A-")):
            continue

        if "-" in segment and len(segment) > 3:
            # Longer slugs are product names, shorter ones are categories ("men-shorts")
            if slug is None or len(segment) > len(slug):
                slug = segment

            if i + 1 < len(segments) and _is_product_id(segments[i + 1]):
                product_id = segments[i + 1]

    return slug, product_id
