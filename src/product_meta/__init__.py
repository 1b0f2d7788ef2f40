"""Product metadata resolution: image, title and description for a product URL."""

from .models import ProductMetadata, UrlComponents
from .services import MetadataResolver

__all__ = ["MetadataResolver", "ProductMetadata", "UrlComponents"]
