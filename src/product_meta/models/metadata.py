"""Product metadata model - the result of one resolution call."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ProductMetadata:
    """Image, title and description found for a product URL."""

    image_url: str | None = None
    price: Decimal | None = None
    title: str | None = None
    description: str | None = None
    success: bool = False
    error_message: str | None = None

    @property
    def has_content(self) -> bool:
        """True when an image or a title was found."""
        return bool(self.image_url) or bool(self.title)

    def to_dict(self) -> dict[str, Any]:
        return {
            "image_url": self.image_url,
            "price": str(self.price) if self.price is not None else None,
            "title": self.title,
            "description": self.description,
            "success": self.success,
            "error_message": self.error_message,
        }
