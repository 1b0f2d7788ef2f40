"""URL components model - heuristic parse of a product URL."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UrlComponents:
    """
    Brand domain, product name, product id and useful query params of a URL.

    Either everything is empty, or domain and product_name are both set.
    """

    domain: str | None = None
    product_name: str | None = None
    product_id: str | None = None
    query_params: tuple[str, ...] = field(default_factory=tuple)  # "key value" strings

    @classmethod
    def empty(cls) -> "UrlComponents":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.domain and self.product_name)

    def to_query(self) -> str:
        """Full search query: domain, name, "item <id>", then params."""
        parts = [self.domain, self.product_name]
        if self.product_id:
            parts.append(f"item {self.product_id}")
        parts.extend(self.query_params)
        return " ".join(parts)
