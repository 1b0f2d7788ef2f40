import re


def slug_to_name(slug: str) -> str:
    """Convert a URL slug to a readable product name.

    Example: "straw-shoulder-bag" -> "straw shoulder bag"
    """
    name = slug.replace("-", " ").replace("_", " ").strip()
    name = re.sub(r"[^\w\s]", " ", name)
    return re.sub(r"\s+", " ", name).strip()


def first_words(text: str, count: int) -> str:
    """Return the first `count` space-separated words of text."""
    return " ".join(text.split(" ")[:count])


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
