"""Business logic services."""

from .metadata import MetadataResolver
from .query_strategy import QueryStrategyResolver

__all__ = ["MetadataResolver", "QueryStrategyResolver"]
