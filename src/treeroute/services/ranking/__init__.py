"""Attribute ranking helpers."""

from .registry import REGISTRY, AssetQueryRegistry, query_for_type
from .service import AttributeRankingSelector

__all__ = [
    "AttributeRankingSelector",
    "AssetQueryRegistry",
    "REGISTRY",
    "query_for_type",
]
