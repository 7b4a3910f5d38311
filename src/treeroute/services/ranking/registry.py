"""Registry mapping each asset type to the query that loads its candidates."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Optional

from ...models.domain import Asset, AssetType
from ...persistence.repository import AssetRepository

QueryAdapter = Callable[[AssetRepository, str], list[Asset]]

logger = logging.getLogger(__name__)


def query_for_type(asset_type: AssetType) -> QueryAdapter:
    """Build an adapter that loads assets of ``asset_type`` declaring an attribute."""

    def _query(repository: AssetRepository, attribute_name: str) -> list[Asset]:
        return list(repository.find_by_type_and_attribute_present(asset_type, attribute_name))

    return _query


class AssetQueryRegistry:
    """Simple registry for mapping asset types to query adapters."""

    def __init__(self) -> None:
        self._adapters: Dict[AssetType, QueryAdapter] = {}

    def register(self, asset_type: AssetType, adapter: QueryAdapter) -> None:
        logger.debug(f"Registering query adapter for asset type '{asset_type.value}'")
        self._adapters[asset_type] = adapter

    def get(self, asset_type: AssetType) -> Optional[QueryAdapter]:
        return self._adapters.get(asset_type)

    def supported_types(self) -> Iterable[AssetType]:
        return sorted(self._adapters, key=lambda member: member.value)


def default_registry() -> AssetQueryRegistry:
    registry = AssetQueryRegistry()
    for asset_type in AssetType:
        registry.register(asset_type, query_for_type(asset_type))
    return registry


REGISTRY = default_registry()
