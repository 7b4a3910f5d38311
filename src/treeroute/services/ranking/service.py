"""Select the assets with the lowest values for a ranking attribute."""

from __future__ import annotations

import logging
from typing import Optional

from ...config import settings
from ...models.domain import Asset, AssetType
from ...persistence.repository import AssetRepository
from .registry import REGISTRY, AssetQueryRegistry

logger = logging.getLogger(__name__)


class AttributeRankingSelector:
    """Ranks assets of one type ascending by a named attribute.

    Invalid input never raises: the selector logs the reason and returns an
    empty list, which callers treat as "nothing to optimize".
    """

    def __init__(
        self,
        repository: AssetRepository,
        *,
        registry: AssetQueryRegistry = REGISTRY,
        limit: Optional[int] = None,
    ) -> None:
        self.repository = repository
        self.registry = registry
        self.limit = limit if limit is not None else settings.max_route_assets

    def rank(self, asset_type: AssetType | None, attribute_name: str | None) -> list[Asset]:
        if not attribute_name or not attribute_name.strip():
            logger.error("Attribute name is empty. Unable to rank assets.")
            return []
        if not isinstance(asset_type, AssetType):
            logger.error(f"Unknown asset type '{asset_type}'. Unable to rank assets.")
            return []

        adapter = self.registry.get(asset_type)
        if adapter is None:
            supported = ", ".join(member.value for member in self.registry.supported_types()) or "none"
            logger.error(f"No query registered for asset type '{asset_type.value}'. Supported types: {supported}")
            return []

        candidates = [asset for asset in adapter(self.repository, attribute_name) if asset.get_value(attribute_name) is not None]
        if not candidates:
            logger.info(f"No {asset_type.value} assets with non-null values found for attribute: {attribute_name}")
            return []

        try:
            # sorted() is stable, so equal values keep repository order
            ranked = sorted(candidates, key=lambda asset: asset.get_value(attribute_name))
        except TypeError as exc:
            logger.error(f"Values of attribute '{attribute_name}' are not mutually comparable: {exc}")
            return []

        selected = ranked[: self.limit]
        for asset in selected:
            logger.info(f"Asset ID: {asset.asset_id} {asset.name} - {attribute_name}: {asset.get_value(attribute_name)}")
        return selected
