"""Persist computed routes back onto assets.

Writes are independent upserts with no transaction around them. The first
failing write raises ``PersistenceError``; writes made before it are kept.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, TypeVar

from ...errors import PersistenceError
from ...models.domain import ROUTE_ID, Asset, AssetType
from ...persistence.repository import AssetRepository
from .models import SyncReport

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RouteStateSynchronizer:
    def __init__(self, repository: AssetRepository) -> None:
        self.repository = repository

    def synchronize(
        self,
        ordered_assets: Sequence[Asset],
        candidates: Sequence[Asset],
        maps_url: Optional[str],
    ) -> SyncReport:
        """Assign positions 1..N, reset stale positions and store the map link."""
        report = SyncReport()
        reference = ordered_assets[0] if ordered_assets else (candidates[0] if candidates else None)
        if reference is None:
            logger.info("Nothing to synchronize: route and candidate set are both empty")
            return report
        asset_type = reference.asset_type

        positions = {asset.asset_id: index for index, asset in enumerate(ordered_assets, start=1)}
        stored = self._call(
            lambda: self.repository.find_all_by_ids(asset_type, list(positions)),
            "Failed to load routed assets",
        )
        stored_by_id = {asset.asset_id: asset for asset in stored}

        for asset in ordered_assets:
            target = stored_by_id.get(asset.asset_id)
            if target is None:
                logger.warning(f"Asset {asset.asset_id} no longer exists, route position not stored")
                continue
            target.route_id = positions[asset.asset_id]
            self._merge(target)
            asset.route_id = target.route_id
            report.positions[asset.asset_id] = target.route_id
            logger.info(f"Setting route ID {target.route_id} for asset: {target.name}")

        for asset in self._stale_assets(asset_type, positions, candidates):
            asset.route_id = 0
            self._merge(asset)
            report.reset_asset_ids.append(asset.asset_id)
            logger.info(f"Resetting route ID to 0 for asset ID: {asset.asset_id}")

        if maps_url:
            report.parent_asset_id = self._update_parent(candidates, maps_url)
        return report

    def _stale_assets(self, asset_type: AssetType, positions: dict[str, int], candidates: Sequence[Asset]) -> list[Asset]:
        """Freshly loaded assets still holding a position outside the new route."""
        dropped_ids = [asset.asset_id for asset in candidates if asset.asset_id not in positions]
        reloaded = self._call(
            lambda: self.repository.find_all_by_ids(asset_type, dropped_ids),
            "Failed to reload dropped candidates",
        )
        routed = self._call(
            lambda: self.repository.find_by_type_and_attribute_present(asset_type, ROUTE_ID),
            "Failed to load previously routed assets",
        )
        stale: dict[str, Asset] = {}
        for asset in [*reloaded, *routed]:
            if asset.asset_id not in positions and asset.route_id > 0:
                stale.setdefault(asset.asset_id, asset)
        return list(stale.values())

    def _update_parent(self, candidates: Sequence[Asset], maps_url: str) -> Optional[str]:
        parent_id = next((asset.parent_id for asset in candidates if asset.parent_id), None)
        if parent_id is None:
            logger.warning("Parent asset not found: no candidate has a parent reference")
            return None

        parent = self._call(lambda: self.repository.find_by_id(parent_id), f"Failed to load parent asset {parent_id}")
        if parent is None:
            logger.warning(f"Parent asset {parent_id} does not exist, map link not stored")
            return None

        parent.notes = maps_url
        self._merge(parent)
        logger.info(f"Updated parent asset {parent.name} ID: {parent.asset_id} with map URL")
        return parent.asset_id

    def _merge(self, asset: Asset) -> None:
        self._call(lambda: self.repository.merge(asset), f"Failed to persist asset {asset.asset_id}", asset.asset_id)

    @staticmethod
    def _call(operation: Callable[[], T], message: str, asset_id: str | None = None) -> T:
        try:
            return operation()
        except PersistenceError:
            raise
        except Exception as e:
            logger.error(f"{message}: {e}")
            raise PersistenceError(f"{message}: {e}", asset_id=asset_id) from e
