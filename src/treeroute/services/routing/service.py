"""Routing orchestration service."""

from __future__ import annotations

import functools
import logging
import threading
from typing import Iterable, Optional

from ...config import settings
from ...data.assets_repository import get_asset_repository
from ...errors import InputValidationError
from ...models.domain import Asset, AssetType, Coordinate
from ...persistence.repository import AssetRepository
from ..ranking.service import AttributeRankingSelector
from .base import RoutePlanner
from .models import RouteResult, RouteStatus
from .planner import build_planner
from .synchronizer import RouteStateSynchronizer

logger = logging.getLogger(__name__)


def depot_coordinate() -> Coordinate:
    return Coordinate(x=settings.depot_longitude, y=settings.depot_latitude)


def _resolve_asset_type(asset_type: AssetType | str | None) -> AssetType:
    if isinstance(asset_type, AssetType):
        return asset_type
    return AssetType.parse(asset_type)


class RouteOptimizationService:
    """Selects assets by attribute, plans a route and stores the result.

    Calls for the same asset type run one at a time because every attribute of
    a type writes the same route position attribute.
    """

    def __init__(
        self,
        repository: AssetRepository,
        *,
        selector: Optional[AttributeRankingSelector] = None,
        planner: Optional[RoutePlanner] = None,
        synchronizer: Optional[RouteStateSynchronizer] = None,
        depot: Optional[Coordinate] = None,
    ) -> None:
        self.repository = repository
        self.selector = selector or AttributeRankingSelector(repository)
        self.planner = planner or build_planner()
        self.synchronizer = synchronizer or RouteStateSynchronizer(repository)
        self.depot = depot or depot_coordinate()
        self._locks: dict[AssetType, threading.Lock] = {member: threading.Lock() for member in AssetType}

    def rank_assets(self, asset_type: AssetType | str | None, attribute_name: str | None) -> list[Asset]:
        try:
            resolved = _resolve_asset_type(asset_type)
        except InputValidationError as e:
            logger.error(f"Unable to rank assets: {e}")
            return []
        return self.selector.rank(resolved, attribute_name)

    def optimize_route(self, asset_type: AssetType | str | None, attribute_name: str | None) -> RouteResult:
        try:
            resolved = _resolve_asset_type(asset_type)
        except InputValidationError as e:
            logger.error(f"{e} Unable to optimize route.")
            return RouteResult.failed(RouteStatus.INVALID_INPUT, str(e))
        if not attribute_name or not attribute_name.strip():
            logger.error("Attribute name is null or empty. Unable to optimize route.")
            return RouteResult.failed(RouteStatus.INVALID_INPUT, "Attribute name is required.")

        with self._locks[resolved]:
            candidates = self.selector.rank(resolved, attribute_name)
            if not candidates:
                logger.error(f"No sorted {resolved.value} assets found for '{attribute_name}'. Unable to optimize route.")
                return RouteResult.failed(
                    RouteStatus.NO_CANDIDATES,
                    f"No {resolved.value} assets have a value for '{attribute_name}'.",
                )

            result = self.planner.plan(candidates, self.depot)
            if not result.succeeded:
                return result

            report = self.synchronizer.synchronize(result.ordered_assets, candidates, result.maps_url)
            logger.info(
                f"Route for {resolved.value}/{attribute_name}: {len(report.positions)} positions set, "
                f"{len(report.reset_asset_ids)} reset"
            )
            for asset in result.ordered_assets:
                logger.info(f"Visit Asset ID: {asset.asset_id} - {asset.name} - {asset.get_value(attribute_name)}")
            return result

    def optimize_startup_attributes(
        self,
        attributes: Iterable[str] | None = None,
        asset_type: AssetType = AssetType.TREE,
    ) -> dict[str, RouteResult]:
        """Run one optimization per attribute, logging failures instead of raising."""
        results: dict[str, RouteResult] = {}
        for attribute_name in attributes if attributes is not None else settings.startup_attributes:
            try:
                results[attribute_name] = self.optimize_route(asset_type, attribute_name)
            except Exception as e:
                logger.exception(f"Startup optimization for '{attribute_name}' failed: {e}")
        return results


@functools.lru_cache(maxsize=1)
def get_route_optimization_service() -> RouteOptimizationService:
    return RouteOptimizationService(get_asset_repository())
