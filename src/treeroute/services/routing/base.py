"""Base class for route planning strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from ...models.domain import Asset, Coordinate
from .models import RouteResult

logger = logging.getLogger(__name__)


class RoutePlanner(ABC):
    """Contract for planners that order assets into a depot round trip."""

    name: str = "planner"

    @abstractmethod
    def plan(self, assets: Sequence[Asset], start: Coordinate) -> RouteResult:
        raise NotImplementedError


def located_assets(assets: Sequence[Asset]) -> list[Asset]:
    """Keep assets that have a location, warning about the rest."""
    located: list[Asset] = []
    for asset in assets:
        if asset.location is None:
            logger.warning(f"Asset {asset.asset_id} has no location and cannot be routed, skipping")
            continue
        located.append(asset)
    return located
