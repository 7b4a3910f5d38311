"""Asset repository contract and the in-memory implementation."""

from __future__ import annotations

import copy
import logging
import threading
from typing import Iterable, Optional, Protocol, Sequence

from ..models.domain import Asset, AssetType

logger = logging.getLogger(__name__)


class AssetRepository(Protocol):
    """Storage operations the ranking and routing services rely on."""

    def find_by_type_and_attribute_present(self, asset_type: AssetType, attribute_name: str) -> list[Asset]:
        ...

    def find_by_id(self, asset_id: str) -> Optional[Asset]:
        ...

    def find_all_by_ids(self, asset_type: AssetType, asset_ids: Sequence[str]) -> list[Asset]:
        ...

    def merge(self, asset: Asset) -> None:
        ...


class InMemoryAssetRepository:
    """Dictionary-backed repository used for tests and local demo runs.

    Assets are copied on the way in and out so callers never share state with
    the store; changes only become visible after ``merge``.
    """

    def __init__(self, assets: Iterable[Asset] = ()) -> None:
        self._assets: dict[str, Asset] = {}
        self._lock = threading.Lock()
        for asset in assets:
            self.merge(asset)

    def __len__(self) -> int:
        return len(self._assets)

    def find_by_type_and_attribute_present(self, asset_type: AssetType, attribute_name: str) -> list[Asset]:
        with self._lock:
            return [
                copy.deepcopy(asset)
                for asset in self._assets.values()
                if asset.asset_type == asset_type and asset.declares(attribute_name)
            ]

    def find_by_id(self, asset_id: str) -> Optional[Asset]:
        with self._lock:
            asset = self._assets.get(asset_id)
            return copy.deepcopy(asset) if asset is not None else None

    def find_all_by_ids(self, asset_type: AssetType, asset_ids: Sequence[str]) -> list[Asset]:
        wanted = set(asset_ids)
        with self._lock:
            return [
                copy.deepcopy(asset)
                for asset_id, asset in self._assets.items()
                if asset_id in wanted and asset.asset_type == asset_type
            ]

    def merge(self, asset: Asset) -> None:
        with self._lock:
            self._assets[asset.asset_id] = copy.deepcopy(asset)
        logger.debug(f"Merged asset {asset.asset_id}")

    def all(self) -> list[Asset]:
        with self._lock:
            return [copy.deepcopy(asset) for asset in self._assets.values()]
