"""Asset and route response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Asset, Coordinate
from ..services.routing.models import RouteResult, RouteStatus


class AssetModel(BaseModel):
    id: str
    name: str
    type: str
    parent_id: Optional[str] = None
    route_id: int = 0
    location: Optional[List[float]] = Field(default=None, description="[longitude, latitude]")
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetModel":
        location = asset.location
        attributes = {
            name: value.as_lon_lat() if isinstance(value, Coordinate) else value
            for name, value in asset.attributes.items()
        }
        return cls(
            id=asset.asset_id,
            name=asset.name,
            type=asset.asset_type.value,
            parent_id=asset.parent_id,
            route_id=asset.route_id,
            location=location.as_lon_lat() if location else None,
            attributes=attributes,
        )


class RouteResponseModel(BaseModel):
    status: RouteStatus
    maps_url: Optional[str] = None
    reason: Optional[str] = None
    ordered_assets: List[AssetModel] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: RouteResult) -> "RouteResponseModel":
        return cls(
            status=result.status,
            maps_url=result.maps_url,
            reason=result.reason,
            ordered_assets=[AssetModel.from_asset(asset) for asset in result.ordered_assets],
        )
