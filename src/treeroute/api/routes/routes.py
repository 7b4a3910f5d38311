"""Ranking and route optimization endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from ...errors import PersistenceError
from ...schemas.routing import AssetModel, RouteResponseModel
from ...services.routing.models import RouteStatus
from ...services.routing.service import get_route_optimization_service

router = APIRouter(tags=["routes"])


@router.get("/sortbyattribute", response_model=List[AssetModel], status_code=status.HTTP_200_OK)
def sort_assets_by_attribute(
    asset_type: str = Query(..., alias="assetType", description="Asset type tag, e.g. 'tree'"),
    attribute: str = Query(..., description="Attribute to rank by, e.g. 'waterLevel'"),
) -> List[AssetModel]:
    service = get_route_optimization_service()
    return [AssetModel.from_asset(asset) for asset in service.rank_assets(asset_type, attribute)]


@router.get("/optimizeRoute", response_model=RouteResponseModel, status_code=status.HTTP_200_OK)
def optimize_route(
    asset_type: str = Query(..., alias="assetType", description="Asset type tag, e.g. 'tree'"),
    attribute: str = Query(..., description="Attribute to rank by, e.g. 'waterLevel'"),
) -> RouteResponseModel:
    try:
        result = get_route_optimization_service().optimize_route(asset_type, attribute)
    except PersistenceError as exc:
        logging.exception(f"Route computed but not fully persisted: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store route: {str(exc)}",
        ) from exc

    if result.status is RouteStatus.INVALID_INPUT:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.reason)
    if result.status is RouteStatus.SOLVER_FAILED:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.reason)
    return RouteResponseModel.from_result(result)
