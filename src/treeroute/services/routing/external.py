"""Route planning delegated to the OpenRouteService optimization API."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...config import settings
from ...errors import ExternalServiceError
from ...models.domain import Asset, Coordinate
from ...schemas.optimization import (
    OptimizationJob,
    OptimizationRequest,
    OptimizationResponse,
    OptimizationVehicle,
)
from .base import RoutePlanner, located_assets
from .links import build_route_coordinates, generate_maps_url
from .models import RouteResult, RouteStatus
from .ors_client import OpenRouteServiceClient

logger = logging.getLogger(__name__)


def build_optimization_request(
    assets: Sequence[Asset],
    start: Coordinate,
    profile: str,
) -> tuple[OptimizationRequest, dict[int, Asset]]:
    """Create one job per asset (ids 1..N) and the job-id lookup for this call."""
    jobs: list[OptimizationJob] = []
    job_assets: dict[int, Asset] = {}
    for job_id, asset in enumerate(assets, start=1):
        jobs.append(OptimizationJob(id=job_id, location=asset.location.as_lon_lat()))
        job_assets[job_id] = asset

    vehicle = OptimizationVehicle(id=1, start=start.as_lon_lat(), return_to_depot=True, profile=profile)
    return OptimizationRequest(vehicles=[vehicle], jobs=jobs), job_assets


def reconcile_steps(
    response: OptimizationResponse,
    job_assets: dict[int, Asset],
    assets: Sequence[Asset],
    limit: int,
) -> list[Asset]:
    """Map solver steps back onto assets through the job ids sent with the request.

    Duplicate or unknown job ids are dropped. When fewer assets come back than
    were submitted, the remaining inputs are appended in their original order
    until ``min(limit, len(assets))`` is reached.
    """
    ordered: list[Asset] = []
    seen: set[str] = set()
    for step in response.job_steps():
        asset = job_assets.get(step.job)
        if asset is None:
            logger.warning(f"Solver returned unknown job id {step.job}, ignoring")
            continue
        if asset.asset_id in seen:
            continue
        seen.add(asset.asset_id)
        ordered.append(asset)

    target = min(limit, len(assets))
    if len(ordered) < target:
        logger.warning(f"Solver visited {len(ordered)} of {len(assets)} jobs; padding with unvisited assets")
        for asset in assets:
            if len(ordered) >= target:
                break
            if asset.asset_id not in seen:
                seen.add(asset.asset_id)
                ordered.append(asset)

    logger.info(f"Total assets after mapping: {len(ordered)}")
    return ordered


class ExternalSolverPlanner(RoutePlanner):
    """Orders assets with the external solver; failures become SOLVER_FAILED results."""

    name = "openrouteservice"

    def __init__(
        self,
        client: Optional[OpenRouteServiceClient] = None,
        *,
        profile: str | None = None,
        limit: int | None = None,
        maps_base_url: str | None = None,
    ) -> None:
        self.client = client or OpenRouteServiceClient()
        self.profile = profile or settings.ors_profile
        self.limit = limit if limit is not None else settings.max_route_assets
        self.maps_base_url = maps_base_url

    def plan(self, assets: Sequence[Asset], start: Coordinate) -> RouteResult:
        routable = located_assets(assets)
        if not routable:
            return RouteResult.failed(RouteStatus.NO_CANDIDATES, "None of the selected assets has a location.")

        request, job_assets = build_optimization_request(routable, start, self.profile)
        try:
            response = self.client.optimize(request)
        except ExternalServiceError as e:
            logger.error(f"Failed to call OpenRouteService: {e}")
            return RouteResult.failed(RouteStatus.SOLVER_FAILED, str(e))

        ordered_assets = reconcile_steps(response, job_assets, routable, self.limit)
        route = build_route_coordinates(start, [asset.location for asset in ordered_assets])
        maps_url = generate_maps_url(route, self.maps_base_url)
        logger.info(f"View route on map: {maps_url}")
        return RouteResult.optimized(maps_url, ordered_assets)
