"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/solver", status_code=status.HTTP_200_OK)
def health_solver() -> dict:
    """Report which planner is active and whether the external solver is configured."""
    from ...services.routing.ors_client import OpenRouteServiceClient
    from ...services.routing.planner import build_planner

    client = OpenRouteServiceClient()
    planner = build_planner(settings.route_strategy, client=client)
    return {
        "service": "openrouteservice",
        "strategy": settings.route_strategy,
        "planner": planner.name,
        "endpoint": client.endpoint,
        "configured": client.is_configured(),
    }
