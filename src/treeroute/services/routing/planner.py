"""Factory for route planners based on configuration."""

from __future__ import annotations

from typing import Any

from ...config import settings
from .base import RoutePlanner
from .external import ExternalSolverPlanner
from .nearest_neighbor import NearestNeighborPlanner


def build_planner(strategy: str | None = None, **kwargs: Any) -> RoutePlanner:
    method = strategy or settings.route_strategy
    match method:
        case "nearest_neighbor":
            return NearestNeighborPlanner(maps_base_url=kwargs.get("maps_base_url"))
        case "openrouteservice":
            planner_kwargs = {
                k: v
                for k, v in kwargs.items()
                if k in {"client", "profile", "limit", "maps_base_url"}
            }
            return ExternalSolverPlanner(**planner_kwargs)
        case _:
            raise ValueError(f"Unknown route strategy '{method}'.")
