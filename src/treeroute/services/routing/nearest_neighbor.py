"""Greedy nearest-neighbor ordering in the Euclidean plane."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import Asset, Coordinate
from .base import RoutePlanner, located_assets
from .links import build_route_coordinates, generate_maps_url
from .models import RouteResult, RouteStatus

logger = logging.getLogger(__name__)


def nearest_neighbor_order(start: Coordinate, coordinates: Sequence[Coordinate]) -> list[int]:
    """Return input indices in visiting order starting from ``start``.

    Candidates are scanned in input order and only a strictly shorter
    distance replaces the current best, so ties go to the earliest input.
    """
    visited = [False] * len(coordinates)
    order: list[int] = []
    current = start
    for _ in range(len(coordinates)):
        best_index = -1
        best_distance = float("inf")
        for index, candidate in enumerate(coordinates):
            if visited[index]:
                continue
            distance = current.distance_to(candidate)
            if distance < best_distance:
                best_index = index
                best_distance = distance
        visited[best_index] = True
        order.append(best_index)
        current = coordinates[best_index]
    return order


def nearest_neighbor_route(start: Coordinate, coordinates: Sequence[Coordinate]) -> list[Coordinate]:
    """Full round trip: depot, every coordinate once, depot."""
    order = nearest_neighbor_order(start, coordinates)
    return build_route_coordinates(start, [coordinates[index] for index in order])


class NearestNeighborPlanner(RoutePlanner):
    """Self-contained planner; deterministic for a given input order."""

    name = "nearest_neighbor"

    def __init__(self, maps_base_url: str | None = None) -> None:
        self.maps_base_url = maps_base_url

    def plan(self, assets: Sequence[Asset], start: Coordinate) -> RouteResult:
        routable = located_assets(assets)
        if not routable:
            return RouteResult.failed(RouteStatus.NO_CANDIDATES, "None of the selected assets has a location.")

        coordinates = [asset.location for asset in routable]
        order = nearest_neighbor_order(start, coordinates)
        ordered_assets = [routable[index] for index in order]
        route = build_route_coordinates(start, [coordinates[index] for index in order])
        maps_url = generate_maps_url(route, self.maps_base_url)
        logger.info(f"Nearest-neighbor route computed for {len(ordered_assets)} assets")
        return RouteResult.optimized(maps_url, ordered_assets)
