"""Route planning services."""

from .base import RoutePlanner
from .external import ExternalSolverPlanner
from .models import RouteResult, RouteStatus, SyncReport
from .nearest_neighbor import NearestNeighborPlanner
from .ors_client import OpenRouteServiceClient
from .planner import build_planner
from .synchronizer import RouteStateSynchronizer

__all__ = [
    "RoutePlanner",
    "NearestNeighborPlanner",
    "ExternalSolverPlanner",
    "OpenRouteServiceClient",
    "RouteResult",
    "RouteStatus",
    "RouteStateSynchronizer",
    "SyncReport",
    "build_planner",
]
