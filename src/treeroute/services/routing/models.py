"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ...models.domain import Asset


class RouteStatus(str, Enum):
    OPTIMIZED = "optimized"
    INVALID_INPUT = "invalid_input"
    NO_CANDIDATES = "no_candidates"
    SOLVER_FAILED = "solver_failed"


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Outcome of one optimization call.

    Only an ``OPTIMIZED`` result carries a map link and ordered assets; the
    other statuses say why nothing was routed.
    """

    status: RouteStatus
    maps_url: Optional[str] = None
    ordered_assets: Tuple[Asset, ...] = ()
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is RouteStatus.OPTIMIZED

    @classmethod
    def optimized(cls, maps_url: str, ordered_assets: Tuple[Asset, ...] | list[Asset]) -> "RouteResult":
        return cls(status=RouteStatus.OPTIMIZED, maps_url=maps_url, ordered_assets=tuple(ordered_assets))

    @classmethod
    def failed(cls, status: RouteStatus, reason: str) -> "RouteResult":
        if status is RouteStatus.OPTIMIZED:
            raise ValueError("A failed result cannot use the OPTIMIZED status.")
        return cls(status=status, reason=reason)


@dataclass(slots=True)
class SyncReport:
    positions: dict[str, int] = field(default_factory=dict)
    reset_asset_ids: list[str] = field(default_factory=list)
    parent_asset_id: Optional[str] = None
