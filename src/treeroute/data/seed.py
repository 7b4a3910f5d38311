"""Demo tree assets scattered around a base location."""

from __future__ import annotations

import math
import random
import uuid
from typing import Optional

from ..models.domain import (
    LOCATION,
    NOTES,
    PRIORITY,
    ROUTE_ID,
    SOIL_TEMPERATURE,
    WATER_LEVEL,
    Asset,
    AssetType,
    Coordinate,
)

BASE_LATITUDE = 51.43848672819468
BASE_LONGITUDE = 5.47967205919616
MAX_RADIUS_KM = 4.0
KM_PER_DEGREE = 111.0


def random_location(rng: random.Random, *, max_radius_km: float = MAX_RADIUS_KM) -> Coordinate:
    """Return a point within ``max_radius_km`` of the base location."""

    angle = 2 * math.pi * rng.random()
    radius = max_radius_km * rng.random()
    dx = radius * math.cos(angle)
    dy = radius * math.sin(angle)
    latitude = BASE_LATITUDE + dy / KM_PER_DEGREE
    longitude = BASE_LONGITUDE + dx / (KM_PER_DEGREE * math.cos(math.radians(BASE_LATITUDE)))
    return Coordinate(x=longitude, y=latitude)


def make_parent_asset(name: str = "TreeOrg Assets") -> Asset:
    return Asset(
        asset_id=uuid.uuid5(uuid.NAMESPACE_URL, name).hex,
        name=name,
        asset_type=AssetType.THING,
        attributes={NOTES: None},
    )


def generate_tree_assets(count: int, parent: Optional[Asset] = None, *, seed: int | None = None) -> list[Asset]:
    """Create ``count`` tree assets with random water levels.

    Every tree starts unrouted (``routeId`` 0) with a soil temperature of
    21.0 and ``priority`` False.
    """
    rng = random.Random(seed)
    trees: list[Asset] = []
    for index in range(count):
        name = f"TreeAsset {index + 1}"
        trees.append(
            Asset(
                asset_id=uuid.UUID(int=rng.getrandbits(128)).hex,
                name=name,
                asset_type=AssetType.TREE,
                parent_id=parent.asset_id if parent else None,
                attributes={
                    LOCATION: random_location(rng),
                    WATER_LEVEL: rng.randint(1, 10000),
                    SOIL_TEMPERATURE: 21.0,
                    ROUTE_ID: 0,
                    PRIORITY: False,
                },
            )
        )
    return trees
