"""Domain models for sensor assets and their coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..errors import InputValidationError

LOCATION = "location"
ROUTE_ID = "routeId"
NOTES = "notes"

WATER_LEVEL = "waterLevel"
SOIL_TEMPERATURE = "soilTemperature"
TREE_TYPE = "treeType"
PRIORITY = "priority"


class AssetType(str, Enum):
    """Closed set of asset kinds the services know how to query."""

    TREE = "tree"
    THING = "thing"

    @classmethod
    def parse(cls, value: str | None) -> "AssetType":
        """Resolve an asset type from its tag or a legacy class name.

        Accepts ``"tree"``, ``"TREE"`` and class-style names such as
        ``"org.openremote.model.treeorg.TreeAsset"``.
        """
        if value is None or not value.strip():
            raise InputValidationError("Asset type is required.")
        normalized = value.strip().rsplit(".", 1)[-1].lower()
        if normalized.endswith("asset") and normalized != "asset":
            normalized = normalized[: -len("asset")]
        for member in cls:
            if member.value == normalized:
                return member
        raise InputValidationError(f"Unknown asset type '{value}'.")


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Planar point; ``x`` is longitude and ``y`` is latitude."""

    x: float
    y: float

    @property
    def longitude(self) -> float:
        return self.x

    @property
    def latitude(self) -> float:
        return self.y

    def distance_to(self, other: "Coordinate") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_lon_lat(self) -> list[float]:
        return [self.x, self.y]

    @classmethod
    def from_lon_lat(cls, values: Any) -> "Coordinate":
        lon, lat = values
        return cls(x=float(lon), y=float(lat))


@dataclass(slots=True)
class Asset:
    """Represents a persisted asset and its named attribute values.

    A key present in ``attributes`` with a ``None`` value is declared but has
    no value yet.
    """

    asset_id: str
    name: str
    asset_type: AssetType
    parent_id: Optional[str] = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def declares(self, attribute_name: str) -> bool:
        return attribute_name in self.attributes

    def get_value(self, attribute_name: str) -> Any:
        return self.attributes.get(attribute_name)

    def set_value(self, attribute_name: str, value: Any) -> None:
        self.attributes[attribute_name] = value

    @property
    def location(self) -> Optional[Coordinate]:
        value = self.attributes.get(LOCATION)
        if value is None or isinstance(value, Coordinate):
            return value
        return Coordinate.from_lon_lat(value)

    @property
    def route_id(self) -> int:
        return int(self.attributes.get(ROUTE_ID) or 0)

    @route_id.setter
    def route_id(self, value: int) -> None:
        if value < 0:
            raise ValueError("Route position cannot be negative.")
        self.attributes[ROUTE_ID] = value

    @property
    def notes(self) -> Optional[str]:
        return self.attributes.get(NOTES)

    @notes.setter
    def notes(self, value: Optional[str]) -> None:
        self.attributes[NOTES] = value
