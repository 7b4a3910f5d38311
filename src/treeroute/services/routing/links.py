"""Shareable map direction links."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate


def build_route_coordinates(start: Coordinate, stops: Sequence[Coordinate]) -> list[Coordinate]:
    """Wrap the visiting order with the depot on both ends."""
    return [start, *stops, start]


def _format_degrees(value: float) -> str:
    # Shortest round-trip digits in positional notation; "51.0" prints as "51"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def generate_maps_url(coordinates: Sequence[Coordinate], base_url: str | None = None) -> str:
    """Build ``<base>/dir/<lat>,<lon>/.../`` with one path segment per waypoint."""
    base = (base_url or settings.maps_base_url).rstrip("/")
    segments = "".join(
        f"{_format_degrees(coordinate.latitude)},{_format_degrees(coordinate.longitude)}/"
        for coordinate in coordinates
    )
    return f"{base}/dir/{segments}"
