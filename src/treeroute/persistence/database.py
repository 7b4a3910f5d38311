"""Supabase-backed asset repository.

Assets live in a single ``assets`` table::

    id          text primary key
    name        text
    type        text        -- AssetType value
    parent_id   text null
    attributes  jsonb       -- attribute name -> value, location as [lon, lat]
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from supabase import Client

from ..models.domain import LOCATION, Asset, AssetType, Coordinate

TABLE_NAME = "assets"

logger = logging.getLogger(__name__)


def asset_to_row(asset: Asset) -> dict[str, Any]:
    attributes = dict(asset.attributes)
    location = attributes.get(LOCATION)
    if isinstance(location, Coordinate):
        attributes[LOCATION] = location.as_lon_lat()
    return {
        "id": asset.asset_id,
        "name": asset.name,
        "type": asset.asset_type.value,
        "parent_id": asset.parent_id,
        "attributes": attributes,
    }


def row_to_asset(row: dict[str, Any]) -> Asset:
    attributes = dict(row.get("attributes") or {})
    location = attributes.get(LOCATION)
    if location is not None and not isinstance(location, Coordinate):
        attributes[LOCATION] = Coordinate.from_lon_lat(location)
    return Asset(
        asset_id=str(row["id"]),
        name=row.get("name") or "",
        asset_type=AssetType(row["type"]),
        parent_id=row.get("parent_id"),
        attributes=attributes,
    )


class SupabaseAssetRepository:
    """Reads and upserts assets through the Supabase PostgREST API."""

    def __init__(self, client: Client, table: str = TABLE_NAME) -> None:
        self.client = client
        self.table = table

    def find_by_type_and_attribute_present(self, asset_type: AssetType, attribute_name: str) -> list[Asset]:
        response = self.client.table(self.table).select("*").eq("type", asset_type.value).execute()
        rows = response.data or []
        # JSONB key presence is checked client-side so declared-but-null values survive
        return [
            row_to_asset(row)
            for row in rows
            if attribute_name in (row.get("attributes") or {})
        ]

    def find_by_id(self, asset_id: str) -> Optional[Asset]:
        response = self.client.table(self.table).select("*").eq("id", asset_id).limit(1).execute()
        rows = response.data or []
        if not rows:
            return None
        return row_to_asset(rows[0])

    def find_all_by_ids(self, asset_type: AssetType, asset_ids: Sequence[str]) -> list[Asset]:
        if not asset_ids:
            return []
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("type", asset_type.value)
            .in_("id", list(asset_ids))
            .execute()
        )
        return [row_to_asset(row) for row in (response.data or [])]

    def merge(self, asset: Asset) -> None:
        self.client.table(self.table).upsert(asset_to_row(asset)).execute()
        logger.debug(f"Upserted asset {asset.asset_id} into '{self.table}'")
