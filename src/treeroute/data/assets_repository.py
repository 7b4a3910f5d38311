"""Resolve the asset repository used by the running application."""

from __future__ import annotations

import functools
import logging

from ..config import settings
from ..db.supabase import get_supabase_client
from ..persistence.database import SupabaseAssetRepository
from ..persistence.repository import AssetRepository, InMemoryAssetRepository
from .seed import generate_tree_assets, make_parent_asset


def build_demo_repository(count: int) -> InMemoryAssetRepository:
    parent = make_parent_asset()
    repository = InMemoryAssetRepository([parent])
    for tree in generate_tree_assets(count, parent):
        repository.merge(tree)
    return repository


@functools.lru_cache(maxsize=1)
def get_asset_repository() -> AssetRepository:
    """Return the Supabase repository when configured, else an in-memory one."""

    client = get_supabase_client()
    if client is not None:
        logging.info("Using Supabase asset repository")
        return SupabaseAssetRepository(client)

    if settings.seed_demo_assets:
        logging.info(f"Supabase not configured - seeding {settings.seed_asset_count} demo tree assets in memory")
        return build_demo_repository(settings.seed_asset_count)

    logging.info("Supabase not configured - using an empty in-memory asset repository")
    return InMemoryAssetRepository()
