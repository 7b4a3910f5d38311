import math

from treeroute.data.assets_repository import build_demo_repository
from treeroute.data.seed import (
    BASE_LATITUDE,
    BASE_LONGITUDE,
    MAX_RADIUS_KM,
    generate_tree_assets,
    make_parent_asset,
)
from treeroute.models.domain import ROUTE_ID, WATER_LEVEL, AssetType


def test_generated_trees_are_unrouted_and_near_base():
    parent = make_parent_asset()
    trees = generate_tree_assets(50, parent, seed=7)

    assert len(trees) == 50
    assert len({tree.asset_id for tree in trees}) == 50
    for tree in trees:
        assert tree.asset_type is AssetType.TREE
        assert tree.parent_id == parent.asset_id
        assert tree.get_value(ROUTE_ID) == 0
        assert 1 <= tree.get_value(WATER_LEVEL) <= 10000
        dy_km = (tree.location.y - BASE_LATITUDE) * 111.0
        dx_km = (tree.location.x - BASE_LONGITUDE) * 111.0 * math.cos(math.radians(BASE_LATITUDE))
        assert math.hypot(dx_km, dy_km) <= MAX_RADIUS_KM + 1e-6


def test_generation_is_reproducible_with_seed():
    first = generate_tree_assets(5, seed=42)
    second = generate_tree_assets(5, seed=42)

    assert [tree.asset_id for tree in first] == [tree.asset_id for tree in second]
    assert [tree.location for tree in first] == [tree.location for tree in second]


def test_demo_repository_holds_parent_and_trees():
    repository = build_demo_repository(12)

    trees = repository.find_by_type_and_attribute_present(AssetType.TREE, WATER_LEVEL)
    parents = {tree.parent_id for tree in trees}

    assert len(repository) == 13
    assert len(trees) == 12
    assert len(parents) == 1
    assert repository.find_by_id(parents.pop()).asset_type is AssetType.THING
