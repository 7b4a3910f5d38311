from treeroute.models.domain import LOCATION, ROUTE_ID, WATER_LEVEL, Asset, AssetType, Coordinate
from treeroute.persistence.database import SupabaseAssetRepository, asset_to_row, row_to_asset
from treeroute.persistence.repository import InMemoryAssetRepository


def _tree(asset_id: str, **attributes) -> Asset:
    return Asset(
        asset_id=asset_id,
        name=f"Tree {asset_id}",
        asset_type=AssetType.TREE,
        parent_id="P1",
        attributes={LOCATION: Coordinate(5.4, 51.4), **attributes},
    )


def test_in_memory_repository_copies_on_read_and_write() -> None:
    original = _tree("T1", **{ROUTE_ID: 0})
    repository = InMemoryAssetRepository([original])

    original.route_id = 9
    loaded = repository.find_by_id("T1")
    loaded.route_id = 5

    assert repository.find_by_id("T1").route_id == 0
    repository.merge(loaded)
    assert repository.find_by_id("T1").route_id == 5


def test_in_memory_repository_filters_by_type_and_ids() -> None:
    thing = Asset(asset_id="X1", name="Thing", asset_type=AssetType.THING)
    repository = InMemoryAssetRepository([_tree("T1", **{WATER_LEVEL: None}), _tree("T2"), thing])

    declared = repository.find_by_type_and_attribute_present(AssetType.TREE, WATER_LEVEL)
    by_ids = repository.find_all_by_ids(AssetType.TREE, ["T2", "X1", "missing"])

    assert [asset.asset_id for asset in declared] == ["T1"]
    assert [asset.asset_id for asset in by_ids] == ["T2"]
    assert repository.find_by_id("missing") is None


def test_rows_store_location_as_lon_lat() -> None:
    row = asset_to_row(_tree("T1", **{WATER_LEVEL: 12}))

    assert row == {
        "id": "T1",
        "name": "Tree T1",
        "type": "tree",
        "parent_id": "P1",
        "attributes": {LOCATION: [5.4, 51.4], WATER_LEVEL: 12},
    }
    assert row_to_asset(row).location == Coordinate(5.4, 51.4)


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, table: "FakeTable"):
        self.table = table
        self.filters = []
        self.upserted = None

    def select(self, columns):
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def limit(self, count):
        return self

    def upsert(self, row):
        self.upserted = row
        return self

    def execute(self):
        if self.upserted is not None:
            self.table.rows = [row for row in self.table.rows if row["id"] != self.upserted["id"]]
            self.table.rows.append(self.upserted)
            return FakeResponse([self.upserted])
        return FakeResponse([row for row in self.table.rows if all(check(row) for check in self.filters)])


class FakeTable:
    def __init__(self, rows):
        self.rows = rows


class FakeSupabase:
    def __init__(self, rows):
        self.assets = FakeTable(rows)
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return FakeQuery(self.assets)


def test_supabase_repository_queries_and_upserts() -> None:
    rows = [
        asset_to_row(_tree("T1", **{WATER_LEVEL: 3})),
        asset_to_row(_tree("T2")),
        {"id": "P1", "name": "Parent", "type": "thing", "parent_id": None, "attributes": {WATER_LEVEL: 1}},
    ]
    client = FakeSupabase(rows)
    repository = SupabaseAssetRepository(client)

    declared = repository.find_by_type_and_attribute_present(AssetType.TREE, WATER_LEVEL)
    assert [asset.asset_id for asset in declared] == ["T1"]
    assert [asset.asset_id for asset in repository.find_all_by_ids(AssetType.TREE, ["T2", "P1"])] == ["T2"]

    tree = repository.find_by_id("T1")
    tree.route_id = 4
    repository.merge(tree)

    assert repository.find_by_id("T1").route_id == 4
    assert repository.find_by_id("missing") is None
    assert set(client.tables) == {"assets"}
