import httpx

from treeroute.errors import ExternalServiceError
from treeroute.models.domain import LOCATION, WATER_LEVEL, Asset, AssetType, Coordinate
from treeroute.schemas.optimization import OptimizationResponse
from treeroute.services.routing.external import (
    ExternalSolverPlanner,
    build_optimization_request,
    reconcile_steps,
)
from treeroute.services.routing.models import RouteStatus
from treeroute.services.routing.ors_client import OpenRouteServiceClient

DEPOT = Coordinate(5.45, 51.45)


def _tree(asset_id: str, x: float, y: float) -> Asset:
    return Asset(
        asset_id=asset_id,
        name=f"Tree {asset_id}",
        asset_type=AssetType.TREE,
        attributes={LOCATION: Coordinate(x, y), WATER_LEVEL: 1},
    )


def _response(*job_ids: int) -> OptimizationResponse:
    steps = [{"type": "start", "location": [DEPOT.x, DEPOT.y]}]
    steps += [{"type": "job", "job": job_id, "location": [0.0, 0.0]} for job_id in job_ids]
    steps.append({"type": "end", "location": [DEPOT.x, DEPOT.y]})
    return OptimizationResponse.model_validate({"routes": [{"vehicle": 1, "steps": steps}]})


class DummyClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def optimize(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.response


def test_request_has_sequential_jobs_and_single_depot_vehicle():
    assets = [_tree("A", 5.5, 51.5), _tree("B", 5.6, 51.6)]

    request, job_assets = build_optimization_request(assets, DEPOT, "driving-car")

    assert [job.id for job in request.jobs] == [1, 2]
    assert request.jobs[1].location == [5.6, 51.6]
    assert len(request.vehicles) == 1
    vehicle = request.vehicles[0]
    assert vehicle.start == [5.45, 51.45]
    assert vehicle.return_to_depot is True
    assert vehicle.profile == "driving-car"
    assert {job_id: asset.asset_id for job_id, asset in job_assets.items()} == {1: "A", 2: "B"}


def test_planner_orders_assets_by_returned_job_ids():
    assets = [_tree("A", 5.5, 51.5), _tree("B", 5.6, 51.6), _tree("C", 5.7, 51.7)]
    client = DummyClient(response=_response(3, 1, 2))
    planner = ExternalSolverPlanner(client, maps_base_url="https://maps.example.com")

    result = planner.plan(assets, DEPOT)

    assert result.status is RouteStatus.OPTIMIZED
    assert [asset.asset_id for asset in result.ordered_assets] == ["C", "A", "B"]
    assert result.maps_url == (
        "https://maps.example.com/dir/51.45,5.45/51.7,5.7/51.5,5.5/51.6,5.6/51.45,5.45/"
    )


def test_job_ids_are_independent_per_call():
    client = DummyClient(response=_response(1))
    planner = ExternalSolverPlanner(client)

    planner.plan([_tree("A", 1, 1)], DEPOT)
    planner.plan([_tree("B", 2, 2)], DEPOT)

    assert [job.id for job in client.requests[0].jobs] == [1]
    assert [job.id for job in client.requests[1].jobs] == [1]


def test_reconcile_pads_missing_jobs_in_input_order():
    assets = [_tree("A", 1, 1), _tree("B", 2, 2), _tree("C", 3, 3), _tree("D", 4, 4)]
    _, job_assets = build_optimization_request(assets, DEPOT, "driving-car")

    ordered = reconcile_steps(_response(3), job_assets, assets, limit=10)

    assert [asset.asset_id for asset in ordered] == ["C", "A", "B", "D"]


def test_reconcile_ignores_unknown_and_duplicate_job_ids():
    assets = [_tree("A", 1, 1), _tree("B", 2, 2)]
    _, job_assets = build_optimization_request(assets, DEPOT, "driving-car")

    ordered = reconcile_steps(_response(2, 99, 2, 1), job_assets, assets, limit=10)

    assert [asset.asset_id for asset in ordered] == ["B", "A"]


def test_reconcile_handles_duplicate_coordinates():
    assets = [_tree("A", 1, 1), _tree("B", 1, 1)]
    _, job_assets = build_optimization_request(assets, DEPOT, "driving-car")

    ordered = reconcile_steps(_response(2, 1), job_assets, assets, limit=10)

    assert [asset.asset_id for asset in ordered] == ["B", "A"]


def test_solver_error_returns_failed_result():
    client = DummyClient(error=ExternalServiceError("unreachable"))

    result = ExternalSolverPlanner(client).plan([_tree("A", 1, 1)], DEPOT)

    assert result.status is RouteStatus.SOLVER_FAILED
    assert not result.succeeded
    assert result.maps_url is None
    assert result.ordered_assets == ()


def test_network_error_from_real_client_returns_failed_result():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network down", request=request)

    client = OpenRouteServiceClient(
        endpoint="https://ors.example.com/optimization",
        api_key="key",
        transport=httpx.MockTransport(handler),
    )

    result = ExternalSolverPlanner(client).plan([_tree("A", 1, 1), _tree("B", 2, 2)], DEPOT)

    assert result.status is RouteStatus.SOLVER_FAILED
    assert result.maps_url is None
    assert result.ordered_assets == ()
