import json
import logging

import httpx
import pytest

from treeroute.errors import ExternalServiceError
from treeroute.schemas.optimization import OptimizationJob, OptimizationRequest, OptimizationVehicle
from treeroute.services.routing.ors_client import OpenRouteServiceClient

ENDPOINT = "https://ors.example.com/optimization"


def _client(handler, api_key: str | None = "secret-key") -> OpenRouteServiceClient:
    return OpenRouteServiceClient(
        endpoint=ENDPOINT,
        api_key=api_key,
        timeout=2.0,
        transport=httpx.MockTransport(handler),
    )


def test_submit_posts_payload_with_bearer_token(caplog):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["content_type"] = request.headers["Content-Type"]
        seen["body"] = request.content.decode()
        return httpx.Response(
            200,
            text='{"routes": []}',
            headers={"X-Ratelimit-Remaining": "39", "X-Ratelimit-Reset": "1700000000"},
        )

    caplog.set_level(logging.INFO, logger="treeroute.services.routing.ors_client")
    body = _client(handler).submit('{"jobs": []}')

    assert body == '{"routes": []}'
    assert seen == {
        "method": "POST",
        "url": ENDPOINT,
        "auth": "Bearer secret-key",
        "content_type": "application/json",
        "body": '{"jobs": []}',
    }
    assert "Rate Limit Remaining: 39" in caplog.text
    assert "Rate Limit Resets At: 1700000000" in caplog.text


def test_missing_rate_limit_headers_log_unknown(caplog):
    caplog.set_level(logging.INFO, logger="treeroute.services.routing.ors_client")

    _client(lambda request: httpx.Response(200, text="{}")).submit("{}")

    assert "Rate Limit Remaining: unknown" in caplog.text
    assert "Rate Limit Resets At: unknown" in caplog.text


def test_error_status_raises_and_still_logs_rate_limits(caplog):
    caplog.set_level(logging.INFO, logger="treeroute.services.routing.ors_client")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="Quota exceeded", headers={"X-Ratelimit-Remaining": "0"})

    with pytest.raises(ExternalServiceError) as excinfo:
        _client(handler).submit("{}")

    assert excinfo.value.status_code == 429
    assert "Rate Limit Remaining: 0" in caplog.text


def test_network_failure_raises_external_service_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExternalServiceError):
        _client(handler).submit("{}")


def test_timeout_raises_external_service_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(ExternalServiceError, match="timed out"):
        _client(handler).submit("{}")


def test_missing_api_key_fails_without_calling_service():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, text="{}")

    client = _client(handler, api_key="")

    assert not client.is_configured()
    with pytest.raises(ExternalServiceError):
        client.submit("{}")
    assert calls == []


def test_optimize_serializes_request_and_parses_steps():
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        assert payload["vehicles"][0]["return_to_depot"] is True
        assert payload["jobs"][0] == {"id": 1, "location": [5.5, 51.5]}
        return httpx.Response(
            200,
            json={
                "code": 0,
                "routes": [
                    {
                        "vehicle": 1,
                        "steps": [
                            {"type": "start", "location": [5.4, 51.4]},
                            {"type": "job", "job": 1, "location": [5.5, 51.5]},
                            {"type": "end", "location": [5.4, 51.4]},
                        ],
                    }
                ],
            },
        )

    request = OptimizationRequest(
        vehicles=[OptimizationVehicle(start=[5.4, 51.4])],
        jobs=[OptimizationJob(id=1, location=[5.5, 51.5])],
    )
    response = _client(handler).optimize(request)

    assert [step.job for step in response.job_steps()] == [1]


def test_optimize_with_unreadable_body_raises():
    client = _client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
    request = OptimizationRequest(vehicles=[OptimizationVehicle(start=[0, 0])], jobs=[])

    with pytest.raises(ExternalServiceError):
        client.optimize(request)
