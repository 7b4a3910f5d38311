"""HTTP client for the OpenRouteService optimization endpoint."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from ...config import settings
from ...errors import ExternalServiceError
from ...schemas.optimization import OptimizationRequest, OptimizationResponse

RATE_LIMIT_REMAINING_HEADER = "X-Ratelimit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-Ratelimit-Reset"
UNKNOWN = "unknown"

logger = logging.getLogger(__name__)


class OpenRouteServiceClient:
    """Submits optimization jobs with a single bounded POST; no retries."""

    def __init__(
        self,
        endpoint: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint or settings.ors_endpoint
        self.api_key = api_key if api_key is not None else settings.ors_api_key
        self.timeout = timeout if timeout is not None else settings.ors_timeout_seconds
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key)

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 10.0)),
            transport=self._transport,
        )

    def submit(self, payload: str) -> str:
        """POST a serialized job/vehicle document and return the raw response body."""
        if not self.api_key:
            raise ExternalServiceError("Optimization service API key is not configured.")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        client = self._get_client()
        try:
            try:
                response = client.post(self.endpoint, content=payload, headers=headers)
            except httpx.TimeoutException as e:
                raise ExternalServiceError(
                    f"Optimization request to {self.endpoint} timed out after {self.timeout}s"
                ) from e
            except httpx.HTTPError as e:
                raise ExternalServiceError(f"Failed to reach optimization service at {self.endpoint}: {e}") from e

            log_rate_limits(response)
            if response.is_error:
                raise ExternalServiceError(
                    f"Optimization service returned HTTP {response.status_code}: {response.text[:200]}",
                    status_code=response.status_code,
                )
            return response.text
        finally:
            client.close()

    def optimize(self, request: OptimizationRequest) -> OptimizationResponse:
        body = self.submit(request.model_dump_json())
        try:
            return OptimizationResponse.model_validate_json(body)
        except ValidationError as e:
            raise ExternalServiceError(f"Optimization service returned an unreadable response: {e}") from e


def log_rate_limits(response: httpx.Response) -> tuple[str, str]:
    remaining = response.headers.get(RATE_LIMIT_REMAINING_HEADER, UNKNOWN)
    reset = response.headers.get(RATE_LIMIT_RESET_HEADER, UNKNOWN)
    logger.info(f"Rate Limit Remaining: {remaining}")
    logger.info(f"Rate Limit Resets At: {reset}")
    return remaining, reset
