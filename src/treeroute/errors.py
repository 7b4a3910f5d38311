"""Exception hierarchy shared by the ranking and routing services."""

from __future__ import annotations


class TreeRouteError(Exception):
    """Base class for all errors raised by this package."""


class InputValidationError(TreeRouteError, ValueError):
    """Asset type or attribute name cannot be used for a query."""


class ExternalServiceError(TreeRouteError, OSError):
    """The optimization service could not be reached or rejected the request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(TreeRouteError):
    """A repository write failed while synchronizing route state."""

    def __init__(self, message: str, *, asset_id: str | None = None) -> None:
        super().__init__(message)
        self.asset_id = asset_id
