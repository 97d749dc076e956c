"""
HTTP-facing exceptions for the Asset Transfer API.
Each exception carries the status code and the JSON body it renders to.
"""

from typing import Any


class AssetAPIException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        error: str,
        status_code: int = 500,
        details: Any = None,
    ):
        self.error = error
        self.status_code = status_code
        self.details = details
        super().__init__(error)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            response["details"] = self.details
        return response


class ValidationException(AssetAPIException):
    """400 - Missing required fields or malformed request body."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(error=message, status_code=400, details=details)


class ForbiddenException(AssetAPIException):
    """403 - The ledger refused the caller's identity."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(error=message, status_code=403)


class AssetNotFoundException(AssetAPIException):
    """404 - The ledger has no asset with the requested ID."""

    def __init__(self, message: str = "Asset not found"):
        super().__init__(error=message, status_code=404)


class EndpointNotFoundException(AssetAPIException):
    """404 - No route matches the request."""

    def __init__(self):
        super().__init__(error="Endpoint not found", status_code=404)


class LedgerOperationException(AssetAPIException):
    """500 - Any other failure while talking to the ledger."""

    def __init__(self, message: str, details: str):
        super().__init__(error=message, status_code=500, details=details)
