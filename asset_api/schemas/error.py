"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error response format.

    Examples:
        400: {"error": "Missing required field: value"}
        403: {"error": "Access denied"}
        404: {"error": "Asset not found"}
        500: {"error": "Failed to create asset", "details": "..."}
    """

    error: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Asset not found", "Access denied"],
    )
    details: Any = Field(
        default=None,
        description="Underlying failure message, present on generic failures",
    )


# OpenAPI `responses` entry shared by the ledger-backed routes
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing required field"},
    403: {"model": ErrorResponse, "description": "Ledger refused the role's identity"},
    404: {"model": ErrorResponse, "description": "Asset not found"},
    500: {"model": ErrorResponse, "description": "Ledger or connection failure"},
}
