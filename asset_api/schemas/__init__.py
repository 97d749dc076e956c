"""
Pydantic schemas for request/response validation.
"""

from asset_api.schemas.asset import AssetCreate, AssetMutationResponse, AssetUpdate
from asset_api.schemas.error import ERROR_RESPONSES, ErrorResponse
from asset_api.schemas.health import HealthResponse
from asset_api.schemas.user import RolePermissions, UserInfoResponse

__all__ = [
    # Asset schemas
    "AssetCreate",
    "AssetUpdate",
    "AssetMutationResponse",
    # User schemas
    "RolePermissions",
    "UserInfoResponse",
    # Health schemas
    "HealthResponse",
    # Error schemas
    "ErrorResponse",
    "ERROR_RESPONSES",
]
