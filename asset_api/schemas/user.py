"""Pydantic schemas for the user info endpoint."""

from pydantic import BaseModel


class RolePermissions(BaseModel):
    createAsset: bool
    viewAllAssets: bool
    viewOwnAssets: bool
    updateOwnAssets: bool
    deleteAsset: bool


class UserInfoResponse(BaseModel):
    role: str
    permissions: RolePermissions
