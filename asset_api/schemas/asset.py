"""
Pydantic schemas for asset request/response bodies.

Request bodies accept any JSON types for their fields: presence is checked
by the routes, everything else is left to the contract.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AssetCreate(BaseModel):
    """Body of POST /assets."""

    model_config = ConfigDict(extra="allow")

    id: Any = Field(default=None, examples=["asset1"])
    owner: Any = Field(default=None, examples=["alice"])
    value: Any = Field(default=None, description="Numeric value, sent as a string", examples=[100])

    def is_complete(self) -> bool:
        return bool(self.id) and bool(self.owner) and self.value is not None


class AssetUpdate(BaseModel):
    """Body of PUT /assets/{id}."""

    model_config = ConfigDict(extra="allow")

    value: Any = Field(default=None, examples=[250])
    userRole: Any = Field(default="user", description="Role whose wallet identity is used")

    @property
    def role(self) -> str:
        """Wallet label for `userRole`; non-strings are looked up as their JSON text."""
        return self.userRole if isinstance(self.userRole, str) else json.dumps(self.userRole)


class AssetMutationResponse(BaseModel):
    """Acknowledgement returned by create, update and delete."""

    message: str = Field(..., examples=["Asset created successfully"])
    assetId: Any = Field(..., examples=["asset1"])
