"""
Asset endpoints.

Every handler validates its input, opens a ledger session for a role,
makes exactly one contract call and releases the session before answering.
"""

from typing import Any

from fastapi import APIRouter, Query

from asset_api.auth.dependencies import Provisioner, QueryRole
from asset_api.auth.permissions import ADMIN_ROLE
from asset_api.core.error_mapping import translate_ledger_errors
from asset_api.core.exceptions import ValidationException
from asset_api.schemas.asset import AssetCreate, AssetMutationResponse, AssetUpdate
from asset_api.schemas.error import ERROR_RESPONSES
from asset_api.services.asset_service import AssetService

router = APIRouter(responses=ERROR_RESPONSES)


@router.post("", status_code=201, response_model=AssetMutationResponse)
async def create_asset(provisioner: Provisioner, payload: AssetCreate | None = None):
    """
    Create an asset on the ledger.

    Always runs as the admin identity; `id`, `owner` and `value` are required.
    """
    payload = payload or AssetCreate()
    if not payload.is_complete():
        raise ValidationException("Missing required fields: id, owner, value")

    with translate_ledger_errors("Failed to create asset", not_found=False, access_denied=False):
        async with provisioner.session(ADMIN_ROLE) as session:
            await AssetService(session.contract).create(payload.id, payload.owner, payload.value)

    return {"message": "Asset created successfully", "assetId": payload.id}


@router.get("/{asset_id}")
async def get_asset(asset_id: str, provisioner: Provisioner, role: QueryRole) -> Any:
    """Read one asset as the caller's role."""
    with translate_ledger_errors("Failed to retrieve asset"):
        async with provisioner.session(role) as session:
            return await AssetService(session.contract).read(asset_id)


@router.get("")
async def list_assets(
    provisioner: Provisioner,
    role: QueryRole,
    all_assets: str = Query(default="false", alias="all", description='"true" lists every asset for auditors and admins'),
) -> Any:
    """
    List assets.

    Auditors and admins passing `all=true` get every asset; everyone else
    gets the assets their identity owns.
    """
    with translate_ledger_errors("Failed to retrieve assets", not_found=False):
        async with provisioner.session(role) as session:
            return await AssetService(session.contract).list_assets(role, include_all=all_assets == "true")


@router.put("/{asset_id}", response_model=AssetMutationResponse)
async def update_asset(asset_id: str, provisioner: Provisioner, payload: AssetUpdate | None = None):
    """Update an asset's value as the role named in the body."""
    payload = payload or AssetUpdate()
    if payload.value is None:
        raise ValidationException("Missing required field: value")

    with translate_ledger_errors("Failed to update asset"):
        async with provisioner.session(payload.role) as session:
            await AssetService(session.contract).update(asset_id, payload.value)

    return {"message": "Asset updated successfully", "assetId": asset_id}


@router.delete("/{asset_id}", response_model=AssetMutationResponse)
async def delete_asset(asset_id: str, provisioner: Provisioner):
    """Delete an asset. Always runs as the admin identity."""
    with translate_ledger_errors("Failed to delete asset", access_denied=False):
        async with provisioner.session(ADMIN_ROLE) as session:
            await AssetService(session.contract).delete(asset_id)

    return {"message": "Asset deleted successfully", "assetId": asset_id}
