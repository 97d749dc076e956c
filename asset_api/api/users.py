"""
User info endpoint.
"""

from fastapi import APIRouter

from asset_api.auth.dependencies import Provisioner, QueryRole
from asset_api.auth.permissions import get_role_permissions
from asset_api.core.error_mapping import translate_ledger_errors
from asset_api.schemas.error import ErrorResponse
from asset_api.schemas.user import UserInfoResponse

router = APIRouter()


@router.get(
    "/user-info",
    response_model=UserInfoResponse,
    responses={500: {"model": ErrorResponse}},
)
async def user_info(provisioner: Provisioner, role: QueryRole):
    """
    Report what a role may do.

    A session is opened and released without a contract call, so a role
    with no wallet identity fails here the same way it would on any route.
    """
    with translate_ledger_errors("Failed to get user info", not_found=False, access_denied=False):
        async with provisioner.session(role):
            pass

    return {"role": role, "permissions": get_role_permissions(role)}
