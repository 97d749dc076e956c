"""
Role and session dependencies for FastAPI.
"""

from typing import Annotated

from fastapi import Depends, Query, Request

from asset_api.auth.permissions import USER_ROLE
from asset_api.ledger.session import SessionProvisioner


def get_session_provisioner(request: Request) -> SessionProvisioner:
    """
    Dependency returning the provisioner built at application startup.

    Usage:
        @router.get("/assets")
        async def list_assets(provisioner: Provisioner):
            async with provisioner.session(role) as session:
                ...
    """
    return request.app.state.session_provisioner


async def get_query_role(
    userRole: str = Query(default=USER_ROLE, description="Role whose wallet identity is used"),
) -> str:
    """Role passed as the `userRole` query parameter."""
    return userRole


# Type aliases for dependency injection
Provisioner = Annotated[SessionProvisioner, Depends(get_session_provisioner)]
QueryRole = Annotated[str, Depends(get_query_role)]
