"""
Role handling for the Asset Transfer API.
Callers pick a role; the matching wallet identity authenticates to the ledger.
"""

from asset_api.auth.dependencies import (
    Provisioner,
    QueryRole,
    get_query_role,
    get_session_provisioner,
)
from asset_api.auth.permissions import (
    ADMIN_ROLE,
    AUDITOR_ROLE,
    USER_ROLE,
    can_create_asset,
    can_delete_asset,
    can_view_all_assets,
    get_role_permissions,
)

__all__ = [
    # Roles
    "ADMIN_ROLE",
    "AUDITOR_ROLE",
    "USER_ROLE",
    # Permission functions
    "can_create_asset",
    "can_delete_asset",
    "can_view_all_assets",
    "get_role_permissions",
    # Dependencies
    "get_query_role",
    "get_session_provisioner",
    # Type aliases
    "Provisioner",
    "QueryRole",
]
