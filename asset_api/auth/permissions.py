"""
Role-based permission flags.

The ledger contract enforces access control; these flags only decide
which query the API issues and what `/user-info` reports. Roles are
free strings, anything unrecognized gets the plain user flags.
"""

ADMIN_ROLE = "admin"
USER_ROLE = "user"
AUDITOR_ROLE = "auditor"

# Roles allowed to list every asset on the ledger
ALL_ASSETS_ROLES = frozenset({ADMIN_ROLE, AUDITOR_ROLE})


def can_create_asset(role: str) -> bool:
    return role == ADMIN_ROLE


def can_view_all_assets(role: str) -> bool:
    return role in ALL_ASSETS_ROLES


def can_delete_asset(role: str) -> bool:
    return role == ADMIN_ROLE


def get_role_permissions(role: str) -> dict[str, bool]:
    """
    Build the permission matrix reported for a role.

    Args:
        role: Caller-supplied role name

    Returns:
        Mapping of permission name to whether the role holds it
    """
    return {
        "createAsset": can_create_asset(role),
        "viewAllAssets": can_view_all_assets(role),
        "viewOwnAssets": True,
        "updateOwnAssets": True,
        "deleteAsset": can_delete_asset(role),
    }
