"""Core utilities and exceptions for the Asset Transfer API."""

from asset_api.core.error_mapping import map_ledger_error, translate_ledger_errors
from asset_api.core.exceptions import (
    AssetAPIException,
    AssetNotFoundException,
    EndpointNotFoundException,
    ForbiddenException,
    LedgerOperationException,
    ValidationException,
)

__all__ = [
    "AssetAPIException",
    "AssetNotFoundException",
    "EndpointNotFoundException",
    "ForbiddenException",
    "LedgerOperationException",
    "ValidationException",
    "map_ledger_error",
    "translate_ledger_errors",
]
