"""
Ledger access layer.
Connection profile and wallet loading, gateway abstraction, per-request sessions.
"""

from asset_api.ledger.base import Contract, GatewayOptions, LedgerGateway, Network
from asset_api.ledger.errors import (
    AccessDeniedError,
    IdentityNotFoundError,
    LedgerConnectionError,
    LedgerError,
    RecordNotFoundError,
    TransactionError,
    classify_transaction_error,
)
from asset_api.ledger.profile import ConnectionProfile, load_connection_profile
from asset_api.ledger.rest import RestLedgerGateway
from asset_api.ledger.session import LedgerSession, SessionProvisioner
from asset_api.ledger.wallet import FileSystemWallet, Identity

__all__ = [
    # Gateway interface
    "Contract",
    "GatewayOptions",
    "LedgerGateway",
    "Network",
    "RestLedgerGateway",
    # Sessions
    "LedgerSession",
    "SessionProvisioner",
    # Network description and credentials
    "ConnectionProfile",
    "load_connection_profile",
    "FileSystemWallet",
    "Identity",
    # Errors
    "LedgerError",
    "LedgerConnectionError",
    "IdentityNotFoundError",
    "TransactionError",
    "RecordNotFoundError",
    "AccessDeniedError",
    "classify_transaction_error",
]
