"""
Per-request ledger sessions.

Every request loads the connection profile, looks its role up in the
wallet, connects a fresh gateway and resolves the configured contract.
Nothing is pooled or cached between requests.
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass

from asset_api.config import Settings
from asset_api.ledger.base import Contract, GatewayOptions, LedgerGateway
from asset_api.ledger.errors import IdentityNotFoundError, LedgerConnectionError
from asset_api.ledger.profile import load_connection_profile
from asset_api.ledger.rest import RestLedgerGateway
from asset_api.ledger.wallet import FileSystemWallet

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[Settings], LedgerGateway]


def rest_gateway_factory(settings: Settings) -> LedgerGateway:
    """Default gateway factory: the REST gateway at GATEWAY_URL."""
    return RestLedgerGateway(settings.GATEWAY_URL, timeout=settings.LEDGER_TIMEOUT)


@dataclass
class LedgerSession:
    """A contract handle paired with the gateway connection it runs on."""

    contract: Contract
    gateway: LedgerGateway

    async def close(self) -> None:
        await self.gateway.disconnect()


class SessionProvisioner:
    """Opens ledger sessions on behalf of a role."""

    def __init__(
        self,
        settings: Settings,
        gateway_factory: GatewayFactory = rest_gateway_factory,
    ):
        self.settings = settings
        self.gateway_factory = gateway_factory
        self.wallet = FileSystemWallet(settings.WALLET_PATH)
        self.options = GatewayOptions(
            discovery_enabled=settings.DISCOVERY_ENABLED,
            as_localhost=settings.DISCOVERY_AS_LOCALHOST,
        )

    async def acquire(self, role: str) -> LedgerSession:
        """
        Open a session authenticated as `role`.

        The caller owns the returned session and must close it.

        Raises:
            IdentityNotFoundError: If the wallet has no identity for the role
            LedgerConnectionError: On profile, wallet or network failure
        """
        profile = await load_connection_profile(self.settings.CONNECTION_PROFILE_PATH)

        identity = await self.wallet.get(role)
        if identity is None:
            raise IdentityNotFoundError(role)

        expected_msp = profile.client_mspid
        if expected_msp and identity.msp_id != expected_msp:
            raise LedgerConnectionError(
                f"Identity \"{role}\" belongs to {identity.msp_id}, "
                f"connection profile expects {expected_msp}"
            )

        gateway = self.gateway_factory(self.settings)
        await gateway.connect(profile, identity, self.options)

        try:
            network = await gateway.get_network(self.settings.CHANNEL_NAME)
            contract = network.get_contract(self.settings.CONTRACT_NAME)
        except BaseException:
            await gateway.disconnect()
            raise

        return LedgerSession(contract=contract, gateway=gateway)

    @asynccontextmanager
    async def session(self, role: str) -> AsyncIterator[LedgerSession]:
        """
        Scoped session: released on every exit path.

        Usage:
            async with provisioner.session("admin") as session:
                await session.contract.submit_transaction(...)
        """
        ledger_session = await self.acquire(role)
        try:
            yield ledger_session
        finally:
            await ledger_session.close()
