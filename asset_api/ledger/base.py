"""
Abstract ledger gateway interface.
Defines the contract every gateway implementation must honour.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from asset_api.ledger.profile import ConnectionProfile
from asset_api.ledger.wallet import Identity


@dataclass(frozen=True)
class GatewayOptions:
    """Connection options handed to `LedgerGateway.connect`."""

    discovery_enabled: bool = True
    as_localhost: bool = True


class Contract(ABC):
    """
    Handle on a named contract deployed to a channel.

    Submitted transactions are ordered and committed; evaluated ones are
    read-only queries answered by a peer.
    """

    @abstractmethod
    async def submit_transaction(self, name: str, *args: str) -> bytes:
        """
        Submit a write transaction.

        Args:
            name: Contract function name (e.g., "CreateAsset")
            *args: String arguments

        Returns:
            Raw result payload (often empty)

        Raises:
            TransactionError: If the contract rejects the transaction
            LedgerConnectionError: If the gateway cannot be reached
        """
        pass

    @abstractmethod
    async def evaluate_transaction(self, name: str, *args: str) -> bytes:
        """
        Evaluate a read-only query.

        Args:
            name: Contract function name (e.g., "ReadAsset")
            *args: String arguments

        Returns:
            Raw result payload

        Raises:
            TransactionError: If the contract rejects the query
            LedgerConnectionError: If the gateway cannot be reached
        """
        pass


class Network(ABC):
    """A channel reachable through a connected gateway."""

    @abstractmethod
    def get_contract(self, name: str) -> Contract:
        """Get a handle on a contract deployed to this channel."""
        pass


class LedgerGateway(ABC):
    """
    Abstract base class for ledger gateways.

    A gateway is connected once, used for a single request, then disconnected.
    """

    @abstractmethod
    async def connect(
        self,
        profile: ConnectionProfile,
        identity: Identity,
        options: GatewayOptions,
    ) -> None:
        """
        Open a connection to the network as the given identity.

        Raises:
            LedgerConnectionError: If the handshake fails
        """
        pass

    @abstractmethod
    async def get_network(self, channel: str) -> Network:
        """
        Resolve a channel.

        Raises:
            LedgerConnectionError: If the channel cannot be resolved
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the connection. Safe to call more than once."""
        pass
