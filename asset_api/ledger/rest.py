"""
REST ledger gateway.

Talks to a Fabric REST gateway (FireFly FabConnect style) that holds the
gRPC connections to peers and orderers:

    GET  /identities/{signer}            connection handshake
    POST /transactions?fly-sync=true     submit, waits for commit
    POST /query                          evaluate

Failures come back as non-2xx responses with an `{"error": "..."}` body.
"""

import json
import logging
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from asset_api.ledger.base import Contract, GatewayOptions, LedgerGateway, Network
from asset_api.ledger.errors import LedgerConnectionError, classify_transaction_error
from asset_api.ledger.profile import ConnectionProfile
from asset_api.ledger.wallet import Identity

logger = logging.getLogger(__name__)

LOCALHOST = "localhost"


def rewrite_as_localhost(url: str) -> str:
    """Point a peer URL at localhost, keeping scheme, port and path."""
    parts = urlsplit(url)
    if parts.hostname in (None, LOCALHOST, "127.0.0.1", "::1"):
        return url
    netloc = LOCALHOST if parts.port is None else f"{LOCALHOST}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def encode_result(result: Any) -> bytes:
    """Return a gateway `result` field as the raw payload the contract produced."""
    if result is None:
        return b""
    if isinstance(result, str):
        return result.encode("utf-8")
    return json.dumps(result).encode("utf-8")


class RestContract(Contract):
    """Contract handle issuing requests over the gateway's HTTP client."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        signer: str,
        channel: str,
        chaincode: str,
        peers: list[str] | None = None,
        endpoints: dict[str, str] | None = None,
    ):
        self.client = client
        self.signer = signer
        self.channel = channel
        self.chaincode = chaincode
        self.peers = peers
        self.endpoints = endpoints

    def _headers(self, **extra: Any) -> dict[str, Any]:
        headers = {
            "signer": self.signer,
            "channel": self.channel,
            "chaincode": self.chaincode,
            **extra,
        }
        # Without discovery the gateway needs explicit endorsement targets
        if self.peers:
            headers["peers"] = self.peers
        if self.endpoints:
            headers["peerEndpoints"] = self.endpoints
        return headers

    async def _post(self, path: str, body: dict[str, Any], params: dict[str, str] | None = None) -> Any:
        try:
            response = await self.client.post(path, json=body, params=params)
        except httpx.HTTPError as e:
            raise LedgerConnectionError(f"Ledger gateway request failed: {e}") from e

        if response.is_error:
            raise classify_transaction_error(_error_message(response))

        try:
            return response.json().get("result")
        except (ValueError, AttributeError):
            return response.text or None

    async def submit_transaction(self, name: str, *args: str) -> bytes:
        body = {
            "headers": self._headers(type="SendTransaction"),
            "func": name,
            "args": list(args),
            "init": False,
        }
        logger.debug(f"Submitting {name} on {self.channel}/{self.chaincode} as {self.signer}")
        result = await self._post("/transactions", body, params={"fly-sync": "true"})
        return encode_result(result)

    async def evaluate_transaction(self, name: str, *args: str) -> bytes:
        body = {
            "headers": self._headers(),
            "func": name,
            "args": list(args),
            "strongread": True,
        }
        logger.debug(f"Evaluating {name} on {self.channel}/{self.chaincode} as {self.signer}")
        result = await self._post("/query", body)
        return encode_result(result)


class RestNetwork(Network):
    """A channel as seen through the REST gateway."""

    def __init__(self, gateway: "RestLedgerGateway", channel: str):
        self.gateway = gateway
        self.channel = channel

    def get_contract(self, name: str) -> Contract:
        peers = endpoints = None
        options = self.gateway.options
        if not options.discovery_enabled:
            peers = self.gateway.profile.channel_peers(self.channel)
            endpoints = self.gateway.profile.peer_endpoints(peers)
            if options.as_localhost:
                endpoints = {peer: rewrite_as_localhost(url) for peer, url in endpoints.items()}
        return RestContract(
            client=self.gateway.client,
            signer=self.gateway.identity.label,
            channel=self.channel,
            chaincode=name,
            peers=peers,
            endpoints=endpoints,
        )


class RestLedgerGateway(LedgerGateway):
    """
    Gateway implementation over HTTP.

    One httpx client is opened per connection and closed on disconnect.
    The base URL is used as given; `as_localhost` only affects peer URLs
    taken from the connection profile.
    """

    def __init__(self, base_url: str, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the gateway.

        Args:
            base_url: Root URL of the REST gateway
            timeout: Per-request timeout in seconds, None for no local bound
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self.client: httpx.AsyncClient | None = None
        self.profile: ConnectionProfile | None = None
        self.identity: Identity | None = None
        self.options = GatewayOptions()

    async def connect(
        self,
        profile: ConnectionProfile,
        identity: Identity,
        options: GatewayOptions,
    ) -> None:
        self.profile = profile
        self.identity = identity
        self.options = options
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
            headers={"X-Fabric-MSP": identity.msp_id},
        )

        try:
            response = await self.client.get(f"/identities/{quote(identity.label, safe='')}")
        except httpx.HTTPError as e:
            await self.disconnect()
            raise LedgerConnectionError(f"Failed to connect to ledger gateway at {self.base_url}: {e}") from e

        if response.is_error:
            await self.disconnect()
            raise LedgerConnectionError(
                f"Ledger gateway rejected identity \"{identity.label}\": {_error_message(response)}"
            )

        logger.debug(f"Connected to {self.base_url} as {identity.label} ({identity.msp_id})")

    async def get_network(self, channel: str) -> Network:
        if self.client is None:
            raise LedgerConnectionError("Gateway is not connected")
        if self.profile.channels and channel not in self.profile.channels:
            raise LedgerConnectionError(
                f"Channel \"{channel}\" is not defined in connection profile {self.profile.name}"
            )
        return RestNetwork(self, channel)

    async def disconnect(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None


def _error_message(response: httpx.Response) -> str:
    """Extract the gateway's error text from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text or f"HTTP {response.status_code}"
