"""
Tests for the REST ledger gateway against a mocked HTTP transport.
"""

import copy
import json

import httpx
import pytest

from asset_api.ledger.base import GatewayOptions
from asset_api.ledger.errors import (
    AccessDeniedError,
    LedgerConnectionError,
    RecordNotFoundError,
    TransactionError,
)
from asset_api.ledger.profile import ConnectionProfile
from asset_api.ledger.rest import RestLedgerGateway, encode_result, rewrite_as_localhost
from asset_api.ledger.wallet import FileSystemWallet

from conftest import SAMPLE_PROFILE


class GatewayServer:
    """Records requests and answers like a FabConnect instance."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.results: dict[str, object] = {}
        self.errors: dict[str, str] = {}
        self.known_signers = {"admin", "user", "auditor"}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path.startswith("/identities/"):
            name = path.rsplit("/", 1)[1]
            if name in self.known_signers:
                return httpx.Response(200, json={"name": name, "mspId": "Org1MSP"})
            return httpx.Response(404, json={"error": f"User {name} not found"})

        body = json.loads(request.content)
        func = body["func"]
        if func in self.errors:
            return httpx.Response(500, json={"error": self.errors[func]})

        if path == "/transactions":
            return httpx.Response(
                200,
                json={"headers": {"type": "TransactionSuccess"}, "transactionID": "tx1", "result": self.results.get(func)},
            )
        if path == "/query":
            return httpx.Response(200, json={"headers": {}, "result": self.results.get(func)})
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def server() -> GatewayServer:
    return GatewayServer()


@pytest.fixture
def profile() -> ConnectionProfile:
    return ConnectionProfile.model_validate(SAMPLE_PROFILE)


def make_gateway(server: GatewayServer, base_url: str = "http://gateway.test") -> RestLedgerGateway:
    return RestLedgerGateway(base_url, transport=httpx.MockTransport(server))


async def connect(server, profile, wallet_path, label="admin", options=None, base_url="http://gateway.test"):
    identity = await FileSystemWallet(wallet_path).get(label)
    gateway = make_gateway(server, base_url)
    await gateway.connect(profile, identity, options or GatewayOptions(as_localhost=False))
    return gateway


@pytest.mark.asyncio
async def test_connect_handshake(server, profile, wallet_path):
    gateway = await connect(server, profile, wallet_path)

    assert len(server.requests) == 1
    assert server.requests[0].url.path == "/identities/admin"
    assert server.requests[0].headers["X-Fabric-MSP"] == "Org1MSP"

    await gateway.disconnect()
    assert gateway.client is None


@pytest.mark.asyncio
async def test_connect_rejected_identity(server, profile, wallet_path):
    server.known_signers = set()

    gateway = make_gateway(server)
    identity = await FileSystemWallet(wallet_path).get("user")
    with pytest.raises(LedgerConnectionError, match="User user not found"):
        await gateway.connect(profile, identity, GatewayOptions(as_localhost=False))

    assert gateway.client is None


@pytest.mark.asyncio
async def test_connect_transport_failure(profile, wallet_path):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = RestLedgerGateway("http://gateway.test", transport=httpx.MockTransport(refuse))
    identity = await FileSystemWallet(wallet_path).get("admin")

    with pytest.raises(LedgerConnectionError, match="connection refused"):
        await gateway.connect(profile, identity, GatewayOptions())

    assert gateway.client is None


@pytest.mark.asyncio
async def test_gateway_url_is_used_as_configured(server, profile, wallet_path):
    gateway = await connect(
        server, profile, wallet_path,
        options=GatewayOptions(),
        base_url="http://fabconnect.internal:3000",
    )

    assert str(server.requests[0].url) == "http://fabconnect.internal:3000/identities/admin"
    await gateway.disconnect()


@pytest.mark.asyncio
async def test_as_localhost_rewrites_peer_endpoints(server, wallet_path):
    data = copy.deepcopy(SAMPLE_PROFILE)
    data["peers"]["peer0.org1.example.com"]["url"] = "grpcs://peer0.org1.example.com:7051"
    profile = ConnectionProfile.model_validate(data)
    gateway = await connect(
        server, profile, wallet_path,
        options=GatewayOptions(discovery_enabled=False, as_localhost=True),
        base_url="http://fabconnect.internal:3000",
    )
    contract = (await gateway.get_network("mychannel")).get_contract("asset-transfer")

    await contract.evaluate_transaction("GetMyAssets")

    request = server.requests[-1]
    assert request.url.host == "fabconnect.internal"
    body = json.loads(request.content)
    assert body["headers"]["peers"] == ["peer0.org1.example.com"]
    assert body["headers"]["peerEndpoints"] == {"peer0.org1.example.com": "grpcs://localhost:7051"}
    await gateway.disconnect()


@pytest.mark.asyncio
async def test_submit_transaction(server, profile, wallet_path):
    gateway = await connect(server, profile, wallet_path)
    contract = (await gateway.get_network("mychannel")).get_contract("asset-transfer")

    result = await contract.submit_transaction("CreateAsset", "a1", "alice", "100")

    request = server.requests[-1]
    assert request.method == "POST"
    assert request.url.path == "/transactions"
    assert request.url.params["fly-sync"] == "true"
    body = json.loads(request.content)
    assert body["headers"] == {
        "type": "SendTransaction",
        "signer": "admin",
        "channel": "mychannel",
        "chaincode": "asset-transfer",
    }
    assert body["func"] == "CreateAsset"
    assert body["args"] == ["a1", "alice", "100"]
    assert result == b""
    await gateway.disconnect()


@pytest.mark.asyncio
async def test_evaluate_transaction(server, profile, wallet_path):
    server.results["ReadAsset"] = {"ID": "a1", "owner": "alice", "value": 100}
    gateway = await connect(server, profile, wallet_path, label="auditor")
    contract = (await gateway.get_network("mychannel")).get_contract("asset-transfer")

    result = await contract.evaluate_transaction("ReadAsset", "a1")

    request = server.requests[-1]
    assert request.url.path == "/query"
    body = json.loads(request.content)
    assert body["headers"]["signer"] == "auditor"
    assert body["strongread"] is True
    assert json.loads(result) == {"ID": "a1", "owner": "alice", "value": 100}
    await gateway.disconnect()


@pytest.mark.asyncio
async def test_discovery_disabled_sends_peers(server, profile, wallet_path):
    gateway = await connect(
        server, profile, wallet_path,
        options=GatewayOptions(discovery_enabled=False, as_localhost=False),
    )
    contract = (await gateway.get_network("mychannel")).get_contract("asset-transfer")

    await contract.evaluate_transaction("GetMyAssets")

    body = json.loads(server.requests[-1].content)
    assert body["headers"]["peers"] == ["peer0.org1.example.com"]
    assert body["headers"]["peerEndpoints"] == {"peer0.org1.example.com": "grpcs://localhost:7051"}
    await gateway.disconnect()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message,error_type",
    [
        ("the asset a9 does not exist", RecordNotFoundError),
        ("access denied: you can only view your own assets", AccessDeniedError),
        ("only admin can delete assets", TransactionError),
    ],
)
async def test_contract_errors_are_classified(server, profile, wallet_path, message, error_type):
    server.errors["DeleteAsset"] = message
    gateway = await connect(server, profile, wallet_path)
    contract = (await gateway.get_network("mychannel")).get_contract("asset-transfer")

    with pytest.raises(error_type) as exc_info:
        await contract.submit_transaction("DeleteAsset", "a9")

    assert type(exc_info.value) is error_type
    assert str(exc_info.value) == message
    await gateway.disconnect()


@pytest.mark.asyncio
async def test_unknown_channel(server, profile, wallet_path):
    gateway = await connect(server, profile, wallet_path)

    with pytest.raises(LedgerConnectionError, match="otherchannel"):
        await gateway.get_network("otherchannel")

    await gateway.disconnect()


@pytest.mark.asyncio
async def test_get_network_requires_connection():
    gateway = RestLedgerGateway("http://gateway.test")

    with pytest.raises(LedgerConnectionError):
        await gateway.get_network("mychannel")


def test_rewrite_as_localhost():
    assert rewrite_as_localhost("https://peer0.org1.example.com:7443/api") == "https://localhost:7443/api"
    assert rewrite_as_localhost("http://gateway") == "http://localhost"
    assert rewrite_as_localhost("http://127.0.0.1:5102") == "http://127.0.0.1:5102"


def test_encode_result():
    assert encode_result(None) == b""
    assert encode_result('{"ID":"a1"}') == b'{"ID":"a1"}'
    assert json.loads(encode_result([{"ID": "a1"}])) == [{"ID": "a1"}]
