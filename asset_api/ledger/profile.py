"""
Fabric common connection profile loading.
The profile is read from disk on every call; nothing is cached.
"""

import json
from pathlib import Path

import aiofiles
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from asset_api.ledger.errors import LedgerConnectionError


class ClientSection(BaseModel):
    """The `client` block naming the organization this service acts for."""

    model_config = ConfigDict(extra="allow")

    organization: str | None = None


class OrganizationEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    mspid: str | None = None
    peers: list[str] = Field(default_factory=list)


class PeerEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str | None = None


class ChannelEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    peers: dict[str, dict] = Field(default_factory=dict)


class ConnectionProfile(BaseModel):
    """
    Subset of the Fabric connection profile the API relies on.

    Unknown sections (orderers, certificateAuthorities, TLS material)
    are kept as extra fields and passed through untouched.
    """

    model_config = ConfigDict(extra="allow")

    name: str = "network"
    version: str | None = None
    client: ClientSection | None = None
    organizations: dict[str, OrganizationEntry] = Field(default_factory=dict)
    peers: dict[str, PeerEntry] = Field(default_factory=dict)
    channels: dict[str, ChannelEntry] = Field(default_factory=dict)

    @property
    def client_mspid(self) -> str | None:
        """MSP ID of the client organization, if the profile names one."""
        if self.client is None or self.client.organization is None:
            return None
        organization = self.organizations.get(self.client.organization)
        return organization.mspid if organization else None

    def channel_peers(self, channel: str) -> list[str]:
        """Peer names joined to a channel, falling back to the client org's peers."""
        entry = self.channels.get(channel)
        if entry and entry.peers:
            return list(entry.peers)
        if self.client and self.client.organization in self.organizations:
            return list(self.organizations[self.client.organization].peers)
        return list(self.peers)

    def peer_endpoints(self, names: list[str]) -> dict[str, str]:
        """URLs of the named peers, for those the profile gives one."""
        return {
            name: self.peers[name].url
            for name in names
            if name in self.peers and self.peers[name].url
        }


async def load_connection_profile(path: str | Path) -> ConnectionProfile:
    """
    Read and validate a connection profile.

    Args:
        path: Location of the JSON connection profile

    Returns:
        Parsed ConnectionProfile

    Raises:
        LedgerConnectionError: If the file is missing, not JSON, or malformed
    """
    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            raw = await f.read()
    except OSError as e:
        raise LedgerConnectionError(
            f"Failed to read connection profile {path}: {e}"
        ) from e

    try:
        return ConnectionProfile.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise LedgerConnectionError(
            f"Invalid connection profile {path}: {e}"
        ) from e
