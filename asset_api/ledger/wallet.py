"""
File system wallet.
Stores one signing identity per label as `<label>.id` JSON files.
"""

import json
from pathlib import Path

import aiofiles
import aiofiles.os
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from asset_api.ledger.errors import LedgerConnectionError

IDENTITY_SUFFIX = ".id"


class Credentials(BaseModel):
    certificate: str
    private_key: str = Field(alias="privateKey")


class Identity(BaseModel):
    """An X.509 signing identity as written by the Fabric SDK wallets."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    label: str = ""
    type: str = "X.509"
    msp_id: str = Field(alias="mspId")
    credentials: Credentials
    version: int = 1


class FileSystemWallet:
    """
    Wallet backed by a directory of identity files.

    Labels are role names (`admin`, `user`, `auditor`, ...).
    """

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)

    def _get_full_path(self, label: str) -> Path | None:
        """Identity file for a label, or None if the label cannot name a file."""
        if not label or "/" in label or "\\" in label or label.startswith("."):
            return None
        return self.base_path / f"{label}{IDENTITY_SUFFIX}"

    async def get(self, label: str) -> Identity | None:
        """
        Load an identity.

        Args:
            label: Wallet label, usually the caller's role

        Returns:
            The identity, or None if the wallet holds none under this label

        Raises:
            LedgerConnectionError: If the identity file exists but is unreadable
        """
        full_path = self._get_full_path(label)
        if full_path is None or not await aiofiles.os.path.isfile(full_path):
            return None

        try:
            async with aiofiles.open(full_path, "r", encoding="utf-8") as f:
                raw = await f.read()
            identity = Identity.model_validate(json.loads(raw))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise LedgerConnectionError(
                f"Failed to load identity \"{label}\" from wallet: {e}"
            ) from e

        identity.label = label
        return identity

    async def labels(self) -> list[str]:
        """List the labels stored in the wallet."""
        if not await aiofiles.os.path.isdir(self.base_path):
            return []
        names = await aiofiles.os.listdir(self.base_path)
        return sorted(
            name[: -len(IDENTITY_SUFFIX)]
            for name in names
            if name.endswith(IDENTITY_SUFFIX)
        )
