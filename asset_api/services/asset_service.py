"""
Asset service - the six contract operations behind the asset routes.
Arguments are string-encoded here; results are parsed from JSON.
"""

import json
import logging
import math
from decimal import Decimal
from typing import Any

from asset_api.auth.permissions import can_view_all_assets
from asset_api.ledger.base import Contract
from asset_api.services.metrics import get_metrics_collector

logger = logging.getLogger(__name__)

# Contract function names
CREATE_ASSET = "CreateAsset"
READ_ASSET = "ReadAsset"
UPDATE_ASSET = "UpdateAsset"
DELETE_ASSET = "DeleteAsset"
GET_ALL_ASSETS = "GetAllAssets"
GET_MY_ASSETS = "GetMyAssets"


def format_number(value: int | float) -> str:
    """
    Format a number the way a JavaScript runtime prints it.

    Plain notation between 1e-7 and 1e21, exponent notation (`1e-7`,
    `1.5e+21`) outside that range. Floats use their shortest round-trip
    digits, which both runtimes agree on.
    """
    if isinstance(value, int) and abs(value) < 10**21:
        return str(value)
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    # Decimal point position relative to the start of `digits`
    n = exponent + k
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + digits
    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{prefix}{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"


def encode_argument(value: Any) -> str:
    """
    Render a JSON value as the string argument the contract receives.

    Numbers print as a JavaScript client would (`100.0` -> `100`,
    `1e-07` -> `1e-7`); booleans are lowercase. Objects and arrays are sent
    as JSON text rather than JavaScript's `[object Object]` / `1,2`
    renderings. No range or type checks happen here, the contract validates.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def parse_payload(payload: bytes) -> Any:
    """Parse a contract result payload as JSON."""
    return json.loads(payload.decode("utf-8"))


class AssetService:
    """Service class for asset operations on a single contract handle."""

    def __init__(self, contract: Contract):
        self.contract = contract

    async def _submit(self, operation: str, *args: str) -> bytes:
        return await self._invoke("submit", operation, *args)

    async def _evaluate(self, operation: str, *args: str) -> bytes:
        return await self._invoke("evaluate", operation, *args)

    async def _invoke(self, kind: str, operation: str, *args: str) -> bytes:
        metrics = get_metrics_collector()
        call = (
            self.contract.submit_transaction
            if kind == "submit"
            else self.contract.evaluate_transaction
        )
        try:
            result = await call(operation, *args)
        except Exception as e:
            metrics.record_ledger_call(operation, kind, type(e).__name__)
            raise
        metrics.record_ledger_call(operation, kind, "success")
        return result

    async def create(self, asset_id: Any, owner: Any, value: Any) -> None:
        """
        Create an asset.

        Args:
            asset_id: New asset ID
            owner: Owner name
            value: Numeric value, sent as its decimal string
        """
        await self._submit(
            CREATE_ASSET,
            encode_argument(asset_id),
            encode_argument(owner),
            encode_argument(value),
        )
        logger.info(f"Created asset {asset_id}")

    async def read(self, asset_id: str) -> Any:
        """
        Read one asset.

        Returns:
            The asset exactly as the contract serialized it
        """
        payload = await self._evaluate(READ_ASSET, asset_id)
        return parse_payload(payload)

    async def list_assets(self, role: str, include_all: bool = False) -> list[Any]:
        """
        List assets visible to a role.

        `GetAllAssets` is only issued when the caller asked for everything
        and the role may see everything; otherwise `GetMyAssets`.

        Returns:
            Assets from the contract, empty if the contract returned null
        """
        if include_all and can_view_all_assets(role):
            payload = await self._evaluate(GET_ALL_ASSETS)
        else:
            payload = await self._evaluate(GET_MY_ASSETS)

        assets = parse_payload(payload)
        return assets if assets is not None else []

    async def update(self, asset_id: str, value: Any) -> None:
        """Set a new value on an asset."""
        await self._submit(UPDATE_ASSET, asset_id, encode_argument(value))
        logger.info(f"Updated asset {asset_id}")

    async def delete(self, asset_id: str) -> None:
        """Delete an asset."""
        await self._submit(DELETE_ASSET, asset_id)
        logger.info(f"Deleted asset {asset_id}")
