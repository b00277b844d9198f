"""JSON-RPC result parsers for gblend-deploy library."""

from typing import Any, Dict, Optional

from .exceptions import MalformedResponseError
from .types import DeploymentReceipt, ReceiptStatus


def parse_quantity(value: Any, field: str = "quantity") -> int:
    """
    Decode a JSON-RPC quantity (0x-prefixed hex string) into an int.

    Args:
        value: Raw value from the RPC result
        field: Field name used in error messages

    Returns:
        Decoded non-negative integer

    Raises:
        MalformedResponseError: If value is not a 0x-prefixed hex string
    """
    if not isinstance(value, str) or not value.startswith("0x"):
        raise MalformedResponseError(f"Expected hex quantity for {field}, got {value!r}")
    try:
        return int(value, 16)
    except ValueError as e:
        raise MalformedResponseError(f"Invalid hex quantity for {field}: {value!r}") from e


def parse_optional_quantity(data: Dict[str, Any], key: str) -> Optional[int]:
    """Decode data[key] when present and not null."""
    value = data.get(key)
    if value is None:
        return None
    return parse_quantity(value, key)


def parse_receipt(data: Dict[str, Any]) -> DeploymentReceipt:
    """
    Parse an eth_getTransactionReceipt result.

    Args:
        data: Receipt object from the RPC result (not null)

    Returns:
        DeploymentReceipt with decoded numeric fields

    Raises:
        MalformedResponseError: If required fields are missing or malformed
    """
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected receipt object, got {type(data).__name__}")

    if "transactionHash" not in data:
        raise MalformedResponseError("Receipt is missing transactionHash")

    # Pre-Byzantium receipts carry a state root instead of a status
    if "status" not in data or data["status"] is None:
        raise MalformedResponseError(
            f"Receipt for {data['transactionHash']} is missing status"
        )
    status_code = parse_quantity(data["status"], "status")
    status = ReceiptStatus.SUCCESS if status_code == 1 else ReceiptStatus.REVERTED

    logs = data.get("logs") or []

    return DeploymentReceipt(
        tx_hash=data["transactionHash"],
        status=status,
        contract_address=data.get("contractAddress"),
        gas_used=parse_optional_quantity(data, "gasUsed"),
        effective_gas_price=parse_optional_quantity(data, "effectiveGasPrice"),
        block_number=parse_optional_quantity(data, "blockNumber"),
        event_count=len(logs),
    )
