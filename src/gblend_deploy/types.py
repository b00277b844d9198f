"""Data types and dataclasses for gblend-deploy library."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constants import (
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_CONFIRMATIONS,
    DEFAULT_GAS_LIMIT,
    DEFAULT_GAS_PRICE,
    DEFAULT_POLL_INTERVAL,
)


@dataclass(frozen=True)
class NetworkConfig:
    """Network selected for one deployment."""

    name: str  # "local", "dev" or "custom"
    endpoint: str  # JSON-RPC URL
    chain_id: int


@dataclass(frozen=True)
class DeploymentTransaction:
    """Unsigned contract-creation transaction carrying a WASM payload."""

    chain_id: int
    payload: bytes = field(repr=False)  # raw artifact bytes, never re-encoded
    gas_limit: int
    gas_price: int

    def to_dict(self, nonce: int) -> Dict[str, Any]:
        """
        Build the legacy transaction dict accepted by eth_account.

        No ``to`` key: the transaction creates a contract.
        """
        return {
            "nonce": nonce,
            "gasPrice": self.gas_price,
            "gas": self.gas_limit,
            "value": 0,
            "data": self.payload,
            "chainId": self.chain_id,
        }


@dataclass(frozen=True)
class PendingDeployment:
    """A transaction accepted by the endpoint but not yet known to be mined."""

    tx_hash: str
    gas_limit: int


class ReceiptStatus(Enum):
    """Execution status reported by a transaction receipt."""

    SUCCESS = "success"
    REVERTED = "reverted"


@dataclass(frozen=True)
class DeploymentReceipt:
    """Network record of a mined deployment transaction."""

    tx_hash: str
    status: ReceiptStatus
    contract_address: Optional[str] = None
    gas_used: Optional[int] = None
    effective_gas_price: Optional[int] = None
    block_number: Optional[int] = None
    event_count: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status is ReceiptStatus.SUCCESS


class TrackingState(Enum):
    """
    States of confirmation tracking.

    SUBMITTED -> INCLUDED -> FINALIZED -> SUCCESS on the happy path.
    REVERTED and TIMED_OUT are terminal failures.
    """

    SUBMITTED = "submitted"
    INCLUDED = "included"
    FINALIZED = "finalized"
    SUCCESS = "success"
    REVERTED = "reverted"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class ConfirmationResult:
    """Terminal outcome of tracking a deployment that reached a block."""

    state: TrackingState
    receipt: DeploymentReceipt
    gas_limit: int
    confirmations: int = 0  # depth observed when tracking stopped
    gas_limit_reached: bool = False


@dataclass
class DeployRequest:
    """Everything the pipeline needs for one deployment."""

    wasm_file: Union[Path, str]
    private_key: str = field(repr=False)
    gas_limit: int = DEFAULT_GAS_LIMIT
    gas_price: int = DEFAULT_GAS_PRICE
    confirmations: int = DEFAULT_CONFIRMATIONS

    # Network selection: exactly one of local, dev or rpc_url + chain_id
    local: bool = False
    dev: bool = False
    rpc_url: Optional[str] = None
    chain_id: Optional[int] = None

    timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
