"""Shared pytest fixtures for gblend-deploy tests."""

from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, List, Optional

import pytest
from eth_utils import keccak, to_hex

from gblend_deploy.exceptions import RpcError
from gblend_deploy.types import DeploymentReceipt, ReceiptStatus

# Well-known development key (first Hardhat/Anvil account)
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


class StubNetworkClient:
    """In-memory NetworkClient recording every call it receives."""

    def __init__(self):
        self.calls: List[str] = []
        self.gas_price_value = 42
        self.nonce = 0
        # Successive get_transaction_receipt results; the last one repeats
        self.receipts: List[Optional[DeploymentReceipt]] = [None]
        # Successive block_number results; the last one repeats
        self.heights: List[int] = [0]
        self.send_error: Optional[Exception] = None
        self.sent: List[bytes] = []

    def send_raw_transaction(self, raw_transaction: bytes) -> str:
        self.calls.append("send_raw_transaction")
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(raw_transaction)
        return to_hex(keccak(raw_transaction))

    def get_transaction_receipt(self, tx_hash: str) -> Optional[DeploymentReceipt]:
        self.calls.append("get_transaction_receipt")
        receipt = self.receipts.pop(0) if len(self.receipts) > 1 else self.receipts[0]
        if receipt is not None and receipt.tx_hash != tx_hash:
            receipt = replace(receipt, tx_hash=tx_hash)
        return receipt

    def gas_price(self) -> int:
        self.calls.append("gas_price")
        return self.gas_price_value

    def block_number(self) -> int:
        self.calls.append("block_number")
        return self.heights.pop(0) if len(self.heights) > 1 else self.heights[0]

    def get_transaction_count(self, address: str) -> int:
        self.calls.append("get_transaction_count")
        return self.nonce


class FakeClock:
    """Monotonic clock advanced only by sleep()."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def stub_client() -> StubNetworkClient:
    """Return a fresh in-memory network client."""
    return StubNetworkClient()


@pytest.fixture
def fake_clock() -> FakeClock:
    """Return a fake clock starting at zero."""
    return FakeClock()


@pytest.fixture
def make_receipt() -> Callable[..., DeploymentReceipt]:
    """Return a factory for receipts with sensible defaults."""

    def factory(**overrides: Any) -> DeploymentReceipt:
        fields = {
            "tx_hash": "0x" + "ab" * 32,
            "status": ReceiptStatus.SUCCESS,
            "contract_address": CONTRACT_ADDRESS,
            "gas_used": 21000,
            "effective_gas_price": 1,
            "block_number": 10,
            "event_count": 0,
        }
        fields.update(overrides)
        return DeploymentReceipt(**fields)

    return factory


@pytest.fixture
def rejected_submission() -> RpcError:
    """Return the error an endpoint gives for an unfunded sender."""
    return RpcError("eth_sendRawTransaction", -32000, "insufficient funds for gas * price + value")


@pytest.fixture
def wasm_file(tmp_path: Path) -> Path:
    """Create a minimal artifact: WASM magic followed by one byte."""
    path = tmp_path / "lib.wasm"
    path.write_bytes(bytes([0x00, 0x61, 0x73, 0x6D, 0xFF]))
    return path


@pytest.fixture
def not_wasm_file(tmp_path: Path) -> Path:
    """Create a file that does not start with the WASM magic number."""
    path = tmp_path / "lib.wasm"
    path.write_bytes(b"\x7fELF\x02\x01\x01")
    return path


@pytest.fixture
def dev_private_key() -> str:
    """Return a well-known development private key."""
    return DEV_PRIVATE_KEY


@pytest.fixture
def dev_address() -> str:
    """Return the checksummed address of dev_private_key."""
    return DEV_ADDRESS
