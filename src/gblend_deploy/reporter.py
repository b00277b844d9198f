"""Deployment result reporting for gblend-deploy library."""

from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import ConfirmationTimeoutError, GblendError, TransactionRevertedError
from .types import ConfirmationResult, NetworkConfig, TrackingState


class DeploymentStatus(Enum):
    """
    Final status of a deployment.

    Value strings define the serialized form used by to_dict().
    """

    SUCCESS = "success"
    REVERTED = "reverted"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass
class DeploymentReport:
    """Structured, display-ready summary of one deployment."""

    network: Optional[str]
    chain_id: Optional[int]
    status: DeploymentStatus

    tx_hash: Optional[str] = None
    contract_address: Optional[str] = None
    gas_used: Optional[int] = None
    gas_limit: Optional[int] = None
    effective_gas_price: Optional[int] = None
    block_number: Optional[int] = None
    event_count: int = 0
    confirmations: int = 0
    gas_limit_reached: bool = False

    # Set for failed and timed out deployments
    error_stage: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_result(cls, network: NetworkConfig, result: ConfirmationResult) -> "DeploymentReport":
        """Build a report from a mined deployment (successful or reverted)."""
        receipt = result.receipt
        if result.state is TrackingState.SUCCESS:
            status = DeploymentStatus.SUCCESS
        elif result.state is TrackingState.REVERTED:
            status = DeploymentStatus.REVERTED
        else:
            raise ValueError(f"Not a terminal tracking state: {result.state}")

        return cls(
            network=network.name,
            chain_id=network.chain_id,
            status=status,
            tx_hash=receipt.tx_hash,
            contract_address=receipt.contract_address,
            gas_used=receipt.gas_used,
            gas_limit=result.gas_limit,
            effective_gas_price=receipt.effective_gas_price,
            block_number=receipt.block_number,
            event_count=receipt.event_count,
            confirmations=result.confirmations,
            gas_limit_reached=result.gas_limit_reached,
        )

    @classmethod
    def from_error(
        cls, network: Optional[NetworkConfig], error: GblendError
    ) -> "DeploymentReport":
        """
        Build a report from a pipeline failure.

        Args:
            network: Target network, or None if failure happened before it was resolved
            error: Exception raised by the pipeline
        """
        report = cls(
            network=network.name if network else None,
            chain_id=network.chain_id if network else None,
            status=DeploymentStatus.FAILED,
            error_stage=error.stage,
            error_message=str(error),
        )

        if isinstance(error, ConfirmationTimeoutError):
            report.status = DeploymentStatus.TIMED_OUT
            report.tx_hash = error.tx_hash
            if error.receipt is not None:
                report.block_number = error.receipt.block_number
                report.gas_used = error.receipt.gas_used
                report.contract_address = error.receipt.contract_address

        return report

    @property
    def succeeded(self) -> bool:
        return self.status is DeploymentStatus.SUCCESS

    def raise_for_status(self) -> None:
        """
        Raise TransactionRevertedError if the deployment reverted.

        Failed and timed out reports were produced from an exception the
        caller already handled, so only reverts raise here.
        """
        if self.status is DeploymentStatus.REVERTED:
            message = f"Transaction {self.tx_hash} reverted in block {self.block_number}"
            if self.gas_limit_reached:
                message += " (gas limit reached)"
            raise TransactionRevertedError(message)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    def lines(self) -> List[str]:
        """Human-readable summary, one line per fact."""
        if self.status is DeploymentStatus.SUCCESS:
            return self._success_lines()
        if self.status is DeploymentStatus.REVERTED:
            return self._reverted_lines()
        return self._error_lines()

    def __str__(self) -> str:
        return "\n".join(self.lines())

    def _network_line(self) -> str:
        return f"Network: {self.network} (chain ID {self.chain_id})"

    def _success_lines(self) -> List[str]:
        lines = ["Contract deployed successfully", self._network_line()]
        if self.contract_address:
            lines.append(f"Contract address: {self.contract_address}")
        lines.append(f"Transaction hash: {self.tx_hash}")
        lines.append(f"Gas used: {_or_unknown(self.gas_used)}")
        lines.append(f"Effective gas price: {_or_unknown(self.effective_gas_price)}")
        lines.append(f"Block number: {_or_unknown(self.block_number)}")
        if self.confirmations:
            lines.append(f"Confirmations: {self.confirmations}")
        if self.event_count:
            lines.append(f"Events emitted: {self.event_count}")
        return lines

    def _reverted_lines(self) -> List[str]:
        lines = [
            "Contract deployment failed: transaction reverted",
            self._network_line(),
            f"Transaction hash: {self.tx_hash}",
            f"Gas limit: {_or_unknown(self.gas_limit)}",
            f"Gas used: {_or_unknown(self.gas_used)}",
            f"Effective gas price: {_or_unknown(self.effective_gas_price)}",
            f"Block number: {_or_unknown(self.block_number)}",
        ]
        if self.gas_limit_reached:
            lines.append("Gas limit reached, likely cause of the revert. Increase the gas limit.")
        lines.append("Check the transaction trace for more details.")
        return lines

    def _error_lines(self) -> List[str]:
        if self.status is DeploymentStatus.TIMED_OUT:
            lines = ["Contract deployment timed out"]
        else:
            lines = ["Contract deployment failed"]
        if self.network is not None:
            lines.append(self._network_line())
        lines.append(f"Stage: {self.error_stage}")
        lines.append(f"Error: {self.error_message}")
        if self.tx_hash:
            lines.append(f"Transaction hash: {self.tx_hash}")
        if self.block_number is not None:
            lines.append(f"Block number: {self.block_number}")
        return lines


def format_deployment_start(
    network: NetworkConfig, deployer: str, wasm_file: Union[Path, str]
) -> str:
    """Render the banner shown before a deployment starts."""
    return "\n".join(
        [
            "Starting Deployment",
            "====================",
            f"Network: {network.name}",
            f"RPC Endpoint: {network.endpoint}",
            f"Chain ID: {network.chain_id}",
            f"Deployer: {deployer}",
            f"WASM File: {wasm_file}",
            "====================",
        ]
    )


def _or_unknown(value: Optional[int]) -> str:
    return "unknown" if value is None else str(value)
