"""Custom exception classes for gblend-deploy library."""

from typing import Any, Optional


class GblendError(Exception):
    """Base exception for every failure raised by the deployment pipeline."""

    stage = "deployment"
    network: Any = None  # NetworkConfig of the failed deployment, once known


class ValidationError(GblendError, ValueError):
    """Raised for bad local input. No network I/O has happened yet."""

    stage = "validation"


class WasmValidationError(ValidationError):
    """Raised when the artifact is not a WASM binary module."""

    stage = "artifact validation"


class InvalidPrivateKey(ValidationError):
    """Raised when the private key is not 32 hex-encoded bytes."""

    stage = "wallet"


class ConfigurationError(GblendError, ValueError):
    """Raised for a conflicting, incomplete or malformed configuration."""

    stage = "network configuration"


class NetworkError(GblendError, RuntimeError):
    """Raised when the network endpoint is unreachable or answers badly."""

    stage = "network"


class RpcError(NetworkError):
    """Raised when the endpoint answers with a JSON-RPC error member."""

    def __init__(self, method: str, code: Optional[int], message: str, data: Any = None):
        self.method = method
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"RPC error {code} in {method}: {message}")


class MalformedResponseError(NetworkError):
    """Raised when an RPC result is missing or cannot be decoded."""

    pass


class DeploymentError(GblendError):
    """Base exception for failures of the deployment itself."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when the WASM artifact file does not exist."""

    stage = "artifact validation"


class SubmissionRejectedError(DeploymentError):
    """Raised when the endpoint refuses the signed transaction."""

    stage = "submission"


class TransactionRevertedError(DeploymentError):
    """Raised on request for a deployment whose receipt reports a revert."""

    stage = "execution"


class DeploymentCancelledError(DeploymentError):
    """Raised when confirmation tracking is cancelled by the caller."""

    stage = "confirmation"


class ConfirmationTimeoutError(GblendError, TimeoutError):
    """Raised when confirmation does not complete before the deadline."""

    stage = "confirmation"

    def __init__(self, tx_hash: str, timeout: float, receipt: Any = None):
        self.tx_hash = tx_hash
        self.timeout = timeout
        self.receipt = receipt
        if receipt is None:
            detail = "no receipt"
        else:
            detail = f"included in block {receipt.block_number} but not confirmed"
        super().__init__(
            f"Transaction {tx_hash} confirmation timed out after {timeout:g}s ({detail})"
        )
