"""
gblend-deploy: Python library for deploying WASM smart contracts to Fluent networks
"""

from importlib.metadata import PackageNotFoundError, version

from .config import request_from_env
from .deployments import deploy, run_deployment
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DeploymentCancelledError,
    DeploymentError,
    GblendError,
    InvalidPrivateKey,
    MalformedResponseError,
    NetworkError,
    RpcError,
    SubmissionRejectedError,
    TransactionRevertedError,
    ValidationError,
    WasmValidationError,
)
from .logging_config import setup_logger
from .networks import resolve_network
from .reporter import DeploymentReport, DeploymentStatus
from .rpc import JsonRpcClient, NetworkClient
from .tracker import ConfirmationTracker
from .types import (
    ConfirmationResult,
    DeploymentReceipt,
    DeploymentTransaction,
    DeployRequest,
    NetworkConfig,
    PendingDeployment,
    ReceiptStatus,
    TrackingState,
)

try:
    __version__ = version("gblend-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "deploy",
    "run_deployment",
    "request_from_env",
    "resolve_network",
    "setup_logger",
    "ConfirmationTracker",
    "JsonRpcClient",
    "NetworkClient",
    "DeployRequest",
    "DeploymentReport",
    "DeploymentStatus",
    "NetworkConfig",
    "DeploymentTransaction",
    "PendingDeployment",
    "DeploymentReceipt",
    "ReceiptStatus",
    "TrackingState",
    "ConfirmationResult",
    "GblendError",
    "ValidationError",
    "WasmValidationError",
    "InvalidPrivateKey",
    "ConfigurationError",
    "NetworkError",
    "RpcError",
    "MalformedResponseError",
    "DeploymentError",
    "ArtifactNotFoundError",
    "SubmissionRejectedError",
    "TransactionRevertedError",
    "DeploymentCancelledError",
    "ConfirmationTimeoutError",
]
