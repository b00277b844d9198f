"""Main API for gblend-deploy library."""

import logging
import threading
from typing import Optional

from .builder import build_deployment_transaction
from .exceptions import GblendError
from .networks import resolve_network
from .reporter import DeploymentReport, format_deployment_start
from .rpc import JsonRpcClient, NetworkClient
from .submitter import submit_transaction
from .tracker import ConfirmationTracker
from .types import DeployRequest
from .wallet import derive_signing_identity
from .wasm import read_wasm_artifact

logger = logging.getLogger(__name__)


def deploy(
    request: DeployRequest,
    client: Optional[NetworkClient] = None,
    tracker: Optional[ConfirmationTracker] = None,
    cancel: Optional[threading.Event] = None,
) -> DeploymentReport:
    """
    Deploy a WASM artifact and wait for the configured confirmations.

    Stages run strictly in order: artifact validation, network selection,
    wallet derivation, transaction building, submission, confirmation
    tracking. Every stage fails fast and nothing is retried.

    Args:
        request: Deployment parameters
        client: Network client (defaults to a JsonRpcClient for the
                selected endpoint)
        tracker: Confirmation tracker (defaults to one built from
                 request.timeout and request.poll_interval)
        cancel: Optional event that stops confirmation tracking

    Returns:
        DeploymentReport with status SUCCESS or REVERTED

    Raises:
        ArtifactNotFoundError: If the WASM file does not exist
        WasmValidationError: If the file is not a WASM module
        ConfigurationError: If the network selection is invalid
        InvalidPrivateKey: If the private key is malformed
        NetworkError: If the endpoint is unreachable or misbehaves
        SubmissionRejectedError: If the endpoint rejects the transaction
        ConfirmationTimeoutError: If confirmation exceeds request.timeout
    """
    artifact = read_wasm_artifact(request.wasm_file)

    network = resolve_network(
        local=request.local,
        dev=request.dev,
        rpc_url=request.rpc_url,
        chain_id=request.chain_id,
    )
    owned_client = None
    try:
        identity = derive_signing_identity(request.private_key, network.chain_id)

        banner = format_deployment_start(network, identity.address, request.wasm_file)
        for line in banner.splitlines():
            logger.info(line)

        if client is None:
            client = owned_client = JsonRpcClient(network.endpoint)
        if tracker is None:
            tracker = ConfirmationTracker(
                client, timeout=request.timeout, poll_interval=request.poll_interval
            )

        logger.info("Preparing deployment transaction...")
        transaction = build_deployment_transaction(
            artifact, network, client, request.gas_limit, request.gas_price
        )

        pending = submit_transaction(transaction, identity, client)
        result = tracker.track(pending, request.confirmations, cancel=cancel)
    except GblendError as e:
        # Lets failure reports name the network
        e.network = network
        raise
    finally:
        if owned_client is not None:
            owned_client.close()

    report = DeploymentReport.from_result(network, result)
    if report.succeeded:
        logger.info("Contract deployed at %s", report.contract_address)
    return report


def run_deployment(
    request: DeployRequest,
    client: Optional[NetworkClient] = None,
    tracker: Optional[ConfirmationTracker] = None,
    cancel: Optional[threading.Event] = None,
) -> DeploymentReport:
    """
    Run deploy() and turn any pipeline failure into a report.

    This is the boundary for presentation code: every outcome, including
    failures, comes back as a DeploymentReport. Exceptions that are not
    GblendError propagate.
    """
    try:
        return deploy(request, client=client, tracker=tracker, cancel=cancel)
    except GblendError as e:
        logger.error("Deployment failed during %s: %s", e.stage, e)
        return DeploymentReport.from_error(e.network, e)
