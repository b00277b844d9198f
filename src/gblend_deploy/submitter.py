"""Transaction signing and submission for gblend-deploy library."""

import logging

from eth_utils import to_hex

from .exceptions import RpcError, SubmissionRejectedError
from .rpc import NetworkClient
from .types import DeploymentTransaction, PendingDeployment
from .wallet import SigningIdentity

logger = logging.getLogger(__name__)


def submit_transaction(
    transaction: DeploymentTransaction,
    identity: SigningIdentity,
    client: NetworkClient,
) -> PendingDeployment:
    """
    Sign a deployment transaction locally and hand it to the endpoint.

    Returns as soon as the endpoint accepts the transaction into its
    queue. That says nothing about block inclusion.

    Args:
        transaction: Unsigned deployment transaction
        identity: Signing identity bound to transaction.chain_id
        client: Client bound to the target endpoint

    Returns:
        PendingDeployment identified by the transaction hash

    Raises:
        SubmissionRejectedError: If the endpoint rejects the transaction
        NetworkError: If the endpoint cannot be reached (not retried)
    """
    nonce = client.get_transaction_count(identity.address)
    signed = identity.sign_transaction(transaction, nonce)
    local_hash = to_hex(signed.hash)

    logger.info("Sending transaction from %s (nonce %d)...", identity.address, nonce)
    try:
        tx_hash = client.send_raw_transaction(bytes(signed.raw_transaction))
    except RpcError as e:
        raise SubmissionRejectedError(f"Failed to send transaction: {e.message}") from e

    if tx_hash.lower() != local_hash.lower():
        logger.warning(
            "Endpoint returned hash %s, locally computed %s", tx_hash, local_hash
        )

    logger.info("Transaction submitted: %s", tx_hash)
    return PendingDeployment(tx_hash=tx_hash, gas_limit=transaction.gas_limit)
