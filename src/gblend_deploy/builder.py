"""Deployment transaction construction for gblend-deploy library."""

import logging

from .constants import MAX_UINT64
from .exceptions import ValidationError
from .rpc import NetworkClient
from .types import DeploymentTransaction, NetworkConfig

logger = logging.getLogger(__name__)


def build_deployment_transaction(
    artifact: bytes,
    network: NetworkConfig,
    client: NetworkClient,
    gas_limit: int,
    gas_price: int,
) -> DeploymentTransaction:
    """
    Assemble the unsigned deployment transaction.

    A gas_price of 0 means "use the endpoint's current gas price": one
    eth_gasPrice call is made. Any other value is used verbatim and no
    network call happens.

    Args:
        artifact: Validated WASM bytes, used as the payload unchanged
        network: Target network
        client: Client bound to network.endpoint
        gas_limit: Gas limit for the deployment
        gas_price: Gas price in wei, or 0 for auto

    Returns:
        DeploymentTransaction for network.chain_id

    Raises:
        ValidationError: If gas_limit or gas_price is out of range
        NetworkError: If fetching the gas price fails (not retried)
    """
    _check_uint64("gas limit", gas_limit)
    _check_uint64("gas price", gas_price)
    if gas_limit == 0:
        raise ValidationError("Gas limit must be greater than zero")

    if gas_price == 0:
        logger.info("Estimating gas price...")
        gas_price = client.gas_price()
        logger.info("Gas price: %d wei (from %s)", gas_price, network.name)
    else:
        logger.info("Gas price: %d wei", gas_price)

    return DeploymentTransaction(
        chain_id=network.chain_id,
        payload=artifact,
        gas_limit=gas_limit,
        gas_price=gas_price,
    )


def _check_uint64(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"The {name} must be an integer, got {value!r}")
    if not 0 <= value <= MAX_UINT64:
        raise ValidationError(f"The {name} is out of range: {value}")
