"""Network selection for gblend-deploy library."""

from typing import Optional
from urllib.parse import urlparse

from .constants import CUSTOM_NETWORK_NAME, MAX_UINT64, NETWORK_PRESETS
from .exceptions import ConfigurationError
from .types import NetworkConfig


def get_preset(name: str) -> NetworkConfig:
    """
    Get the NetworkConfig of a named preset.

    Args:
        name: Preset name ("local" or "dev")

    Raises:
        ConfigurationError: If the preset is unknown
    """
    if name not in NETWORK_PRESETS:
        raise ConfigurationError(
            f"Unknown network: {name}. Supported: {list(NETWORK_PRESETS.keys())}"
        )
    preset = NETWORK_PRESETS[name]
    return NetworkConfig(name=name, endpoint=preset["endpoint"], chain_id=preset["chain_id"])


def resolve_network(
    local: bool = False,
    dev: bool = False,
    rpc_url: Optional[str] = None,
    chain_id: Optional[int] = None,
) -> NetworkConfig:
    """
    Map a network selection onto a NetworkConfig.

    Exactly one mode must be selected: the local preset, the dev preset,
    or a custom endpoint given by both rpc_url and chain_id. No network
    I/O happens here.

    Args:
        local: Select the local preset
        dev: Select the dev preset
        rpc_url: Custom JSON-RPC endpoint
        chain_id: Custom chain ID

    Returns:
        NetworkConfig for the selected network

    Raises:
        ConfigurationError: If the selection is conflicting, incomplete or empty
    """
    custom_given = rpc_url is not None or chain_id is not None

    if local and dev:
        raise ConfigurationError("Specify only one of --local or --dev, not both")

    if (local or dev) and custom_given:
        raise ConfigurationError(
            "Specify either a preset (--local or --dev) or both --rpc and --chain-id, not both"
        )

    if local:
        return get_preset("local")
    if dev:
        return get_preset("dev")

    if not custom_given:
        raise ConfigurationError(
            "Network not specified. Use --local, --dev, or both --rpc and --chain-id"
        )
    if rpc_url is None or chain_id is None:
        raise ConfigurationError("A custom network needs both --rpc and --chain-id")

    _check_endpoint(rpc_url)
    _check_chain_id(chain_id)

    return NetworkConfig(name=CUSTOM_NETWORK_NAME, endpoint=rpc_url, chain_id=chain_id)


def _check_endpoint(rpc_url: str) -> None:
    parsed = urlparse(rpc_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid RPC endpoint URL: {rpc_url!r}")


def _check_chain_id(chain_id: int) -> None:
    # bool is an int subclass
    if isinstance(chain_id, bool) or not isinstance(chain_id, int):
        raise ConfigurationError(f"Chain ID must be an integer, got {chain_id!r}")
    if not 0 < chain_id <= MAX_UINT64:
        raise ConfigurationError(f"Chain ID out of range: {chain_id}")
