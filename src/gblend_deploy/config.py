"""Environment-driven configuration for gblend-deploy library."""

import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .constants import ENV_VARS, MAX_UINT64
from .exceptions import ConfigurationError
from .types import DeployRequest


def _parse_uint(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
    if not 0 <= value <= MAX_UINT64:
        raise ConfigurationError(f"{name} is out of range: {value}")
    return value


def _parse_seconds(name: str, raw: str) -> float:
    try:
        value = float(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _parse_str(name: str, raw: str) -> str:
    return raw


# Parser for each field read from the environment
_PARSERS: Dict[str, Callable[[str, str], Any]] = {
    "private_key": _parse_str,
    "gas_limit": _parse_uint,
    "gas_price": _parse_uint,
    "confirmations": _parse_uint,
    "rpc_url": _parse_str,
    "chain_id": _parse_uint,
    "timeout": _parse_seconds,
    "poll_interval": _parse_seconds,
}


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Read deployment settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Dictionary of DeployRequest field -> parsed value, containing only
        the variables that are set and non-empty

    Raises:
        ConfigurationError: If a variable holds a malformed value
    """
    if environ is None:
        environ = os.environ

    settings: Dict[str, Any] = {}
    for field_name, env_name in ENV_VARS.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        settings[field_name] = _PARSERS[field_name](env_name, raw)
    return settings


def request_from_env(
    wasm_file: Union[Path, str],
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> DeployRequest:
    """
    Build a DeployRequest from the environment plus explicit overrides.

    Overrides win over environment values; overrides that are None are
    ignored so optional command-line values don't mask the environment.

    Args:
        wasm_file: Path to the compiled WASM file
        environ: Mapping to read from (defaults to os.environ)
        **overrides: DeployRequest fields

    Returns:
        DeployRequest

    Raises:
        ConfigurationError: If the private key is missing, a value is
            malformed, or an override names an unknown field
    """
    settings = settings_from_env(environ)

    allowed = set(ENV_VARS) | {"local", "dev"}
    for key, value in overrides.items():
        if key not in allowed:
            raise ConfigurationError(f"Unknown deployment setting: {key}")
        if value is not None:
            settings[key] = value

    if not settings.get("private_key"):
        raise ConfigurationError(
            f"Private key required: set ${ENV_VARS['private_key']} or pass private_key"
        )

    return DeployRequest(wasm_file=wasm_file, **settings)
