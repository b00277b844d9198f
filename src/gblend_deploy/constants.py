"""Configuration constants for gblend-deploy library."""

# First four bytes of every WebAssembly binary module ("\0asm")
WASM_MAGIC = b"\x00asm"

# Network presets selectable with --local / --dev
NETWORK_PRESETS = {
    "local": {
        "endpoint": "http://localhost:8545",
        "chain_id": 1337,
    },
    "dev": {
        "endpoint": "https://rpc.dev.gblend.xyz",
        "chain_id": 20993,
    },
}

CUSTOM_NETWORK_NAME = "custom"

# Deployment defaults
DEFAULT_GAS_LIMIT = 30_000_000
DEFAULT_GAS_PRICE = 0  # 0 = fetch eth_gasPrice from the endpoint
DEFAULT_CONFIRMATIONS = 0

# Confirmation tracking, seconds
DEFAULT_CONFIRMATION_TIMEOUT = 120
DEFAULT_POLL_INTERVAL = 1

# Per-request HTTP timeout, seconds
RPC_REQUEST_TIMEOUT = 30

# Largest value accepted for u64 parameters
MAX_UINT64 = 2**64 - 1

# Environment variables read by config.request_from_env
ENV_VARS = {
    "private_key": "DEPLOY_PRIVATE_KEY",
    "gas_limit": "DEPLOY_GAS_LIMIT",
    "gas_price": "DEPLOY_GAS_PRICE",
    "confirmations": "DEPLOY_CONFIRMATIONS",
    "rpc_url": "DEPLOY_RPC_URL",
    "chain_id": "DEPLOY_CHAIN_ID",
    "timeout": "DEPLOY_TIMEOUT",
    "poll_interval": "DEPLOY_POLL_INTERVAL",
}
