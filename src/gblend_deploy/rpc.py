"""JSON-RPC network client for gblend-deploy library."""

import itertools
import logging
from typing import Any, List, Optional, Protocol

import requests
from eth_utils import to_hex

from .constants import RPC_REQUEST_TIMEOUT
from .exceptions import MalformedResponseError, NetworkError, RpcError
from .parsers import parse_quantity, parse_receipt
from .types import DeploymentReceipt

logger = logging.getLogger(__name__)


class NetworkClient(Protocol):
    """The endpoint operations the deployment pipeline relies on."""

    def send_raw_transaction(self, raw_transaction: bytes) -> str:
        ...

    def get_transaction_receipt(self, tx_hash: str) -> Optional[DeploymentReceipt]:
        ...

    def gas_price(self) -> int:
        ...

    def block_number(self) -> int:
        ...

    def get_transaction_count(self, address: str) -> int:
        ...


class JsonRpcClient:
    """NetworkClient talking JSON-RPC 2.0 over HTTP."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = RPC_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client. No request is made here.

        Args:
            endpoint: JSON-RPC URL
            timeout: Per-request HTTP timeout in seconds
            session: Optional requests session to reuse
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session or requests.Session()
        self._ids = itertools.count(1)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> "JsonRpcClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def call(self, method: str, params: List[Any]) -> Any:
        """
        Perform one JSON-RPC call and return its result member.

        Raises:
            NetworkError: On transport failure, HTTP error status or non-JSON body
            RpcError: If the response carries an error member
            MalformedResponseError: If the response has no result member
        """
        request_id = next(self._ids)
        logger.debug("RPC %s -> %s (id=%d)", method, self.endpoint, request_id)

        try:
            response = self._session.post(
                self.endpoint,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params,
                    "id": request_id,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(f"Network error during {method} call: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            if response.status_code != 200:
                raise NetworkError(
                    f"RPC request {method} failed with status {response.status_code}"
                ) from e
            raise NetworkError(f"RPC response to {method} is not valid JSON") from e

        # Check for RPC errors, which some endpoints send with an HTTP error status
        if isinstance(payload, dict) and payload.get("error") is not None:
            error = payload["error"]
            if isinstance(error, dict):
                raise RpcError(
                    method, error.get("code"), str(error.get("message", "")), error.get("data")
                )
            raise RpcError(method, None, str(error))

        # Check for HTTP errors
        if response.status_code != 200:
            raise NetworkError(
                f"RPC request {method} failed with status {response.status_code}"
            )

        if not isinstance(payload, dict):
            raise MalformedResponseError(f"RPC response to {method} is not an object")

        if "result" not in payload:
            raise MalformedResponseError(f"RPC response to {method} has no result")

        return payload["result"]

    def send_raw_transaction(self, raw_transaction: bytes) -> str:
        """Submit signed transaction bytes and return the transaction hash."""
        result = self.call("eth_sendRawTransaction", [to_hex(raw_transaction)])
        if not isinstance(result, str):
            raise MalformedResponseError(f"Expected transaction hash, got {result!r}")
        return result

    def get_transaction_receipt(self, tx_hash: str) -> Optional[DeploymentReceipt]:
        """Fetch the receipt for tx_hash, or None while it is pending."""
        result = self.call("eth_getTransactionReceipt", [tx_hash])
        if result is None:
            return None
        return parse_receipt(result)

    def gas_price(self) -> int:
        """Current gas price suggested by the endpoint, in wei."""
        return parse_quantity(self.call("eth_gasPrice", []), "gasPrice")

    def block_number(self) -> int:
        """Current chain height."""
        return parse_quantity(self.call("eth_blockNumber", []), "blockNumber")

    def get_transaction_count(self, address: str) -> int:
        """Next nonce for address, counting pending transactions."""
        return parse_quantity(
            self.call("eth_getTransactionCount", [address, "pending"]), "nonce"
        )
