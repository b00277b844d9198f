"""Unit tests for the JSON-RPC network client."""

import json

import pytest
import requests
import responses

from gblend_deploy.exceptions import MalformedResponseError, NetworkError, RpcError
from gblend_deploy.rpc import JsonRpcClient
from gblend_deploy.types import ReceiptStatus

RPC_URL = "http://test-rpc.example.com"


def rpc_result(result):
    return {"jsonrpc": "2.0", "id": 1, "result": result}


class TestCall:
    """Test the generic call method."""

    @responses.activate
    def test_request_format(self):
        """Test that requests are JSON-RPC 2.0 envelopes with increasing ids."""
        seen = []

        def request_callback(request):
            body = json.loads(request.body)
            seen.append(body)
            return (200, {}, json.dumps({"jsonrpc": "2.0", "id": body["id"], "result": "0x1"}))

        responses.add_callback(
            responses.POST, RPC_URL, callback=request_callback, content_type="application/json"
        )

        client = JsonRpcClient(RPC_URL)
        client.call("eth_chainId", [])
        client.call("eth_blockNumber", [])

        assert seen[0]["jsonrpc"] == "2.0"
        assert seen[0]["method"] == "eth_chainId"
        assert seen[0]["params"] == []
        assert seen[1]["id"] > seen[0]["id"]

    @responses.activate
    def test_rpc_error_member(self):
        """Test that an error member raises RpcError with code and message."""
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "method not found"}},
            status=200,
        )

        with pytest.raises(RpcError) as exc_info:
            JsonRpcClient(RPC_URL).call("eth_foo", [])

        assert exc_info.value.code == -32601
        assert exc_info.value.message == "method not found"
        assert exc_info.value.method == "eth_foo"

    @responses.activate
    def test_http_error_status(self):
        """Test that a non-200 status raises NetworkError."""
        responses.add(responses.POST, RPC_URL, body="Bad gateway", status=502)

        with pytest.raises(NetworkError, match="502"):
            JsonRpcClient(RPC_URL).call("eth_blockNumber", [])

    @responses.activate
    def test_rpc_error_member_with_http_error_status(self):
        """Test that an error member wins over a 4xx status."""
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "nonce too low"}},
            status=400,
        )

        with pytest.raises(RpcError) as exc_info:
            JsonRpcClient(RPC_URL).call("eth_sendRawTransaction", ["0x00"])

        assert exc_info.value.code == -32000
        assert exc_info.value.message == "nonce too low"

    @responses.activate
    def test_http_error_status_with_json_without_error(self):
        """Test that a JSON body without an error member still fails on status."""
        responses.add(responses.POST, RPC_URL, json={"detail": "forbidden"}, status=403)

        with pytest.raises(NetworkError, match="403") as exc_info:
            JsonRpcClient(RPC_URL).call("eth_blockNumber", [])
        assert not isinstance(exc_info.value, RpcError)

    @responses.activate
    def test_non_json_body(self):
        """Test that an HTML body raises NetworkError."""
        responses.add(responses.POST, RPC_URL, body="<html>oops</html>", status=200)

        with pytest.raises(NetworkError):
            JsonRpcClient(RPC_URL).call("eth_blockNumber", [])

    @responses.activate
    def test_missing_result(self):
        """Test that an envelope without result is malformed."""
        responses.add(responses.POST, RPC_URL, json={"jsonrpc": "2.0", "id": 1}, status=200)

        with pytest.raises(MalformedResponseError):
            JsonRpcClient(RPC_URL).call("eth_blockNumber", [])

    @responses.activate
    def test_connection_error(self):
        """Test that transport failures raise NetworkError."""
        responses.add(
            responses.POST, RPC_URL, body=requests.ConnectionError("connection refused")
        )

        with pytest.raises(NetworkError, match="connection refused"):
            JsonRpcClient(RPC_URL).call("eth_blockNumber", [])


class TestSessionLifecycle:
    """Test closing the client's HTTP session."""

    def test_close_closes_session(self):
        """Test that close() closes the underlying session."""
        session = requests.Session()
        closed = []
        session.close = lambda: closed.append(True)

        JsonRpcClient(RPC_URL, session=session).close()

        assert closed == [True]

    def test_context_manager_closes_session(self):
        """Test that leaving a with block closes the session."""
        session = requests.Session()
        closed = []
        session.close = lambda: closed.append(True)

        with JsonRpcClient(RPC_URL, session=session) as client:
            assert closed == []

        assert client.endpoint == RPC_URL
        assert closed == [True]


class TestOperations:
    """Test the NetworkClient operations."""

    @responses.activate
    def test_gas_price(self):
        """Test eth_gasPrice decoding."""
        responses.add(responses.POST, RPC_URL, json=rpc_result("0x2a"), status=200)

        assert JsonRpcClient(RPC_URL).gas_price() == 42
        assert json.loads(responses.calls[0].request.body)["method"] == "eth_gasPrice"

    @responses.activate
    def test_block_number(self):
        """Test eth_blockNumber decoding."""
        responses.add(responses.POST, RPC_URL, json=rpc_result("0x10"), status=200)

        assert JsonRpcClient(RPC_URL).block_number() == 16

    @responses.activate
    def test_get_transaction_count_uses_pending(self, dev_address):
        """Test that the nonce counts pending transactions."""
        responses.add(responses.POST, RPC_URL, json=rpc_result("0x3"), status=200)

        assert JsonRpcClient(RPC_URL).get_transaction_count(dev_address) == 3
        body = json.loads(responses.calls[0].request.body)
        assert body["method"] == "eth_getTransactionCount"
        assert body["params"] == [dev_address, "pending"]

    @responses.activate
    def test_send_raw_transaction_hex_encodes(self):
        """Test that raw bytes are sent as 0x-prefixed hex."""
        tx_hash = "0x" + "cd" * 32
        responses.add(responses.POST, RPC_URL, json=rpc_result(tx_hash), status=200)

        assert JsonRpcClient(RPC_URL).send_raw_transaction(b"\xf8\x01\x02") == tx_hash
        body = json.loads(responses.calls[0].request.body)
        assert body["method"] == "eth_sendRawTransaction"
        assert body["params"] == ["0xf80102"]

    @responses.activate
    def test_pending_receipt_is_none(self):
        """Test that a null receipt result means pending."""
        responses.add(responses.POST, RPC_URL, json=rpc_result(None), status=200)

        assert JsonRpcClient(RPC_URL).get_transaction_receipt("0x" + "ab" * 32) is None

    @responses.activate
    def test_receipt_is_parsed(self):
        """Test that a receipt result is decoded into a DeploymentReceipt."""
        tx_hash = "0x" + "ab" * 32
        responses.add(
            responses.POST,
            RPC_URL,
            json=rpc_result(
                {
                    "transactionHash": tx_hash,
                    "status": "0x1",
                    "blockNumber": "0x64",
                    "gasUsed": "0x5208",
                    "contractAddress": "0x5FbDB2315678afecb367f032d93F642f64180aa3",
                    "logs": [],
                }
            ),
            status=200,
        )

        receipt = JsonRpcClient(RPC_URL).get_transaction_receipt(tx_hash)

        assert receipt.status is ReceiptStatus.SUCCESS
        assert receipt.block_number == 100
        assert receipt.gas_used == 21000

    @responses.activate
    def test_malformed_gas_price(self):
        """Test that a decimal gas price is rejected."""
        responses.add(responses.POST, RPC_URL, json=rpc_result("1000"), status=200)

        with pytest.raises(MalformedResponseError):
            JsonRpcClient(RPC_URL).gas_price()
