"""
Property-based tests for the Chainweb Pact API client.

Requests are served by httpx.MockTransport; no network access is needed.
"""

import asyncio
import json

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from kdn_sdk.chainweb_client import ChainwebClient, PactApiClient
from kdn_sdk.enums import ErrorCode
from kdn_sdk.exceptions import DomainValidationError, NetworkTransportError
from kdn_sdk.models import UnsignedTransaction

from chain_stubs import StubChainweb, success

HOST = "https://api.chainweb.com/chainweb/0.0/mainnet01/chain/15/pact"

COMMAND = json.dumps({
    "payload": {"exec": {"code": '(free.kadenanames.get-address "a.kda")', "data": {}}},
    "nonce": "n",
    "signers": [],
    "meta": {"chainId": "15", "sender": "", "gasLimit": 2500,
             "gasPrice": 1.0e-8, "ttl": 28800, "creationTime": 0},
    "networkId": "mainnet01",
}, separators=(",", ":"))


def _unsigned() -> UnsignedTransaction:
    return UnsignedTransaction(cmd=COMMAND, hash="hash-1", sigs=(None,))


def _signed() -> UnsignedTransaction:
    return UnsignedTransaction(cmd=COMMAND, hash="hash-1", sigs=("sig-1",))


class TestLocalRequestProperty:
    """Simulations POST the command to /api/v1/local with checks disabled."""

    def test_client_satisfies_protocol(self) -> None:
        assert isinstance(ChainwebClient(), PactApiClient)

    def test_local_request_shape(self) -> None:
        stub = StubChainweb({"get-address": success("k:abc")})
        client = ChainwebClient(transport=stub.transport)

        body = asyncio.run(client.local(_unsigned(), HOST))

        assert body["result"] == {"status": "success", "data": "k:abc"}
        request = stub.requests[0]
        assert request.method == "POST"
        assert request.url.host == "api.chainweb.com"
        assert request.url.path == "/chainweb/0.0/mainnet01/chain/15/pact/api/v1/local"
        assert request.url.params["preflight"] == "false"
        assert request.url.params["signatureVerification"] == "false"
        assert json.loads(request.content) == {"cmd": COMMAND, "hash": "hash-1", "sigs": [None]}

    def test_trailing_slash_on_host(self) -> None:
        stub = StubChainweb({"get-address": success(None)})
        client = ChainwebClient(transport=stub.transport)

        asyncio.run(client.local(_unsigned(), HOST + "/"))

        assert stub.requests[0].url.path.endswith("/pact/api/v1/local")


class TestTransportFailureProperty:
    """Every transport problem surfaces as NetworkTransportError."""

    @given(status=st.sampled_from([300, 400, 404, 429, 500, 502, 503]))
    @settings(max_examples=20)
    def test_error_statuses(self, status: int) -> None:
        stub = StubChainweb({"get-address": lambda request: httpx.Response(status, text="boom")})
        client = ChainwebClient(transport=stub.transport)

        with pytest.raises(NetworkTransportError) as exc_info:
            asyncio.run(client.local(_unsigned(), HOST))

        assert exc_info.value.code == ErrorCode.NETWORK_ERROR.value
        assert exc_info.value.message == f"Chainweb node returned HTTP {status}: boom"
        assert exc_info.value.details["status_code"] == status

    def test_invalid_json(self) -> None:
        stub = StubChainweb({"get-address": "<html>gateway</html>"})
        client = ChainwebClient(transport=stub.transport)

        with pytest.raises(NetworkTransportError) as exc_info:
            asyncio.run(client.local(_unsigned(), HOST))

        assert exc_info.value.message.startswith("Invalid JSON response: <html>")

    def test_connection_error(self) -> None:
        stub = StubChainweb({"get-address": httpx.ConnectError("connection refused")})
        client = ChainwebClient(transport=stub.transport)

        with pytest.raises(NetworkTransportError) as exc_info:
            asyncio.run(client.local(_unsigned(), HOST))

        assert exc_info.value.code == ErrorCode.NETWORK_ERROR.value
        assert "connection refused" in exc_info.value.message

    def test_timeout(self) -> None:
        stub = StubChainweb({"get-address": httpx.ReadTimeout("too slow")})
        client = ChainwebClient(timeout=2.5, transport=stub.transport)

        with pytest.raises(NetworkTransportError) as exc_info:
            asyncio.run(client.local(_unsigned(), HOST))

        assert exc_info.value.code == ErrorCode.TIMEOUT.value
        assert exc_info.value.message == "Request timed out after 2.5s"


class TestSubmitProperty:
    """Submission requires full signatures and returns a descriptor."""

    def test_unsigned_is_rejected_before_sending(self) -> None:
        stub = StubChainweb()
        client = ChainwebClient(transport=stub.transport)

        with pytest.raises(DomainValidationError) as exc_info:
            asyncio.run(client.submit(_unsigned(), HOST))

        assert exc_info.value.message == "Transaction is not signed"
        assert stub.requests == []

    def test_descriptor_from_request_key(self) -> None:
        stub = StubChainweb()
        client = ChainwebClient(transport=stub.transport)

        descriptor = asyncio.run(client.submit(_signed(), HOST))

        assert descriptor.request_key == "hash-1"
        assert descriptor.chain_id == "15"
        assert descriptor.network_id == "mainnet01"
        request = stub.requests[0]
        assert request.url.path.endswith("/api/v1/send")
        assert json.loads(request.content) == {
            "cmds": [{"cmd": COMMAND, "hash": "hash-1", "sigs": [{"sig": "sig-1"}]}]
        }

    def test_missing_request_keys(self) -> None:
        stub = StubChainweb({"send": {"requestKeys": []}})
        client = ChainwebClient(transport=stub.transport)

        with pytest.raises(NetworkTransportError) as exc_info:
            asyncio.run(client.submit(_signed(), HOST))

        assert exc_info.value.message == "Send response contains no request keys"
