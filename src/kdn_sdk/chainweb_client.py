"""
Chainweb Pact API client.

This module provides an async client for the two Pact API endpoints the SDK
uses: /local for non-committing simulations ("dirty reads") and /send for
submitting signed transactions. Transport failures, non-2xx statuses and
undecodable bodies are translated into NetworkTransportError.
"""

import json
import time
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from .enums import ErrorCode
from .exceptions import DomainValidationError, NetworkTransportError
from .models import TransactionDescriptor, UnsignedTransaction


@runtime_checkable
class PactApiClient(Protocol):
    """Simulation and submission collaborator."""

    async def local(self, transaction: UnsignedTransaction, host: str) -> dict:
        ...

    async def submit(
        self, transaction: UnsignedTransaction, host: str
    ) -> TransactionDescriptor:
        ...


class ChainwebClient:
    """
    Async Pact API client over httpx.

    A fresh httpx.AsyncClient is opened per request, so one ChainwebClient
    can be shared by concurrent callers.
    """

    LOCAL_PATH = "/api/v1/local"
    SEND_PATH = "/api/v1/send"

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self._timeout = timeout
        self._transport = transport

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            verify=True,
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            transport=self._transport,
        )

    async def local(self, transaction: UnsignedTransaction, host: str) -> dict:
        """
        Execute a transaction without committing it.

        Preflight and signature verification are disabled, so unsigned
        commands are accepted.

        Args:
            transaction: The command to simulate
            host: Pact API base URL

        Returns:
            The decoded command result

        Raises:
            NetworkTransportError: If the request fails or the body is not JSON
        """
        url = f"{host.rstrip('/')}{self.LOCAL_PATH}"
        return await self._post_json(
            url,
            transaction.to_dict(),
            params={"preflight": "false", "signatureVerification": "false"},
        )

    async def submit(
        self, transaction: UnsignedTransaction, host: str
    ) -> TransactionDescriptor:
        """
        Submit a signed transaction.

        Raises:
            DomainValidationError: If there are no signature slots or one is empty
            NetworkTransportError: If the node rejects or cannot be reached
        """
        if not transaction.is_signed():
            raise DomainValidationError(
                code=ErrorCode.VALIDATION_ERROR.value,
                message="Transaction is not signed",
                details={"hash": transaction.hash},
            )

        url = f"{host.rstrip('/')}{self.SEND_PATH}"
        body = await self._post_json(url, {"cmds": [transaction.to_dict()]})

        request_keys = body.get("requestKeys") if isinstance(body, dict) else None
        if not request_keys:
            raise NetworkTransportError(
                code=ErrorCode.NETWORK_ERROR.value,
                message="Send response contains no request keys",
                details={"request_url": url, "body": body},
            )

        command = json.loads(transaction.cmd)
        return TransactionDescriptor(
            request_key=request_keys[0],
            chain_id=str(command.get("meta", {}).get("chainId", "")),
            network_id=str(command.get("networkId", "")),
        )

    async def _post_json(
        self,
        url: str,
        payload: dict,
        params: Optional[dict] = None,
    ) -> Any:
        start_time = time.perf_counter()
        try:
            async with self._make_client() as client:
                response = await client.post(
                    url,
                    json=payload,
                    params=params,
                    headers={"Accept": "application/json"},
                )
        except httpx.TimeoutException as e:
            raise NetworkTransportError(
                code=ErrorCode.TIMEOUT.value,
                message=f"Request timed out after {self._timeout}s",
                details={"request_url": url, "error": str(e)},
            ) from e
        except httpx.HTTPError as e:
            raise NetworkTransportError(
                code=ErrorCode.NETWORK_ERROR.value,
                message=f"Connection error: {e}",
                details={"request_url": url},
            ) from e

        response_time_ms = (time.perf_counter() - start_time) * 1000

        if response.status_code >= 300:
            raise NetworkTransportError(
                code=ErrorCode.NETWORK_ERROR.value,
                message=f"Chainweb node returned HTTP {response.status_code}: {response.text}",
                details={
                    "request_url": url,
                    "status_code": response.status_code,
                    "response_time_ms": response_time_ms,
                },
            )

        try:
            return response.json()
        except ValueError as e:
            raise NetworkTransportError(
                code=ErrorCode.NETWORK_ERROR.value,
                message=f"Invalid JSON response: {response.text[:200]}",
                details={"request_url": url, "status_code": response.status_code},
            ) from e
