"""
Chain Query Executor.

Builds read-only registry queries, runs each one as a single simulation
against the resolved host, and hands the raw result to the response parser.
Every failure (transport, chain, payload) is logged and returned as a failed
Result; nothing raised below this layer escapes it.
"""

from typing import Any, Optional

from .audit_logger import AuditLogger
from .chainweb_client import PactApiClient
from .enums import ErrorCode, RegistryOperation
from .exceptions import DomainValidationError, KdnSdkError
from .hosts import get_chain_id_by_network
from .models import PactInt, Result, SaleState
from .names import ensure_kda_extension
from .pact import TransactionBuilder
from .registry import Registry
from .response_parser import parse_chain_response, parse_pact_decimal


class ChainQueryExecutor:
    """Runs registry read queries against a Chainweb node."""

    COMPONENT = "ChainQueryExecutor"

    def __init__(
        self,
        client: PactApiClient,
        builder: TransactionBuilder,
        registry: Registry,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._client = client
        self._builder = builder
        self._registry = registry
        self._logger = logger

    async def _dirty_read(
        self,
        operation: RegistryOperation,
        network_id: str,
        host: str,
        subject: str,
        args: tuple,
        sender: Optional[str] = None,
    ) -> Any:
        """Simulate one registry call and return its parsed data (raises on failure)."""
        chain_id = get_chain_id_by_network(network_id)
        invocation = self._registry.invocation(operation, network_id, *args)
        metadata = self._registry.metadata(operation, chain_id, sender)
        transaction = self._builder.build(invocation, metadata, network_id)

        if self._logger:
            self._logger.debug(
                self.COMPONENT,
                f"Querying {operation.value}",
                {"network_id": network_id, "host": host, "args": list(map(str, args))},
            )

        response = await self._client.local(transaction, host)
        return parse_chain_response(response, subject)

    async def _resolve(
        self,
        identifier: str,
        network_id: str,
        host: str,
        subject: str,
    ) -> Result[Optional[str]]:
        if subject == "address":
            operation = RegistryOperation.GET_ADDRESS
            param = ensure_kda_extension(identifier.strip())
        else:
            operation = RegistryOperation.GET_NAME
            param = identifier.strip()

        try:
            data = await self._dirty_read(operation, network_id, host, subject, (param,))
        except Exception as e:
            self._log_failure(f"Error resolving {subject}", e, host, identifier)
            return Result.fail(
                f'Failed to resolve {subject} for identifier "{identifier}"',
                self._error_code(e),
            )

        return Result.ok(data or None)

    async def name_to_address(
        self, name: str, network_id: str, host: str
    ) -> Result[Optional[str]]:
        """Resolve a name ('example' or 'example.kda') to its address."""
        return await self._resolve(name, network_id, host, "address")

    async def address_to_name(
        self, address: str, network_id: str, host: str
    ) -> Result[Optional[str]]:
        """Resolve an address to its primary name."""
        return await self._resolve(address, network_id, host, "name")

    async def fetch_sale_state(
        self, name: str, network_id: str, host: str
    ) -> Result[SaleState]:
        """Fetch whether a name is sellable and at what price."""
        formatted_name = ensure_kda_extension(name)
        try:
            data = await self._dirty_read(
                RegistryOperation.GET_SALE_STATE,
                network_id,
                host,
                "sale state",
                (formatted_name,),
            )
            if not isinstance(data, dict):
                raise DomainValidationError(
                    code=ErrorCode.VALIDATION_ERROR.value,
                    message="Sale state parsing failed",
                    details={"data": data},
                )
            price = parse_pact_decimal(data.get("price"))
            sale_state = SaleState(
                sellable=bool(data.get("sellable", False)),
                price=price if price is not None else 0.0,
            )
        except Exception as e:
            self._log_failure("Error fetching sale state", e, host, formatted_name)
            return Result.fail(
                f'Failed to fetch sale state for "{formatted_name}": {e}',
                self._error_code(e),
            )

        return Result.ok(sale_state)

    async def fetch_raw_name_info(
        self, name: str, network_id: str, owner: str, host: str
    ) -> Result[Optional[dict]]:
        """Fetch the registry's name-info object; empty data yields None."""
        formatted_name = ensure_kda_extension(name)
        try:
            data = await self._dirty_read(
                RegistryOperation.GET_NAME_INFO,
                network_id,
                host,
                "name info",
                (formatted_name,),
                sender=owner,
            )
        except Exception as e:
            self._log_failure("Error fetching name info", e, host, formatted_name)
            return Result.fail(
                f'Failed to fetch name information for "{formatted_name}": {e}',
                self._error_code(e),
            )

        if data is not None and not isinstance(data, dict):
            self._log_failure(
                "Name info payload is not an object", None, host, formatted_name
            )
            return Result.fail(
                f'Failed to fetch name information for "{formatted_name}": payload is not an object',
                ErrorCode.VALIDATION_ERROR.value,
            )
        return Result.ok(data or None)

    async def fetch_price(
        self, days: int, network_id: str, owner: str, host: str
    ) -> Result[float]:
        """Fetch the registration price for a number of days."""
        try:
            data = await self._dirty_read(
                RegistryOperation.GET_PRICE,
                network_id,
                host,
                "price",
                (PactInt(days),),
                sender=owner,
            )
            price = parse_pact_decimal(data)
            if price is None:
                raise DomainValidationError(
                    code=ErrorCode.VALIDATION_ERROR.value,
                    message="Price parsing failed",
                    details={"data": data},
                )
        except Exception as e:
            self._log_failure("Error fetching price", e, host, str(days))
            return Result.fail(
                f"Failed to fetch price for {days} days: {e}",
                self._error_code(e),
            )

        return Result.ok(price)

    def _error_code(self, error: Exception) -> str:
        if isinstance(error, KdnSdkError):
            return error.code
        return ErrorCode.NETWORK_ERROR.value

    def _log_failure(
        self,
        message: str,
        error: Optional[Exception],
        host: str,
        identifier: str,
    ) -> None:
        if self._logger:
            self._logger.log_error(
                self.COMPONENT,
                message,
                error=error,
                request_url=host,
                additional_data={"identifier": identifier},
            )
