"""
KadenaNames SDK engine.

This module provides the public entry point that wires the components
together:
- Host resolution for the requested network
- Read-only registry queries (name <-> address, sale state, name info, prices)
- Preparation of unsigned registration and affiliate transactions
- Submission of signed transactions

The engine holds only configuration fixed at construction; each call resolves
its own host and opens its own HTTP connection.
"""

from typing import Optional

from .audit_logger import AuditLogger, create_logger
from .chainweb_client import ChainwebClient, PactApiClient
from .config import SDKConfig, create_default_config
from .enums import ErrorCode
from .exceptions import UnsupportedNetworkError
from .hosts import (
    DEFAULT_CHAINWEB_HOSTS,
    HostGenerator,
    create_host_generator,
    default_chainweb_host_generator,
    get_chain_id_by_network,
    resolve_endpoint,
)
from .models import (
    PRICE_MAP,
    NameInfo,
    NetworkEndpoint,
    Result,
    SaleState,
    TransactionDescriptor,
    UnsignedTransaction,
)
from .name_service import NameService
from .pact import PactCommandBuilder, TransactionBuilder
from .query_executor import ChainQueryExecutor
from .registry import Registry
from .transactions import TransactionPreparer


class KadenaNamesSDK:
    """
    Engine for KadenaNames resolution and transaction preparation.

    Every Result-returning operation reports an unknown network id as a
    failed Result with error_code 'unsupported_network'.
    """

    COMPONENT = "KadenaNamesSDK"

    PRICE_MAP = PRICE_MAP

    def __init__(
        self,
        config: Optional[SDKConfig] = None,
        host_generator: Optional[HostGenerator] = None,
        client: Optional[PactApiClient] = None,
        builder: Optional[TransactionBuilder] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: SDK configuration (defaults to public Chainweb hosts)
            host_generator: Custom host resolution strategy; overrides config.network
            client: Pact API collaborator (defaults to ChainwebClient)
            builder: Transaction builder (defaults to PactCommandBuilder)
            logger: Logger (defaults to one built from config.logging)
        """
        self._config = config or create_default_config()

        if host_generator is not None:
            self._host_generator = host_generator
        elif self._config.network.hosts:
            hosts = dict(DEFAULT_CHAINWEB_HOSTS)
            hosts.update(self._config.network.hosts)
            self._host_generator = create_host_generator(hosts)
        else:
            self._host_generator = default_chainweb_host_generator

        self._logger = logger or create_logger(
            self._config.logging.level, self._config.logging.output_format
        )
        self._client = client or ChainwebClient(
            timeout=self._config.http.timeout_seconds
        )
        self._builder = builder or PactCommandBuilder()
        self._registry = Registry(self._config.registry)

        self._executor = ChainQueryExecutor(
            self._client, self._builder, self._registry, self._logger
        )
        self._name_service = NameService(self._executor, self._logger)
        self._preparer = TransactionPreparer(
            self._name_service, self._builder, self._registry, self._logger
        )

    @property
    def config(self) -> SDKConfig:
        return self._config

    @property
    def registry(self) -> Registry:
        return self._registry

    def get_chainweb_url(self, network_id: str, chain_id: str) -> str:
        """
        Generate the Pact API URL for a network and chain.

        Raises:
            UnsupportedNetworkError: If the host strategy does not know the network
        """
        return self.resolve_endpoint(network_id, chain_id).host_url

    def resolve_endpoint(
        self, network_id: str, chain_id: Optional[str] = None
    ) -> NetworkEndpoint:
        """Resolve a network id (chain derived when omitted) with the configured strategy."""
        return resolve_endpoint(network_id, chain_id, self._host_generator)

    def _host_for(self, network_id: str) -> Result[str]:
        try:
            endpoint = self.resolve_endpoint(network_id)
        except UnsupportedNetworkError as e:
            self._logger.log_error(self.COMPONENT, "Host resolution failed", error=e)
            return Result.fail(e.message, e.code)
        return Result.ok(endpoint.host_url)

    async def name_to_address(self, name: str, network_id: str) -> Result[Optional[str]]:
        """
        Resolve a name to its address.

        Args:
            name: The name (e.g., 'example.kda' or 'example')
            network_id: The network identifier (e.g., 'testnet04', 'mainnet01')

        Returns:
            Result with the address, or None data when the registry has no address
        """
        host = self._host_for(network_id)
        if not host.success:
            return Result.fail(host.error, host.error_code)
        return await self._executor.name_to_address(name, network_id, host.data)

    async def address_to_name(self, address: str, network_id: str) -> Result[Optional[str]]:
        """Resolve an address to its name."""
        host = self._host_for(network_id)
        if not host.success:
            return Result.fail(host.error, host.error_code)
        return await self._executor.address_to_name(address, network_id, host.data)

    async def fetch_sale_state(self, name: str, network_id: str) -> Result[SaleState]:
        """Fetch the sale state of a name."""
        host = self._host_for(network_id)
        if not host.success:
            return Result.fail(host.error, host.error_code)
        return await self._executor.fetch_sale_state(name, network_id, host.data)

    async def fetch_name_info(
        self, name: str, network_id: str, owner: str
    ) -> Result[NameInfo]:
        """Fetch price, market price, availability and expiry of a name."""
        host = self._host_for(network_id)
        if not host.success:
            return Result.fail(host.error, host.error_code)
        return await self._name_service.fetch_name_info(
            name, network_id, owner, host.data
        )

    async def fetch_price_by_period(
        self, period: int, network_id: str, owner: str
    ) -> Result[float]:
        """Fetch the registration price for a period (1 or 2 years)."""
        host = self._host_for(network_id)
        if not host.success:
            return Result.fail(host.error, host.error_code)
        return await self._name_service.fetch_price_by_period(
            period, network_id, owner, host.data
        )

    async def prepare_register_name_transaction(
        self,
        owner: str,
        address: str,
        name: str,
        period: int,
        network_id: str,
        account: str,
    ) -> Result[UnsignedTransaction]:
        """Prepare an unsigned name registration transaction."""
        host = self._host_for(network_id)
        if not host.success:
            return Result.fail(host.error, host.error_code)
        return await self._preparer.prepare_register_name_transaction(
            owner, address, name, period, network_id, account, host.data
        )

    def prepare_add_affiliate_transaction(
        self,
        affiliate_name: str,
        fee_address: str,
        fee: float,
        admin_key: str,
        network_id: str,
    ) -> Result[UnsignedTransaction]:
        """Prepare an unsigned add-affiliate transaction (no chain reads)."""
        return self._preparer.prepare_add_affiliate_transaction(
            affiliate_name, fee_address, fee, admin_key, network_id
        )

    async def send_transaction(
        self,
        signed_transaction: UnsignedTransaction,
        network_id: str,
        chain_id: Optional[str] = None,
    ) -> Result[TransactionDescriptor]:
        """
        Submit a signed transaction.

        Host resolution problems and unsigned transactions are returned as a
        failed Result. Errors raised by the submission itself are logged and
        re-raised unchanged.

        Args:
            signed_transaction: Transaction with every signature slot filled
            network_id: The network identifier
            chain_id: Target chain; derived from the network id if omitted
        """
        if chain_id is None:
            chain_id = get_chain_id_by_network(network_id)
        try:
            endpoint = self.resolve_endpoint(network_id, chain_id)
        except UnsupportedNetworkError as e:
            self._logger.log_error(self.COMPONENT, "Host resolution failed", error=e)
            return Result.fail(e.message, e.code)

        if not signed_transaction.is_signed():
            return Result.fail(
                "Transaction is not signed", ErrorCode.VALIDATION_ERROR.value
            )

        try:
            descriptor = await self._client.submit(signed_transaction, endpoint.host_url)
        except Exception as e:
            self._logger.log_error(
                self.COMPONENT,
                "Transaction submission failed",
                error=e,
                request_url=endpoint.host_url,
                additional_data={"hash": signed_transaction.hash},
            )
            raise

        self._logger.info(
            self.COMPONENT,
            "Transaction submitted",
            {"request_key": descriptor.request_key, "network_id": network_id},
        )
        return Result.ok(descriptor)
