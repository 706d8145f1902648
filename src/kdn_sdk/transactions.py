"""
Transaction preparation for registry writes.

Builds unsigned `register` and `add-affiliate` transactions. Registration
reconciles the name's current price with the stored period price and
attaches the capabilities the registry requires of the signer, in this
order: coin.GAS, coin.TRANSFER(owner, vault, price), <module>.ACCOUNT_GUARD(owner).
"""

from decimal import Decimal
from typing import Optional

from .audit_logger import AuditLogger
from .enums import ErrorCode, RegistryOperation
from .exceptions import KdnSdkError
from .hosts import get_chain_id_by_network
from .models import (
    PRICE_MAP,
    Capability,
    ChainMetadata,
    PactInt,
    Result,
    Signer,
    UnsignedTransaction,
)
from .name_service import NameService
from .names import ensure_kda_extension
from .pact import TransactionBuilder
from .registry import Registry


def reconcile_price(new_price: float, stored_price: float) -> float:
    """Use the name's current price when it is positive and differs from the stored one."""
    if new_price > 0 and new_price != stored_price:
        return new_price
    return stored_price


class TransactionPreparer:
    """Prepares unsigned registry transactions."""

    COMPONENT = "TransactionPreparer"

    def __init__(
        self,
        name_service: NameService,
        builder: TransactionBuilder,
        registry: Registry,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._name_service = name_service
        self._builder = builder
        self._registry = registry
        self._logger = logger

    async def prepare_register_name_transaction(
        self,
        owner: str,
        address: str,
        name: str,
        period: int,
        network_id: str,
        account: str,
        host: str,
    ) -> Result[UnsignedTransaction]:
        """
        Prepare a name registration.

        Args:
            owner: Account that will own the name and pays the fee
            address: Address the name resolves to
            name: Name to register
            period: Registration period (key of PRICE_MAP)
            network_id: The network identifier
            account: Public key signing the transaction
            host: Pact API base URL used for the price queries

        Returns:
            Result with the unsigned transaction, or the failing step's message
        """
        days = PRICE_MAP.get(period)
        if days is None:
            return Result.fail(
                f"Unsupported registration period: {period}",
                ErrorCode.VALIDATION_ERROR.value,
            )

        name_info = await self._name_service.fetch_name_info(
            name, network_id, owner, host
        )
        if not name_info.success:
            return Result.fail(
                f'Failed to fetch name info for "{name}": {name_info.error}',
                name_info.error_code,
            )

        stored = await self._name_service.fetch_price_by_period(
            period, network_id, owner, host
        )
        if not stored.success:
            return Result.fail(
                f"Failed to fetch price for period {period}: {stored.error}",
                stored.error_code,
            )

        price = reconcile_price(name_info.data.price, stored.data)

        try:
            transaction = self.create_register_name_transaction(
                owner, address, name, days, price, network_id, account
            )
        except (KdnSdkError, ValueError) as e:
            return Result.fail(
                f'Failed to build registration for "{name}": {e}',
                getattr(e, "code", ErrorCode.VALIDATION_ERROR.value),
            )

        if self._logger:
            self._logger.info(
                self.COMPONENT,
                f"Prepared registration of {name}",
                {
                    "network_id": network_id,
                    "owner": owner,
                    "days": days,
                    "price": price,
                    "stored_price": stored.data,
                    "hash": transaction.hash,
                },
            )
        return Result.ok(transaction)

    def create_register_name_transaction(
        self,
        owner: str,
        address: str,
        name: str,
        days: int,
        price: float,
        network_id: str,
        account: str,
    ) -> UnsignedTransaction:
        """Build the `register` command with its signer capabilities."""
        module = self._registry.module_for(network_id)
        chain_id = get_chain_id_by_network(network_id)
        formatted_name = ensure_kda_extension(name)

        invocation = self._registry.invocation(
            RegistryOperation.REGISTER,
            network_id,
            owner,
            address,
            formatted_name,
            PactInt(days),
            "",
        )
        signer = Signer(
            pub_key=account,
            capabilities=[
                Capability("coin.GAS"),
                Capability(
                    "coin.TRANSFER",
                    (owner, self._registry.vault_account, Decimal(str(price))),
                ),
                Capability(f"{module}.ACCOUNT_GUARD", (owner,)),
            ],
        )
        metadata = self._registry.metadata(
            RegistryOperation.REGISTER, chain_id, sender=owner
        )
        return self._builder.build(invocation, metadata, network_id, [signer])

    def prepare_add_affiliate_transaction(
        self,
        affiliate_name: str,
        fee_address: str,
        fee: float,
        admin_key: str,
        network_id: str,
    ) -> Result[UnsignedTransaction]:
        """
        Prepare an `add-affiliate` governance transaction.

        No chain reads are needed; the fee is taken as given.
        """
        chain_id = get_chain_id_by_network(network_id)
        try:
            invocation = self._registry.invocation(
                RegistryOperation.ADD_AFFILIATE,
                network_id,
                affiliate_name,
                fee_address,
                fee,
            )
            metadata: ChainMetadata = self._registry.metadata(
                RegistryOperation.ADD_AFFILIATE, chain_id, sender=admin_key
            )
            transaction = self._builder.build(invocation, metadata, network_id)
        except (KdnSdkError, ValueError) as e:
            if self._logger:
                self._logger.log_error(
                    self.COMPONENT,
                    "Failed to build add-affiliate transaction",
                    error=e,
                    additional_data={"affiliate_name": affiliate_name},
                )
            return Result.fail(
                f'Failed to prepare affiliate "{affiliate_name}": {e}',
                getattr(e, "code", ErrorCode.VALIDATION_ERROR.value),
            )

        if self._logger:
            self._logger.info(
                self.COMPONENT,
                f"Prepared add-affiliate for {affiliate_name}",
                {"network_id": network_id, "fee": fee, "hash": transaction.hash},
            )
        return Result.ok(transaction)
