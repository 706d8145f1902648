"""
Registry contract operation table.

Every contract function the SDK calls is listed here with its argument
shape and the metadata profile its commands carry. Invocations are checked
against the table before any command is built, so a malformed call fails
locally instead of on-chain.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .config import RegistryConfig
from .enums import ErrorCode, NetworkFamily, RegistryOperation
from .exceptions import DomainValidationError
from .hosts import get_network_family
from .models import ChainMetadata, PactInt, PactInvocation


@dataclass(frozen=True)
class MetadataProfile:
    """Gas and ttl settings of a command; None keeps the ChainMetadata default."""

    gas_limit: Optional[int] = None
    gas_price: Optional[float] = None
    ttl: Optional[int] = None
    default_sender: str = ""


@dataclass(frozen=True)
class OperationSpec:
    """Argument shape and metadata profile of one registry function."""

    operation: RegistryOperation
    arg_types: tuple
    metadata: MetadataProfile


DEFAULT_PROFILE = MetadataProfile()
READ_PROFILE = MetadataProfile(gas_limit=100000, gas_price=0.001, ttl=600)
PRICE_PROFILE = MetadataProfile(gas_limit=600, gas_price=1.0e-6, ttl=28800)
ADMIN_PROFILE = MetadataProfile(gas_limit=100000, gas_price=0.001, ttl=600)

_NUMBER = (int, float, Decimal)

OPERATIONS: dict[RegistryOperation, OperationSpec] = {
    RegistryOperation.GET_ADDRESS: OperationSpec(
        RegistryOperation.GET_ADDRESS, (str,), DEFAULT_PROFILE
    ),
    RegistryOperation.GET_NAME: OperationSpec(
        RegistryOperation.GET_NAME, (str,), DEFAULT_PROFILE
    ),
    RegistryOperation.GET_SALE_STATE: OperationSpec(
        RegistryOperation.GET_SALE_STATE,
        (str,),
        MetadataProfile(gas_limit=100000, gas_price=0.001, ttl=600, default_sender="account"),
    ),
    RegistryOperation.GET_NAME_INFO: OperationSpec(
        RegistryOperation.GET_NAME_INFO, (str,), READ_PROFILE
    ),
    RegistryOperation.GET_PRICE: OperationSpec(
        RegistryOperation.GET_PRICE, (PactInt,), PRICE_PROFILE
    ),
    RegistryOperation.REGISTER: OperationSpec(
        RegistryOperation.REGISTER, (str, str, str, PactInt, str), DEFAULT_PROFILE
    ),
    RegistryOperation.ADD_AFFILIATE: OperationSpec(
        RegistryOperation.ADD_AFFILIATE, (str, str, _NUMBER), ADMIN_PROFILE
    ),
}


class Registry:
    """Resolves registry operations to concrete invocations for a network."""

    def __init__(self, config: Optional[RegistryConfig] = None) -> None:
        self._config = config or RegistryConfig()

    @property
    def vault_account(self) -> str:
        return self._config.vault_account

    def module_for(self, network_id: str) -> str:
        """Registry module for the network's family."""
        if get_network_family(network_id) == NetworkFamily.TESTNET:
            return self._config.testnet_module
        return self._config.mainnet_module

    def invocation(
        self,
        operation: RegistryOperation,
        network_id: str,
        *args,
    ) -> PactInvocation:
        """
        Build an invocation after checking its arguments against the table.

        Raises:
            DomainValidationError: On wrong argument count or type
        """
        spec = OPERATIONS[operation]
        if len(args) != len(spec.arg_types):
            raise DomainValidationError(
                code=ErrorCode.VALIDATION_ERROR.value,
                message=(
                    f"{operation.value} expects {len(spec.arg_types)} arguments, "
                    f"got {len(args)}"
                ),
                details={"operation": operation.value},
            )
        for position, (arg, expected) in enumerate(zip(args, spec.arg_types)):
            if isinstance(arg, bool) or not isinstance(arg, expected):
                raise DomainValidationError(
                    code=ErrorCode.VALIDATION_ERROR.value,
                    message=(
                        f"{operation.value} argument {position} has invalid "
                        f"type {type(arg).__name__}"
                    ),
                    details={"operation": operation.value, "position": position},
                )
        return PactInvocation(
            module=self.module_for(network_id),
            function=operation.value,
            args=tuple(args),
        )

    def metadata(
        self,
        operation: RegistryOperation,
        chain_id: str,
        sender: Optional[str] = None,
    ) -> ChainMetadata:
        """Metadata for a command of this operation."""
        profile = OPERATIONS[operation].metadata
        metadata = ChainMetadata(
            chain_id=chain_id,
            sender=sender if sender is not None else profile.default_sender,
        )
        if profile.gas_limit is not None:
            metadata.gas_limit = profile.gas_limit
        if profile.gas_price is not None:
            metadata.gas_price = profile.gas_price
        if profile.ttl is not None:
            metadata.ttl = profile.ttl
        return metadata
