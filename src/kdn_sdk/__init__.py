"""
kdn-sdk - KadenaNames resolution and transaction preparation.

This package resolves .kda names to Kadena addresses (and back) through
read-only Pact simulations, and prepares unsigned registration and affiliate
transactions for external signing.
"""

__version__ = "0.1.0"
__author__ = "KadenaNames SDK Team"

from kdn_sdk.exceptions import (
    KdnSdkError,
    UnsupportedNetworkError,
    ChainFailureError,
    UnknownOutcomeError,
    NetworkTransportError,
    DomainValidationError,
)
from kdn_sdk.enums import (
    NetworkFamily,
    RegistryOperation,
    ErrorCode,
    LogLevel,
)
from kdn_sdk.config import (
    NetworkConfig,
    RegistryConfig,
    HttpConfig,
    LoggingConfig,
    SDKConfig,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
    apply_env_overrides,
)
from kdn_sdk.models import (
    PRICE_MAP,
    Result,
    NetworkEndpoint,
    SaleState,
    NameInfo,
    PactInt,
    PactInvocation,
    Capability,
    Signer,
    ChainMetadata,
    UnsignedTransaction,
    TransactionDescriptor,
)
from kdn_sdk.audit_logger import (
    AuditLogger,
    LogEntry,
)
from kdn_sdk.hosts import (
    DEFAULT_CHAINWEB_HOSTS,
    HostGenerator,
    create_host_generator,
    default_chainweb_host_generator,
    get_chain_id_by_network,
    resolve_endpoint,
)
from kdn_sdk.names import (
    ensure_kda_extension,
    add_extension_to_name,
    shorten_string,
)
from kdn_sdk.dates import (
    GRACE_PERIOD,
    transform_pact_date,
    is_name_expired,
)
from kdn_sdk.response_parser import (
    parse_chain_response,
    parse_pact_decimal,
)
from kdn_sdk.pact import (
    PactCommandBuilder,
    TransactionBuilder,
)
from kdn_sdk.registry import (
    Registry,
)
from kdn_sdk.chainweb_client import (
    ChainwebClient,
    PactApiClient,
)
from kdn_sdk.query_executor import (
    ChainQueryExecutor,
)
from kdn_sdk.name_service import (
    NameService,
)
from kdn_sdk.transactions import (
    TransactionPreparer,
    reconcile_price,
)
from kdn_sdk.sdk import (
    KadenaNamesSDK,
)
from kdn_sdk.cli import (
    main as cli_main,
    create_parser,
)

__all__ = [
    # Exceptions
    "KdnSdkError",
    "UnsupportedNetworkError",
    "ChainFailureError",
    "UnknownOutcomeError",
    "NetworkTransportError",
    "DomainValidationError",
    # Enums
    "NetworkFamily",
    "RegistryOperation",
    "ErrorCode",
    "LogLevel",
    # Configuration
    "NetworkConfig",
    "RegistryConfig",
    "HttpConfig",
    "LoggingConfig",
    "SDKConfig",
    "create_default_config",
    "load_config_from_file",
    "save_config_to_file",
    "apply_env_overrides",
    # Models
    "PRICE_MAP",
    "Result",
    "NetworkEndpoint",
    "SaleState",
    "NameInfo",
    "PactInt",
    "PactInvocation",
    "Capability",
    "Signer",
    "ChainMetadata",
    "UnsignedTransaction",
    "TransactionDescriptor",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
    # Hosts
    "DEFAULT_CHAINWEB_HOSTS",
    "HostGenerator",
    "create_host_generator",
    "default_chainweb_host_generator",
    "get_chain_id_by_network",
    "resolve_endpoint",
    # Names and dates
    "ensure_kda_extension",
    "add_extension_to_name",
    "shorten_string",
    "GRACE_PERIOD",
    "transform_pact_date",
    "is_name_expired",
    # Response Parser
    "parse_chain_response",
    "parse_pact_decimal",
    # Pact
    "PactCommandBuilder",
    "TransactionBuilder",
    "Registry",
    # Chainweb Client
    "ChainwebClient",
    "PactApiClient",
    # Engine
    "ChainQueryExecutor",
    "NameService",
    "TransactionPreparer",
    "reconcile_price",
    "KadenaNamesSDK",
    # CLI
    "cli_main",
    "create_parser",
]
