"""
Enumeration types for the KadenaNames SDK.

These enums provide type-safe constants for network families, registry
operations, error codes, and logging levels.
"""

from enum import Enum


class NetworkFamily(Enum):
    """Network family; each family has its own registry module."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


class RegistryOperation(Enum):
    """Registry contract functions called by the SDK."""

    GET_ADDRESS = "get-address"
    GET_NAME = "get-name"
    GET_SALE_STATE = "get-sale-state"
    GET_NAME_INFO = "get-name-info"
    GET_PRICE = "get-price"
    REGISTER = "register"
    ADD_AFFILIATE = "add-affiliate"


class ErrorCode(Enum):
    """Error codes carried by exceptions and failed results."""

    UNSUPPORTED_NETWORK = "unsupported_network"
    CHAIN_FAILURE = "chain_failure"
    UNKNOWN_OUTCOME = "unknown_outcome"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    VALIDATION_ERROR = "validation_error"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
