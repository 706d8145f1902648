"""
Exception classes for the KadenaNames SDK.

All exceptions inherit from KdnSdkError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional


class KdnSdkError(Exception):
    """Base exception for all SDK errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class UnsupportedNetworkError(KdnSdkError):
    """Raised when a network id has no entry in the host table."""

    pass


class ChainFailureError(KdnSdkError):
    """Raised when a Pact execution reports a failure status."""

    pass


class UnknownOutcomeError(KdnSdkError):
    """Raised when a command result has neither success nor failure shape."""

    pass


class NetworkTransportError(KdnSdkError):
    """Raised when a request to a Chainweb node could not complete."""

    pass


class DomainValidationError(KdnSdkError):
    """Raised when a payload or argument violates a domain rule (e.g. missing price)."""

    pass
