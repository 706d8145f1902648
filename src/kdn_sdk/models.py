"""
Data models for the KadenaNames SDK.

This module defines the values exchanged with callers: resolved endpoints,
sale state and name information, the pieces of a Pact command, unsigned
transactions, submission descriptors, and the Result wrapper returned by
every public operation.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

# Registration period in years -> registration length in days
PRICE_MAP: dict[int, int] = {
    1: 365,
    2: 730,
}


@dataclass
class Result(Generic[T]):
    """Outcome of a public SDK operation."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T]) -> "Result[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: Optional[str] = None) -> "Result[T]":
        return cls(success=False, error=error, error_code=error_code)

    def to_dict(self) -> dict:
        """Convert to a dictionary; failed results carry no data key."""
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error, "error_code": self.error_code}


@dataclass
class NetworkEndpoint:
    """A network id resolved to a concrete Pact API base URL."""

    network_id: str
    chain_id: str
    host_url: str


@dataclass
class SaleState:
    """Sale state of a name as reported by the registry (price 0 when not reported)."""

    sellable: bool = False
    price: float = 0.0

    def to_dict(self) -> dict:
        return {"sellable": self.sellable, "price": self.price}


@dataclass
class NameInfo:
    """Pricing and availability of a name."""

    price: float
    market_price: float
    is_available: bool
    is_for_sale: bool
    expiry_date: Optional[datetime] = None
    last_price: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "price": self.price,
            "market_price": self.market_price,
            "is_available": self.is_available,
            "is_for_sale": self.is_for_sale,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
            "last_price": self.last_price,
        }


@dataclass(frozen=True)
class PactInt:
    """Argument rendered as a Pact integer; plain numbers render as decimals."""

    value: int


@dataclass
class PactInvocation:
    """A single module function call: (module.function args...)."""

    module: str
    function: str
    args: tuple = ()


@dataclass
class Capability:
    """A capability granted by a signer, e.g. coin.TRANSFER."""

    name: str
    args: tuple = ()


@dataclass
class Signer:
    """A public key and the capabilities it scopes its signature to."""

    pub_key: str
    capabilities: list[Capability] = field(default_factory=list)


@dataclass
class ChainMetadata:
    """Public metadata of a Pact command."""

    chain_id: str
    sender: str = ""
    gas_limit: int = 2500
    gas_price: float = 1.0e-8
    ttl: int = 28800
    creation_time: int = field(default_factory=lambda: int(time.time()))


@dataclass(frozen=True)
class UnsignedTransaction:
    """
    A Pact command ready for external signing.

    `cmd` is the serialized command, `hash` its blake2b digest and `sigs`
    holds one slot per signer. A signed transaction has at least one slot
    and every slot filled; a command without signers is never signed.
    """

    cmd: str
    hash: str
    sigs: tuple = ()

    def is_signed(self) -> bool:
        return bool(self.sigs) and all(sig is not None for sig in self.sigs)

    def to_dict(self) -> dict:
        return {
            "cmd": self.cmd,
            "hash": self.hash,
            "sigs": [None if sig is None else {"sig": sig} for sig in self.sigs],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UnsignedTransaction":
        sigs = []
        for sig in data.get("sigs", []):
            if isinstance(sig, dict):
                sigs.append(sig.get("sig"))
            else:
                sigs.append(sig)
        return cls(cmd=data["cmd"], hash=data["hash"], sigs=tuple(sigs))


@dataclass
class TransactionDescriptor:
    """Handle to a submitted transaction."""

    request_key: str
    chain_id: str
    network_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_key": self.request_key,
            "chain_id": self.chain_id,
            "network_id": self.network_id,
        }
