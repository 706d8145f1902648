"""
Pact command construction.

Renders module function invocations as Pact code, assembles the command
JSON (payload, metadata, signers with capability lists), and hashes it into
an UnsignedTransaction ready for signing by an external wallet.

A Pact command hash is the unpadded base64url encoding of the blake2b-256
digest of the serialized command.
"""

import base64
import hashlib
import json
import math
import time
from decimal import Decimal
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from .models import (
    Capability,
    ChainMetadata,
    PactInt,
    PactInvocation,
    Signer,
    UnsignedTransaction,
)

SIGNER_SCHEME = "ED25519"


def format_decimal(value: Any) -> str:
    """
    Format a number as a Pact decimal literal ('5' -> '5.0', 1e-06 -> '0.000001').

    Raises:
        ValueError: For NaN, infinities, and non-numeric values
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError(f"Not a finite number: {value!r}")
        decimal_value = Decimal(repr(value))
    elif isinstance(value, (int, Decimal)):
        decimal_value = Decimal(value)
        if not decimal_value.is_finite():
            raise ValueError(f"Not a finite number: {value!r}")
    else:
        raise ValueError(f"Not a number: {value!r}")

    text = format(decimal_value, "f")
    if "." not in text:
        text += ".0"
    return text


def render_pact_value(value: Any) -> str:
    """Render a Python value as a Pact literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, PactInt):
        return str(int(value.value))
    if isinstance(value, (int, float, Decimal)):
        return format_decimal(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(render_pact_value(item) for item in value) + "]"
    if isinstance(value, dict):
        fields = ", ".join(
            f"{json.dumps(str(key))}: {render_pact_value(item)}"
            for key, item in value.items()
        )
        return "{" + fields + "}"
    raise ValueError(f"Cannot render {type(value).__name__} as a Pact value")


def render_invocation(invocation: PactInvocation) -> str:
    """Render (module.function arg ...) code."""
    parts = [f"{invocation.module}.{invocation.function}"]
    parts.extend(render_pact_value(arg) for arg in invocation.args)
    return "(" + " ".join(parts) + ")"


def capability_arg_to_json(value: Any) -> Any:
    """Convert a capability argument to its JSON Pact value."""
    if isinstance(value, bool) or isinstance(value, str):
        return value
    if isinstance(value, PactInt):
        return {"int": int(value.value)}
    if isinstance(value, (int, float, Decimal)):
        return {"decimal": format_decimal(value)}
    raise ValueError(f"Unsupported capability argument: {value!r}")


def hash_command(cmd: str) -> str:
    digest = hashlib.blake2b(cmd.encode("utf-8"), digest_size=32).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


@runtime_checkable
class TransactionBuilder(Protocol):
    """Turns an invocation plus metadata into an UnsignedTransaction."""

    def build(
        self,
        invocation: PactInvocation,
        metadata: ChainMetadata,
        network_id: str,
        signers: Optional[Sequence[Signer]] = None,
    ) -> UnsignedTransaction:
        ...


class PactCommandBuilder:
    """Builds Pact exec commands."""

    NONCE_PREFIX = "kdn-py:nonce:"

    def build(
        self,
        invocation: PactInvocation,
        metadata: ChainMetadata,
        network_id: str,
        signers: Optional[Sequence[Signer]] = None,
    ) -> UnsignedTransaction:
        """
        Build an unsigned transaction.

        Args:
            invocation: The module function call to execute
            metadata: Chain id, sender, gas and ttl settings
            network_id: Target network id
            signers: Optional signers with their capability lists

        Returns:
            UnsignedTransaction with one empty signature slot per signer
        """
        signers = list(signers or [])
        command = {
            "payload": {
                "exec": {
                    "code": render_invocation(invocation),
                    "data": {},
                },
            },
            "nonce": self._make_nonce(),
            "signers": [self._signer_to_json(signer) for signer in signers],
            "meta": {
                "chainId": metadata.chain_id,
                "sender": metadata.sender,
                "gasLimit": metadata.gas_limit,
                "gasPrice": metadata.gas_price,
                "ttl": metadata.ttl,
                "creationTime": metadata.creation_time,
            },
            "networkId": network_id,
        }
        cmd = json.dumps(command, separators=(",", ":"))
        return UnsignedTransaction(
            cmd=cmd,
            hash=hash_command(cmd),
            sigs=tuple(None for _ in signers),
        )

    def _make_nonce(self) -> str:
        return f"{self.NONCE_PREFIX}{int(time.time() * 1000)}"

    def _signer_to_json(self, signer: Signer) -> dict:
        return {
            "pubKey": signer.pub_key,
            "scheme": SIGNER_SCHEME,
            "clist": [self._capability_to_json(cap) for cap in signer.capabilities],
        }

    def _capability_to_json(self, capability: Capability) -> dict:
        return {
            "name": capability.name,
            "args": [capability_arg_to_json(arg) for arg in capability.args],
        }
