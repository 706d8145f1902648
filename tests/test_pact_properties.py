"""
Property-based tests for Pact command construction.

Checks code rendering, command layout, signer capability lists and the
blake2b command hash.
"""

import base64
import hashlib
import json
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from kdn_sdk.models import Capability, ChainMetadata, PactInt, PactInvocation, Signer
from kdn_sdk.pact import (
    PactCommandBuilder,
    TransactionBuilder,
    capability_arg_to_json,
    format_decimal,
    hash_command,
    render_invocation,
    render_pact_value,
)


def _blake2b_b64url(cmd: str) -> str:
    digest = hashlib.blake2b(cmd.encode("utf-8"), digest_size=32).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


class TestFormatDecimal:
    """Numbers render as Pact decimal literals."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (5, "5.0"),
            (5.0, "5.0"),
            (2.5, "2.5"),
            (1.0e-6, "0.000001"),
            (Decimal("12.50"), "12.50"),
            (0, "0.0"),
        ],
    )
    def test_examples(self, value, expected: str) -> None:
        assert format_decimal(value) == expected

    @pytest.mark.parametrize(
        "value", [float("nan"), float("inf"), Decimal("NaN"), True, "5", None]
    )
    def test_rejects_non_finite_and_non_numbers(self, value) -> None:
        with pytest.raises(ValueError):
            format_decimal(value)

    @given(value=st.floats(allow_nan=False, allow_infinity=False, min_value=-1e12, max_value=1e12))
    @settings(max_examples=100)
    def test_always_a_decimal_literal(self, value: float) -> None:
        text = format_decimal(value)
        assert "." in text
        assert "e" not in text.lower()
        assert Decimal(text) == Decimal(repr(value))


class TestRenderInvocation:
    """Invocations render as (module.function arg ...)."""

    def test_lookup(self) -> None:
        invocation = PactInvocation("free.kadenanames", "get-address", ("turkiye.kda",))
        assert render_invocation(invocation) == '(free.kadenanames.get-address "turkiye.kda")'

    def test_integer_and_decimal_arguments(self) -> None:
        invocation = PactInvocation("ns.mod", "f", (PactInt(365), 5, "a"))
        assert render_invocation(invocation) == '(ns.mod.f 365 5.0 "a")'

    @given(text=st.text(max_size=40))
    @settings(max_examples=100)
    def test_strings_are_json_quoted(self, text: str) -> None:
        assert json.loads(render_pact_value(text)) == text

    def test_collections(self) -> None:
        assert render_pact_value([1, "x", True]) == '[1.0 "x" true]'
        assert render_pact_value({"a": PactInt(2)}) == '{"a": 2}'

    def test_unrenderable_value(self) -> None:
        with pytest.raises(ValueError):
            render_pact_value(object())


class TestCapabilityArguments:
    def test_conversion(self) -> None:
        assert capability_arg_to_json("k:abc") == "k:abc"
        assert capability_arg_to_json(5) == {"decimal": "5.0"}
        assert capability_arg_to_json(Decimal("7.5")) == {"decimal": "7.5"}
        assert capability_arg_to_json(PactInt(3)) == {"int": 3}

    def test_unsupported(self) -> None:
        with pytest.raises(ValueError):
            capability_arg_to_json(None)


class TestCommandBuilderProperty:
    """Built commands carry the metadata, signers and a matching hash."""

    def _build(self, signers=None):
        builder = PactCommandBuilder()
        metadata = ChainMetadata(
            chain_id="15",
            sender="k:owner",
            gas_limit=2500,
            gas_price=1.0e-8,
            ttl=28800,
            creation_time=1700000000,
        )
        invocation = PactInvocation("free.kadenanames", "get-name", ("k:owner",))
        return builder.build(invocation, metadata, "mainnet01", signers)

    def test_builder_satisfies_protocol(self) -> None:
        assert isinstance(PactCommandBuilder(), TransactionBuilder)

    def test_command_layout(self) -> None:
        tx = self._build()
        command = json.loads(tx.cmd)

        assert command["payload"]["exec"] == {
            "code": '(free.kadenanames.get-name "k:owner")',
            "data": {},
        }
        assert command["nonce"].startswith("kdn-py:nonce:")
        assert command["signers"] == []
        assert command["meta"] == {
            "chainId": "15",
            "sender": "k:owner",
            "gasLimit": 2500,
            "gasPrice": 1.0e-8,
            "ttl": 28800,
            "creationTime": 1700000000,
        }
        assert command["networkId"] == "mainnet01"
        assert tx.sigs == ()
        assert not tx.is_signed()

    def test_hash_is_blake2b_of_cmd(self) -> None:
        tx = self._build()
        assert tx.hash == _blake2b_b64url(tx.cmd)
        assert "=" not in tx.hash

    @given(cmd=st.text(max_size=200))
    @settings(max_examples=100)
    def test_hash_command_matches_reference(self, cmd: str) -> None:
        assert hash_command(cmd) == _blake2b_b64url(cmd)
        assert len(hash_command(cmd)) == 43

    def test_signers_and_capability_order(self) -> None:
        signer = Signer(
            pub_key="abc",
            capabilities=[
                Capability("coin.GAS"),
                Capability("coin.TRANSFER", ("k:owner", "vault", Decimal("5"))),
            ],
        )
        tx = self._build([signer])
        command = json.loads(tx.cmd)

        assert command["signers"] == [
            {
                "pubKey": "abc",
                "scheme": "ED25519",
                "clist": [
                    {"name": "coin.GAS", "args": []},
                    {
                        "name": "coin.TRANSFER",
                        "args": ["k:owner", "vault", {"decimal": "5.0"}],
                    },
                ],
            }
        ]
        assert tx.sigs == (None,)
        assert not tx.is_signed()
        assert tx.to_dict()["sigs"] == [None]
