"""
Property-based tests for host resolution.

Uses Hypothesis to check URL generation for the known networks and hard
failure for everything else.
"""

import pytest
from hypothesis import given, settings, assume
from hypothesis import strategies as st

from kdn_sdk.enums import ErrorCode, NetworkFamily
from kdn_sdk.exceptions import UnsupportedNetworkError
from kdn_sdk.hosts import (
    DEFAULT_CHAINWEB_HOSTS,
    create_host_generator,
    default_chainweb_host_generator,
    get_chain_id_by_network,
    get_network_family,
    resolve_endpoint,
)

KNOWN_NETWORKS = sorted(DEFAULT_CHAINWEB_HOSTS)

chain_ids = st.integers(min_value=0, max_value=19).map(str)


class TestDefaultHostGenerator:
    """Known networks resolve to {base}/chainweb/0.0/{network}/chain/{chain}/pact."""

    @given(network_id=st.sampled_from(KNOWN_NETWORKS), chain_id=chain_ids)
    @settings(max_examples=100)
    def test_known_networks_resolve_to_pact_url(self, network_id: str, chain_id: str) -> None:
        url = default_chainweb_host_generator(network_id, chain_id)

        base = DEFAULT_CHAINWEB_HOSTS[network_id]
        assert url == f"{base}/chainweb/0.0/{network_id}/chain/{chain_id}/pact"

    @given(network_id=st.text(min_size=0, max_size=30), chain_id=chain_ids)
    @settings(max_examples=100)
    def test_unknown_networks_fail(self, network_id: str, chain_id: str) -> None:
        assume(network_id not in DEFAULT_CHAINWEB_HOSTS)

        with pytest.raises(UnsupportedNetworkError) as exc_info:
            default_chainweb_host_generator(network_id, chain_id)

        assert exc_info.value.code == ErrorCode.UNSUPPORTED_NETWORK.value
        assert network_id in exc_info.value.message

    def test_development_is_not_a_default_network(self) -> None:
        with pytest.raises(UnsupportedNetworkError):
            default_chainweb_host_generator("development", "1")

    def test_exact_urls(self) -> None:
        assert default_chainweb_host_generator("mainnet01", "15") == (
            "https://api.chainweb.com/chainweb/0.0/mainnet01/chain/15/pact"
        )
        assert default_chainweb_host_generator("testnet04", "1") == (
            "https://api.testnet.chainweb.com/chainweb/0.0/testnet04/chain/1/pact"
        )
        assert default_chainweb_host_generator("testnet05", "1") == (
            "https://api.testnet.chainweb.com/chainweb/0.0/testnet05/chain/1/pact"
        )


class TestChainIdSelection:
    """Testnet-family ids use chain 1, all others chain 15."""

    @given(prefix=st.text(max_size=10), suffix=st.text(max_size=10))
    @settings(max_examples=100)
    def test_testnet_family_uses_chain_1(self, prefix: str, suffix: str) -> None:
        network_id = f"{prefix}testnet{suffix}"
        assert get_chain_id_by_network(network_id) == "1"
        assert get_network_family(network_id) == NetworkFamily.TESTNET

    @given(network_id=st.text(max_size=30))
    @settings(max_examples=100)
    def test_other_ids_use_chain_15(self, network_id: str) -> None:
        assume("testnet" not in network_id)
        assert get_chain_id_by_network(network_id) == "15"
        assert get_network_family(network_id) == NetworkFamily.MAINNET


class TestResolveEndpoint:
    """resolve_endpoint derives the chain and honors custom strategies."""

    def test_chain_derived_from_network(self) -> None:
        endpoint = resolve_endpoint("testnet04")

        assert endpoint.network_id == "testnet04"
        assert endpoint.chain_id == "1"
        assert endpoint.host_url.endswith("/testnet04/chain/1/pact")

    def test_explicit_chain_is_kept(self) -> None:
        endpoint = resolve_endpoint("mainnet01", "2")
        assert endpoint.chain_id == "2"
        assert endpoint.host_url.endswith("/mainnet01/chain/2/pact")

    def test_custom_table_adds_development_network(self) -> None:
        generator = create_host_generator({"development": "http://localhost:8080/"})

        endpoint = resolve_endpoint("development", host_generator=generator)

        assert endpoint.host_url == (
            "http://localhost:8080/chainweb/0.0/development/chain/15/pact"
        )
        with pytest.raises(UnsupportedNetworkError):
            resolve_endpoint("mainnet01", host_generator=generator)

    def test_generator_returning_empty_url_fails(self) -> None:
        with pytest.raises(UnsupportedNetworkError):
            resolve_endpoint("mainnet01", host_generator=lambda network_id, chain_id: "")
