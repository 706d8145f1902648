"""
Chainweb host resolution.

Maps a network id (and chain id) to the Pact API base URL of a Chainweb
node. Resolution is a pure table lookup; unknown network ids are a hard
failure, never a default.
"""

from typing import Callable, Mapping, Optional

from .enums import ErrorCode, NetworkFamily
from .exceptions import UnsupportedNetworkError
from .models import NetworkEndpoint

# (network_id, chain_id) -> Pact API base URL
HostGenerator = Callable[[str, str], str]

DEFAULT_CHAINWEB_HOSTS: dict[str, str] = {
    "mainnet01": "https://api.chainweb.com",
    "testnet04": "https://api.testnet.chainweb.com",
    "testnet05": "https://api.testnet.chainweb.com",
}

TESTNET_CHAIN_ID = "1"
MAINNET_CHAIN_ID = "15"


def is_testnet(network_id: str) -> bool:
    return "testnet" in network_id


def get_network_family(network_id: str) -> NetworkFamily:
    return NetworkFamily.TESTNET if is_testnet(network_id) else NetworkFamily.MAINNET


def get_chain_id_by_network(network_id: str) -> str:
    """
    Determine the registry chain for a network.

    Args:
        network_id: The network identifier (e.g., 'testnet04', 'mainnet01')

    Returns:
        '1' for testnet networks, '15' otherwise
    """
    return TESTNET_CHAIN_ID if is_testnet(network_id) else MAINNET_CHAIN_ID


def build_pact_url(base_url: str, network_id: str, chain_id: str) -> str:
    return f"{base_url.rstrip('/')}/chainweb/0.0/{network_id}/chain/{chain_id}/pact"


def create_host_generator(hosts: Mapping[str, str]) -> HostGenerator:
    """
    Create a host generator over a fixed network -> base URL table.

    Args:
        hosts: Mapping of network id to node base URL

    Returns:
        A generator raising UnsupportedNetworkError for ids not in the table
    """
    table = dict(hosts)

    def generate(network_id: str, chain_id: str) -> str:
        base_url = table.get(network_id)
        if not base_url:
            raise UnsupportedNetworkError(
                code=ErrorCode.UNSUPPORTED_NETWORK.value,
                message=f"Unsupported networkId: {network_id}",
                details={"network_id": network_id, "known": sorted(table)},
            )
        return build_pact_url(base_url, network_id, chain_id)

    return generate


default_chainweb_host_generator: HostGenerator = create_host_generator(
    DEFAULT_CHAINWEB_HOSTS
)


def resolve_endpoint(
    network_id: str,
    chain_id: Optional[str] = None,
    host_generator: Optional[HostGenerator] = None,
) -> NetworkEndpoint:
    """
    Resolve a network id to a NetworkEndpoint.

    Args:
        network_id: The network identifier
        chain_id: Chain to target; derived from the network id if omitted
        host_generator: Resolution strategy; the default table if omitted

    Returns:
        The resolved endpoint

    Raises:
        UnsupportedNetworkError: If the strategy does not know the network
    """
    if chain_id is None:
        chain_id = get_chain_id_by_network(network_id)
    generator = host_generator or default_chainweb_host_generator
    host_url = generator(network_id, chain_id)
    if not host_url:
        raise UnsupportedNetworkError(
            code=ErrorCode.UNSUPPORTED_NETWORK.value,
            message="Failed to generate chainweb url using chainwebHostGenerator method",
            details={"network_id": network_id, "chain_id": chain_id},
        )
    return NetworkEndpoint(network_id=network_id, chain_id=chain_id, host_url=host_url)
