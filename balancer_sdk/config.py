"""Network and swap configuration.

Network addressing lives in frozen dataclasses so concerns can be constructed
with an explicit configuration. The process-wide default network comes from
the BALANCER_NETWORK environment variable.
"""

import os
from dataclasses import dataclass
from enum import IntEnum

from balancer_sdk.constants import BALANCER_VAULT, MAX_DEADLINE


class Network(IntEnum):
    """Chain ids of networks with Balancer deployments."""

    MAINNET = 1
    GOERLI = 5
    OPTIMISM = 10
    GNOSIS = 100
    POLYGON = 137
    FANTOM = 250
    ZKEVM = 1101
    BASE = 8453
    ARBITRUM = 42161
    AVALANCHE = 43114
    ARTIO = 80085  # Berachain testnet
    KATLA = 167008  # Taiko testnet
    SEPOLIA = 11155111


@dataclass(frozen=True)
class NetworkConfig:
    """Addresses a pool concern needs to build calls on one network.

    Attributes:
        chain_id: EVM chain id
        vault: Balancer Vault address (destination of swap/join/exit calls)
        wrapped_native_asset: Wrapped native token (WETH, WMATIC, ...). Joins
            and exits that use the native asset substitute the zero address
            for this token.
    """

    chain_id: int
    vault: str
    wrapped_native_asset: str


BALANCER_NETWORK_CONFIG: dict[Network, NetworkConfig] = {
    Network.MAINNET: NetworkConfig(
        chain_id=Network.MAINNET,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
    ),
    Network.GOERLI: NetworkConfig(
        chain_id=Network.GOERLI,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0xb4fbf271143f4fbf7b91a5ded31805e42b2208d6",
    ),
    Network.OPTIMISM: NetworkConfig(
        chain_id=Network.OPTIMISM,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0x4200000000000000000000000000000000000006",
    ),
    Network.GNOSIS: NetworkConfig(
        chain_id=Network.GNOSIS,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0xe91d153e0b41518a2ce8dd3d7944fa863463a97d",
    ),
    Network.POLYGON: NetworkConfig(
        chain_id=Network.POLYGON,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270",
    ),
    Network.FANTOM: NetworkConfig(
        chain_id=Network.FANTOM,
        vault="0x20dd72ed959b6147912c2e529f0a0c651c33c9ce",
        wrapped_native_asset="0x21be370d5312f44cb42ce377bc9b8a0cef1a4c83",
    ),
    Network.ZKEVM: NetworkConfig(
        chain_id=Network.ZKEVM,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0x4f9a0e7fd2bf6067db6994cf12e4495df938e6e9",
    ),
    Network.BASE: NetworkConfig(
        chain_id=Network.BASE,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0x4200000000000000000000000000000000000006",
    ),
    Network.ARBITRUM: NetworkConfig(
        chain_id=Network.ARBITRUM,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0x82af49447d8a07e3bd95bd0d56f35241523fbab1",
    ),
    Network.AVALANCHE: NetworkConfig(
        chain_id=Network.AVALANCHE,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0xb31f66aa3c1e785363f0875a1b74e27b85fd66c7",
    ),
    Network.SEPOLIA: NetworkConfig(
        chain_id=Network.SEPOLIA,
        vault=BALANCER_VAULT,
        wrapped_native_asset="0x7b79995e5f793a07bc00c21412e50ecae098e7f9",
    ),
}


def get_network_config(network: Network | int | str) -> NetworkConfig:
    """Look up the configuration for a network by enum, chain id, or name.

    Raises:
        ValueError: If the network is unknown or has no deployment configured
    """
    try:
        if isinstance(network, str) and not network.isdigit():
            key = Network[network.upper()]
        else:
            key = Network(int(network))
    except (KeyError, ValueError) as err:
        raise ValueError(f"Unknown network: {network}") from err

    config = BALANCER_NETWORK_CONFIG.get(key)
    if config is None:
        raise ValueError(f"No Balancer deployment configured for {key.name}")
    return config


def default_network_config() -> NetworkConfig:
    """Configuration for BALANCER_NETWORK (default: mainnet)."""
    return get_network_config(os.environ.get("BALANCER_NETWORK", "mainnet"))


@dataclass(frozen=True)
class SwapOptions:
    """Defaults for building a swap from a freshly found route.

    Attributes:
        max_pools: Maximum route length passed to the route provider
        gas_price: Gas price hint passed to the route provider (wei)
        deadline: Unix timestamp after which the vault rejects the swap
        max_slippage: Slippage tolerance in basis points (10 = 0.1%)
    """

    max_pools: int = 4
    gas_price: int = 1
    deadline: int = MAX_DEADLINE
    max_slippage: int = 10


DEFAULT_SWAP_OPTIONS = SwapOptions()
