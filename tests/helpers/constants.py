"""Shared token and pool constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import WETH, USDC
    # or
    from tests.helpers.constants import WETH, USDC
"""

# =============================================================================
# Mainnet tokens
# =============================================================================

WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"  # Wrapped Ether (18 decimals)
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"  # USD Coin (6 decimals)
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"  # Dai Stablecoin (18 decimals)
USDT = "0xdac17f958d2ee523a2206206994597c13d831ec7"  # Tether USD (6 decimals)
WSTETH = "0x7f39c581f595b53c5cb19bd0b3f8da6c935e2ca0"  # Wrapped stETH (18 decimals)
ADAI = "0x02d60b84491589974263d922d9cc7a3152618ef6"  # Static aDAI (18 decimals)
EURS = "0xdb25f211ab05b1c97d595516f45794528a807ad8"  # STASIS EURO (2 decimals)

# =============================================================================
# Accounts
# =============================================================================

SENDER = "0x1111111111111111111111111111111111111111"
RECIPIENT = "0x2222222222222222222222222222222222222222"

# =============================================================================
# Pools (pool id = pool address + 12 bytes of specialization/nonce)
# =============================================================================


def pool_id_for(address: str, nonce: int = 1) -> str:
    """Balancer pool id for a pool address."""
    return address + f"{nonce:024x}"


WEIGHTED_POOL = "0x5c6ee304399dbdb9c8ef030ab642b10820db8f56"
STABLE_POOL = "0x06df3b2bbb68adc8b0e302443692037ed9f91b42"
COMPOSABLE_POOL = "0x79c58f70905f734641735bc61e45c19dd9ad60bc"
LINEAR_POOL = "0x804cdb9116a10bb78768d3252355a1b18067bf8f"
GYRO_POOL = "0xdac42eeb17758daa38caf9a3540c808247527ae3"
FX_POOL = "0x55bec22f8f6c69137ceaf284d9b441db1b9bfedc"

WEIGHTED_POOL_ID = pool_id_for(WEIGHTED_POOL)
STABLE_POOL_ID = pool_id_for(STABLE_POOL)
COMPOSABLE_POOL_ID = pool_id_for(COMPOSABLE_POOL)
LINEAR_POOL_ID = pool_id_for(LINEAR_POOL)
GYRO_POOL_ID = pool_id_for(GYRO_POOL)
FX_POOL_ID = pool_id_for(FX_POOL)

ONE = 10**18


__all__ = [
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WSTETH",
    "ADAI",
    "EURS",
    "SENDER",
    "RECIPIENT",
    "pool_id_for",
    "WEIGHTED_POOL",
    "WEIGHTED_POOL_ID",
    "STABLE_POOL",
    "STABLE_POOL_ID",
    "COMPOSABLE_POOL",
    "COMPOSABLE_POOL_ID",
    "LINEAR_POOL",
    "LINEAR_POOL_ID",
    "GYRO_POOL",
    "GYRO_POOL_ID",
    "FX_POOL",
    "FX_POOL_ID",
    "ONE",
]
