"""Detection of join/exit hops in a route.

A hop that swaps a token for the BPT of the pool it trades in (or back)
joins or exits that pool. The Vault only supports this natively for pools
that hold their own BPT (composable stable, linear, ...); anything else needs
a relayer, which the builders do not produce.
"""

from __future__ import annotations

from balancer_sdk.models.types import normalize_address
from balancer_sdk.pools.snapshot import PoolSnapshot

from .types import Route


def pool_address(pool_id: str) -> str:
    """BPT address encoded in the first 20 bytes of a pool id."""
    return normalize_address(pool_id[:42])


def some_join_exit(route: Route, pools: list[PoolSnapshot] | None = None) -> bool:
    """Whether any hop of the route joins or exits a pool through its BPT.

    Pools listed in `pools` that hold their own BPT swap it natively and are
    not counted.
    """
    native_bpt_pools = {
        normalize_address(pool.id) for pool in pools or [] if pool.bpt_index is not None
    }
    for step in route.swaps:
        if normalize_address(step.pool_id) in native_bpt_pools:
            continue
        bpt = pool_address(step.pool_id)
        asset_in = normalize_address(route.token_addresses[step.asset_in_index])
        asset_out = normalize_address(route.token_addresses[step.asset_out_index])
        if bpt in (asset_in, asset_out):
            return True
    return False
