"""Swap transaction builders.

Turn a route plus a slippage tolerance into a bounded Vault call. A builder is
configured step by step (funds, deadline, limits) and refuses to produce
output until all three are set; `build_swap` does the whole sequence in one
call and picks `swap` for single-hop routes, `batchSwap` otherwise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Protocol

import structlog

from balancer_sdk.config import DEFAULT_SWAP_OPTIONS, NetworkConfig, SwapOptions, default_network_config
from balancer_sdk.constants import ZERO_ADDRESS
from balancer_sdk.errors import BuilderNotConfigured, EmptyRoute, JoinExitPathUnsupported
from balancer_sdk.models.types import normalize_address
from balancer_sdk.pools.snapshot import PoolSnapshot

from .encoding import encode_batch_swap, encode_swap
from .join_exit import some_join_exit
from .limits import get_limits_for_slippage, route_deltas
from .types import FundManagement, Route, SingleSwap, SwapAttributes, SwapType

logger = structlog.get_logger()


class RouteProvider(Protocol):
    """External route oracle (a smart order router)."""

    def get_swaps(
        self,
        token_in: str,
        token_out: str,
        swap_type: SwapType,
        amount: int,
        *,
        gas_price: int,
        max_pools: int,
    ) -> Route: ...


class SwapBuilder(ABC):
    """Common configuration and limits for single and batch swaps."""

    function_name: ClassVar[str]

    def __init__(
        self, route: Route, kind: SwapType, network_config: NetworkConfig | None = None
    ) -> None:
        if not route.swaps:
            raise EmptyRoute("Route has no swaps")
        self.route = route
        self.kind = SwapType(kind)
        self.network_config = network_config or default_network_config()
        self._funds: FundManagement | None = None
        self._deadline: int | None = None
        self._limits: list[int] | None = None

    def set_funds(
        self,
        sender: str,
        recipient: str | None = None,
        from_internal_balance: bool = False,
        to_internal_balance: bool = False,
    ) -> None:
        """Recipient defaults to the sender."""
        self._funds = FundManagement(
            sender=normalize_address(sender),
            recipient=normalize_address(recipient or sender),
            from_internal_balance=from_internal_balance,
            to_internal_balance=to_internal_balance,
        )

    def set_deadline(self, deadline: int) -> None:
        if deadline < 0:
            raise ValueError(f"Deadline must be non-negative, got {deadline}")
        self._deadline = deadline

    def set_limits(self, tolerance_bps: int) -> None:
        """Bound the non-fixed side of the trade by `tolerance_bps`."""
        self._limits = get_limits_for_slippage(
            [self.route.token_in],
            [self.route.token_out],
            self.kind,
            self.deltas(),
            list(self.route.token_addresses),
            tolerance_bps,
        )

    @property
    def funds(self) -> FundManagement:
        if self._funds is None:
            raise BuilderNotConfigured("Call set_funds() first")
        return self._funds

    @property
    def deadline(self) -> int:
        if self._deadline is None:
            raise BuilderNotConfigured("Call set_deadline() first")
        return self._deadline

    @property
    def limits(self) -> list[int]:
        """Limits aligned with `route.token_addresses`."""
        if self._limits is None:
            raise BuilderNotConfigured("Call set_limits() first")
        return self._limits

    def deltas(self) -> list[int]:
        """Expected Vault deltas aligned with `route.token_addresses`."""
        return route_deltas(self.route, self.kind)

    def to(self) -> str:
        return self.network_config.vault

    def _limit_for(self, token: str) -> int:
        token_norm = normalize_address(token)
        for asset, limit in zip(self.route.token_addresses, self.limits, strict=True):
            if normalize_address(asset) == token_norm:
                return limit
        return 0

    def _require_configured(self) -> None:
        """Raise BuilderNotConfigured unless funds, deadline and limits are all set."""
        _ = (self.funds, self.deadline, self.limits)

    def value(self) -> int:
        """Native asset to attach: the most the sender may pay in it."""
        self._require_configured()
        if normalize_address(self.route.token_in) != ZERO_ADDRESS:
            return 0
        return max(self._limit_for(ZERO_ADDRESS), 0)

    @abstractmethod
    def attributes(self) -> dict: ...

    @abstractmethod
    def data(self) -> str: ...

    def build(self) -> SwapAttributes:
        return SwapAttributes(
            to=self.to(),
            function_name=self.function_name,
            data=self.data(),
            value=self.value(),
            limits=list(self.limits),
            attributes=self.attributes(),
        )


class SingleSwapBuilder(SwapBuilder):
    """Vault.swap for one-hop routes."""

    function_name = "swap"

    def __init__(
        self, route: Route, kind: SwapType, network_config: NetworkConfig | None = None
    ) -> None:
        super().__init__(route, kind, network_config)
        if len(route.swaps) != 1:
            raise ValueError(f"Single swap needs a one-hop route, got {len(route.swaps)} hops")

    def single_swap(self) -> SingleSwap:
        step = self.route.swaps[0]
        return SingleSwap(
            pool_id=step.pool_id,
            kind=self.kind,
            asset_in=self.route.token_addresses[step.asset_in_index],
            asset_out=self.route.token_addresses[step.asset_out_index],
            amount=self.route.swap_amount,
            user_data=step.user_data,
        )

    def limit(self) -> int:
        """Minimum out for ExactIn, maximum in for ExactOut."""
        if self.kind == SwapType.SWAP_EXACT_IN:
            return -self._limit_for(self.route.token_out)
        return self._limit_for(self.route.token_in)

    def attributes(self) -> dict:
        return {
            "request": self.single_swap(),
            "funds": self.funds,
            "limit": self.limit(),
            "deadline": self.deadline,
        }

    def data(self) -> str:
        return encode_swap(self.single_swap(), self.funds, self.limit(), self.deadline)


class BatchSwapBuilder(SwapBuilder):
    """Vault.batchSwap for multi-hop routes."""

    function_name = "batchSwap"

    def attributes(self) -> dict:
        return {
            "kind": self.kind,
            "swaps": list(self.route.swaps),
            "assets": list(self.route.token_addresses),
            "funds": self.funds,
            "limits": self.limits,
            "deadline": self.deadline,
        }

    def data(self) -> str:
        return encode_batch_swap(
            self.kind,
            list(self.route.swaps),
            list(self.route.token_addresses),
            self.funds,
            self.limits,
            self.deadline,
        )


def build_swap(
    route: Route,
    kind: SwapType,
    sender: str,
    deadline: int,
    tolerance_bps: int,
    recipient: str | None = None,
    network_config: NetworkConfig | None = None,
    pools: list[PoolSnapshot] | None = None,
) -> SwapAttributes:
    """Build a bounded swap call for a route.

    Single-hop routes use Vault.swap to save gas; longer routes use batchSwap.

    Raises:
        EmptyRoute: If the route has no swaps
        JoinExitPathUnsupported: If a hop joins or exits a pool through its BPT
        InvalidTolerance: If tolerance_bps is outside [0, 10000]
    """
    if not route.swaps:
        raise EmptyRoute("Route has no swaps")
    if some_join_exit(route, pools):
        raise JoinExitPathUnsupported("Route joins or exits a pool; it needs a relayer")

    builder_cls = BatchSwapBuilder if len(route.swaps) > 1 else SingleSwapBuilder
    builder = builder_cls(route, kind, network_config)
    builder.set_funds(sender, recipient)
    builder.set_deadline(deadline)
    builder.set_limits(tolerance_bps)
    attributes = builder.build()

    logger.debug(
        "swap_built",
        function_name=attributes.function_name,
        hops=len(route.swaps),
        kind=builder.kind.name,
        swap_amount=route.swap_amount,
        return_amount=route.return_amount,
        tolerance_bps=tolerance_bps,
    )
    return attributes


def _build_route(
    provider: RouteProvider,
    kind: SwapType,
    sender: str,
    recipient: str | None,
    token_in: str,
    token_out: str,
    amount: int,
    options: SwapOptions,
    network_config: NetworkConfig | None,
) -> SwapAttributes:
    route = provider.get_swaps(
        token_in,
        token_out,
        kind,
        amount,
        gas_price=options.gas_price,
        max_pools=options.max_pools,
    )
    return build_swap(
        route,
        kind,
        sender,
        options.deadline,
        options.max_slippage,
        recipient=recipient,
        network_config=network_config,
    )


def build_route_exact_in(
    provider: RouteProvider,
    sender: str,
    recipient: str | None,
    token_in: str,
    token_out: str,
    amount: int,
    options: SwapOptions = DEFAULT_SWAP_OPTIONS,
    network_config: NetworkConfig | None = None,
) -> SwapAttributes:
    """Find a route selling exactly `amount` of token_in and build its swap call."""
    return _build_route(
        provider,
        SwapType.SWAP_EXACT_IN,
        sender,
        recipient,
        token_in,
        token_out,
        amount,
        options,
        network_config,
    )


def build_route_exact_out(
    provider: RouteProvider,
    sender: str,
    recipient: str | None,
    token_in: str,
    token_out: str,
    amount: int,
    options: SwapOptions = DEFAULT_SWAP_OPTIONS,
    network_config: NetworkConfig | None = None,
) -> SwapAttributes:
    """Find a route buying exactly `amount` of token_out and build its swap call."""
    return _build_route(
        provider,
        SwapType.SWAP_EXACT_OUT,
        sender,
        recipient,
        token_in,
        token_out,
        amount,
        options,
        network_config,
    )
