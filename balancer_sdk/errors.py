"""Balancer SDK error classes.

Every failure is raised synchronously to the caller. Nothing here is retried
internally: each error reflects malformed input or a pool state that cannot
satisfy the request.
"""


class BalancerError(Exception):
    """Base error for Balancer SDK operations."""

    code = "BALANCER_ERROR"


class UnsupportedPoolType(BalancerError):
    """Pool type tag is not in the set of recognized pool types."""

    code = "UNSUPPORTED_POOL_TYPE"


class UnsupportedOperation(BalancerError):
    """Operation is not available for this pool family."""

    code = "UNSUPPORTED_OPERATION"


class PoolPaused(BalancerError):
    """Snapshot marks the pool as inactive."""

    code = "POOL_PAUSED"


class InsufficientLiquidity(BalancerError):
    """Join would mint a non-positive amount of BPT."""

    code = "INSUFFICIENT_LIQUIDITY"


class ExceedsPoolBalance(BalancerError):
    """Exit would take more than the pool holds."""

    code = "EXCEEDS_POOL_BALANCE"


class InvariantDidNotConverge(BalancerError):
    """Newton iteration for an invariant or balance did not converge."""

    code = "INVARIANT_DID_NOT_CONVERGE"


class DivisionByZero(BalancerError, ZeroDivisionError):
    """Fixed-point or guarded integer division by zero."""

    code = "DIVISION_BY_ZERO"


class InvalidTolerance(BalancerError):
    """Slippage tolerance must be within [0, 10000] basis points."""

    code = "INVALID_TOLERANCE"


class BuilderNotConfigured(BalancerError):
    """Swap builder read before funds, deadline and limits were set."""

    code = "BUILDER_NOT_CONFIGURED"


class EmptyRoute(BalancerError):
    """Route contains no swap steps."""

    code = "EMPTY_ROUTE"


class InvalidFeeError(BalancerError):
    """Swap fee must be in range [0, 1)."""

    code = "INVALID_FEE"


class ZeroBalanceError(BalancerError):
    """Token balance must be positive for this calculation."""

    code = "ZERO_BALANCE"


class JoinExitPathUnsupported(BalancerError):
    """Route hops through a pool's own BPT and needs a relayer multicall."""

    code = "JOIN_EXIT_PATH_UNSUPPORTED"


class SlippageExceeded(BalancerError):
    """Quoted amount falls outside the slippage-bounded limit."""

    code = "SLIPPAGE_EXCEEDED"
