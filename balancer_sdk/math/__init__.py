"""Mathematical primitives for pool calculations.

- Bfp: 18-decimal fixed-point arithmetic (Balancer-style)
"""

from balancer_sdk.math.fixed_point import ONE, ZERO, Bfp

__all__ = ["Bfp", "ONE", "ZERO"]
