"""Protocol constants for Balancer V2.

Centralizes well-known addresses and protocol parameters.
"""

from balancer_sdk.models.types import is_valid_address


def _validate_address(name: str, address: str) -> str:
    """Validate and return a lowercase address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address.lower()


# Vault deployment shared by every network built with the canonical deployer
BALANCER_VAULT = _validate_address("Vault", "0xBA12222222228d8Ba445958a75a0704d566BF2C8")

# The vault treats the zero address as the chain's native asset (ETH, MATIC, ...)
ZERO_ADDRESS = _validate_address("zero", "0x" + "00" * 20)
NATIVE_ASSET = ZERO_ADDRESS

# Slippage is expressed in basis points
BPS_DENOMINATOR = 10_000
MAX_SLIPPAGE_BPS = 10_000

# Default deadline used when the caller does not care (far future)
MAX_DEADLINE = 999_999_999_999_999_999

# Exit kind understood by every pool in recovery mode
RECOVERY_MODE_EXIT_KIND = 255
