"""Fixed-point integer helpers shared by the vault, oracle and feeder.

Vault values use 18 fractional decimal digits. Oracles publish with their own
(usually 8) decimals. All conversions between the two go through rescale().

.. code-block:: python

    >>> price_per_share(to_units("250", 18), to_units("100", 18))
    2500000000000000000
    >>> rescale(2500000000000000000, 18, 8)
    250000000
    >>> from_units(250000000, 8)
    Decimal('2.5')
"""

from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation

# Number of fractional digits used by vault values.
VALUE_DECIMALS = 18
WAD = 10**VALUE_DECIMALS

# Chainlink-style price feeds publish with 8 decimals.
DEFAULT_ORACLE_DECIMALS = 8

MAX_UINT256 = 2**256 - 1

# The default decimal context keeps 28 digits, uint256 values need 78.
_CONTEXT = Context(prec=100)


def require_uint256(name: str, value: int) -> int:
    """Check that a value fits an unsigned 256-bit integer.

    :param name: Field name used in error messages.
    :param value: Value to check.
    :returns: The value, unchanged.
    :raises TypeError: If value is not an int (bools are rejected too).
    :raises ValueError: If value is negative or exceeds 2**256 - 1.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    if value > MAX_UINT256:
        raise ValueError(f"{name} exceeds uint256 range")
    return value


def rescale(value: int, from_decimals: int, to_decimals: int) -> int:
    """Convert a fixed-point integer between two decimal precisions.

    Downscaling truncates (floor division), upscaling is exact.

    :param value: Non-negative fixed-point value.
    :param from_decimals: Fractional digits of the input.
    :param to_decimals: Fractional digits of the result.
    :returns: Rescaled value.

    .. code-block:: python

        >>> rescale(10**18 + 99, 18, 8)
        100000000
        >>> rescale(5, 2, 4)
        500
    """
    if to_decimals < from_decimals:
        return value // 10 ** (from_decimals - to_decimals)
    return value * 10 ** (to_decimals - from_decimals)


def price_per_share(pooled_value: int, total_shares: int) -> int:
    """Compute the 18-decimal price of one share.

    :param pooled_value: Total pooled value, 18 decimals.
    :param total_shares: Outstanding shares, 18 decimals.
    :returns: pooled_value * 1e18 // total_shares, or 0 when there are no shares.
    """
    if total_shares == 0:
        return 0
    return pooled_value * WAD // total_shares


def to_units(amount: str | int | Decimal, decimals: int) -> int:
    """Parse a human-readable amount into a fixed-point integer.

    :param amount: Amount such as "250" or "2.5".
    :param decimals: Fractional digits of the result.
    :returns: Fixed-point integer.
    :raises ValueError: If amount is not a number, is negative or has more
        fractional digits than decimals allows.

    .. code-block:: python

        >>> to_units("1.5", 8)
        150000000
    """
    try:
        parsed = Decimal(str(amount).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid amount '{amount}'") from None

    if not parsed.is_finite():
        raise ValueError(f"Invalid amount '{amount}'")
    if parsed < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")

    scaled = parsed.scaleb(decimals, context=_CONTEXT)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount '{amount}' has more than {decimals} decimals")
    return int(scaled)


def from_units(value: int, decimals: int) -> Decimal:
    """Format a fixed-point integer as a Decimal in human units."""
    return Decimal(value).scaleb(-decimals, context=_CONTEXT).normalize(_CONTEXT)
