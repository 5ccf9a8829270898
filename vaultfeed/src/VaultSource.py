"""VaultSource: Pooled-asset vault exposing a derived per-share price.

Both the pooled value and the share count are 18-decimal fixed-point integers.

.. code-block:: python

    >>> vault = VaultSource(250 * 10**18, 100 * 10**18, address=addr, deployer=addr)
    >>> vault.get_price_per_share()
    2500000000000000000
"""

from __future__ import annotations

import logging

from .fixed_point import price_per_share, require_uint256
from .identity import normalize_identity

logger = logging.getLogger(__name__)


class VaultSource:
    """Vault holding a pooled value and an outstanding share count.

    The setters are unrestricted administrative hooks.

    :ivar address: Identity of this vault instance.
    :ivar deployer: Identity that deployed the vault.
    """

    def __init__(
        self,
        pool_value: int,
        total_shares: int,
        *,
        address: str,
        deployer: str,
    ) -> None:
        """Initialize the vault.

        :param pool_value: Initial pooled value (18 decimals).
        :param total_shares: Initial outstanding shares (18 decimals).
        :param address: Identity of this instance.
        :param deployer: Identity of the deploying account.
        :raises ValueError: If a value is negative or out of uint256 range.
        """
        self.address = normalize_identity(address)
        self.deployer = normalize_identity(deployer)
        self._pool_value = require_uint256("pool_value", pool_value)
        self._total_shares = require_uint256("total_shares", total_shares)

    def __repr__(self) -> str:
        return (
            f"VaultSource({self.address}, pool_value={self._pool_value}, "
            f"total_shares={self._total_shares})"
        )

    @property
    def pool_value(self) -> int:
        """Total value of the pooled assets (18 decimals)."""
        return self._pool_value

    @property
    def total_shares(self) -> int:
        """Outstanding shares (18 decimals)."""
        return self._total_shares

    def get_price_per_share(self) -> int:
        """Return the value of one share in 18-decimal fixed point.

        Returns 0 when no shares are outstanding.
        """
        return price_per_share(self._pool_value, self._total_shares)

    def set_pool_value(self, value: int) -> None:
        """Overwrite the pooled value.

        :param value: New pooled value (18 decimals).
        """
        self._pool_value = require_uint256("pool_value", value)
        logger.info(f"Vault {self.address}: pool value set to {value}")

    def set_total_shares(self, shares: int) -> None:
        """Overwrite the outstanding share count.

        :param shares: New share count (18 decimals).
        """
        self._total_shares = require_uint256("total_shares", shares)
        logger.info(f"Vault {self.address}: total shares set to {shares}")
