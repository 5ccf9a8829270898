"""PriceOracle: Owner-gated store for a single published price.

The oracle mirrors the read surface of a Chainlink aggregator (latest_answer,
decimals) and keeps write access behind a single owner identity:

    - The deployer is the initial owner
    - Only the current owner may set the price
    - Only the current owner may hand ownership to another identity
    - A rejected call raises AuthorizationError and changes nothing

.. code-block:: python

    >>> oracle = PriceOracle(0, 8, address=oracle_addr, deployer=alice)
    >>> oracle.set_price(100123456, caller=alice)
    >>> oracle.latest_answer()
    100123456
    >>> oracle.set_price(1, caller=bob)
    Traceback (most recent call last):
    ...
    AuthorizationError: Not owner
"""

from __future__ import annotations

import logging

from .errors import AuthorizationError
from .fixed_point import require_uint256
from .identity import ZERO_ADDRESS, normalize_identity

logger = logging.getLogger(__name__)


class PriceOracle:
    """Single-price oracle with fixed decimals and a transferable owner.

    :ivar address: Identity of this oracle instance.
    :ivar deployer: Identity that deployed the oracle.
    """

    def __init__(
        self,
        initial_price: int,
        decimals: int,
        *,
        address: str,
        deployer: str,
    ) -> None:
        """Initialize the oracle.

        :param initial_price: Starting price in oracle units (often 0).
        :param decimals: Number of fractional digits of the published price.
        :param address: Identity of this instance.
        :param deployer: Identity of the deploying account; becomes the owner.
        :raises ValueError: If decimals is not positive or the price is out of range.
        """
        if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 1:
            raise ValueError(f"decimals must be a positive integer, got {decimals!r}")

        self.address = normalize_identity(address)
        self.deployer = normalize_identity(deployer)
        self._price = require_uint256("initial_price", initial_price)
        self._decimals = decimals
        self._owner = self.deployer

        logger.debug(
            f"PriceOracle {self.address} created "
            f"(price={self._price}, decimals={decimals}, owner={self._owner})"
        )

    def __repr__(self) -> str:
        return (
            f"PriceOracle({self.address}, price={self._price}, "
            f"decimals={self._decimals}, owner={self._owner})"
        )

    def latest_answer(self) -> int:
        """Return the published price in oracle units."""
        return self._price

    def decimals(self) -> int:
        """Return the number of fractional digits of the published price."""
        return self._decimals

    def owner(self) -> str:
        """Return the identity currently allowed to mutate the oracle."""
        return self._owner

    def _require_owner(self, caller: str, action: str) -> None:
        """Raise AuthorizationError unless caller is the current owner.

        :param caller: Normalized caller identity.
        :param action: Operation name for logging.
        :raises AuthorizationError: If caller is not the owner.
        """
        if caller != self._owner:
            logger.warning(
                f"PriceOracle {self.address}: {action} rejected for {caller} "
                f"(owner is {self._owner})"
            )
            raise AuthorizationError(caller=caller, owner=self._owner)

    def set_price(self, price: int, *, caller: str) -> None:
        """Overwrite the published price.

        :param price: New price in oracle units.
        :param caller: Identity performing the call.
        :raises AuthorizationError: If caller is not the owner.
        :raises ValueError: If price is out of uint256 range.
        """
        caller = normalize_identity(caller)
        self._require_owner(caller, "set_price")
        self._price = require_uint256("price", price)
        logger.info(f"PriceOracle {self.address}: price set to {price} by {caller}")

    def transfer_ownership(self, new_owner: str, *, caller: str) -> None:
        """Hand the owner role to another identity.

        Transferring to the current owner is a no-op change. Transferring to
        the zero address is allowed and leaves the price permanently frozen.

        :param new_owner: Identity that becomes the owner.
        :param caller: Identity performing the call.
        :raises AuthorizationError: If caller is not the owner.
        :raises ValueError: If new_owner is not a valid identity.
        """
        caller = normalize_identity(caller)
        self._require_owner(caller, "transfer_ownership")
        new_owner = normalize_identity(new_owner)

        if new_owner == ZERO_ADDRESS:
            logger.warning(
                f"PriceOracle {self.address}: ownership renounced to zero address, "
                "price can no longer be updated"
            )

        previous = self._owner
        self._owner = new_owner
        logger.info(
            f"PriceOracle {self.address}: ownership transferred {previous} -> {new_owner}"
        )
