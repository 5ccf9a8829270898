"""OracleFeeder: Pushes the vault's per-share price into a PriceOracle.

Each update is a single read-then-write:
    1. Read the 18-decimal price per share from the vault
    2. Rescale it to the oracle's decimals (truncating)
    3. Call set_price on the oracle as the feeder's own identity

The feeder does not check ownership itself. If it is not the oracle's owner
the AuthorizationError raised by the oracle propagates to the caller.
"""

from __future__ import annotations

import logging

from .errors import ConfigurationError
from .fixed_point import VALUE_DECIMALS, rescale
from .identity import normalize_identity
from .PriceOracle import PriceOracle
from .VaultSource import VaultSource

logger = logging.getLogger(__name__)


class OracleFeeder:
    """Feeds a vault's price per share into an oracle.

    :ivar address: Identity of the feeder; must own the oracle for updates.
    :ivar deployer: Identity that deployed the feeder.
    """

    def __init__(
        self,
        vault: VaultSource,
        oracle: PriceOracle,
        *,
        address: str,
        deployer: str,
    ) -> None:
        """Initialize the feeder.

        :param vault: Vault to read the price from.
        :param oracle: Oracle to publish the price to.
        :param address: Identity of this instance.
        :param deployer: Identity of the deploying account.
        :raises ConfigurationError: If the oracle uses more than 18 decimals.
        """
        if oracle.decimals() > VALUE_DECIMALS:
            raise ConfigurationError(
                f"Oracle {oracle.address} uses {oracle.decimals()} decimals, "
                f"more than the vault's {VALUE_DECIMALS}"
            )

        self.address = normalize_identity(address)
        self.deployer = normalize_identity(deployer)
        self._vault = vault
        self._oracle = oracle

    def __repr__(self) -> str:
        return (
            f"OracleFeeder({self.address}, vault={self._vault.address}, "
            f"oracle={self._oracle.address})"
        )

    @property
    def vault(self) -> VaultSource:
        return self._vault

    @property
    def oracle(self) -> PriceOracle:
        return self._oracle

    def update_oracle(self) -> int:
        """Publish the vault's current price per share to the oracle.

        :returns: Price written to the oracle, in oracle units.
        :raises AuthorizationError: If the feeder does not own the oracle.
        """
        price_per_share = self._vault.get_price_per_share()
        price = rescale(price_per_share, VALUE_DECIMALS, self._oracle.decimals())
        logger.debug(
            f"Feeder {self.address}: price per share {price_per_share} -> {price} "
            f"({self._oracle.decimals()} decimals)"
        )

        self._oracle.set_price(price, caller=self.address)
        return price
