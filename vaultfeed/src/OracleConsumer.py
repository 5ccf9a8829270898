"""OracleConsumer: Read-only access to a PriceOracle."""

from __future__ import annotations

from .identity import normalize_identity
from .PriceOracle import PriceOracle


class OracleConsumer:
    """Reads the published price of an oracle. Available to any caller.

    :ivar address: Identity of this consumer instance.
    :ivar deployer: Identity that deployed the consumer.
    """

    def __init__(self, oracle: PriceOracle, *, address: str, deployer: str) -> None:
        self.address = normalize_identity(address)
        self.deployer = normalize_identity(deployer)
        self._oracle = oracle

    def __repr__(self) -> str:
        return f"OracleConsumer({self.address}, oracle={self._oracle.address})"

    @property
    def oracle(self) -> PriceOracle:
        return self._oracle

    def get_latest_price(self) -> tuple[int, int]:
        """Return the oracle's price together with its decimals.

        :returns: Tuple of (price, decimals).
        """
        return self._oracle.latest_answer(), self._oracle.decimals()
