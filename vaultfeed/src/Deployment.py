"""Deployment: Builds and wires a complete vault price pipeline.

Deployment order:
    1. VaultSource with the initial pool value and share count
    2. PriceOracle with the initial price and decimals, owned by the deployer
    3. OracleFeeder bound to the vault and the oracle
    4. OracleConsumer bound to the oracle
    5. Optionally, oracle ownership is transferred to the feeder

Every instance gets a deterministic address derived from the deployer and
the number of instances it deployed before, counted across all calls.

.. code-block:: python

    >>> pipeline = deploy_pipeline(
    ...     deployer,
    ...     pool_value=to_units("250", 18),
    ...     total_shares=to_units("100", 18),
    ... )
    >>> pipeline.feeder.update_oracle()
    250000000
    >>> pipeline.consumer.get_latest_price()
    (250000000, 8)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .fixed_point import DEFAULT_ORACLE_DECIMALS
from .identity import compute_instance_address, normalize_identity
from .OracleConsumer import OracleConsumer
from .OracleFeeder import OracleFeeder
from .PriceOracle import PriceOracle
from .VaultSource import VaultSource

logger = logging.getLogger(__name__)

# Instances deployed so far per deployer. Addresses are never reused.
_deployer_nonces: dict[str, int] = {}


def get_deployer_nonce(deployer: str) -> int:
    """Return the nonce the next instance deployed by deployer will use.

    :param deployer: Deploying identity, any case.
    :returns: Number of instances deployed by deployer so far.
    """
    return _deployer_nonces.get(normalize_identity(deployer), 0)


@dataclass
class Pipeline:
    """The deployed components of one price pipeline.

    :ivar deployer: Identity that deployed every component.
    :ivar vault: Value source.
    :ivar oracle: Price oracle.
    :ivar feeder: Feeder moving prices from vault to oracle.
    :ivar consumer: Read-only oracle consumer.
    """

    deployer: str
    vault: VaultSource
    oracle: PriceOracle
    feeder: OracleFeeder
    consumer: OracleConsumer

    def resolve(
        self, address: str
    ) -> VaultSource | PriceOracle | OracleFeeder | OracleConsumer:
        """Look up a component by its address.

        :param address: Component address, any case.
        :returns: The component deployed at that address.
        :raises KeyError: If no component lives at the address.
        """
        address = normalize_identity(address)
        for instance in (self.vault, self.oracle, self.feeder, self.consumer):
            if instance.address == address:
                return instance
        raise KeyError(f"No pipeline component at {address}")


def deploy_pipeline(
    deployer: str,
    *,
    pool_value: int,
    total_shares: int,
    initial_price: int = 0,
    decimals: int = DEFAULT_ORACLE_DECIMALS,
    transfer_ownership: bool = True,
) -> Pipeline:
    """Deploy a vault, oracle, feeder and consumer and wire them together.

    :param deployer: Identity deploying the components.
    :param pool_value: Initial vault pool value (18 decimals).
    :param total_shares: Initial vault share count (18 decimals).
    :param initial_price: Initial oracle price in oracle units (default: 0).
    :param decimals: Oracle decimals (default: 8).
    :param transfer_ownership: Hand oracle ownership to the feeder (default: True).
    :returns: The deployed Pipeline.
    :raises ValueError: If an initial value is invalid.
    :raises ConfigurationError: If decimals exceed the vault precision.
    """
    deployer = normalize_identity(deployer)

    def next_address() -> str:
        nonce = _deployer_nonces.get(deployer, 0)
        _deployer_nonces[deployer] = nonce + 1
        return compute_instance_address(deployer, nonce)

    logger.info(f"Deploying from address: {deployer}")

    vault = VaultSource(
        pool_value, total_shares, address=next_address(), deployer=deployer
    )
    logger.info(f"VaultSource deployed to: {vault.address}")

    oracle = PriceOracle(
        initial_price, decimals, address=next_address(), deployer=deployer
    )
    logger.info(f"PriceOracle deployed to: {oracle.address}")

    feeder = OracleFeeder(vault, oracle, address=next_address(), deployer=deployer)
    logger.info(f"OracleFeeder deployed to: {feeder.address}")

    consumer = OracleConsumer(oracle, address=next_address(), deployer=deployer)
    logger.info(f"OracleConsumer deployed to: {consumer.address}")
    logger.debug(f"Oracle owner address: {oracle.owner()}")

    if transfer_ownership:
        oracle.transfer_ownership(feeder.address, caller=deployer)
        logger.info(f"Transferred oracle ownership to feeder: {feeder.address}")

    return Pipeline(
        deployer=deployer,
        vault=vault,
        oracle=oracle,
        feeder=feeder,
        consumer=consumer,
    )
