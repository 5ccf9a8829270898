"""Unit tests for OracleFeeder."""

import pytest
from web3 import Web3

from vaultfeed.src.errors import AuthorizationError, ConfigurationError
from vaultfeed.src.fixed_point import WAD
from vaultfeed.src.OracleFeeder import OracleFeeder
from vaultfeed.src.PriceOracle import PriceOracle
from vaultfeed.src.VaultSource import VaultSource

OWNER = Web3.to_checksum_address("0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266")
VAULT = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
ORACLE = "0xe7f1725e7734ce288f8367e1bb143e90bb3f0512"
FEEDER = Web3.to_checksum_address("0x9fe46736679d2d9a65f0992f2272de9f3c7fa6e0")


def make_feeder(
    pool_value: int = 250 * WAD,
    total_shares: int = 100 * WAD,
    decimals: int = 8,
    transfer: bool = True,
) -> OracleFeeder:
    vault = VaultSource(pool_value, total_shares, address=VAULT, deployer=OWNER)
    oracle = PriceOracle(0, decimals, address=ORACLE, deployer=OWNER)
    feeder = OracleFeeder(vault, oracle, address=FEEDER, deployer=OWNER)
    if transfer:
        oracle.transfer_ownership(feeder.address, caller=OWNER)
    return feeder


class TestOracleFeederInit:
    """Test feeder construction and configuration checks."""

    def test_bindings(self) -> None:
        feeder = make_feeder()
        assert feeder.vault.address == Web3.to_checksum_address(VAULT)
        assert feeder.oracle.address == Web3.to_checksum_address(ORACLE)
        assert feeder.address == FEEDER

    def test_decimals_above_vault_precision_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="19 decimals"):
            make_feeder(decimals=19, transfer=False)

    def test_decimals_equal_to_vault_precision_allowed(self) -> None:
        feeder = make_feeder(decimals=18)
        assert feeder.update_oracle() == 25 * WAD // 10


class TestOracleFeederUpdate:
    """Test pulling from the vault and pushing to the oracle."""

    def test_scenario_basic_update(self) -> None:
        """250/100 gives 2.5e18 per share, published as 250000000."""
        feeder = make_feeder()
        assert feeder.update_oracle() == 250_000_000
        assert feeder.oracle.latest_answer() == 250_000_000

    def test_scenario_pool_value_change(self) -> None:
        """Raising the pool to 1000 publishes 1e9 on the next update."""
        feeder = make_feeder()
        feeder.update_oracle()

        feeder.vault.set_pool_value(1000 * WAD)
        feeder.update_oracle()
        assert feeder.oracle.latest_answer() == 1_000_000_000

    def test_scenario_zero_shares(self) -> None:
        """Zero shares publishes a zero price."""
        feeder = make_feeder()
        feeder.update_oracle()

        feeder.vault.set_total_shares(0)
        assert feeder.vault.get_price_per_share() == 0
        feeder.update_oracle()
        assert feeder.oracle.latest_answer() == 0

    def test_share_split(self) -> None:
        """250 value over 25 shares publishes 1e9."""
        feeder = make_feeder()
        feeder.vault.set_total_shares(25 * WAD)
        assert feeder.vault.get_price_per_share() == 10 * WAD

        feeder.update_oracle()
        assert feeder.oracle.latest_answer() == 1_000_000_000

    def test_oracle_reflects_vault_after_updates(self) -> None:
        """After every update the oracle holds the rescaled vault price."""
        feeder = make_feeder()
        for i in range(1, 5):
            feeder.vault.set_pool_value(i * 123 * WAD)
            feeder.vault.set_total_shares(50 * WAD)
            feeder.update_oracle()

            expected = feeder.vault.get_price_per_share() // 10**10
            assert feeder.oracle.latest_answer() == expected

        assert feeder.oracle.latest_answer() == 4 * 123 * WAD // 50 // 10**10

    def test_truncates_sub_unit_digits(self) -> None:
        """Digits below the oracle precision are truncated."""
        feeder = make_feeder(pool_value=10 * WAD, total_shares=3 * WAD)
        assert feeder.update_oracle() == 333_333_333

    def test_other_decimals(self) -> None:
        feeder = make_feeder(decimals=6)
        assert feeder.update_oracle() == 2_500_000
        assert feeder.oracle.decimals() == 6

    def test_idempotent(self) -> None:
        """Two updates without vault changes publish the same price."""
        feeder = make_feeder(pool_value=777 * WAD + 1, total_shares=13 * WAD)
        first = feeder.update_oracle()
        second = feeder.update_oracle()

        assert first == second
        assert feeder.oracle.latest_answer() == first

    def test_matches_formula(self) -> None:
        for pool_value, total_shares in [(1, 1), (5 * WAD, 7 * WAD), (10**40, 3)]:
            feeder = make_feeder(pool_value, total_shares)
            feeder.update_oracle()
            pps = feeder.vault.get_price_per_share()
            assert feeder.oracle.latest_answer() == pps // 10 ** (18 - 8)


class TestOracleFeederAuthorization:
    """Test that the oracle's owner check gates feeder updates."""

    def test_update_without_ownership_fails(self) -> None:
        feeder = make_feeder(transfer=False)

        with pytest.raises(AuthorizationError, match="Not owner") as exc_info:
            feeder.update_oracle()

        assert exc_info.value.caller == FEEDER
        assert exc_info.value.owner == OWNER
        assert feeder.oracle.latest_answer() == 0

    def test_update_after_ownership_moved_away_fails(self) -> None:
        feeder = make_feeder()
        feeder.update_oracle()

        feeder.oracle.transfer_ownership(OWNER, caller=FEEDER)
        feeder.vault.set_pool_value(1000 * WAD)

        with pytest.raises(AuthorizationError):
            feeder.update_oracle()
        assert feeder.oracle.latest_answer() == 250_000_000
