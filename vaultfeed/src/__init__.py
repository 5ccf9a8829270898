"""
Vault Price Feed - In-Memory Oracle Pipeline

This module publishes a pooled-asset vault's price per share through an
owner-gated oracle:
- VaultSource: Pooled value and shares with a derived 18-decimal price
- PriceOracle: Single published price, fixed decimals, transferable owner
- OracleFeeder: Rescales the vault price and writes it to the oracle
- OracleConsumer: Read-only (price, decimals) accessor
- Deployment: Wires the components together in deployment order
"""

from .Deployment import Pipeline, deploy_pipeline
from .errors import AuthorizationError, ConfigurationError, VaultFeedError
from .fixed_point import DEFAULT_ORACLE_DECIMALS, VALUE_DECIMALS, rescale
from .OracleConsumer import OracleConsumer
from .OracleFeeder import OracleFeeder
from .PriceOracle import PriceOracle
from .VaultSource import VaultSource

__all__ = [
    "AuthorizationError",
    "ConfigurationError",
    "DEFAULT_ORACLE_DECIMALS",
    "OracleConsumer",
    "OracleFeeder",
    "Pipeline",
    "PriceOracle",
    "VALUE_DECIMALS",
    "VaultFeedError",
    "VaultSource",
    "deploy_pipeline",
    "rescale",
]
