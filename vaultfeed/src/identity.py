"""Caller and instance identities.

Identities are EVM-style addresses compared in EIP-55 checksum form, so
"0xabc..." and "0xABC..." refer to the same principal.
"""

from __future__ import annotations

from eth_account import Account
from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Well-known localnet development key (first test account).
LOCALNET_DEPLOYER_KEY = (
    "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
)


def normalize_identity(identity: str) -> str:
    """Return the checksum form of an identity.

    :param identity: Hex address, any case.
    :returns: EIP-55 checksum address.
    :raises ValueError: If identity is not a 20-byte hex address.
    """
    if not isinstance(identity, str) or not Web3.is_address(identity):
        raise ValueError(f"Invalid identity: {identity!r}")
    return Web3.to_checksum_address(identity)


def identity_from_key(private_key: str) -> str:
    """Derive the address controlled by a private key.

    :param private_key: Hex-encoded secp256k1 private key.
    :returns: Checksum address.
    :raises ValueError: If the key cannot be parsed.
    """
    try:
        return Account.from_key(private_key).address
    except Exception as e:  # eth_keys raises its own ValidationError
        raise ValueError(f"Invalid private key: {e}") from e


def compute_instance_address(deployer: str, nonce: int) -> str:
    """Compute a deterministic address for an instance deployed by deployer.

    The address is the last 20 bytes of keccak256("<deployer>/<nonce>"),
    with the deployer in lowercase hex.

    :param deployer: Deploying identity.
    :param nonce: Number of instances the deployer created before this one.
    :returns: Checksum address of the new instance.
    """
    deployer = normalize_identity(deployer)
    digest = Web3.keccak(text=f"{deployer.lower()}/{nonce}")
    return Web3.to_checksum_address(digest[-20:])
