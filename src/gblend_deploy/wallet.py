"""Signing identity derivation for gblend-deploy library."""

import re
from dataclasses import dataclass, field

from eth_account import Account
from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount

from .exceptions import DeploymentError, InvalidPrivateKey
from .types import DeploymentTransaction

PRIVATE_KEY_PATTERN = re.compile(r"(0x)?[0-9a-fA-F]{64}")


@dataclass(frozen=True)
class SigningIdentity:
    """A private key bound to the chain it is allowed to sign for."""

    account: LocalAccount = field(repr=False)
    chain_id: int

    @property
    def address(self) -> str:
        """Checksummed deployer address."""
        return self.account.address

    def sign_transaction(self, transaction: DeploymentTransaction, nonce: int) -> SignedTransaction:
        """
        Sign a deployment transaction for the bound chain.

        Raises:
            DeploymentError: If the transaction targets a different chain
        """
        if transaction.chain_id != self.chain_id:
            raise DeploymentError(
                f"Transaction chain ID {transaction.chain_id} does not match "
                f"signing identity chain ID {self.chain_id}"
            )
        return self.account.sign_transaction(transaction.to_dict(nonce))


def derive_signing_identity(private_key: str, chain_id: int) -> SigningIdentity:
    """
    Parse a hex private key into a signing identity for a chain.

    Args:
        private_key: 64 hex characters, optionally prefixed with 0x
        chain_id: Chain ID the identity will sign for

    Returns:
        SigningIdentity bound to chain_id

    Raises:
        InvalidPrivateKey: If the key is not 32 hex-encoded bytes or is not
            a valid secp256k1 key
    """
    if not isinstance(private_key, str):
        raise InvalidPrivateKey("Private key must be a hex string")

    if not PRIVATE_KEY_PATTERN.fullmatch(private_key):
        # The key itself never goes into the message
        raise InvalidPrivateKey("Private key must be 32 bytes (64 hex characters) long")

    key = private_key[2:] if private_key.startswith("0x") else private_key

    try:
        account = Account.from_key(bytes.fromhex(key))
    except Exception as e:  # eth_keys raises its own ValidationError hierarchy
        raise InvalidPrivateKey(f"Invalid private key format: {type(e).__name__}") from e

    return SigningIdentity(account=account, chain_id=chain_id)
