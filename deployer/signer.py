"""
Signer
Deployer identity: address, balance and transaction signing
"""

from typing import Dict, Optional

from web3 import Web3
from eth_account import Account
from loguru import logger

from .exceptions import SignerUnavailableError


class LocalSigner:
    """
    Signs transactions with a locally held private key
    """

    def __init__(self, private_key: str):
        """
        Initialize signer

        Args:
            private_key: Hex private key, with or without 0x prefix
        """
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key

        self.account = Account.from_key(private_key)
        self.address = self.account.address

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction dict

        Returns:
            Signed transaction (raw bytes in .raw_transaction)
        """
        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_balance(self, w3: Web3) -> int:
        """Native balance in wei"""
        return w3.eth.get_balance(self.address)


def load_signer(private_key: Optional[str]) -> LocalSigner:
    """
    Create the deployer signer from configuration

    Raises:
        SignerUnavailableError: If no key is configured or the key is malformed
    """
    if not private_key:
        raise SignerUnavailableError("PRIVATE_KEY must be set in the environment or .env")

    try:
        signer = LocalSigner(private_key)
    except (ValueError, TypeError) as e:
        raise SignerUnavailableError(f"PRIVATE_KEY is not a valid private key: {e}") from e

    logger.info(f"Deployer wallet: {signer.address}")
    return signer
