"""
Network Context
Identity of the connected chain (name, chain id, block height)
"""

from dataclasses import dataclass

from web3 import Web3
from loguru import logger

from deployer.exceptions import NetworkResolutionError

# Well-known public chains; anything else resolves without a name
KNOWN_CHAINS = {
    1: "mainnet",
    5: "goerli",
    10: "optimism",
    56: "bnb",
    100: "gnosis",
    137: "matic",
    8453: "base",
    42161: "arbitrum",
    80001: "maticmum",
    11155111: "sepolia",
}


@dataclass
class NetworkContext:
    name: str
    chain_id: int
    block_number: int

    def label(self, fallback: str) -> str:
        """Network name, or the configured fallback when the chain is unnamed"""
        if not self.name or self.name == "unknown":
            return fallback
        return self.name


def resolve_network(w3: Web3) -> NetworkContext:
    """
    Query the connected network for its identity

    Args:
        w3: Web3 instance

    Returns:
        NetworkContext

    Raises:
        NetworkResolutionError: On any RPC/connectivity failure
    """
    try:
        chain_id = int(w3.eth.chain_id)
        block_number = int(w3.eth.block_number)
    except Exception as e:
        raise NetworkResolutionError(f"Failed to query network: {e}") from e

    if chain_id < 0:
        raise NetworkResolutionError(f"Node reported invalid chain id: {chain_id}")

    context = NetworkContext(
        name=KNOWN_CHAINS.get(chain_id, ""),
        chain_id=chain_id,
        block_number=block_number,
    )

    logger.info(f"Network: {context.name or 'Unknown'}")
    logger.info(f"Chain ID: {context.chain_id}")
    logger.info(f"Block number: {context.block_number}")

    return context
