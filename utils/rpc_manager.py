"""
RPC Manager
Opens the Web3 connection for the selected network
"""

from web3 import Web3
from loguru import logger

from deployer.config import NetworkConfig
from deployer.exceptions import NetworkResolutionError


class RPCManager:
    """
    Single-endpoint connection to the target network
    """

    def __init__(self, network: NetworkConfig):
        """
        Initialize RPC Manager

        Args:
            network: Network settings (RPC URL, timeout)
        """
        self.network = network
        self.w3 = None

    def get_web3(self) -> Web3:
        """
        Connect (once) and return the Web3 instance

        Raises:
            NetworkResolutionError: If the endpoint is unreachable
        """
        if self.w3 is not None:
            return self.w3

        w3 = Web3(Web3.HTTPProvider(
            self.network.rpc_url,
            request_kwargs={'timeout': self.network.timeout}
        ))

        if not w3.is_connected():
            raise NetworkResolutionError(
                f"Failed to connect to {self.network.name} at {self.network.rpc_url}"
            )

        logger.success(f"Connected to {self.network.name}")
        self.w3 = w3
        return w3
