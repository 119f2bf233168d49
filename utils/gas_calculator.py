"""
Gas Calculator
Deployment gas estimation with a fixed safety buffer, plus cost reporting
"""

from typing import Dict, Optional

from web3 import Web3
from loguru import logger

from deployer.exceptions import GasEstimationError
from deployer.outcome import GasEstimate

# Fixed policy: provision 20% above the node's estimate
GAS_BUFFER_PERCENT = 20


def apply_gas_buffer(estimate: int) -> int:
    """floor(estimate * 1.2) in integer arithmetic"""
    return estimate * (100 + GAS_BUFFER_PERCENT) // 100


class GasCalculator:
    """
    Estimates deployment gas and prices it
    """

    def __init__(self, w3: Web3, gas_price: Optional[int] = None, currency: str = "ETH"):
        """
        Initialize Gas Calculator

        Args:
            w3: Web3 instance
            gas_price: Fixed gas price in wei (None = ask the node)
            currency: Native currency symbol for cost reports
        """
        self.w3 = w3
        self.fixed_gas_price = gas_price
        self.currency = currency

    def estimate(self, payload: Dict) -> GasEstimate:
        """
        Estimate gas for an unsent transaction and apply the buffer

        Args:
            payload: Transaction dict (from, data)

        Returns:
            GasEstimate

        Raises:
            GasEstimationError: If the node cannot estimate (e.g. constructor reverts)
        """
        try:
            estimate = int(self.w3.eth.estimate_gas(payload))
        except Exception as e:
            raise GasEstimationError(f"Gas estimation failed: {e}") from e

        if estimate <= 0:
            raise GasEstimationError(f"Node returned a non-positive gas estimate: {estimate}")

        gas_limit = apply_gas_buffer(estimate)

        logger.info(f"Estimated gas for deployment: {estimate}")
        logger.info(f"Gas limit (+{GAS_BUFFER_PERCENT}% buffer): {gas_limit}")

        return GasEstimate(estimate=estimate, gas_limit=gas_limit)

    def get_gas_price(self) -> int:
        """Configured gas price, or the node's current price, in wei"""
        if self.fixed_gas_price is not None:
            return int(self.fixed_gas_price)
        try:
            return int(self.w3.eth.gas_price)
        except Exception as e:
            raise GasEstimationError(f"Failed to fetch gas price: {e}") from e

    def report_provisioned_cost(self, gas_limit: int, gas_price: int):
        """Log the maximum cost of the deployment"""
        cost = Web3.from_wei(gas_limit * gas_price, 'ether')
        logger.info(f"Gas price: {Web3.from_wei(gas_price, 'gwei')} gwei")
        logger.info(f"Max deployment cost: {cost} {self.currency}")

    def report_actual_cost(self, gas_used: Optional[int], effective_gas_price: Optional[int]):
        """Log what the mined transaction actually cost"""
        if gas_used is None or effective_gas_price is None:
            logger.info("Actual deployment cost unavailable (receipt lacks gas data)")
            return

        cost = Web3.from_wei(gas_used * effective_gas_price, 'ether')
        logger.info(f"Gas consumed: {gas_used}")
        logger.info(f"Actual deployment cost: {cost} {self.currency}")
