"""
Post-Deploy Verifier
Reads back initial contract state; advisory only
"""

from typing import Iterable, Optional

from web3 import Web3
from loguru import logger

from .outcome import VerificationCheck, VerificationReport


class PostDeployVerifier:
    """
    Compares the deployed contract's owner and counters with expected defaults
    """

    def __init__(self, owner_function: Optional[str] = "owner", zero_counters: Iterable[str] = ()):
        self.owner_function = owner_function
        self.zero_counters = list(zero_counters)

    def verify(self, contract, expected_owner: str) -> VerificationReport:
        """
        Run all read-only checks

        Args:
            contract: Deployed contract instance
            expected_owner: Address the owner function should return

        Returns:
            VerificationReport (mismatches are logged, never raised)
        """
        logger.info("🔍 Verifying deployment...")
        report = VerificationReport()

        if self.owner_function:
            report.checks.append(self._check(
                contract,
                self.owner_function,
                expected=expected_owner,
                matches=lambda actual: _same_address(actual, expected_owner),
            ))

        for counter in self.zero_counters:
            report.checks.append(self._check(
                contract,
                counter,
                expected=0,
                matches=lambda actual: actual == 0,
            ))

        for check in report.checks:
            if check.passed:
                logger.info(f"{check.name}: {check.actual}")
            elif check.error:
                logger.warning(f"Could not read {check.name}: {check.error}")
            else:
                logger.warning(f"{check.name} is {check.actual}, expected {check.expected}")

        if report.passed:
            logger.success("Initial contract state matches expected defaults")
        else:
            logger.warning(
                f"{len(report.mismatches)} verification check(s) failed; "
                "the contract is deployed, review its configuration"
            )

        return report

    def _check(self, contract, name: str, expected, matches) -> VerificationCheck:
        try:
            actual = getattr(contract.functions, name)().call()
        except Exception as e:
            return VerificationCheck(name=name, expected=expected, error=str(e))

        return VerificationCheck(name=name, expected=expected, actual=actual, passed=matches(actual))


def _same_address(actual, expected: str) -> bool:
    if not isinstance(actual, str) or not Web3.is_address(actual):
        return False
    return Web3.to_checksum_address(actual) == Web3.to_checksum_address(expected)
