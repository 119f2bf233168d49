"""
Deployment Outcome
Typed results returned by each pipeline stage and by the pipeline itself
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, List, Optional

from .exceptions import DeploymentError, ErrorCategory


class Stage(IntEnum):
    """Pipeline states, in execution order"""

    INIT = 0
    NETWORK_RESOLVED = 1
    GAS_ESTIMATED = 2
    SUBMITTED = 3
    CONFIRMED = 4
    VERIFIED = 5
    RECORD_WRITTEN = 6
    SMOKE_TESTED = 7
    DONE = 8


@dataclass
class GasEstimate:
    """Node estimate and the buffered limit actually provisioned"""

    estimate: int
    gas_limit: int


@dataclass
class DeploymentReceipt:
    """What the executor learned from the mined deployment transaction"""

    contract_address: str
    transaction_hash: str
    block_number: Optional[int]
    gas_limit: int
    gas_used: Optional[int] = None
    effective_gas_price: Optional[int] = None


@dataclass
class VerificationCheck:
    name: str
    expected: Any
    actual: Any = None
    passed: bool = False
    error: Optional[str] = None


@dataclass
class VerificationReport:
    """Advisory read-back of initial contract state"""

    checks: List[VerificationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def mismatches(self) -> List[VerificationCheck]:
        return [check for check in self.checks if not check.passed]


@dataclass
class SmokeTestResult:
    passed: bool
    transaction_hash: Optional[str] = None
    counter_before: Optional[int] = None
    counter_after: Optional[int] = None
    error: Optional[str] = None


@dataclass
class DeploymentOutcome:
    """
    Result of one pipeline run

    A fatal error is carried in `error`; verification mismatches and smoke
    test failures are reported separately and never make the run fail.
    """

    stage: Stage = Stage.INIT
    error: Optional[DeploymentError] = None
    network: Optional[Any] = None
    network_label: Optional[str] = None
    deployer_address: Optional[str] = None
    gas: Optional[GasEstimate] = None
    transaction_hash: Optional[str] = None
    receipt: Optional[DeploymentReceipt] = None
    verification: Optional[VerificationReport] = None
    record: Optional[Any] = None
    record_path: Optional[Any] = None
    abi_path: Optional[Any] = None
    smoke_test: Optional[SmokeTestResult] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.stage == Stage.DONE

    @property
    def contract_deployed(self) -> bool:
        return self.stage >= Stage.CONFIRMED

    @property
    def error_category(self) -> Optional[ErrorCategory]:
        if self.error is None:
            return None
        return self.error.category

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1
