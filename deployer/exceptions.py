"""
Deployment Exceptions
Error taxonomy for the deployment pipeline
"""

from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    """Failure categories, each with its own remediation path"""

    PREFLIGHT = "preflight"
    ESTIMATION = "estimation"
    TRANSACTION = "transaction"
    PERSISTENCE = "persistence"
    SMOKE_TEST = "smoke_test"


class DeploymentError(Exception):
    """Base exception for deployment failures."""

    category: Optional[ErrorCategory] = None

    # True when nothing has touched the chain yet and re-running is harmless
    retry_safe = False


class ConfigError(DeploymentError, ValueError):
    """Raised when the deployment configuration is missing or invalid."""

    category = ErrorCategory.PREFLIGHT
    retry_safe = True


class PreflightError(DeploymentError):
    """Raised before anything is sent to the network."""

    category = ErrorCategory.PREFLIGHT
    retry_safe = True


class NetworkResolutionError(PreflightError, ConnectionError):
    """Raised when the network identity cannot be queried."""

    pass


class ChainMismatchError(PreflightError, ValueError):
    """Raised when the connected chain is not the one configured."""

    pass


class SignerUnavailableError(PreflightError, ValueError):
    """Raised when no usable signing key is configured."""

    pass


class ArtifactNotFoundError(PreflightError, FileNotFoundError):
    """Raised when the compiled contract artifact is missing or unreadable."""

    pass


class GasEstimationError(DeploymentError):
    """Raised when the node cannot estimate the deployment (e.g. it would revert)."""

    category = ErrorCategory.ESTIMATION


class TransactionError(DeploymentError):
    """Raised once a transaction may have reached the network."""

    category = ErrorCategory.TRANSACTION

    def __init__(self, message: str, transaction_hash: Optional[str] = None):
        super().__init__(message)
        self.transaction_hash = transaction_hash


class SubmissionError(TransactionError):
    """Raised when signing or broadcasting the deployment transaction fails."""

    pass


class ConfirmationError(TransactionError):
    """Raised when a broadcast transaction is not confirmed successfully."""

    pass


class RecordWriteError(DeploymentError, OSError):
    """Raised when deployment artifacts cannot be saved. The contract is already live."""

    category = ErrorCategory.PERSISTENCE

    def __init__(
        self,
        message: str,
        contract_address: Optional[str] = None,
        transaction_hash: Optional[str] = None,
    ):
        super().__init__(message)
        self.contract_address = contract_address
        self.transaction_hash = transaction_hash


class SmokeTestError(DeploymentError):
    """Raised inside the smoke test runner; never escapes it."""

    category = ErrorCategory.SMOKE_TEST
