"""
Deployer Package
Deployment pipeline, signer, verification, record persistence and smoke test
"""

from .exceptions import (
    ArtifactNotFoundError,
    ChainMismatchError,
    ConfigError,
    ConfirmationError,
    DeploymentError,
    ErrorCategory,
    GasEstimationError,
    NetworkResolutionError,
    PreflightError,
    RecordWriteError,
    SignerUnavailableError,
    SmokeTestError,
    SubmissionError,
    TransactionError,
)
from .outcome import DeploymentOutcome, Stage

__all__ = [
    'DeploymentOutcome',
    'Stage',
    'ErrorCategory',
    'DeploymentError',
    'ConfigError',
    'PreflightError',
    'NetworkResolutionError',
    'ChainMismatchError',
    'SignerUnavailableError',
    'ArtifactNotFoundError',
    'GasEstimationError',
    'TransactionError',
    'SubmissionError',
    'ConfirmationError',
    'RecordWriteError',
    'SmokeTestError',
]
