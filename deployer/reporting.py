"""
Console Reporting
Human-readable deployment summary and failure report
"""

from typing import Optional

from loguru import logger

from .exceptions import ErrorCategory, RecordWriteError
from .outcome import DeploymentOutcome

# Explorer roots for well-known chain ids
EXPLORERS = {
    1: "https://etherscan.io",
    137: "https://polygonscan.com",
    1116: "https://scan.test2.btcs.network",
    11155111: "https://sepolia.etherscan.io",
}

RULE = "─" * 50


def explorer_url(chain_id: int, address: str, configured: Optional[str] = None) -> str:
    """
    Address page on a block explorer

    Well-known chain ids win over the configured explorer; otherwise a hint.
    """
    base = EXPLORERS.get(chain_id) or configured
    if not base:
        return "Check network explorer"
    return f"{base.rstrip('/')}/address/{address}"


def report_success(outcome: DeploymentOutcome, configured_explorer: Optional[str] = None):
    """Frontend integration summary and next steps"""
    receipt = outcome.receipt
    network = outcome.network

    logger.info("")
    logger.info("🎯 Frontend Integration Information:")
    logger.info(RULE)
    logger.info(f"Contract Address: {receipt.contract_address}")
    logger.info(f"Transaction Hash: {receipt.transaction_hash}")
    logger.info(f"Deployer Address: {outcome.deployer_address}")
    logger.info(f"Network: {outcome.network_label}")
    logger.info(f"Chain ID: {network.chain_id}")
    logger.info(
        f"Explorer URL: {explorer_url(network.chain_id, receipt.contract_address, configured_explorer)}"
    )

    if outcome.verification is not None and not outcome.verification.passed:
        logger.warning("Verification reported mismatches; see warnings above")

    if outcome.smoke_test is not None:
        if outcome.smoke_test.passed:
            logger.info("Smoke test: passed")
        else:
            logger.warning(f"Smoke test: failed ({outcome.smoke_test.error}) - deployment itself succeeded")

    logger.info("")
    logger.info("📋 Next Steps:")
    logger.info("1. Update your .env file with the contract address")
    logger.info("2. Update frontend configuration with the new contract address")
    logger.info("3. Test the contract functions using the provided scripts")
    logger.info("4. Consider verifying the contract on the block explorer")
    logger.info("")
    logger.success("🎉 Deployment Complete!")


def report_failure(outcome: DeploymentOutcome):
    """Print the fatal error with what the operator needs to act on it"""
    error = outcome.error

    logger.error("")
    logger.error("❌ Deployment failed:")
    logger.error(f"{type(error).__name__}: {error}")
    logger.error(f"Stage reached: {outcome.stage.name}")

    if error.category is not None:
        logger.error(f"Category: {error.category.value}")

    transaction_hash = getattr(error, "transaction_hash", None) or outcome.transaction_hash
    if transaction_hash and not isinstance(error, RecordWriteError):
        logger.error(f"Transaction hash: {transaction_hash} (investigate before retrying)")

    if isinstance(error, RecordWriteError):
        logger.error(
            f"The contract IS deployed at {error.contract_address} "
            f"(tx {error.transaction_hash}); only the deployment record failed to save"
        )
    elif outcome.contract_deployed and outcome.receipt is not None:
        logger.error(
            f"The contract IS deployed at {outcome.receipt.contract_address}; "
            "do not re-run without checking it first"
        )
    elif error.category == ErrorCategory.TRANSACTION:
        logger.error("Gas may have been spent. Re-running submits a NEW deployment.")
    elif error.retry_safe:
        logger.error("Nothing was sent to the network; safe to retry after fixing the cause")
    elif error.category == ErrorCategory.ESTIMATION:
        logger.error("Nothing was sent to the network; check constructor arguments and contract code")

    logger.opt(exception=error).error("Full error detail:")
