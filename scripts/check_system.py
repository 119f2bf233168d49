"""
System Check Script
Pre-flight checks before deploying; never sends a transaction

Run from the project root: python -m scripts.check_system
"""

import sys
from web3 import Web3
from loguru import logger

from blockchain.contract_manager import ContractArtifact, ContractManager, load_artifact
from blockchain.network import resolve_network
from blockchain.transaction_builder import TransactionBuilder
from deployer.config import DeployConfig, load_config
from deployer.exceptions import DeploymentError
from deployer.signer import LocalSigner, load_signer
from utils.gas_calculator import GasCalculator
from utils.rpc_manager import RPCManager


def check_signer(config: DeployConfig):
    """Check that a deployer key is configured"""
    logger.info("Checking deployer key...")

    try:
        signer = load_signer(config.private_key)
    except DeploymentError as e:
        logger.error(f"  ✗ {e}")
        return None

    logger.success(f"  ✓ Deployer: {signer.address}")
    return signer


def check_artifact(config: DeployConfig):
    """Check that the compiled contract exists"""
    logger.info("Checking contract artifact...")

    try:
        artifact = load_artifact(config.artifacts_dir, config.contract_name)
    except DeploymentError as e:
        logger.error(f"  ✗ {e}")
        return None

    logger.success(f"  ✓ {artifact.contract_name}: {len(artifact.abi)} ABI entries")
    return artifact


def check_rpc_connection(config: DeployConfig):
    """Check RPC connection and chain id"""
    logger.info(f"Checking RPC connection to {config.network.name}...")

    try:
        w3 = RPCManager(config.network).get_web3()
        network = resolve_network(w3)
    except DeploymentError as e:
        logger.error(f"  ✗ {e}")
        return None

    expected = config.network.chain_id
    if expected is not None and network.chain_id != expected:
        logger.error(f"  ✗ Chain ID {network.chain_id}, expected {expected}")
        return None

    logger.success(f"  ✓ Connected (Chain ID: {network.chain_id}, Block: {network.block_number})")
    return w3


def check_wallet_balance(w3: Web3, signer: LocalSigner, config: DeployConfig) -> bool:
    """Check deployer balance"""
    logger.info("Checking deployer balance...")

    try:
        balance = signer.get_balance(w3)
    except Exception as e:
        logger.error(f"  Error checking balance: {e}")
        return False

    logger.info(f"  Balance: {Web3.from_wei(balance, 'ether')} {config.network.currency}")

    if balance == 0:
        logger.error("  ✗ Deployer has zero balance")
        return False

    logger.success("  ✓ Balance available")
    return True


def check_gas_estimate(w3: Web3, signer: LocalSigner, artifact: ContractArtifact, config: DeployConfig) -> bool:
    """Dry-run gas estimation for the deployment"""
    logger.info("Estimating deployment gas...")

    calculator = GasCalculator(w3, gas_price=config.network.gas_price, currency=config.network.currency)

    try:
        constructor = ContractManager(w3, artifact).constructor(*config.constructor_args)
        payload = TransactionBuilder(w3, signer.address).build_deploy_payload(constructor)
        gas = calculator.estimate(payload)
        gas_price = calculator.get_gas_price()
    except DeploymentError as e:
        logger.error(f"  ✗ {e}")
        return False
    except Exception as e:
        logger.error(f"  ✗ Cannot encode constructor: {e}")
        return False

    calculator.report_provisioned_cost(gas.gas_limit, gas_price)

    balance = signer.get_balance(w3)
    if balance < gas.gas_limit * gas_price:
        logger.warning("  ⚠ Balance may not cover the provisioned gas")

    logger.success("  ✓ Deployment would not revert at estimation time")
    return True


def run_checks(config: DeployConfig) -> bool:
    """Run every check; True when all pass"""
    signer = check_signer(config)
    artifact = check_artifact(config)
    w3 = check_rpc_connection(config)

    if signer is None or artifact is None or w3 is None:
        return False

    if not check_wallet_balance(w3, signer, config):
        return False

    return check_gas_estimate(w3, signer, artifact, config)


def main() -> int:
    logger.info("=" * 70)
    logger.info("Deployment pre-flight check")
    logger.info("=" * 70)

    try:
        config = load_config()
    except DeploymentError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if run_checks(config):
        logger.success("✓ All checks passed - ready to deploy")
        return 0

    logger.error("✗ Pre-flight checks failed - fix the issues above before deploying")
    return 1


if __name__ == "__main__":
    sys.exit(main())
