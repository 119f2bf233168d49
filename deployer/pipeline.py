"""
Deployment Pipeline
Orchestrates one deployment: network → gas → submit → confirm → verify → record → smoke test
"""

from datetime import datetime
from typing import Callable, Optional

from web3 import Web3
from loguru import logger

from blockchain.contract_manager import ContractArtifact, ContractManager, load_artifact
from blockchain.deployment_executor import DeploymentExecutor
from blockchain.network import resolve_network
from utils.gas_calculator import GasCalculator
from utils.rpc_manager import RPCManager

from .config import DeployConfig
from .exceptions import (
    ChainMismatchError,
    DeploymentError,
    GasEstimationError,
    NetworkResolutionError,
)
from .outcome import DeploymentOutcome, Stage
from .record_writer import DeploymentRecordWriter, utc_now
from .signer import load_signer
from .smoke_test import SmokeTestRunner
from .verifier import PostDeployVerifier


class DeploymentPipeline:
    """
    Runs the deployment state machine once

    run() returns a DeploymentOutcome instead of raising, so callers can tell
    "contract not deployed" apart from "contract deployed, metadata suspect".
    """

    def __init__(
        self,
        w3: Web3,
        signer,
        artifact: ContractArtifact,
        config: DeployConfig,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize Deployment Pipeline

        Args:
            w3: Web3 instance connected to the target network
            signer: Deployer signer (.address, .sign_transaction)
            artifact: Compiled contract to deploy
            config: Deployment configuration
            clock: Timestamp source for the deployment record
        """
        self.w3 = w3
        self.signer = signer
        self.artifact = artifact
        self.config = config

        network = config.network
        self.contract_manager = ContractManager(w3, artifact)
        self.gas_calculator = GasCalculator(w3, gas_price=network.gas_price, currency=network.currency)
        self.executor = DeploymentExecutor(w3, signer, confirmation_timeout=network.timeout)
        self.verifier = PostDeployVerifier(config.owner_function, config.zero_counters)
        self.record_writer = DeploymentRecordWriter(config.output_dir, clock=clock)

    @classmethod
    def from_config(cls, config: DeployConfig) -> "DeploymentPipeline":
        """
        Build the collaborators named by the configuration

        Raises:
            SignerUnavailableError, ArtifactNotFoundError, NetworkResolutionError
        """
        signer = load_signer(config.private_key)
        artifact = load_artifact(config.artifacts_dir, config.contract_name)
        w3 = RPCManager(config.network).get_web3()
        return cls(w3, signer, artifact, config)

    def run(self) -> DeploymentOutcome:
        """Execute every stage in order, stopping at the first fatal error"""
        outcome = DeploymentOutcome(deployer_address=self.signer.address)

        logger.info(f"🚀 Starting deployment of {self.artifact.contract_name}...")

        try:
            self._run_stages(outcome)
        except DeploymentError as e:
            outcome.error = e
            logger.error(f"Deployment stopped after {outcome.stage.name}: {e}")
        except Exception as e:
            error = DeploymentError(f"Unexpected error after {outcome.stage.name}: {e}")
            error.__cause__ = e
            outcome.error = error
            logger.opt(exception=e).error(f"Deployment stopped after {outcome.stage.name}: {e}")

        return outcome

    def _run_stages(self, outcome: DeploymentOutcome):
        config = self.config

        # Network context
        logger.info("📝 Deployment Details:")
        logger.info(f"Deploying contracts with account: {self.signer.address}")

        network = resolve_network(self.w3)
        self._check_chain(network.chain_id)
        outcome.network = network
        outcome.network_label = network.label(config.network_label)
        outcome.stage = Stage.NETWORK_RESOLVED

        try:
            balance = self.signer.get_balance(self.w3)
        except Exception as e:
            raise NetworkResolutionError(f"Failed to query deployer balance: {e}") from e

        logger.info(f"Account balance: {Web3.from_wei(balance, 'ether')} {config.network.currency}")
        if balance == 0:
            logger.warning(f"Deployer {self.signer.address} has zero balance; deployment will likely fail")

        # Gas
        logger.info(f"📦 Deploying {self.artifact.contract_name} contract...")
        try:
            constructor = self.contract_manager.constructor(*config.constructor_args)
            payload = self.executor.tx_builder.build_deploy_payload(constructor)
        except Exception as e:
            raise GasEstimationError(f"Cannot encode {self.artifact.contract_name} constructor: {e}") from e

        outcome.gas = self.gas_calculator.estimate(payload)
        gas_price = self.gas_calculator.get_gas_price()
        if config.report_gas:
            self.gas_calculator.report_provisioned_cost(outcome.gas.gas_limit, gas_price)
        outcome.stage = Stage.GAS_ESTIMATED

        # Submission and confirmation
        outcome.transaction_hash = self.executor.submit(
            payload, outcome.gas.gas_limit, gas_price, network.chain_id
        )
        outcome.stage = Stage.SUBMITTED

        receipt = self.executor.wait_for_confirmation(outcome.transaction_hash, outcome.gas.gas_limit)
        outcome.receipt = receipt
        outcome.stage = Stage.CONFIRMED

        logger.success("✅ Deployment Successful!")
        logger.success(f"Contract Address: {receipt.contract_address}")
        logger.success(f"Transaction Hash: {receipt.transaction_hash}")
        logger.info(f"Gas Limit: {receipt.gas_limit}")
        logger.info(f"Deployer Address: {self.signer.address}")
        if config.report_gas:
            self.gas_calculator.report_actual_cost(receipt.gas_used, receipt.effective_gas_price)

        # Verification (advisory)
        contract = self.contract_manager.at(receipt.contract_address)
        outcome.verification = self.verifier.verify(contract, self.signer.address)
        outcome.stage = Stage.VERIFIED

        # Persistence
        outcome.record = self.record_writer.build_record(
            network_label=outcome.network_label,
            chain_id=network.chain_id,
            contract_address=receipt.contract_address,
            deployer_address=self.signer.address,
            transaction_hash=receipt.transaction_hash,
            block_number=receipt.block_number,
            gas_limit=receipt.gas_limit,
        )
        outcome.record_path, outcome.abi_path = self.record_writer.write(
            outcome.record, self.artifact.contract_name, self.artifact.abi
        )
        outcome.stage = Stage.RECORD_WRITTEN

        # Smoke test (optional, never fatal)
        if config.smoke_test_enabled and config.smoke_test_function:
            runner = SmokeTestRunner(
                self.w3,
                self.signer,
                config.smoke_test_function,
                args=config.smoke_test_args,
                counter=config.smoke_test_counter,
                gas_price=gas_price,
                chain_id=network.chain_id,
                confirmation_timeout=config.network.timeout,
            )
            outcome.smoke_test = runner.run(contract)
            outcome.stage = Stage.SMOKE_TESTED

        outcome.stage = Stage.DONE

    def _check_chain(self, chain_id: int):
        expected = self.config.network.chain_id
        if expected is not None and chain_id != expected:
            raise ChainMismatchError(
                f"Connected to chain {chain_id} but network '{self.config.network.name}' "
                f"is configured for chain {expected}"
            )


def run_deployment(config: DeployConfig, pipeline: Optional[DeploymentPipeline] = None) -> DeploymentOutcome:
    """
    Build the pipeline from configuration and run it

    Failures while building collaborators are returned as an INIT-stage outcome.
    """
    if pipeline is None:
        try:
            pipeline = DeploymentPipeline.from_config(config)
        except DeploymentError as e:
            return DeploymentOutcome(error=e)

    return pipeline.run()
