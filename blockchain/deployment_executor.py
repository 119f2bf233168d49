"""
Deployment Executor
Signs, broadcasts and confirms the contract creation transaction
"""

from typing import Dict

from web3 import Web3
from loguru import logger

from deployer.exceptions import ConfirmationError, SubmissionError
from deployer.outcome import DeploymentReceipt

from .transaction_builder import TransactionBuilder


class DeploymentExecutor:
    """
    Submits exactly one deployment transaction per call to submit()

    There is no retry: a failed submission or confirmation is reported
    and the operator decides whether to run again.
    """

    def __init__(self, w3: Web3, signer, confirmation_timeout: int = 120):
        """
        Initialize Deployment Executor

        Args:
            w3: Web3 instance
            signer: Signer with .address and .sign_transaction()
            confirmation_timeout: Seconds the RPC client waits for the receipt
        """
        self.w3 = w3
        self.signer = signer
        self.confirmation_timeout = confirmation_timeout
        self.tx_builder = TransactionBuilder(w3, signer.address)

    def submit(self, payload: Dict, gas_limit: int, gas_price: int, chain_id: int) -> str:
        """
        Sign and broadcast the deployment transaction

        Args:
            payload: Unsent deployment payload (from, data)
            gas_limit: Buffered gas limit
            gas_price: Gas price in wei
            chain_id: Target chain id

        Returns:
            Transaction hash (0x-prefixed hex)

        Raises:
            SubmissionError: If building, signing or broadcasting fails
        """
        try:
            transaction = self.tx_builder.build_deploy_tx(payload, gas_limit, gas_price, chain_id)

            logger.info("Signing transaction...")
            signed_tx = self.signer.sign_transaction(transaction)

            logger.info("Sending deployment transaction...")
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except Exception as e:
            raise SubmissionError(f"Failed to submit deployment transaction: {e}") from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash_hex}")
        return tx_hash_hex

    def wait_for_confirmation(self, tx_hash: str, gas_limit: int) -> DeploymentReceipt:
        """
        Block until the deployment transaction is mined

        Args:
            tx_hash: Hash returned by submit()
            gas_limit: Gas limit the transaction was sent with

        Returns:
            DeploymentReceipt

        Raises:
            ConfirmationError: On timeout, RPC failure, revert or missing contract address
        """
        logger.info("⏳ Waiting for deployment transaction to be mined...")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.confirmation_timeout
            )
        except Exception as e:
            raise ConfirmationError(
                f"Deployment transaction {tx_hash} was not confirmed: {e}",
                transaction_hash=tx_hash
            ) from e

        status = receipt.get('status')
        if status is None:
            raise ConfirmationError(
                f"Receipt for {tx_hash} has no status field; cannot tell whether the deployment succeeded",
                transaction_hash=tx_hash
            )

        if status != 1:
            raise ConfirmationError(
                f"Deployment transaction {tx_hash} reverted in block {receipt.get('blockNumber')}",
                transaction_hash=tx_hash
            )

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise ConfirmationError(
                f"Receipt for {tx_hash} has no contract address",
                transaction_hash=tx_hash
            )

        return DeploymentReceipt(
            contract_address=Web3.to_checksum_address(contract_address),
            transaction_hash=tx_hash,
            block_number=receipt.get('blockNumber'),
            gas_limit=gas_limit,
            gas_used=receipt.get('gasUsed'),
            effective_gas_price=receipt.get('effectiveGasPrice'),
        )
