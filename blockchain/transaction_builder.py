"""
Transaction Builder
Constructs deployment and contract-call transactions for the deployer
"""

from typing import Dict

from web3 import Web3


class TransactionBuilder:
    """
    Builds transaction dicts signed by a single sender
    """

    def __init__(self, w3: Web3, sender: str):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            sender: Address that signs and pays
        """
        self.w3 = w3
        self.sender = sender

    def build_deploy_payload(self, constructor) -> Dict:
        """
        Unsent deployment payload used for gas estimation

        Args:
            constructor: Contract constructor call (bytecode + encoded args)

        Returns:
            Transaction dict with from and data only
        """
        return {
            'from': self.sender,
            'data': constructor.data_in_transaction,
        }

    def next_nonce(self) -> int:
        """Next nonce for the sender, counting pending transactions"""
        return self.w3.eth.get_transaction_count(self.sender, 'pending')

    def build_deploy_tx(
        self,
        payload: Dict,
        gas_limit: int,
        gas_price: int,
        chain_id: int
    ) -> Dict:
        """
        Complete the deployment payload for signing

        Args:
            payload: Result of build_deploy_payload
            gas_limit: Buffered gas limit
            gas_price: Gas price in wei
            chain_id: Chain the transaction is valid on

        Returns:
            Transaction dict
        """
        return {
            **payload,
            'nonce': self.next_nonce(),
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': chain_id,
            'value': 0,
        }

    def build_call_tx(self, contract_function, gas_price: int, chain_id: int) -> Dict:
        """
        Build a state-changing contract call; the node estimates gas

        Args:
            contract_function: Bound contract function, e.g. contract.functions.listProduct(...)
            gas_price: Gas price in wei
            chain_id: Chain the transaction is valid on

        Returns:
            Transaction dict
        """
        return contract_function.build_transaction({
            'from': self.sender,
            'nonce': self.next_nonce(),
            'gasPrice': gas_price,
            'chainId': chain_id,
        })
