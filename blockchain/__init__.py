"""
Blockchain Interaction Package
Handles network identity, contract artifacts, transaction building and deployment
"""

from .contract_manager import ContractArtifact, ContractManager, load_artifact
from .deployment_executor import DeploymentExecutor
from .network import NetworkContext, resolve_network
from .transaction_builder import TransactionBuilder

__all__ = [
    'ContractArtifact',
    'ContractManager',
    'load_artifact',
    'DeploymentExecutor',
    'NetworkContext',
    'resolve_network',
    'TransactionBuilder',
]
