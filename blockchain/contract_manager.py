"""
Contract Manager
Loads compiled contract artifacts and creates contract handles
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from web3 import Web3
from loguru import logger

from deployer.exceptions import ArtifactNotFoundError


@dataclass
class ContractArtifact:
    """Build output for one contract: ABI plus creation bytecode"""

    contract_name: str
    abi: List[Dict[str, Any]]
    bytecode: str


def artifact_path(artifacts_dir: Union[Path, str], contract_name: str) -> Path:
    """Hardhat layout: artifacts/contracts/<Name>.sol/<Name>.json"""
    return Path(artifacts_dir) / "contracts" / f"{contract_name}.sol" / f"{contract_name}.json"


def load_artifact(artifacts_dir: Union[Path, str], contract_name: str) -> ContractArtifact:
    """
    Load a compiled contract artifact

    Args:
        artifacts_dir: Build output directory
        contract_name: Contract to load

    Returns:
        ContractArtifact

    Raises:
        ArtifactNotFoundError: If the artifact is missing, unreadable or has no bytecode
    """
    path = artifact_path(artifacts_dir, contract_name)

    if not path.exists():
        raise ArtifactNotFoundError(
            f"Contract artifact not found: {path} (run 'npx hardhat compile' first)"
        )

    try:
        with open(path, 'r', encoding='utf-8') as f:
            contract_json = json.load(f)
        abi = contract_json['abi']
        bytecode = contract_json['bytecode']
    except (OSError, json.JSONDecodeError, KeyError) as e:
        raise ArtifactNotFoundError(f"Invalid contract artifact {path}: {e}") from e

    if not bytecode or bytecode == "0x":
        raise ArtifactNotFoundError(
            f"{contract_name} has no creation bytecode (abstract contract or interface?)"
        )

    logger.debug(f"Loaded artifact for {contract_name} from {path}")
    return ContractArtifact(
        contract_name=contract_json.get('contractName', contract_name),
        abi=abi,
        bytecode=bytecode,
    )


class ContractManager:
    """
    Creates contract objects for one artifact
    """

    def __init__(self, w3: Web3, artifact: ContractArtifact):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            artifact: Compiled contract
        """
        self.w3 = w3
        self.artifact = artifact

    def constructor(self, *args):
        """Unsent constructor call for the artifact"""
        factory = self.w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)
        return factory.constructor(*args)

    def at(self, address: str):
        """Contract instance bound to a deployed address"""
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=self.artifact.abi
        )
