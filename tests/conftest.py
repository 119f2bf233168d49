"""Shared pytest fixtures: a mocked Web3 node, signer, artifact and config."""

import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from loguru import logger

from blockchain.contract_manager import ContractArtifact
from deployer.config import DeployConfig, NetworkConfig
from deployer.signer import LocalSigner

# Hardhat's well-known development account #0
DEPLOYER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEPLOYER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TX_HASH = bytes.fromhex("ab" * 32)
TX_HASH_HEX = "0x" + "ab" * 32
SMOKE_TX_HASH = bytes.fromhex("cd" * 32)

CHAIN_ID = 1116
GAS_ESTIMATE = 2_500_000
GAS_PRICE = 20_000_000_000
DEPLOY_BLOCK = 4243

CONSTRUCTOR_DATA = "0x6080604052348015600f57600080fd5b50"

SAMPLE_ABI = [
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "productCounter",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "orderCounter",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "string", "name": "_name", "type": "string"},
            {"internalType": "string", "name": "_description", "type": "string"},
            {"internalType": "uint256", "name": "_price", "type": "uint256"},
            {"internalType": "uint256", "name": "_stock", "type": "uint256"},
            {"internalType": "string", "name": "_ipfsHash", "type": "string"},
        ],
        "name": "listProduct",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

SMOKE_ARGS = [
    "Test Product",
    "This is a test product for deployment verification",
    100000000000000000,
    10,
    "QmTestHash",
]


def fixed_clock() -> datetime:
    return datetime(2026, 10, 19, 12, 0, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def deployed_contract():
    """Mock contract instance at CONTRACT_ADDRESS with default initial state"""
    contract = MagicMock()
    contract.address = CONTRACT_ADDRESS
    contract.functions.owner.return_value.call.return_value = DEPLOYER_ADDRESS
    contract.functions.productCounter.return_value.call.return_value = 0
    contract.functions.orderCounter.return_value.call.return_value = 0
    contract.functions.listProduct.return_value.build_transaction.side_effect = lambda params: {
        **params,
        "to": CONTRACT_ADDRESS,
        "data": "0x12345678",
        "gas": 250_000,
        "value": 0,
    }
    return contract


@pytest.fixture
def contract_factory():
    """Mock contract factory whose constructor encodes CONSTRUCTOR_DATA"""
    factory = MagicMock()
    factory.constructor.return_value.data_in_transaction = CONSTRUCTOR_DATA
    return factory


@pytest.fixture
def w3(deployed_contract, contract_factory):
    """Mock Web3 connected to chain 1116 where deployment succeeds"""
    w3 = MagicMock()
    w3.eth.chain_id = CHAIN_ID
    w3.eth.block_number = DEPLOY_BLOCK - 1
    w3.eth.gas_price = GAS_PRICE
    w3.eth.get_balance.return_value = 5 * 10**18
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.estimate_gas.return_value = GAS_ESTIMATE
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        "status": 1,
        "contractAddress": CONTRACT_ADDRESS,
        "blockNumber": DEPLOY_BLOCK,
        "gasUsed": 2_100_000,
        "effectiveGasPrice": GAS_PRICE,
        "transactionHash": TX_HASH,
    }

    def contract(address=None, abi=None, bytecode=None):
        if address is not None:
            return deployed_contract
        return contract_factory

    w3.eth.contract.side_effect = contract
    return w3


@pytest.fixture
def signer() -> LocalSigner:
    return LocalSigner(DEPLOYER_KEY)


@pytest.fixture
def artifact() -> ContractArtifact:
    return ContractArtifact(
        contract_name="DecentralizedAmazonPlatform",
        abi=SAMPLE_ABI,
        bytecode=CONSTRUCTOR_DATA,
    )


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Hardhat-style artifacts directory holding the sample contract"""
    root = tmp_path / "artifacts"
    contract_dir = root / "contracts" / "DecentralizedAmazonPlatform.sol"
    contract_dir.mkdir(parents=True)
    with open(contract_dir / "DecentralizedAmazonPlatform.json", "w") as f:
        json.dump(
            {
                "contractName": "DecentralizedAmazonPlatform",
                "abi": SAMPLE_ABI,
                "bytecode": CONSTRUCTOR_DATA,
            },
            f,
            indent=2,
        )
    return root


@pytest.fixture
def network_config() -> NetworkConfig:
    return NetworkConfig(
        name="core_testnet2",
        rpc_url="http://mock-rpc",
        chain_id=CHAIN_ID,
        gas_price=GAS_PRICE,
        timeout=60,
        currency="CORE",
        explorer_url="https://scan.test2.btcs.network",
    )


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "deployments"


@pytest.fixture
def deploy_config(network_config: NetworkConfig, output_dir: Path, artifacts_dir: Path) -> DeployConfig:
    return DeployConfig(
        network=network_config,
        contract_name="DecentralizedAmazonPlatform",
        network_label="core_testnet2",
        output_dir=output_dir,
        artifacts_dir=artifacts_dir,
        private_key=DEPLOYER_KEY,
        owner_function="owner",
        zero_counters=["productCounter", "orderCounter"],
        smoke_test_enabled=False,
        smoke_test_function="listProduct",
        smoke_test_args=list(SMOKE_ARGS),
        smoke_test_counter="productCounter",
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Deployment config JSON with two networks"""
    path = tmp_path / "deploy_config.json"
    with open(path, "w") as f:
        json.dump(
            {
                "default_network": "core_testnet2",
                "output_dir": "out",
                "artifacts_dir": "build",
                "contract": {"name": "DecentralizedAmazonPlatform", "constructor_args": []},
                "verification": {
                    "owner_function": "owner",
                    "zero_counters": ["productCounter", "orderCounter"],
                },
                "smoke_test": {
                    "function": "listProduct",
                    "args": SMOKE_ARGS,
                    "counter": "productCounter",
                },
                "networks": {
                    "localhost": {"rpc_url": "http://127.0.0.1:8545", "chain_id": 1337},
                    "core_testnet2": {
                        "rpc_url": "https://rpc.test2.btcs.network",
                        "rpc_url_env": "CORE_TESTNET2_RPC_URL",
                        "chain_id": 1116,
                        "gas_price": 20000000000,
                        "timeout": 60,
                        "currency": "CORE",
                        "explorer_url": "https://scan.test2.btcs.network",
                    },
                },
            },
            f,
        )
    return path


@pytest.fixture
def messages():
    """Collect log messages emitted during the test"""
    captured = []
    handler_id = logger.add(lambda message: captured.append(message.record["message"]), level="DEBUG")
    yield captured
    logger.remove(handler_id)
