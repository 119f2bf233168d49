"""
Deployment Configuration
Loads config/deploy_config.json and the environment (.env supported)
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

load_dotenv()

DEFAULT_CONFIG_PATH = "config/deploy_config.json"

# Label used when the connected network has no name
DEFAULT_NETWORK_LABEL = "core_testnet2"


@dataclass
class NetworkConfig:
    """Connection settings for one target network"""

    name: str
    rpc_url: str
    chain_id: Optional[int] = None
    gas_price: Optional[int] = None  # wei; None = ask the node
    timeout: int = 120  # seconds the RPC client waits for a receipt
    currency: str = "ETH"
    explorer_url: Optional[str] = None


@dataclass
class DeployConfig:
    """Everything one pipeline run needs to know"""

    network: NetworkConfig
    contract_name: str
    constructor_args: List[Any] = field(default_factory=list)
    network_label: str = DEFAULT_NETWORK_LABEL
    output_dir: Path = Path("deployments")
    artifacts_dir: Path = Path("artifacts")
    private_key: Optional[str] = None

    owner_function: Optional[str] = "owner"
    zero_counters: List[str] = field(default_factory=list)

    smoke_test_enabled: bool = False
    smoke_test_function: Optional[str] = None
    smoke_test_args: List[Any] = field(default_factory=list)
    smoke_test_counter: Optional[str] = None

    report_gas: bool = False


def _parse_network(name: str, data: Dict[str, Any], env: Mapping[str, str]) -> NetworkConfig:
    rpc_url = data.get("rpc_url")
    rpc_url_env = data.get("rpc_url_env")
    if rpc_url_env and env.get(rpc_url_env):
        rpc_url = env[rpc_url_env]

    if not rpc_url:
        raise ConfigError(f"Network '{name}' has no rpc_url")

    chain_id = data.get("chain_id")
    if chain_id is not None and (not isinstance(chain_id, int) or chain_id < 0):
        raise ConfigError(f"Network '{name}' has invalid chain_id: {chain_id!r}")

    return NetworkConfig(
        name=name,
        rpc_url=rpc_url,
        chain_id=chain_id,
        gas_price=data.get("gas_price"),
        timeout=data.get("timeout", 120),
        currency=data.get("currency", "ETH"),
        explorer_url=data.get("explorer_url"),
    )


def load_config(
    config_path: Optional[str] = None,
    network: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> DeployConfig:
    """
    Build the deployment configuration

    Args:
        config_path: JSON config file (defaults to $DEPLOY_CONFIG, then config/deploy_config.json)
        network: Network key (defaults to $DEPLOY_NETWORK, then the file's default_network)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        DeployConfig

    Raises:
        ConfigError: If the file is missing, malformed or names an unknown network
    """
    env = os.environ if environ is None else environ

    if config_path is None:
        config_path = env.get("DEPLOY_CONFIG", DEFAULT_CONFIG_PATH)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file is not valid JSON: {config_path}: {e}") from e

    networks = data.get("networks", {})
    default_network = data.get("default_network", DEFAULT_NETWORK_LABEL)
    network_name = network or env.get("DEPLOY_NETWORK") or default_network

    if network_name not in networks:
        raise ConfigError(
            f"Unknown network '{network_name}'. Available: {', '.join(sorted(networks)) or 'none'}"
        )

    contract = data.get("contract", {})
    if not contract.get("name"):
        raise ConfigError("contract.name must be set in the deployment config")

    verification = data.get("verification", {})
    smoke_test = data.get("smoke_test", {})

    return DeployConfig(
        network=_parse_network(network_name, networks[network_name], env),
        contract_name=contract["name"],
        constructor_args=list(contract.get("constructor_args", [])),
        network_label=network_name,
        output_dir=Path(data.get("output_dir", "deployments")),
        artifacts_dir=Path(data.get("artifacts_dir", "artifacts")),
        private_key=env.get("PRIVATE_KEY") or None,
        owner_function=verification.get("owner_function", "owner"),
        zero_counters=list(verification.get("zero_counters", [])),
        smoke_test_enabled=env.get("TEST_DEPLOYMENT") == "true",
        smoke_test_function=smoke_test.get("function"),
        smoke_test_args=list(smoke_test.get("args", [])),
        smoke_test_counter=smoke_test.get("counter"),
        report_gas=env.get("REPORT_GAS") is not None,
    )
