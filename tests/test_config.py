"""
Configuration Tests
"""

import json
from pathlib import Path

import pytest

from deployer.config import DEFAULT_NETWORK_LABEL, load_config
from deployer.exceptions import ConfigError

from conftest import DEPLOYER_KEY, SMOKE_ARGS


class TestLoadConfig:

    def test_default_network(self, config_file):
        config = load_config(str(config_file), environ={})

        assert config.network.name == "core_testnet2"
        assert config.network.chain_id == 1116
        assert config.network.gas_price == 20000000000
        assert config.network.timeout == 60
        assert config.network.currency == "CORE"
        assert config.network_label == "core_testnet2"
        assert config.contract_name == "DecentralizedAmazonPlatform"
        assert config.output_dir == Path("out")
        assert config.artifacts_dir == Path("build")

    def test_network_argument_wins(self, config_file):
        config = load_config(str(config_file), network="localhost", environ={"DEPLOY_NETWORK": "core_testnet2"})

        assert config.network.name == "localhost"
        assert config.network.chain_id == 1337
        assert config.network.gas_price is None
        assert config.network.currency == "ETH"

    def test_network_from_environment(self, config_file):
        config = load_config(str(config_file), environ={"DEPLOY_NETWORK": "localhost"})

        assert config.network.rpc_url == "http://127.0.0.1:8545"

    def test_rpc_url_override(self, config_file):
        config = load_config(str(config_file), environ={"CORE_TESTNET2_RPC_URL": "https://private-node"})

        assert config.network.rpc_url == "https://private-node"

    def test_config_path_from_environment(self, config_file):
        config = load_config(environ={"DEPLOY_CONFIG": str(config_file)})

        assert config.contract_name == "DecentralizedAmazonPlatform"

    def test_private_key(self, config_file):
        assert load_config(str(config_file), environ={"PRIVATE_KEY": DEPLOYER_KEY}).private_key == DEPLOYER_KEY
        assert load_config(str(config_file), environ={"PRIVATE_KEY": ""}).private_key is None

    def test_verification_and_smoke_settings(self, config_file):
        config = load_config(str(config_file), environ={})

        assert config.owner_function == "owner"
        assert config.zero_counters == ["productCounter", "orderCounter"]
        assert config.smoke_test_function == "listProduct"
        assert config.smoke_test_args == SMOKE_ARGS
        assert config.smoke_test_counter == "productCounter"


class TestEnvironmentFlags:

    @pytest.mark.parametrize("value,expected", [
        ("true", True),
        ("TRUE", False),
        ("1", False),
        ("", False),
    ])
    def test_smoke_test_requires_literal_true(self, config_file, value, expected):
        config = load_config(str(config_file), environ={"TEST_DEPLOYMENT": value})

        assert config.smoke_test_enabled is expected

    def test_smoke_test_off_by_default(self, config_file):
        assert not load_config(str(config_file), environ={}).smoke_test_enabled

    def test_report_gas_any_value(self, config_file):
        assert load_config(str(config_file), environ={"REPORT_GAS": ""}).report_gas
        assert not load_config(str(config_file), environ={}).report_gas


class TestInvalidConfig:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(tmp_path / "missing.json"), environ={})

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{")

        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(str(path), environ={})

    def test_unknown_network(self, config_file):
        with pytest.raises(ConfigError, match="Unknown network 'goerli'"):
            load_config(str(config_file), network="goerli", environ={})

    def test_missing_contract_name(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "networks": {DEFAULT_NETWORK_LABEL: {"rpc_url": "http://localhost:8545"}},
        }))

        with pytest.raises(ConfigError, match="contract.name"):
            load_config(str(path), environ={})

    def test_negative_chain_id(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "default_network": "dev",
            "contract": {"name": "Token"},
            "networks": {"dev": {"rpc_url": "http://localhost:8545", "chain_id": -5}},
        }))

        with pytest.raises(ConfigError, match="invalid chain_id"):
            load_config(str(path), environ={})

    def test_config_error_is_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(str(tmp_path / "missing.json"), environ={})
