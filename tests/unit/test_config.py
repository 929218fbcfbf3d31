"""Unit tests for environment-driven configuration loading."""

from pathlib import Path
from typing import Dict
from unittest import mock

import pytest

from rootstock_deployments import config as config_module
from rootstock_deployments.config import load_config, read_environment, validate_environment
from rootstock_deployments.exceptions import ConfigurationError, MissingConfigurationError


class TestRequiredVariables:
    """Test fail-fast validation of required variables."""

    def test_empty_testnet_rpc_url_raises(self):
        """Test that an empty testnet RPC URL is reported as missing."""
        env = {"RSK_TESTNET_RPC_URL": "", "PRIVATE_KEY": "k", "API_KEY": "a"}

        with pytest.raises(MissingConfigurationError) as exc_info:
            load_config(env)

        assert "testnet RPC URL" in str(exc_info.value)
        assert exc_info.value.variable == "RSK_TESTNET_RPC_URL"

    @pytest.mark.parametrize(
        "variable,description",
        [
            ("RSK_TESTNET_RPC_URL", "testnet RPC URL"),
            ("PRIVATE_KEY", "private key"),
            ("API_KEY", "API key"),
        ],
    )
    def test_each_absent_variable_is_named(
        self, valid_env: Dict[str, str], variable: str, description: str
    ):
        """Test that the error identifies exactly which variable is missing."""
        del valid_env[variable]

        with pytest.raises(MissingConfigurationError) as exc_info:
            load_config(valid_env)

        assert exc_info.value.variable == variable
        assert exc_info.value.description == description
        assert variable in str(exc_info.value)

    def test_whitespace_only_value_counts_as_missing(self, valid_env: Dict[str, str]):
        """Test that whitespace-only values are rejected."""
        valid_env["API_KEY"] = "   "

        with pytest.raises(MissingConfigurationError) as exc_info:
            load_config(valid_env)

        assert exc_info.value.variable == "API_KEY"

    def test_first_missing_variable_is_reported(self):
        """Test that validation reports variables in declaration order."""
        with pytest.raises(MissingConfigurationError) as exc_info:
            load_config({})

        assert exc_info.value.variable == "RSK_TESTNET_RPC_URL"

    def test_no_profile_built_when_variable_missing(self, valid_env: Dict[str, str]):
        """Test that no network table is constructed before validation passes."""
        del valid_env["PRIVATE_KEY"]

        with mock.patch.object(config_module, "NetworkProfile") as profile_cls:
            with pytest.raises(MissingConfigurationError):
                load_config(valid_env)

        profile_cls.assert_not_called()

    def test_missing_configuration_is_value_error(self):
        """Test that MissingConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            load_config({})

    def test_validate_environment_returns_stripped_values(self, valid_env: Dict[str, str]):
        """Test that validated values are stripped of surrounding whitespace."""
        valid_env["API_KEY"] = "  key  "

        required = validate_environment(valid_env)

        assert required["API_KEY"] == "key"
        assert set(required) == {"RSK_TESTNET_RPC_URL", "PRIVATE_KEY", "API_KEY"}


class TestLoadedConfig:
    """Test the configuration produced from a valid environment."""

    def test_testnet_profile(self):
        """Test the testnet profile parameters."""
        env = {"RSK_TESTNET_RPC_URL": "http://x", "PRIVATE_KEY": "k", "API_KEY": "a"}

        cfg = load_config(env)

        testnet = cfg.networks["rskTestnet"]
        assert testnet.chain_id == 31
        assert testnet.gas_price == 60000000
        assert testnet.rpc_url == "http://x"
        assert testnet.signing_key == "k"
        assert testnet.live is True

    def test_mainnet_is_optional(self, valid_env: Dict[str, str]):
        """Test that the reserved mainnet URL may be absent."""
        cfg = load_config(valid_env)

        assert "rskMainnet" not in cfg.networks
        assert "rskmainnet" not in cfg.verification

    def test_empty_mainnet_url_is_not_an_error(self, valid_env: Dict[str, str]):
        """Test that an empty reserved value is treated as absent."""
        valid_env["RSK_MAINNET_RPC_URL"] = ""

        cfg = load_config(valid_env)

        assert "rskMainnet" not in cfg.networks

    def test_mainnet_enabled_when_configured(self, valid_env: Dict[str, str]):
        """Test that setting the mainnet URL adds mainnet profiles."""
        valid_env["RSK_MAINNET_RPC_URL"] = "http://mainnet.example.com"

        cfg = load_config(valid_env)

        mainnet = cfg.networks["rskMainnet"]
        assert mainnet.chain_id == 30
        assert mainnet.gas_price == 60000000
        assert cfg.verification["rskmainnet"].api_base_url == "https://rootstock.blockscout.com/api/"
        assert cfg.verification["rskmainnet"].chain_id == 30

    def test_localhost_is_always_available(self, valid_env: Dict[str, str]):
        """Test that the local development network needs no configuration."""
        cfg = load_config(valid_env)

        local = cfg.networks["localhost"]
        assert local.rpc_url == "http://127.0.0.1:8545"
        assert local.live is False
        assert local.signing_key is None

    def test_testnet_verification_profile(self, valid_env: Dict[str, str]):
        """Test the Blockscout endpoints for testnet."""
        cfg = load_config(valid_env)

        profile = cfg.verification["rsktestnet"]
        assert profile.chain_id == 31
        assert profile.api_base_url == "https://rootstock-testnet.blockscout.com/api/"
        assert profile.explorer_url == "https://rootstock-testnet.blockscout.com/"
        assert profile.api_key == "blockscout-any-key"

    def test_compiler_pin(self, valid_env: Dict[str, str]):
        """Test the pinned Solidity version."""
        assert load_config(valid_env).solidity == "0.8.27"
        assert load_config(valid_env).sourcify_enabled is True

    def test_constants_stable_across_loads(self, valid_env: Dict[str, str]):
        """Test that chain ids and gas prices don't vary between loads."""
        first = load_config(valid_env).networks["rskTestnet"]
        second = load_config(valid_env).networks["rskTestnet"]

        assert first.chain_id == second.chain_id == 31
        assert first.gas_price == second.gas_price == 60000000
        assert first == second

    def test_mappings_are_read_only(self, valid_env: Dict[str, str]):
        """Test that the configuration can't be mutated by consumers."""
        cfg = load_config(valid_env)

        with pytest.raises(TypeError):
            cfg.networks["other"] = cfg.networks["localhost"]

    def test_secrets_not_in_repr(self, valid_env: Dict[str, str]):
        """Test that signing and API keys never appear in repr output."""
        cfg = load_config(valid_env)

        text = repr(cfg)
        assert valid_env["PRIVATE_KEY"] not in text
        assert valid_env["API_KEY"] not in text


class TestReadEnvironment:
    """Test reading values from .env files and the process environment."""

    def test_reads_env_file(self, tmp_path: Path, monkeypatch):
        """Test that values are read from a .env file."""
        for name in ("RSK_TESTNET_RPC_URL", "PRIVATE_KEY", "API_KEY", "RSK_MAINNET_RPC_URL"):
            monkeypatch.delenv(name, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text(
            "RSK_TESTNET_RPC_URL=http://from-file\nPRIVATE_KEY=file-key\nAPI_KEY=file-api\n"
        )

        cfg = load_config(env_file=str(env_file))

        assert cfg.networks["rskTestnet"].rpc_url == "http://from-file"

    def test_process_environment_wins(self, tmp_path: Path, monkeypatch):
        """Test that process variables override the .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("API_KEY=file-api\n")
        monkeypatch.setenv("API_KEY", "process-api")

        values = read_environment(str(env_file))

        assert values["API_KEY"] == "process-api"

    def test_missing_env_file_is_ignored(self, tmp_path: Path, monkeypatch):
        """Test that a missing .env file is not an error."""
        monkeypatch.setenv("PRIVATE_KEY", "k")

        values = read_environment(str(tmp_path / "absent.env"))

        assert values["PRIVATE_KEY"] == "k"

    def test_does_not_modify_os_environ(self, tmp_path: Path, monkeypatch):
        """Test that loading a .env file leaves os.environ untouched."""
        import os

        monkeypatch.delenv("ONLY_IN_FILE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ONLY_IN_FILE=1\n")

        values = read_environment(str(env_file))

        assert values["ONLY_IN_FILE"] == "1"
        assert "ONLY_IN_FILE" not in os.environ

    def test_config_errors_share_base_class(self):
        """Test that configuration errors derive from ConfigurationError."""
        with pytest.raises(ConfigurationError):
            load_config({})
