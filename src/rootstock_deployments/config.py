"""Environment-driven configuration loading for rootstock-deployments library."""

import logging
import os
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from .constants import (
    CUSTOM_CHAINS,
    NETWORK_CONFIG,
    OPTIONAL_ENV_VARS,
    REQUIRED_ENV_VARS,
    SOLIDITY_VERSION,
)
from .exceptions import MissingConfigurationError
from .types import DeployerConfig, NetworkProfile, VerificationProfile

logger = logging.getLogger(__name__)


def read_environment(env_file: Optional[str] = ".env") -> Dict[str, str]:
    """
    Collect configuration values from a .env file and the process environment.

    Process environment wins over the file, matching dotenv's default of never
    overriding variables that are already set. os.environ is not modified.

    Args:
        env_file: Path to .env file (None to skip the file)

    Returns:
        Dictionary of variable name -> value
    """
    values: Dict[str, str] = {}
    if env_file is not None:
        values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    values.update(os.environ)
    return values


def _get(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def validate_environment(environ: Mapping[str, str]) -> Dict[str, str]:
    """
    Check that every required variable is present and non-empty.

    Args:
        environ: Variable name -> value

    Returns:
        Dictionary of required variable name -> stripped value

    Raises:
        MissingConfigurationError: On the first required variable that is
            absent, empty or whitespace-only
    """
    required: Dict[str, str] = {}
    for name, description in REQUIRED_ENV_VARS.items():
        value = _get(environ, name)
        if value is None:
            raise MissingConfigurationError(name, description)
        required[name] = value
    return required


def load_config(
    environ: Optional[Mapping[str, str]] = None, env_file: Optional[str] = ".env"
) -> DeployerConfig:
    """
    Build the deployer configuration.

    Required variables are validated before any network profile is built, so
    a partially configured object is never returned.

    Args:
        environ: Explicit variables to use (defaults to .env + os.environ)
        env_file: .env file read when environ is None

    Returns:
        DeployerConfig with network and verification profiles

    Raises:
        MissingConfigurationError: If a required variable is missing
    """
    if environ is None:
        environ = read_environment(env_file)

    required = validate_environment(environ)
    private_key = required["PRIVATE_KEY"]
    api_key = required["API_KEY"]

    networks: Dict[str, NetworkProfile] = {}
    verification: Dict[str, VerificationProfile] = {}

    for network_name, params in NETWORK_CONFIG.items():
        if not params["live"]:
            networks[network_name] = NetworkProfile(
                name=network_name,
                rpc_url=params["rpc_url"],
                chain_id=params["chain_id"],
                gas_price=params["gas_price"],
                live=False,
            )
            continue

        rpc_url = _get(environ, params["rpc_env"])
        if rpc_url is None:
            # Reserved network, not enabled for this run
            logger.debug(
                "Skipping %s: %s not set (%s)",
                network_name,
                OPTIONAL_ENV_VARS[params["rpc_env"]],
                params["rpc_env"],
            )
            continue

        networks[network_name] = NetworkProfile(
            name=network_name,
            rpc_url=rpc_url,
            chain_id=params["chain_id"],
            gas_price=params["gas_price"],
            signing_key=private_key,
            live=True,
        )

        chain_key = params["verification_key"]
        chain = CUSTOM_CHAINS[chain_key]
        verification[chain_key] = VerificationProfile(
            network_name=chain_key,
            chain_id=chain["chain_id"],
            api_base_url=chain["api_url"],
            explorer_url=chain["browser_url"],
            api_key=api_key,
        )

    logger.debug("Configured networks: %s", ", ".join(networks))

    return DeployerConfig(
        solidity=SOLIDITY_VERSION,
        networks=networks,
        verification=verification,
        sourcify_enabled=True,
    )
