"""
rootstock-deployments: Python library for configuring and deploying contracts on Rootstock
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from .config import load_config
from .context import DeploymentContext, RpcDeploymentContext
from .deployments import Deployer
from .exceptions import (
    ArtifactError,
    ArtifactNotFoundError,
    ConfigurationError,
    ConstructorArgumentsError,
    DeploymentError,
    DeploymentModuleNotFoundError,
    DuplicateModuleError,
    InvalidConfigurationError,
    JournalError,
    MissingConfigurationError,
    NetworkExecutionError,
    NetworkNotFoundError,
    VerificationError,
)
from .modules import (
    CREATE_REGISTRY_MODULE,
    STREAM_TOKEN_MODULE,
    USER_REGISTRY_MODULE,
    DeploymentUnit,
    ModuleRegistry,
    build_module,
    default_registry,
    execute_unit,
)
from .types import (
    ContractHandle,
    DeployerConfig,
    NetworkProfile,
    VerificationProfile,
    VerificationResult,
)

try:
    __version__ = version("rootstock-deployments")
except PackageNotFoundError:
    __version__ = None

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "load_config",
    "Deployer",
    "DeploymentContext",
    "RpcDeploymentContext",
    "DeploymentUnit",
    "ModuleRegistry",
    "build_module",
    "default_registry",
    "execute_unit",
    "CREATE_REGISTRY_MODULE",
    "STREAM_TOKEN_MODULE",
    "USER_REGISTRY_MODULE",
    "ContractHandle",
    "DeployerConfig",
    "NetworkProfile",
    "VerificationProfile",
    "VerificationResult",
    "DeploymentError",
    "ConfigurationError",
    "MissingConfigurationError",
    "InvalidConfigurationError",
    "NetworkNotFoundError",
    "DeploymentModuleNotFoundError",
    "DuplicateModuleError",
    "ArtifactNotFoundError",
    "ArtifactError",
    "ConstructorArgumentsError",
    "JournalError",
    "NetworkExecutionError",
    "VerificationError",
]
