"""Custom exception classes for rootstock-deployments library."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Base exception for configuration errors."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when a required configuration value is absent or empty."""

    def __init__(self, variable: str, description: str):
        super().__init__(f"The {description} is not configured (set {variable})")
        self.variable = variable
        self.description = description


class InvalidConfigurationError(ConfigurationError):
    """Raised when a configuration value is present but invalid."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    pass


class DeploymentModuleNotFoundError(DeploymentError, ValueError):
    """Raised when requested deployment module is not registered."""

    pass


class DuplicateModuleError(DeploymentError, ValueError):
    """Raised when a deployment module name is registered twice."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact or build-info file is missing."""

    pass


class ArtifactError(DeploymentError, ValueError):
    """Raised when a compiled contract artifact is malformed or ambiguous."""

    pass


class ConstructorArgumentsError(DeploymentError, ValueError):
    """Raised when constructor arguments don't match the contract ABI."""

    pass


class JournalError(DeploymentError, ValueError):
    """Raised when the deployment journal file cannot be read."""

    pass


class NetworkExecutionError(DeploymentError, RuntimeError):
    """Raised when an RPC call, transaction or receipt wait fails."""

    pass


class VerificationError(DeploymentError, RuntimeError):
    """Raised when a deployed contract could not be verified."""

    pass
