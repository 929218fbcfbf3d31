"""Main API for rootstock-deployments library."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

from .artifacts import load_artifact
from .context import DeploymentContext, RpcDeploymentContext
from .exceptions import NetworkNotFoundError
from .journal import load_journal, record_deployment, save_journal
from .modules import ModuleRegistry, default_registry, execute_unit
from .paths import get_default_artifacts_dir, get_journal_path
from .types import ContractHandle, DeployerConfig, VerificationResult
from .verification import verify_handles

logger = logging.getLogger(__name__)


class Deployer:
    """Runs deployment modules against one network and journals the results."""

    def __init__(
        self,
        config: DeployerConfig,
        network: str = "rskTestnet",
        registry: Optional[ModuleRegistry] = None,
        artifacts_dir: Optional[Union[Path, str]] = None,
        journal_root: Optional[Union[Path, str]] = None,
        context: Optional[DeploymentContext] = None,
    ):
        """
        Initialize the deployer.

        Args:
            config: Loaded deployer configuration
            network: Name of the target network
            registry: Deployment modules (defaults to the project's modules)
            artifacts_dir: Hardhat artifacts directory (defaults to ./artifacts)
            journal_root: Directory holding ignition/deployments (defaults to cwd)
            context: Execution context (defaults to an RPC context for the network)

        Raises:
            NetworkNotFoundError: If network isn't in the configuration
        """
        if network not in config.networks:
            raise NetworkNotFoundError(
                f"Network '{network}' not configured. "
                f"Available: {', '.join(config.networks)}"
            )

        self.config = config
        self.network = config.networks[network]
        self.registry = registry if registry is not None else default_registry()
        self.artifacts_dir = Path(artifacts_dir) if artifacts_dir else get_default_artifacts_dir()
        self.journal_path = get_journal_path(self.network.chain_id, journal_root)
        self.context = context or RpcDeploymentContext(self.network, self.artifacts_dir)

    def deployed_addresses(self) -> Dict[str, str]:
        """
        Get journaled deployments for this network.

        Returns:
            Mapping of future id ("Module#Contract") -> address
        """
        return load_journal(self.journal_path)

    def deploy(self, module_name: str, reset: bool = False) -> Dict[str, ContractHandle]:
        """
        Deploy a module unless the journal already records it.

        Args:
            module_name: Registered module name, e.g., "StreamTokenModule"
            reset: Deploy again even if the journal has an address

        Returns:
            Mapping of the module's output name -> ContractHandle

        Raises:
            DeploymentModuleNotFoundError: If module isn't registered
            NetworkExecutionError: If the deployment transaction fails
        """
        unit = self.registry.get(module_name)
        journal = load_journal(self.journal_path)

        if unit.future_id in journal and not reset:
            address = journal[unit.future_id]
            logger.info(
                "%s already deployed on %s at %s, skipping",
                unit.future_id,
                self.network.name,
                address,
            )
            artifact = load_artifact(self.artifacts_dir, unit.contract_name)
            handle = ContractHandle(
                contract_name=artifact.contract_name,
                address=address,
                abi=artifact.abi,
                network=self.network.name,
                constructor_args=unit.constructor_args,
            )
            return {unit.output_name: handle}

        logger.info("Running %s on %s", unit.module_name, self.network.name)
        result = execute_unit(unit, self.context)

        # Journal only after the deployment succeeded
        handle = result[unit.output_name]
        save_journal(record_deployment(journal, unit, handle.address), self.journal_path)

        return result

    def deploy_all(self, reset: bool = False) -> Dict[str, ContractHandle]:
        """
        Deploy every registered module in registration order.

        Returns:
            Merged mapping of output names -> ContractHandle
        """
        handles: Dict[str, ContractHandle] = {}
        for unit in self.registry:
            handles.update(self.deploy(unit.module_name, reset=reset))
        return handles

    def verify(
        self, handles: Union[Mapping[str, ContractHandle], Iterable[ContractHandle]]
    ) -> List[VerificationResult]:
        """
        Verify deployed contracts; failures are reported, never raised.

        Args:
            handles: Result of deploy()/deploy_all(), or a list of handles

        Returns:
            One VerificationResult per contract and service
        """
        if isinstance(handles, Mapping):
            handles = list(handles.values())
        return verify_handles(handles, self.config, self.network, self.artifacts_dir)
