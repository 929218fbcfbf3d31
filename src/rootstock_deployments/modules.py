"""Deployment module declarations for rootstock-deployments library."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .context import DeploymentContext
from .exceptions import DeploymentModuleNotFoundError, DuplicateModuleError
from .types import ContractHandle


@dataclass(frozen=True)
class DeploymentUnit:
    """A named unit that instantiates exactly one contract."""

    module_name: str  # e.g., "StreamTokenModule"
    contract_name: str  # e.g., "StreamToken"
    output_name: str  # Key of the returned handle, e.g., "streamTokenModule"
    constructor_args: Tuple[Any, ...] = ()

    @property
    def future_id(self) -> str:
        """Journal key, in Hardhat Ignition's "Module#Contract" form."""
        return f"{self.module_name}#{self.contract_name}"


def build_module(
    module_name: str,
    contract_name: str,
    output_name: Optional[str] = None,
    args: Sequence[Any] = (),
) -> DeploymentUnit:
    """
    Declare a deployment unit.

    Args:
        module_name: Unique module name
        contract_name: Contract to instantiate
        output_name: Symbolic name of the returned handle
                     (defaults to module_name with a lower-case first letter)
        args: Ordered constructor arguments

    Returns:
        DeploymentUnit descriptor

    Raises:
        ValueError: If module_name or contract_name is empty
    """
    if not module_name:
        raise ValueError("Module name must not be empty")
    if not contract_name:
        raise ValueError(f"Module '{module_name}' has no contract name")

    if output_name is None:
        output_name = module_name[0].lower() + module_name[1:]

    return DeploymentUnit(
        module_name=module_name,
        contract_name=contract_name,
        output_name=output_name,
        constructor_args=tuple(args),
    )


def execute_unit(unit: DeploymentUnit, context: DeploymentContext) -> Dict[str, ContractHandle]:
    """
    Run a deployment unit against a network-bound context.

    Args:
        unit: Unit to execute
        context: Context that performs the actual instantiation

    Returns:
        Single-entry mapping of unit.output_name -> ContractHandle
    """
    handle = context.contract(unit.contract_name, unit.constructor_args)
    return {unit.output_name: handle}


class ModuleRegistry:
    """Ordered collection of deployment units addressable by module name."""

    def __init__(self, units: Sequence[DeploymentUnit] = ()):
        self._units: Dict[str, DeploymentUnit] = {}
        for unit in units:
            self.register(unit)

    def register(self, unit: DeploymentUnit) -> DeploymentUnit:
        if unit.module_name in self._units:
            raise DuplicateModuleError(f"Module '{unit.module_name}' is already registered")
        self._units[unit.module_name] = unit
        return unit

    def get(self, module_name: str) -> DeploymentUnit:
        try:
            return self._units[module_name]
        except KeyError:
            raise DeploymentModuleNotFoundError(
                f"Module '{module_name}' not found. Available: {', '.join(self._units) or 'none'}"
            ) from None

    def names(self) -> List[str]:
        return list(self._units)

    def __contains__(self, module_name: object) -> bool:
        return module_name in self._units

    def __iter__(self) -> Iterator[DeploymentUnit]:
        return iter(self._units.values())

    def __len__(self) -> int:
        return len(self._units)


CREATE_REGISTRY_MODULE = build_module("CreateRegistryModule", "CreatorRegistry")
STREAM_TOKEN_MODULE = build_module("StreamTokenModule", "StreamToken")
USER_REGISTRY_MODULE = build_module("UserRegistryModule", "UserRegistry")


def default_registry() -> ModuleRegistry:
    """Return a new registry holding the project's contract modules."""
    return ModuleRegistry([CREATE_REGISTRY_MODULE, STREAM_TOKEN_MODULE, USER_REGISTRY_MODULE])
