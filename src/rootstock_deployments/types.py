"""Data types and dataclasses for rootstock-deployments library."""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import InvalidConfigurationError, MissingConfigurationError


@dataclass(frozen=True)
class NetworkProfile:
    """Static description of a blockchain endpoint."""

    name: str  # e.g., "rskTestnet"
    rpc_url: str
    chain_id: int
    gas_price: Optional[int] = None  # wei; None means ask the node
    signing_key: Optional[str] = field(default=None, repr=False)
    live: bool = True

    def __post_init__(self) -> None:
        if self.chain_id <= 0:
            raise InvalidConfigurationError(
                f"Network '{self.name}' has invalid chain id {self.chain_id}"
            )
        if self.live:
            if not self.rpc_url:
                raise MissingConfigurationError(
                    f"{self.name}.rpc_url", f"RPC URL for network '{self.name}'"
                )
            if not self.signing_key:
                raise MissingConfigurationError(
                    f"{self.name}.signing_key", f"signing key for network '{self.name}'"
                )


@dataclass(frozen=True)
class VerificationProfile:
    """Block explorer endpoints used to verify contracts on one network."""

    network_name: str  # custom chain key, e.g., "rsktestnet"
    chain_id: int
    api_base_url: str
    explorer_url: str
    api_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.api_key:
            raise MissingConfigurationError(
                "API_KEY", f"API key for verification on '{self.network_name}'"
            )


@dataclass(frozen=True)
class DeployerConfig:
    """Immutable configuration consumed by the deployer and verifier."""

    solidity: str
    networks: Mapping[str, NetworkProfile]
    verification: Mapping[str, VerificationProfile]
    sourcify_enabled: bool = True

    def __post_init__(self) -> None:
        # Freeze the mappings so consumers can't alter shared configuration
        object.__setattr__(self, "networks", MappingProxyType(dict(self.networks)))
        object.__setattr__(self, "verification", MappingProxyType(dict(self.verification)))

    def verification_for(self, network: NetworkProfile) -> Optional[VerificationProfile]:
        """Return the verification profile whose chain id matches the network, if any."""
        for profile in self.verification.values():
            if profile.chain_id == network.chain_id:
                return profile
        return None


@dataclass(frozen=True)
class ContractHandle:
    """A deployed contract: address plus the ABI needed to talk to it."""

    contract_name: str
    address: str  # Checksummed address
    abi: List[Dict[str, Any]] = field(hash=False)
    network: str
    transaction_hash: Optional[str] = None
    block: Optional[int] = None
    constructor_args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract as written by `hardhat compile`."""

    contract_name: str
    source_name: str  # e.g., "contracts/StreamToken.sol"
    abi: List[Dict[str, Any]] = field(hash=False)
    bytecode: str
    deployed_bytecode: str = ""
    link_references: Dict[str, Any] = field(default_factory=dict, hash=False)
    build_info_path: Optional[Path] = None

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"


@dataclass(frozen=True)
class BuildInfo:
    """Compiler input/output for one compilation job."""

    solc_version: str  # e.g., "0.8.27"
    solc_long_version: str  # e.g., "0.8.27+commit.40a35a09"
    input: Dict[str, Any] = field(hash=False)
    output: Dict[str, Any] = field(hash=False)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying one contract with one service."""

    contract_name: str
    address: str
    service: str  # "blockscout" or "sourcify"
    verified: bool
    message: str = ""
    url: Optional[str] = None
