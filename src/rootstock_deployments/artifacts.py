"""Hardhat compilation artifact parsers for rootstock-deployments library."""

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError

from .exceptions import ArtifactError, ArtifactNotFoundError, ConstructorArgumentsError
from .types import BuildInfo, ContractArtifact


def find_artifact_path(artifacts_dir: Path, contract_name: str) -> Path:
    """
    Locate the artifact file for a contract.

    Accepts either a bare contract name ("StreamToken") or a fully qualified
    name ("contracts/StreamToken.sol:StreamToken").

    Args:
        artifacts_dir: Hardhat artifacts directory
        contract_name: Bare or fully qualified contract name

    Returns:
        Path to <source>/<Name>.json

    Raises:
        ArtifactNotFoundError: If no artifact exists for the name
        ArtifactError: If a bare name matches several sources
    """
    if ":" in contract_name:
        source_name, name = contract_name.rsplit(":", 1)
        path = artifacts_dir / source_name / f"{name}.json"
        if not path.exists():
            raise ArtifactNotFoundError(f"Artifact for '{contract_name}' not found at {path}")
        return path

    # build-info files are named by hash, never by contract
    candidates = sorted(
        p
        for p in artifacts_dir.glob(f"**/{contract_name}.json")
        if "build-info" not in p.parts
    )

    if not candidates:
        raise ArtifactNotFoundError(
            f"Artifact for '{contract_name}' not found in {artifacts_dir}. "
            "Compile the contracts first."
        )
    if len(candidates) > 1:
        sources = ", ".join(str(p.parent.relative_to(artifacts_dir)) for p in candidates)
        raise ArtifactError(
            f"Contract name '{contract_name}' is ambiguous ({sources}); "
            "use a fully qualified name"
        )
    return candidates[0]


def parse_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a Hardhat artifact JSON file.

    Args:
        file_path: Path to <Name>.json artifact

    Returns:
        ContractArtifact, with build_info_path resolved from the sibling
        <Name>.dbg.json when present

    Raises:
        ArtifactError: If a required field is missing
    """
    with open(file_path) as f:
        data = json.load(f)

    missing = [k for k in ("contractName", "sourceName", "abi", "bytecode") if k not in data]
    if missing:
        raise ArtifactError(f"Artifact {file_path} is missing {', '.join(missing)}")

    build_info_path = None
    dbg_path = file_path.with_suffix(".dbg.json")
    if dbg_path.exists():
        with open(dbg_path) as f:
            dbg = json.load(f)
        if "buildInfo" in dbg:
            build_info_path = (dbg_path.parent / dbg["buildInfo"]).resolve()

    return ContractArtifact(
        contract_name=data["contractName"],
        source_name=data["sourceName"],
        abi=data["abi"],
        bytecode=data["bytecode"],
        deployed_bytecode=data.get("deployedBytecode", ""),
        link_references=data.get("linkReferences", {}),
        build_info_path=build_info_path,
    )


def load_artifact(artifacts_dir: Path, contract_name: str) -> ContractArtifact:
    """Find and parse the artifact for a contract."""
    return parse_artifact(find_artifact_path(Path(artifacts_dir), contract_name))


def load_build_info(artifact: ContractArtifact) -> BuildInfo:
    """
    Load the compiler input/output that produced an artifact.

    Args:
        artifact: Parsed artifact

    Returns:
        BuildInfo

    Raises:
        ArtifactNotFoundError: If the artifact has no build-info file
    """
    path = artifact.build_info_path
    if path is None or not path.exists():
        raise ArtifactNotFoundError(
            f"Build info for '{artifact.contract_name}' not found; recompile the contracts"
        )

    with open(path) as f:
        data = json.load(f)

    return BuildInfo(
        solc_version=data["solcVersion"],
        solc_long_version=data["solcLongVersion"],
        input=data["input"],
        output=data.get("output", {}),
    )


def _abi_type(param: Dict[str, Any]) -> str:
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(_abi_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def encode_constructor_args(abi: List[Dict[str, Any]], args: Sequence[Any]) -> str:
    """
    ABI-encode constructor arguments.

    Args:
        abi: Contract ABI
        args: Ordered constructor arguments

    Returns:
        Hex string without 0x prefix (empty when there are no arguments)

    Raises:
        ConstructorArgumentsError: If arguments don't match the constructor inputs
    """
    inputs: List[Dict[str, Any]] = []
    for item in abi:
        if item.get("type") == "constructor":
            inputs = item.get("inputs", [])
            break

    if len(inputs) != len(args):
        raise ConstructorArgumentsError(
            f"Constructor expects {len(inputs)} argument(s), got {len(args)}"
        )
    if not inputs:
        return ""

    types = [_abi_type(param) for param in inputs]
    try:
        return encode(types, list(args)).hex()
    except (EncodingError, TypeError, ValueError) as e:
        raise ConstructorArgumentsError(f"Cannot encode constructor arguments {types}: {e}") from e


def deployment_data(artifact: ContractArtifact, args: Sequence[Any] = ()) -> str:
    """
    Build the data field of a contract creation transaction.

    Raises:
        ArtifactError: If the bytecode is empty or needs library linking
        ConstructorArgumentsError: If arguments don't match the constructor
    """
    if artifact.link_references:
        raise ArtifactError(
            f"Contract '{artifact.contract_name}' needs library linking, which is not supported"
        )

    bytecode = artifact.bytecode.removeprefix("0x")
    if not bytecode:
        raise ArtifactError(
            f"Contract '{artifact.contract_name}' has no bytecode (abstract or interface?)"
        )

    return "0x" + bytecode + encode_constructor_args(artifact.abi, args)
