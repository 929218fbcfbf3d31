"""Path management utilities for rootstock-deployments library."""

from pathlib import Path
from typing import Optional, Union


def get_default_artifacts_dir() -> Path:
    """
    Get default Hardhat artifacts directory.

    Returns:
        Path to ./artifacts
    """
    return Path.cwd() / "artifacts"


def get_journal_path(chain_id: int, root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get deployment journal path for a chain.

    Uses the same layout as Hardhat Ignition so both tools share records.

    Args:
        chain_id: Chain ID of the target network
        root: Project root (defaults to current directory)

    Returns:
        Path to <root>/ignition/deployments/chain-<chain_id>/deployed_addresses.json
    """
    if root is None:
        root = Path.cwd()
    else:
        root = Path(root).absolute()

    return root / "ignition" / "deployments" / f"chain-{chain_id}" / "deployed_addresses.json"
