"""Deployment journal management for rootstock-deployments library."""

import json
import os
from pathlib import Path
from typing import Dict

from .exceptions import JournalError
from .modules import DeploymentUnit


def load_journal(journal_path: Path) -> Dict[str, str]:
    """
    Load existing deployment journal or return empty dict.

    Args:
        journal_path: Path to deployed_addresses.json file

    Returns:
        Dictionary mapping future id ("Module#Contract") -> address
        Empty dict if file doesn't exist

    Raises:
        JournalError: If the file exists but isn't a JSON object
    """
    try:
        with open(journal_path) as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        raise JournalError(f"Corrupted deployment journal at {journal_path}: {e}") from e

    if not isinstance(data, dict):
        raise JournalError(f"Deployment journal at {journal_path} is not a JSON object")
    return data


def save_journal(journal: Dict[str, str], journal_path: Path) -> None:
    """
    Save deployment journal to disk.

    Args:
        journal: Future id -> address mapping
        journal_path: Path to deployed_addresses.json file

    Creates parent directories if they don't exist. The file is written to a
    sibling and renamed into place, so an interrupted save leaves the previous
    journal intact.
    """
    journal_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = journal_path.with_name(journal_path.name + ".tmp")
    with open(tmp_path, "w") as f:
        json.dump(journal, f, indent=2)
    os.replace(tmp_path, journal_path)


def record_deployment(journal: Dict[str, str], unit: DeploymentUnit, address: str) -> Dict[str, str]:
    """Return a copy of the journal with the unit's address recorded."""
    updated = dict(journal)
    updated[unit.future_id] = address
    return updated
