"""Remote contracts list parsing for predeploy-bindings library."""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .exceptions import ContractConfigError
from .types import RemoteContractMetadata


def parse_remote_contract(entry: Dict[str, Any], package_name: str) -> RemoteContractMetadata:
    """
    Build a metadata record from one contracts list entry.

    Args:
        entry: Entry with name, verified, deployments and optional
               deploymentSalt/deployerAddress
        package_name: Package the generated bindings belong to

    Returns:
        Fresh RemoteContractMetadata (fetched fields empty)

    Raises:
        ContractConfigError: If name or deployments are missing or malformed
    """
    if not isinstance(entry, dict):
        raise ContractConfigError(f"Remote contract entry must be an object: {entry!r}")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ContractConfigError(f"Remote contract entry is missing a name: {entry!r}")

    deployments = entry.get("deployments")
    if not isinstance(deployments, dict) or not deployments:
        raise ContractConfigError(f"Remote contract '{name}' has no deployments")

    return RemoteContractMetadata(
        name=name,
        package_name=package_name,
        verified=bool(entry.get("verified", False)),
        deployments={str(chain): str(address) for chain, address in deployments.items()},
        deployment_salt=entry.get("deploymentSalt") or "",
        deployer_address=entry.get("deployerAddress") or "",
    )


def load_remote_contracts(
    path: Union[Path, str], package_name: str = "bindings"
) -> List[RemoteContractMetadata]:
    """
    Load the list of remotely sourced contracts.

    Accepts either {"remote": [...]} or a bare list of entries.

    Raises:
        ContractConfigError: If the file is not valid JSON or has no entry list
        FileNotFoundError: If the file doesn't exist
    """
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ContractConfigError(f"Invalid contracts list {path}: {e}") from e

    entries = data.get("remote") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ContractConfigError(f"No remote contracts list found in {path}")

    return [parse_remote_contract(entry, package_name) for entry in entries]
