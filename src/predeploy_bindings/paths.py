"""Path management utilities for predeploy-bindings library."""

from pathlib import Path
from typing import Union

from .constants import METADATA_FILE_SUFFIX


def get_metadata_path(metadata_out: Union[Path, str], contract_name: str) -> Path:
    """
    Get the generated metadata module path for a contract.

    Args:
        metadata_out: Metadata output directory
        contract_name: Contract name

    Returns:
        Path to {metadata_out}/{lowercase name}_more.py
    """
    return Path(metadata_out) / f"{contract_name.lower()}{METADATA_FILE_SUFFIX}"


def get_bindings_path(bindings_out: Union[Path, str], contract_name: str) -> Path:
    """Get the generated binding module path for a contract."""
    return Path(bindings_out) / f"{contract_name.lower()}.py"


def get_artifact_paths(artifacts_dir: Union[Path, str], contract_name: str) -> tuple[Path, Path]:
    """
    Get temporary artifact file paths for a contract.

    Returns:
        Tuple of (abi_path, bytecode_path)
    """
    artifacts_dir = Path(artifacts_dir)
    return (artifacts_dir / f"{contract_name}.abi", artifacts_dir / f"{contract_name}.bin")
