"""Bytecode registry populated from generated metadata modules."""

import importlib.util
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from .constants import METADATA_FILE_SUFFIX

logger = logging.getLogger(__name__)


class MetadataRegistry:
    """
    Name-keyed bytecode metadata of predeployed contracts.

    Construct one registry at startup and pass it to every consumer.
    Generated metadata modules add their entries through register().
    """

    def __init__(self):
        self.deployed_bytecodes: Dict[str, str] = {}
        self.init_bytecodes: Dict[str, str] = {}
        self.deployment_salts: Dict[str, str] = {}
        self.deployer_addresses: Dict[str, str] = {}
        self.storage_layouts: Dict[str, Any] = {}
        self.immutable_references: Dict[str, Any] = {}

    def deployed_bytecode(self, name: str) -> str:
        return self._lookup(self.deployed_bytecodes, "deployed bytecode", name)

    def init_bytecode(self, name: str) -> str:
        return self._lookup(self.init_bytecodes, "init bytecode", name)

    def deployment_salt(self, name: str) -> str:
        return self._lookup(self.deployment_salts, "deployment salt", name)

    def deployer_address(self, name: str) -> str:
        return self._lookup(self.deployer_addresses, "deployer address", name)

    def storage_layout(self, name: str) -> Any:
        return self._lookup(self.storage_layouts, "storage layout", name)

    def immutable_reference(self, name: str) -> Any:
        return self._lookup(self.immutable_references, "immutable references", name)

    @staticmethod
    def _lookup(entries: Dict[str, Any], kind: str, name: str) -> Any:
        if name not in entries:
            raise KeyError(f"No {kind} registered for contract '{name}'")
        return entries[name]


def load_generated_metadata(
    registry: MetadataRegistry, metadata_dir: Union[Path, str]
) -> List[Path]:
    """
    Register every generated metadata module in a directory.

    Args:
        registry: Registry to populate
        metadata_dir: Directory holding *_more.py files

    Returns:
        Paths of the loaded modules, in load order

    Raises:
        AttributeError: If a module has no register() function
    """
    loaded: List[Path] = []
    for path in sorted(Path(metadata_dir).glob(f"*{METADATA_FILE_SUFFIX}")):
        spec = importlib.util.spec_from_file_location(
            f"predeploy_metadata_{path.stem}", path
        )
        if spec is None or spec.loader is None:
            continue
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        module.register(registry)
        loaded.append(path)
        logger.debug(f"Registered contract metadata from {path}")
    return loaded
