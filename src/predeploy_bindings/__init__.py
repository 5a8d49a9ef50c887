"""
predeploy-bindings: verified metadata bindings for remotely sourced predeploy contracts
"""

from importlib.metadata import PackageNotFoundError, version

from .client import EtherscanClient
from .exceptions import (
    BindgenError,
    ContractConfigError,
    ContractDataClientError,
    DeployerMismatchError,
    FetchError,
    SaltMismatchError,
    WriteError,
)
from .generator import RemoteBindingsGenerator, regenerate_remote_bindings
from .handlers import HandlerKind, handler_for
from .registry import MetadataRegistry, load_generated_metadata
from .types import BytecodeDivergence, ContractData, DeploymentTx, HandlerResult, RemoteContractMetadata

try:
    __version__ = version("predeploy-bindings")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "RemoteBindingsGenerator",
    "regenerate_remote_bindings",
    "EtherscanClient",
    "HandlerKind",
    "handler_for",
    "MetadataRegistry",
    "load_generated_metadata",
    "BytecodeDivergence",
    "ContractData",
    "DeploymentTx",
    "HandlerResult",
    "RemoteContractMetadata",
    "BindgenError",
    "ContractConfigError",
    "ContractDataClientError",
    "DeployerMismatchError",
    "FetchError",
    "SaltMismatchError",
    "WriteError",
]
