"""Data types and dataclasses for predeploy-bindings library."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import ContractConfigError


class FetchStage(Enum):
    """
    Retrieval stages of a contract data fetch, in the order they run.

    Value strings are used in error messages.
    """

    INTERFACE = "ABI"
    DEPLOYED_BYTECODE = "deployed bytecode"
    TX_HASH = "deployment transaction hash"
    TX_DATA = "deployment transaction data"


@dataclass
class DeploymentTx:
    """Deployment transaction fields needed for reconciliation."""

    input: str  # Hex-encoded initialization code (calldata)
    to: Optional[str] = None  # Recipient, None for plain contract creation


@dataclass
class ContractData:
    """Consolidated chain data for one (chain, address) pair."""

    deployed_bytecode: str
    deployment_tx: DeploymentTx
    interface_json: Optional[str] = None


@dataclass
class RemoteContractMetadata:
    """A remotely sourced contract, populated in place by its handler."""

    # Supplied by the contracts list
    name: str
    package_name: str
    verified: bool
    deployments: Dict[str, str] = field(default_factory=dict)  # chain -> address
    deployment_salt: str = ""
    deployer_address: str = ""

    # Filled in by the handler
    interface_json: str = ""
    deployed_bin: str = ""
    init_bin: str = ""

    def address_on(self, chain: str) -> str:
        """
        Get this contract's address on a chain.

        Raises:
            ContractConfigError: If the contract has no deployment on the chain
        """
        address = self.deployments.get(chain)
        if not address:
            raise ContractConfigError(
                f"Contract '{self.name}' has no deployment on chain '{chain}'"
            )
        return address


@dataclass(frozen=True)
class BytecodeDivergence:
    """A reconciled bytecode field that differs between two chains."""

    contract_name: str
    kind: str  # "init" or "deployed"
    primary_value: str
    secondary_value: str


@dataclass
class HandlerResult:
    """Outcome of handling one contract."""

    contract_name: str
    metadata_path: Path
    divergences: List[BytecodeDivergence] = field(default_factory=list)
