"""Per-contract handling strategies for predeploy-bindings library."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from string import Template
from typing import Dict, List, Optional

from .constants import (
    MULTI_SEND_CONTRACT,
    PERMIT2_CONTRACT,
    PRIMARY_CHAIN,
    RECONCILE_EXCLUDED,
    SECONDARY_CHAIN,
    SENDER_CREATOR_CONTRACT,
)
from .exceptions import DeployerMismatchError
from .fetcher import fetch_contract_data, fetch_deployed_bytecode
from .reconcile import compare_bytecode
from .templates import PERMIT2_METADATA_TEMPLATE, REMOTE_CONTRACT_METADATA_TEMPLATE
from .types import BytecodeDivergence, ContractData, HandlerResult, RemoteContractMetadata
from .writer import MetadataWriter

logger = logging.getLogger(__name__)


class HandlerKind(Enum):
    """Closed set of contract handling strategies."""

    STANDARD = "standard"
    MULTI_SEND = "multiSend"
    SENDER_CREATOR = "senderCreator"
    PERMIT2 = "permit2"


class ContractHandler(ABC):
    """
    Strategy for turning a contract's remote data into verified metadata.

    Subclasses decide which chain is authoritative and which fields they
    keep (fetch), whether the fetched data needs extra checks (validate),
    whether bytecode is reconciled against the paired chain, and which
    metadata template is written.
    """

    kind: HandlerKind
    template: Template = REMOTE_CONTRACT_METADATA_TEMPLATE
    reconcile_chain: Optional[str] = SECONDARY_CHAIN

    def handle(
        self, client, writer: MetadataWriter, metadata: RemoteContractMetadata
    ) -> HandlerResult:
        """
        Fetch, validate, reconcile and write a contract's metadata.

        Any error aborts before the writer is invoked. Bytecode divergences
        do not abort; they are logged and returned in the result.

        Raises:
            FetchError: If chain data can't be retrieved
            SaltMismatchError: If the deployment salt doesn't match
            DeployerMismatchError: If extra validation fails
            WriteError: If outputs can't be written
        """
        fetched = self.fetch(client, metadata)
        self.validate(metadata, fetched)

        divergences: List[BytecodeDivergence] = []
        if self.should_reconcile(metadata):
            divergences = compare_bytecode(client, metadata, self.reconcile_chain)

        metadata_path = writer.write_all_outputs(metadata, self.template)
        logger.info(f"Generated {self.kind.value} metadata for {metadata.name}")
        return HandlerResult(
            contract_name=metadata.name,
            metadata_path=metadata_path,
            divergences=divergences,
        )

    @abstractmethod
    def fetch(self, client, metadata: RemoteContractMetadata) -> Optional[ContractData]:
        """Fetch data from the authoritative chain and populate metadata."""

    def validate(
        self, metadata: RemoteContractMetadata, fetched: Optional[ContractData]
    ) -> None:
        pass

    def should_reconcile(self, metadata: RemoteContractMetadata) -> bool:
        return self.reconcile_chain is not None


class StandardHandler(ContractHandler):
    """Primary chain is authoritative; all bytecode is reconciled."""

    kind = HandlerKind.STANDARD

    def fetch(self, client, metadata):
        fetched = fetch_contract_data(
            client,
            PRIMARY_CHAIN,
            metadata.address_on(PRIMARY_CHAIN),
            fetch_interface=metadata.verified,
            deployment_salt=metadata.deployment_salt,
        )
        metadata.interface_json = fetched.interface_json or ""
        metadata.deployed_bin = fetched.deployed_bytecode
        metadata.init_bin = fetched.deployment_tx.input
        return fetched

    def should_reconcile(self, metadata):
        # The Create2Deployer predeploy is a modified version that is not
        # yet deployed on the secondary chain.
        return metadata.name not in RECONCILE_EXCLUDED


class MultiSendHandler(ContractHandler):
    """
    Secondary chain is authoritative; nothing is reconciled.

    MultiSend has an immutable that resolves to its own address. The predeploy
    uses the same address as the secondary chain deployment, so that bytecode
    is used directly; the primary chain's bytecode embeds another address.
    """

    kind = HandlerKind.MULTI_SEND
    reconcile_chain = None

    def fetch(self, client, metadata):
        fetched = fetch_contract_data(
            client,
            SECONDARY_CHAIN,
            metadata.address_on(SECONDARY_CHAIN),
            fetch_interface=metadata.verified,
            deployment_salt=metadata.deployment_salt,
        )
        metadata.interface_json = fetched.interface_json or ""
        metadata.deployed_bin = fetched.deployed_bytecode
        metadata.init_bin = fetched.deployment_tx.input
        return fetched


class SenderCreatorHandler(ContractHandler):
    """Factory-only contract: only the deployed bytecode is kept."""

    kind = HandlerKind.SENDER_CREATOR

    def fetch(self, client, metadata):
        metadata.deployed_bin = fetch_deployed_bytecode(
            client, PRIMARY_CHAIN, metadata.address_on(PRIMARY_CHAIN)
        )
        return None


class Permit2Handler(ContractHandler):
    """
    Initialization code is kept, deployed bytecode is not.

    Permit2 has an immutable depending on block.chainid, so its deployed
    bytecode differs per chain. The predeploy is rebuilt from the init code,
    deployment salt and deployer, so the deployer must match the recipient
    of the deployment transaction.
    """

    kind = HandlerKind.PERMIT2
    template = PERMIT2_METADATA_TEMPLATE

    def fetch(self, client, metadata):
        fetched = fetch_contract_data(
            client,
            PRIMARY_CHAIN,
            metadata.address_on(PRIMARY_CHAIN),
            fetch_interface=metadata.verified,
            deployment_salt=metadata.deployment_salt,
        )
        metadata.interface_json = fetched.interface_json or ""
        metadata.init_bin = fetched.deployment_tx.input
        return fetched

    def validate(self, metadata, fetched):
        actual = fetched.deployment_tx.to
        if actual is None or actual.lower() != metadata.deployer_address.lower():
            raise DeployerMismatchError(metadata.name, metadata.deployer_address, actual)


HANDLERS: Dict[HandlerKind, ContractHandler] = {
    HandlerKind.STANDARD: StandardHandler(),
    HandlerKind.MULTI_SEND: MultiSendHandler(),
    HandlerKind.SENDER_CREATOR: SenderCreatorHandler(),
    HandlerKind.PERMIT2: Permit2Handler(),
}

CONTRACT_HANDLER_KINDS: Dict[str, HandlerKind] = {
    MULTI_SEND_CONTRACT: HandlerKind.MULTI_SEND,
    SENDER_CREATOR_CONTRACT: HandlerKind.SENDER_CREATOR,
    PERMIT2_CONTRACT: HandlerKind.PERMIT2,
}


def handler_for(contract_name: str) -> ContractHandler:
    """Select the handling strategy for a contract by its name."""
    kind = CONTRACT_HANDLER_KINDS.get(contract_name, HandlerKind.STANDARD)
    return HANDLERS[kind]
