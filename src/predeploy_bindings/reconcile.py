"""Cross-chain bytecode reconciliation for predeploy-bindings library."""

import logging
from typing import List

from .constants import SECONDARY_CHAIN
from .fetcher import fetch_contract_data
from .types import BytecodeDivergence, RemoteContractMetadata

logger = logging.getLogger(__name__)


def compare_bytecode(
    client, metadata: RemoteContractMetadata, chain: str = SECONDARY_CHAIN
) -> List[BytecodeDivergence]:
    """
    Compare a contract's fetched bytecode with its deployment on a paired chain.

    Mismatches are not errors: each one is logged at CRITICAL level and
    returned, and processing of the contract continues. Empty local fields
    are never compared.

    Args:
        client: Chain data client
        metadata: Contract metadata holding the locally fetched bytecode
        chain: Paired chain to compare against

    Returns:
        List of divergences found (empty if everything matches)

    Raises:
        FetchError: If the paired chain's data can't be retrieved
        SaltMismatchError: If the paired chain's init code lacks the salt
        ContractConfigError: If the contract has no deployment on the chain
    """
    # The ABI isn't needed for bytecode comparison
    paired = fetch_contract_data(
        client,
        chain,
        metadata.address_on(chain),
        fetch_interface=False,
        deployment_salt=metadata.deployment_salt,
    )

    divergences: List[BytecodeDivergence] = []

    if metadata.init_bin and metadata.init_bin != paired.deployment_tx.input:
        divergences.append(
            BytecodeDivergence(
                contract_name=metadata.name,
                kind="init",
                primary_value=metadata.init_bin,
                secondary_value=paired.deployment_tx.input,
            )
        )

    if metadata.deployed_bin and metadata.deployed_bin != paired.deployed_bytecode:
        divergences.append(
            BytecodeDivergence(
                contract_name=metadata.name,
                kind="deployed",
                primary_value=metadata.deployed_bin,
                secondary_value=paired.deployed_bytecode,
            )
        )

    for divergence in divergences:
        logger.critical(
            f"{divergence.kind.capitalize()} bytecode of {divergence.contract_name} "
            f"doesn't match bytecode on {chain}: "
            f"local={divergence.primary_value} {chain}={divergence.secondary_value}",
            extra={
                "contract_name": divergence.contract_name,
                "bytecode_kind": divergence.kind,
                "bytecode_local": divergence.primary_value,
                "bytecode_paired": divergence.secondary_value,
            },
        )

    return divergences
