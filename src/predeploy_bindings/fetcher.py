"""Contract data retrieval for predeploy-bindings library."""

import logging
from typing import Optional

from .exceptions import ContractDataClientError, FetchError, SaltMismatchError
from .types import ContractData, FetchStage

logger = logging.getLogger(__name__)


def strip_deployment_salt(init_bytecode: str, deployment_salt: str) -> str:
    """
    Remove a deployment salt from the front of initialization bytecode.

    The salt must follow the "0x" marker literally. The marker and the salt
    are removed together, so the remaining hex digits are returned unprefixed.

    Args:
        init_bytecode: Deployment transaction input, e.g. "0xabcd1234"
        deployment_salt: Salt hex digits without "0x", e.g. "abcd"

    Returns:
        The initialization bytecode without "0x" + salt, e.g. "1234"

    Raises:
        SaltMismatchError: If the bytecode doesn't start with "0x" + salt
    """
    prefix = "0x" + deployment_salt
    if not init_bytecode.startswith(prefix):
        raise SaltMismatchError(deployment_salt, init_bytecode)
    return init_bytecode[len(prefix):]


def fetch_contract_data(
    client,
    chain: str,
    address: str,
    fetch_interface: bool,
    deployment_salt: Optional[str] = None,
) -> ContractData:
    """
    Fetch and consolidate a contract's data on one chain.

    Stages run in order: interface (only if requested), deployed bytecode,
    deployment transaction hash, deployment transaction data.

    Args:
        client: Chain data client (see EtherscanClient)
        chain: Chain identifier
        address: Contract address on that chain
        fetch_interface: Whether to retrieve the contract's ABI
        deployment_salt: Salt to strip from the initialization bytecode

    Returns:
        ContractData for the (chain, address) pair

    Raises:
        FetchError: If any retrieval stage fails
        SaltMismatchError: If the salt doesn't prefix the initialization code
    """
    interface_json = None
    if fetch_interface:
        interface_json = _fetch_stage(
            FetchStage.INTERFACE, chain, address, client.fetch_interface, chain, address
        )

    deployed_bytecode = _fetch_stage(
        FetchStage.DEPLOYED_BYTECODE,
        chain,
        address,
        client.fetch_deployed_bytecode,
        chain,
        address,
    )

    tx_hash = _fetch_stage(
        FetchStage.TX_HASH, chain, address, client.fetch_deployment_tx_hash, chain, address
    )

    deployment_tx = _fetch_stage(
        FetchStage.TX_DATA, chain, address, client.fetch_deployment_tx, chain, tx_hash
    )

    if deployment_salt:
        deployment_tx.input = strip_deployment_salt(deployment_tx.input, deployment_salt)

    logger.debug(f"Fetched contract data for {address} on {chain}")
    return ContractData(
        deployed_bytecode=deployed_bytecode,
        deployment_tx=deployment_tx,
        interface_json=interface_json,
    )


def fetch_deployed_bytecode(client, chain: str, address: str) -> str:
    """Fetch only the deployed bytecode of a contract."""
    return _fetch_stage(
        FetchStage.DEPLOYED_BYTECODE,
        chain,
        address,
        client.fetch_deployed_bytecode,
        chain,
        address,
    )


def _fetch_stage(stage: FetchStage, chain: str, address: str, fetch, *args):
    try:
        return fetch(*args)
    except ContractDataClientError as e:
        raise FetchError(
            f"error fetching {stage.value} for {address} on {chain}: {e}",
            stage=stage,
            chain=chain,
            address=address,
        ) from e
