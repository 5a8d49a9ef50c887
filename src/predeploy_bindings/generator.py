"""Main API for predeploy-bindings library."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from .client import EtherscanClient
from .constants import CHAIN_CONFIG, PRIMARY_CHAIN, SECONDARY_CHAIN
from .contracts import load_remote_contracts
from .handlers import handler_for
from .types import HandlerResult, RemoteContractMetadata
from .writer import MetadataWriter, generate_bindings

logger = logging.getLogger(__name__)


class RemoteBindingsGenerator:
    """Generates verified metadata for remotely sourced predeploy contracts."""

    def __init__(
        self,
        client,
        metadata_out: Union[Path, str],
        bindings_out: Union[Path, str],
        temp_artifacts_dir: Union[Path, str],
        binding_generator: Callable[..., object] = generate_bindings,
    ):
        """
        Initialize the generator.

        Args:
            client: Chain data client, shared read-only across contracts
            metadata_out: Directory for generated *_more.py metadata modules
            bindings_out: Directory for generated binding modules
            temp_artifacts_dir: Directory for intermediate ABI/bytecode files
            binding_generator: Downstream binding generator
        """
        self.client = client
        self.writer = MetadataWriter(
            metadata_out, bindings_out, temp_artifacts_dir, binding_generator
        )

    def generate(self, metadata: RemoteContractMetadata) -> HandlerResult:
        """
        Handle a single contract with the strategy selected for its name.

        Raises:
            BindgenError: If fetching, validation or writing fails
        """
        handler = handler_for(metadata.name)
        logger.debug(f"Handling {metadata.name} with {handler.kind.value} handler")
        return handler.handle(self.client, self.writer, metadata)

    def generate_all(self, contracts: Iterable[RemoteContractMetadata]) -> List[HandlerResult]:
        """Handle contracts in order, stopping at the first error."""
        return [self.generate(metadata) for metadata in contracts]


def regenerate_remote_bindings(
    contracts_path: Union[Path, str],
    metadata_out: Union[Path, str],
    bindings_out: Union[Path, str],
    package_name: str = "bindings",
    etherscan_api_key: Optional[str] = None,
    op_etherscan_api_key: Optional[str] = None,
    client=None,
) -> List[HandlerResult]:
    """
    Regenerate metadata and bindings for every contract in a contracts list.

    Args:
        contracts_path: Path to the remote contracts JSON list
        metadata_out: Directory for generated metadata modules
        bindings_out: Directory for generated binding modules
        package_name: Package name recorded in the bindings
        etherscan_api_key: Primary chain explorer key (defaults to $ETHERSCAN_API_KEY)
        op_etherscan_api_key: Secondary chain explorer key (defaults to $OP_ETHERSCAN_API_KEY)
        client: Chain data client to use instead of an EtherscanClient

    Returns:
        One HandlerResult per contract

    Raises:
        ValueError: If no client is given and both API keys are missing
        BindgenError: If any contract fails
    """
    if client is None:
        if etherscan_api_key is None:
            etherscan_api_key = os.environ.get(CHAIN_CONFIG[PRIMARY_CHAIN]["api_key_env"])
        if op_etherscan_api_key is None:
            op_etherscan_api_key = os.environ.get(CHAIN_CONFIG[SECONDARY_CHAIN]["api_key_env"])

        if etherscan_api_key is None and op_etherscan_api_key is None:
            raise ValueError(
                "Explorer API key required: set $ETHERSCAN_API_KEY or "
                "$OP_ETHERSCAN_API_KEY environment variable, or pass "
                "etherscan_api_key or op_etherscan_api_key parameter"
            )

        api_keys = {}
        if etherscan_api_key is not None:
            api_keys[PRIMARY_CHAIN] = etherscan_api_key
        if op_etherscan_api_key is not None:
            api_keys[SECONDARY_CHAIN] = op_etherscan_api_key
        client = EtherscanClient(api_keys)

    contracts = load_remote_contracts(contracts_path, package_name)

    Path(metadata_out).mkdir(parents=True, exist_ok=True)
    Path(bindings_out).mkdir(parents=True, exist_ok=True)

    with tempfile.TemporaryDirectory() as tmp_dir:
        generator = RemoteBindingsGenerator(client, metadata_out, bindings_out, tmp_dir)
        results = generator.generate_all(contracts)

    for result in results:
        if result.divergences:
            logger.warning(
                f"{result.contract_name} was written with "
                f"{len(result.divergences)} bytecode divergence(s)"
            )
    return results
