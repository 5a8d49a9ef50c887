"""Shared pytest fixtures for predeploy-bindings tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest

from predeploy_bindings.exceptions import ContractDataClientError
from predeploy_bindings.types import DeploymentTx, RemoteContractMetadata
from predeploy_bindings.writer import MetadataWriter

ETH_ADDRESS = "0x1111111111111111111111111111111111111111"
OP_ADDRESS = "0x2222222222222222222222222222222222222222"
DEPLOYER_ADDRESS = "0x4e59b44847b379578588920cA78FbF26c0B4956C"
SAMPLE_ABI = '[{"type":"function","name":"foo","inputs":[],"outputs":[]}]'


class FakeChainClient:
    """In-memory chain data client that records every call."""

    def __init__(self):
        self.contracts: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.failures: Set[Tuple[str, str]] = set()  # (method, chain)
        self.calls: List[Tuple[str, str, str]] = []

    def add_contract(
        self,
        chain: str,
        address: str,
        deployed: str = "0x6080",
        tx_input: str = "0x60806040",
        tx_to: Optional[str] = None,
        abi: str = SAMPLE_ABI,
    ) -> None:
        self.contracts[(chain, address)] = {
            "abi": abi,
            "deployed": deployed,
            "tx_hash": f"0xhash-{chain}-{address}",
            "tx": DeploymentTx(input=tx_input, to=tx_to),
        }

    def fail(self, method: str, chain: str) -> None:
        self.failures.add((method, chain))

    def _record(self, method: str, chain: str, arg: str) -> None:
        self.calls.append((method, chain, arg))
        if (method, chain) in self.failures:
            raise ContractDataClientError(f"{method} failed on {chain}")

    def fetch_interface(self, chain, address):
        self._record("fetch_interface", chain, address)
        return self.contracts[(chain, address)]["abi"]

    def fetch_deployed_bytecode(self, chain, address):
        self._record("fetch_deployed_bytecode", chain, address)
        return self.contracts[(chain, address)]["deployed"]

    def fetch_deployment_tx_hash(self, chain, address):
        self._record("fetch_deployment_tx_hash", chain, address)
        return self.contracts[(chain, address)]["tx_hash"]

    def fetch_deployment_tx(self, chain, tx_hash):
        self._record("fetch_deployment_tx", chain, tx_hash)
        for (contract_chain, _), data in self.contracts.items():
            if contract_chain == chain and data["tx_hash"] == tx_hash:
                tx = data["tx"]
                # Fresh copy, fetches must not share state
                return DeploymentTx(input=tx.input, to=tx.to)
        raise ContractDataClientError(f"Transaction {tx_hash} not found")

    def chains_called(self) -> Set[str]:
        return {chain for _, chain, _ in self.calls}


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def fake_client() -> FakeChainClient:
    """Chain client with one matching contract on both chains."""
    client = FakeChainClient()
    client.add_contract("eth", ETH_ADDRESS)
    client.add_contract("op", OP_ADDRESS)
    return client


@pytest.fixture
def make_metadata():
    """Factory for fresh RemoteContractMetadata records."""

    def _make(name: str = "Foo", **overrides: Any) -> RemoteContractMetadata:
        fields: Dict[str, Any] = {
            "name": name,
            "package_name": "bindings",
            "verified": True,
            "deployments": {"eth": ETH_ADDRESS, "op": OP_ADDRESS},
        }
        fields.update(overrides)
        return RemoteContractMetadata(**fields)

    return _make


@pytest.fixture
def output_dirs(tmp_path: Path) -> Dict[str, Path]:
    """Create metadata, bindings and artifacts directories."""
    dirs = {
        "metadata": tmp_path / "metadata",
        "bindings": tmp_path / "bindings",
        "artifacts": tmp_path / "artifacts",
    }
    for path in dirs.values():
        path.mkdir(parents=True, exist_ok=True)
    return dirs


@pytest.fixture
def writer(output_dirs: Dict[str, Path]) -> MetadataWriter:
    """MetadataWriter writing into temporary directories."""
    return MetadataWriter(
        output_dirs["metadata"], output_dirs["bindings"], output_dirs["artifacts"]
    )
