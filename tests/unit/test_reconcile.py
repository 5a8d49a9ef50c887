"""Unit tests for cross-chain bytecode reconciliation."""

import logging

import pytest

from predeploy_bindings.exceptions import ContractConfigError, FetchError
from predeploy_bindings.reconcile import compare_bytecode

OP_ADDRESS = "0x2222222222222222222222222222222222222222"


class TestCompareBytecode:
    """Test the compare_bytecode function."""

    def test_matching_bytecode_has_no_divergence(self, fake_client, make_metadata, caplog):
        """Test that identical bytecode produces no divergence or log."""
        metadata = make_metadata(init_bin="0x60806040", deployed_bin="0x6080")

        with caplog.at_level(logging.CRITICAL):
            divergences = compare_bytecode(fake_client, metadata)

        assert divergences == []
        assert not [r for r in caplog.records if r.levelno == logging.CRITICAL]

    def test_init_divergence_is_logged_critical(self, fake_client, make_metadata, caplog):
        """Test that differing init code emits a critical event with both values."""
        metadata = make_metadata(init_bin="0xaaaa", deployed_bin="0x6080")

        with caplog.at_level(logging.CRITICAL):
            divergences = compare_bytecode(fake_client, metadata)

        assert len(divergences) == 1
        assert divergences[0].kind == "init"
        assert divergences[0].primary_value == "0xaaaa"
        assert divergences[0].secondary_value == "0x60806040"

        critical = [r for r in caplog.records if r.levelno == logging.CRITICAL]
        assert len(critical) == 1
        assert "Foo" in critical[0].getMessage()
        assert "0xaaaa" in critical[0].getMessage()
        assert "0x60806040" in critical[0].getMessage()
        assert critical[0].contract_name == "Foo"

    def test_deployed_divergence_is_logged_critical(self, fake_client, make_metadata, caplog):
        """Test that differing deployed bytecode emits a critical event."""
        metadata = make_metadata(init_bin="0x60806040", deployed_bin="0xbbbb")

        with caplog.at_level(logging.CRITICAL):
            divergences = compare_bytecode(fake_client, metadata)

        assert [d.kind for d in divergences] == ["deployed"]
        assert len([r for r in caplog.records if r.levelno == logging.CRITICAL]) == 1

    def test_both_fields_diverge_independently(self, fake_client, make_metadata, caplog):
        """Test that init and deployed divergences are reported separately."""
        metadata = make_metadata(init_bin="0xaaaa", deployed_bin="0xbbbb")

        with caplog.at_level(logging.CRITICAL):
            divergences = compare_bytecode(fake_client, metadata)

        assert [d.kind for d in divergences] == ["init", "deployed"]
        assert len([r for r in caplog.records if r.levelno == logging.CRITICAL]) == 2

    def test_empty_fields_are_never_compared(self, fake_client, make_metadata, caplog):
        """Test that empty local fields never produce a divergence."""
        metadata = make_metadata(init_bin="", deployed_bin="")

        with caplog.at_level(logging.CRITICAL):
            divergences = compare_bytecode(fake_client, metadata)

        assert divergences == []
        assert not caplog.records

    def test_fetches_paired_chain_without_interface(self, fake_client, make_metadata):
        """Test that only the paired chain is queried and the ABI is skipped."""
        compare_bytecode(fake_client, make_metadata(deployed_bin="0x6080"))

        assert fake_client.chains_called() == {"op"}
        methods = [method for method, _, _ in fake_client.calls]
        assert "fetch_interface" not in methods
        assert ("fetch_deployed_bytecode", "op", OP_ADDRESS) in fake_client.calls

    def test_paired_chain_uses_same_salt(self, fake_client, make_metadata):
        """Test that the salt is stripped from the paired chain's init code too."""
        fake_client.add_contract("op", OP_ADDRESS, tx_input="0xabcd1234")
        metadata = make_metadata(deployment_salt="abcd", init_bin="1234")

        assert compare_bytecode(fake_client, metadata) == []

    def test_fetch_error_propagates(self, fake_client, make_metadata):
        """Test that retrieval failures abort instead of being logged."""
        fake_client.fail("fetch_deployment_tx", "op")

        with pytest.raises(FetchError):
            compare_bytecode(fake_client, make_metadata(init_bin="0x60806040"))

    def test_missing_paired_deployment_raises(self, fake_client, make_metadata):
        """Test that a contract without a paired chain deployment is rejected."""
        metadata = make_metadata(deployments={"eth": "0x1111111111111111111111111111111111111111"})

        with pytest.raises(ContractConfigError):
            compare_bytecode(fake_client, metadata)
