"""Unit tests for custom exception classes."""

import pytest

from predeploy_bindings.exceptions import (
    BindgenError,
    ContractConfigError,
    ContractDataClientError,
    DeployerMismatchError,
    FetchError,
    SaltMismatchError,
    WriteError,
)
from predeploy_bindings.types import FetchStage


class TestExceptionCatching:
    """Test that exceptions can be caught as their base types."""

    def test_catch_fetch_error_as_runtime_error(self):
        """Test that FetchError can be caught as RuntimeError."""
        with pytest.raises(RuntimeError):
            raise FetchError("test", stage=FetchStage.TX_HASH)

    def test_catch_salt_mismatch_as_value_error(self):
        """Test that SaltMismatchError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise SaltMismatchError("abcd", "0x1234")

    def test_catch_deployer_mismatch_as_value_error(self):
        """Test that DeployerMismatchError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise DeployerMismatchError("Permit2", "0xaa", "0xbb")

    def test_catch_contract_config_error_as_value_error(self):
        """Test that ContractConfigError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise ContractConfigError("test")

    def test_catch_all_as_bindgen_error(self):
        """Test that all custom exceptions can be caught as BindgenError."""
        exceptions = [
            ContractDataClientError("test"),
            ContractConfigError("test"),
            FetchError("test"),
            SaltMismatchError("abcd", "0x1234"),
            DeployerMismatchError("Permit2", "0xaa", "0xbb"),
            WriteError("test"),
        ]

        for exc in exceptions:
            with pytest.raises(BindgenError):
                raise exc


class TestExceptionContext:
    """Test the context carried by exceptions."""

    def test_fetch_error_carries_stage(self):
        exc = FetchError("boom", stage=FetchStage.TX_DATA, chain="op", address="0x1")

        assert str(exc) == "boom"
        assert exc.stage is FetchStage.TX_DATA
        assert exc.chain == "op"
        assert exc.address == "0x1"

    def test_deployer_mismatch_message(self):
        """Test that both addresses appear in the message."""
        exc = DeployerMismatchError("Permit2", "0xaa", None)

        assert "0xaa" in str(exc)
        assert "None" in str(exc)
        assert "Permit2" in str(exc)

    def test_write_error_carries_path(self, tmp_path):
        exc = WriteError("failed", contract_name="Foo", path=tmp_path)

        assert str(exc) == "failed"
        assert exc.contract_name == "Foo"
        assert exc.path == tmp_path
