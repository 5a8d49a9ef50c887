"""Custom exception classes for predeploy-bindings library."""


class BindgenError(Exception):
    """Base exception for remote binding generation errors."""

    pass


class ContractDataClientError(BindgenError, RuntimeError):
    """Raised when the chain data client cannot retrieve a value."""

    pass


class ContractConfigError(BindgenError, ValueError):
    """Raised when contract metadata is malformed or incomplete."""

    pass


class FetchError(BindgenError, RuntimeError):
    """Raised when retrieving contract data fails at a given stage."""

    def __init__(self, message: str, stage=None, chain=None, address=None):
        super().__init__(message)
        self.stage = stage
        self.chain = chain
        self.address = address


class SaltMismatchError(BindgenError, ValueError):
    """Raised when the deployment salt does not prefix the initialization code."""

    def __init__(self, salt: str, init_bytecode: str):
        super().__init__(
            f"expected salt: {salt} to be at the beginning of the contract "
            f"initialization code: {init_bytecode}, but it wasn't"
        )
        self.salt = salt
        self.init_bytecode = init_bytecode


class DeployerMismatchError(BindgenError, ValueError):
    """Raised when the recorded deployer differs from the deployment tx recipient."""

    def __init__(self, contract_name: str, expected, actual):
        super().__init__(
            f"expected deployer address: {expected} doesn't match the to address: "
            f"{actual} for {contract_name}'s deployment transaction"
        )
        self.contract_name = contract_name
        self.expected = expected
        self.actual = actual


class WriteError(BindgenError, RuntimeError):
    """Raised when artifacts, bindings or metadata cannot be written."""

    def __init__(self, message: str, contract_name=None, path=None):
        super().__init__(message)
        self.contract_name = contract_name
        self.path = path
