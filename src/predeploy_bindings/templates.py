"""Templates for generated contract metadata modules."""

import json
from string import Template

from .exceptions import WriteError
from .types import RemoteContractMetadata

# Metadata of a remotely sourced contract whose deployed bytecode is
# chain-independent.
#
# Placeholders:
# - $name: the name of the contract
# - $deployed_bin: quoted literal of the deployed contract's hex binary
REMOTE_CONTRACT_METADATA_TEMPLATE = Template(
    '''# Code generated - DO NOT EDIT.
# This file is a generated binding and any manual changes will be lost.

${name}DeployedBin = ${deployed_bin}


def register(registry):
    registry.deployed_bytecodes["${name}"] = ${name}DeployedBin
'''
)

# Metadata of the remotely sourced Permit2 contract. Permit2 has an immutable
# that depends on block.chainid, so its deployed bytecode can't be reused and
# has to be regenerated per chain from the initialization code, salt and
# deployer instead.
#
# Placeholders:
# - $name: the name of the contract
# - $init_bin: quoted literal of the initialization code's hex binary
# - $deployment_salt: quoted literal of the deployment salt
# - $deployer_address: quoted literal of the deployer's address
PERMIT2_METADATA_TEMPLATE = Template(
    '''# Code generated - DO NOT EDIT.
# This file is a generated binding and any manual changes will be lost.

${name}InitBin = ${init_bin}
${name}DeploymentSalt = ${deployment_salt}
${name}DeployerAddress = ${deployer_address}


def register(registry):
    registry.init_bytecodes["${name}"] = ${name}InitBin
    registry.deployment_salts["${name}"] = ${name}DeploymentSalt
    registry.deployer_addresses["${name}"] = ${name}DeployerAddress
'''
)


HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def is_hex(value: str) -> bool:
    """Check that a value is hex digits, optionally behind a "0x" marker."""
    digits = value[2:] if value.startswith("0x") else value
    return all(c in HEX_DIGITS for c in digits)


def hex_literal(value: str) -> str:
    """
    Quote a hex value as a Python string literal.

    Raises:
        ValueError: If the value isn't hex
    """
    if not is_hex(value):
        raise ValueError(f"not a hex value: {value!r}")
    return json.dumps(value)


def render(template: Template, metadata: RemoteContractMetadata) -> str:
    """
    Render a metadata template for a contract.

    Bytecode, salt and deployer values are emitted as quoted literals and
    must be hex, so the generated module holds exactly the fetched values.

    Raises:
        WriteError: If the contract name isn't a valid identifier, a value
                    isn't hex, or the template references an unknown field
    """
    if not metadata.name.isidentifier():
        raise WriteError(
            f"Contract name '{metadata.name}' is not a valid identifier",
            contract_name=metadata.name,
        )

    try:
        return template.substitute(
            name=metadata.name,
            deployed_bin=hex_literal(metadata.deployed_bin),
            init_bin=hex_literal(metadata.init_bin),
            deployment_salt=hex_literal(metadata.deployment_salt),
            deployer_address=hex_literal(metadata.deployer_address),
        )
    except (KeyError, ValueError) as e:
        raise WriteError(
            f"error rendering {metadata.name}'s contract metadata: {e}",
            contract_name=metadata.name,
        ) from e
