"""Artifact, binding and metadata output for predeploy-bindings library."""

import json
import logging
from pathlib import Path
from string import Template
from typing import Callable, Union

from .exceptions import WriteError
from .paths import get_artifact_paths, get_bindings_path, get_metadata_path
from .templates import hex_literal, render
from .types import RemoteContractMetadata

logger = logging.getLogger(__name__)

BINDINGS_TEMPLATE = Template(
    '''# Code generated - DO NOT EDIT.
# This file is a generated binding and any manual changes will be lost.
"""Bindings for a remotely sourced contract."""

import json

CONTRACT_NAME = ${contract_name}
PACKAGE_NAME = ${package_name}
ABI_JSON = ${abi_json}
ABI = json.loads(ABI_JSON)
BIN = ${bytecode}
'''
)


def write_contract_artifacts(
    out_dir: Union[Path, str],
    name: str,
    interface_bytes: bytes,
    init_bytecode_bytes: bytes,
) -> tuple[Path, Path]:
    """
    Write a contract's ABI and initialization bytecode to artifact files.

    Args:
        out_dir: Temporary artifacts directory
        name: Contract name, used for file names
        interface_bytes: ABI JSON
        init_bytecode_bytes: Hex-encoded initialization bytecode

    Returns:
        Tuple of (abi_path, bytecode_path)

    Raises:
        WriteError: If a file can't be written
    """
    abi_path, bytecode_path = get_artifact_paths(out_dir, name)
    for path, content in ((abi_path, interface_bytes), (bytecode_path, init_bytecode_bytes)):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise WriteError(
                f"error writing {name}'s artifact at {path}: {e}",
                contract_name=name,
                path=path,
            ) from e

    logger.debug(f"Wrote {name} artifacts to {abi_path} and {bytecode_path}")
    return abi_path, bytecode_path


def generate_bindings(
    interface_path: Path,
    bytecode_path: Path,
    package_name: str,
    contract_name: str,
    out_dir: Union[Path, str],
) -> Path:
    """
    Generate a Python binding module from a contract's artifact files.

    The module exposes the contract's ABI (ABI, ABI_JSON) and its
    initialization bytecode (BIN).

    Returns:
        Path of the generated binding module

    Raises:
        WriteError: If the artifacts can't be read, the ABI isn't valid JSON,
                    the bytecode isn't hex, or the module can't be written
    """
    out_path = get_bindings_path(out_dir, contract_name)
    try:
        abi_json = Path(interface_path).read_text().strip() or "[]"
        json.loads(abi_json)
        bytecode = Path(bytecode_path).read_text().strip()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(
            BINDINGS_TEMPLATE.substitute(
                contract_name=repr(contract_name),
                package_name=repr(package_name),
                abi_json=repr(abi_json),
                bytecode=hex_literal(bytecode),
            )
        )
    except (OSError, ValueError) as e:
        raise WriteError(
            f"error generating {contract_name}'s bindings at {out_path}: {e}",
            contract_name=contract_name,
            path=out_path,
        ) from e

    logger.debug(f"Generated {contract_name} bindings at {out_path}")
    return out_path


def write_contract_metadata(
    metadata: RemoteContractMetadata,
    template: Template,
    metadata_out: Union[Path, str],
) -> Path:
    """
    Render a contract's metadata module, replacing any previous one.

    Returns:
        Path of the written metadata module

    Raises:
        WriteError: If rendering or writing fails
    """
    metadata_path = get_metadata_path(metadata_out, metadata.name)
    content = render(template, metadata)

    try:
        with open(metadata_path, "w") as f:
            f.write(content)
    except OSError as e:
        raise WriteError(
            f"error writing {metadata.name}'s contract metadata at {metadata_path}: {e}",
            contract_name=metadata.name,
            path=metadata_path,
        ) from e

    logger.debug(f"Successfully wrote contract metadata for {metadata.name} to {metadata_path}")
    return metadata_path


class MetadataWriter:
    """Writes all outputs of a handled contract."""

    def __init__(
        self,
        metadata_out: Union[Path, str],
        bindings_out: Union[Path, str],
        temp_artifacts_dir: Union[Path, str],
        binding_generator: Callable[..., object] = generate_bindings,
    ):
        self.metadata_out = Path(metadata_out)
        self.bindings_out = Path(bindings_out)
        self.temp_artifacts_dir = Path(temp_artifacts_dir)
        self.binding_generator = binding_generator

    def write_all_outputs(self, metadata: RemoteContractMetadata, template: Template) -> Path:
        """
        Write artifacts, generate bindings and render the metadata module.

        Files written before a failure are left in place.

        Returns:
            Path of the metadata module

        Raises:
            WriteError: If any step fails
        """
        abi_path, bytecode_path = write_contract_artifacts(
            self.temp_artifacts_dir,
            metadata.name,
            metadata.interface_json.encode(),
            metadata.init_bin.encode(),
        )

        try:
            self.binding_generator(
                abi_path,
                bytecode_path,
                metadata.package_name,
                metadata.name,
                self.bindings_out,
            )
        except WriteError:
            raise
        except Exception as e:
            raise WriteError(
                f"error generating {metadata.name}'s bindings: {e}",
                contract_name=metadata.name,
            ) from e

        return write_contract_metadata(metadata, template, self.metadata_out)
