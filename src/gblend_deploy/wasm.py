"""WASM artifact validation for gblend-deploy library."""

import logging
from pathlib import Path
from typing import Union

from .constants import WASM_MAGIC
from .exceptions import ArtifactNotFoundError, WasmValidationError

logger = logging.getLogger(__name__)


def validate_wasm_artifact(wasm_file: Union[Path, str]) -> Path:
    """
    Check that a file exists and starts with the WASM magic number.

    Only the first four bytes are read.

    Args:
        wasm_file: Path to the compiled WASM file

    Returns:
        The artifact path as a Path

    Raises:
        ArtifactNotFoundError: If the file does not exist
        WasmValidationError: If the file cannot be read or lacks the magic number
    """
    path = Path(wasm_file)
    if not path.is_file():
        raise ArtifactNotFoundError(f"WASM file not found: {path}")

    try:
        with open(path, "rb") as f:
            header = f.read(len(WASM_MAGIC))
    except OSError as e:
        raise WasmValidationError(f"Failed to read WASM file {path}: {e}") from e

    if header != WASM_MAGIC:
        raise WasmValidationError(f"Invalid WASM file {path}: missing magic number")

    return path


def read_wasm_artifact(wasm_file: Union[Path, str]) -> bytes:
    """
    Validate a WASM artifact and return its full contents.

    Raises:
        ArtifactNotFoundError: If the file does not exist
        WasmValidationError: If the file is not a WASM module
    """
    path = validate_wasm_artifact(wasm_file)
    try:
        artifact = path.read_bytes()
    except OSError as e:
        raise WasmValidationError(f"Failed to read WASM file {path}: {e}") from e

    logger.info("WASM file size: %d bytes", len(artifact))
    return artifact
