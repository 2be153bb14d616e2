"""Encoding utilities for Platarium."""

import json
import math
import re
from typing import Any, Union

from ..constants import SCALAR_HEX_LENGTH
from ..exceptions import ErrorKind, PlatariumError

__all__ = [
    "hex_to_bytes",
    "scalar_to_hex",
    "canonical_json",
]

HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        PlatariumError: If hex string is invalid or contains whitespace
    """
    if not isinstance(hex_str, str):
        raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Hex value must be a string")
    if hex_str.startswith("0x"):
        hex_str = hex_str[2:]
    # bytes.fromhex skips whitespace, so digits are checked first
    if not HEX_DIGITS.fullmatch(hex_str) or len(hex_str) % 2:
        raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Invalid hex string")
    return bytes.fromhex(hex_str)


def scalar_to_hex(scalar: Union[int, bytes, bytearray]) -> str:
    """
    Render a 256-bit scalar as exactly 64 hex characters.

    Shorter values are left-padded with zeros. Values whose natural hex
    form is longer than 64 characters are rejected, never truncated.

    Args:
        scalar: Non-negative integer or big-endian bytes

    Returns:
        64-character lowercase hex string

    Raises:
        PlatariumError: LENGTH_VIOLATION if the value exceeds 32 bytes,
            INVALID_ARGUMENT if it is negative or not a number
    """
    if isinstance(scalar, (bytes, bytearray)):
        scalar = int.from_bytes(scalar, "big")
    if isinstance(scalar, bool) or not isinstance(scalar, int):
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "Scalar must be an integer or bytes")
    if scalar < 0:
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "Scalar must be non-negative")

    hex_str = format(scalar, "x")
    if len(hex_str) > SCALAR_HEX_LENGTH:
        raise PlatariumError(
            ErrorKind.LENGTH_VIOLATION,
            "Scalar length is greater than 32 bytes"
        )
    return hex_str.zfill(SCALAR_HEX_LENGTH)


def canonical_json(value: Any) -> str:
    """
    Serialize a message deterministically.

    Keys are sorted, separators carry no whitespace, integral floats are
    written as integers (``1.0`` and ``1`` serialize alike), and non-finite
    floats are refused, so logically equal messages always serialize
    identically.

    Raises:
        PlatariumError: INVALID_ARGUMENT if the value is not JSON-serializable
    """
    try:
        return json.dumps(
            _normalize_numbers(value),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise PlatariumError(
            ErrorKind.INVALID_ARGUMENT,
            f"Message is not canonically serializable: {e}"
        ) from e


def _normalize_numbers(value: Any) -> Any:
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return value
    if isinstance(value, dict):
        return {key: _normalize_numbers(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(item) for item in value]
    return value
