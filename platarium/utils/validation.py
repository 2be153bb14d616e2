"""Validation utilities for Platarium."""

import re
from typing import Optional, Union

from ..constants import MAX_SEED_INDEX, SCALAR_HEX_LENGTH, SECP256K1_ORDER
from ..exceptions import ErrorKind, PlatariumError
from ..utils.encoding import hex_to_bytes

__all__ = [
    "is_valid_scalar_hex",
    "validate_scalar_hex",
    "validate_seed_index",
    "validate_non_empty_bytes",
    "validate_custom_path",
    "validate_private_key",
    "validate_public_key",
    "strip_key_prefix",
]

HEX_PATTERN = re.compile(r"[0-9a-fA-F]*")


def is_valid_scalar_hex(value: object) -> bool:
    """Check for a 64-character hex string."""
    return (
        isinstance(value, str)
        and len(value) == SCALAR_HEX_LENGTH
        and bool(HEX_PATTERN.fullmatch(value))
    )


def validate_scalar_hex(value: object, name: str = "key") -> str:
    """
    Validate a 64-character hex scalar.

    Raises:
        PlatariumError: INVALID_KEY_FORMAT on wrong type, length or digits
    """
    if not is_valid_scalar_hex(value):
        raise PlatariumError(
            ErrorKind.INVALID_KEY_FORMAT,
            f"{name} must be a {SCALAR_HEX_LENGTH}-character hex string"
        )
    return value  # type: ignore[return-value]


def validate_seed_index(index: object) -> int:
    """Validate a derivation slot index: 0 <= index < 2^31 - 1."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "seed_index must be an integer")
    if index < 0 or index >= MAX_SEED_INDEX:
        raise PlatariumError(
            ErrorKind.INVALID_ARGUMENT,
            f"seed_index must be an integer in the range [0, {MAX_SEED_INDEX - 1}]"
        )
    return index


def validate_non_empty_bytes(value: object, name: str) -> bytes:
    """Validate a non-empty bytes-like value."""
    if not isinstance(value, (bytes, bytearray)) or len(value) == 0:
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, f"{name} must be non-empty bytes")
    return bytes(value)


def validate_custom_path(path: object) -> Optional[str]:
    """Explicit derivation path must be a string or None."""
    if path is not None and not isinstance(path, str):
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "custom_path must be a string or None")
    return path


def validate_private_key(key: Union[bytes, bytearray, str]) -> bytes:
    """
    Validate private key and return 32 bytes.

    Args:
        key: 32 raw bytes or 64-character hex string

    Returns:
        Private key bytes

    Raises:
        PlatariumError: If key is malformed or outside [1, n-1]
    """
    if isinstance(key, str):
        key = hex_to_bytes(validate_scalar_hex(key, "private key"))
    if not isinstance(key, (bytes, bytearray)):
        raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Private key must be bytes or hex")
    if len(key) != 32:
        raise PlatariumError(
            ErrorKind.INVALID_KEY_FORMAT,
            f"Private key must be 32 bytes, got {len(key)}"
        )

    key_int = int.from_bytes(key, "big")
    if key_int == 0 or key_int >= SECP256K1_ORDER:
        raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Private key out of curve range")
    return bytes(key)


def validate_public_key(key: Union[bytes, bytearray, str]) -> bytes:
    """
    Validate public key encoding.

    Args:
        key: Compressed (33) or uncompressed (65) bytes, or hex thereof

    Raises:
        PlatariumError: If the encoding is malformed
    """
    if isinstance(key, str):
        key = hex_to_bytes(key)
    if not isinstance(key, (bytes, bytearray)):
        raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Public key must be bytes or hex")

    if len(key) == 33:
        if key[0] not in (0x02, 0x03):
            raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Invalid compressed public key prefix")
    elif len(key) == 65:
        if key[0] != 0x04:
            raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Invalid uncompressed public key prefix")
    else:
        raise PlatariumError(
            ErrorKind.INVALID_KEY_FORMAT,
            f"Public key must be 33 or 65 bytes, got {len(key)}"
        )
    return bytes(key)


def strip_key_prefix(value: object, prefix: str, length: int = SCALAR_HEX_LENGTH) -> str:
    """
    Remove a bundle type prefix and validate the remaining hex.

    Raises:
        PlatariumError: INVALID_KEY_FORMAT if the prefix or body is wrong
    """
    if not isinstance(value, str) or not value.startswith(prefix):
        raise PlatariumError(
            ErrorKind.INVALID_KEY_FORMAT,
            f"Expected a value prefixed with {prefix!r}"
        )
    body = value[len(prefix):]
    if len(body) != length or not HEX_PATTERN.fullmatch(body):
        raise PlatariumError(
            ErrorKind.INVALID_KEY_FORMAT,
            f"Value after {prefix!r} must be {length} hex characters"
        )
    return body
