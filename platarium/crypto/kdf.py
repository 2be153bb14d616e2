"""Signature seed derivation (HKDF-SHA256, RFC 5869)."""

import hashlib
import hmac
from typing import Union

from ..constants import HKDF_INFO, HKDF_SALT, SIGNATURE_SEED_LENGTH
from ..exceptions import ErrorKind, PlatariumError
from ..utils.validation import validate_non_empty_bytes

__all__ = ["hkdf_sha256", "derive_signature_seed"]

HASH_LEN = 32


def hkdf_sha256(ikm: bytes, length: int, salt: bytes, info: bytes) -> bytearray:
    """
    HKDF extract-and-expand over SHA-256.

    Returns:
        ``length`` bytes of output keying material as a mutable buffer
    """
    if length <= 0 or length > 255 * HASH_LEN:
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "HKDF length out of range")

    # Extract: PRK = HMAC-SHA256(salt, IKM)
    prk = bytearray(hmac.new(salt, ikm, hashlib.sha256).digest())
    try:
        okm = bytearray()
        block = b""
        counter = 1
        while len(okm) < length:
            block = hmac.new(bytes(prk), block + info + bytes([counter]), hashlib.sha256).digest()
            okm.extend(block)
            counter += 1
        del okm[length:]
        return okm
    finally:
        prk[:] = bytes(len(prk))


def derive_signature_seed(
    master_seed: Union[bytes, bytearray],
    salt: bytes = HKDF_SALT,
    info: bytes = HKDF_INFO
) -> bytearray:
    """
    Derive the 32-byte signature seed from a master seed.

    The result depends only on (master_seed, salt, info). The same salt and
    info must be supplied wherever the signature key is re-derived.

    Args:
        master_seed: BIP39 master seed
        salt: HKDF salt
        info: HKDF context info

    Returns:
        32-byte mutable buffer; the caller owns and wipes it

    Raises:
        PlatariumError: INVALID_ARGUMENT if any input is empty
    """
    if not isinstance(master_seed, (bytes, bytearray)) or len(master_seed) == 0:
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "master_seed must be non-empty bytes")
    salt = validate_non_empty_bytes(salt, "hkdf_salt")
    info = validate_non_empty_bytes(info, "hkdf_info")

    return hkdf_sha256(bytes(master_seed), SIGNATURE_SEED_LENGTH, salt, info)
