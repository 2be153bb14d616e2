"""Message signing and verification for Platarium."""

import hashlib
import logging
from typing import Any, Tuple, Union

from ..constants import DOMAIN_SEPARATOR, HALF_ORDER, SECP256K1_ORDER
from ..crypto.keys import PrivateKey, PublicKey
from ..exceptions import ErrorKind, PlatariumError
from ..types.common import HexStr
from ..types.identity import SignedMessage
from ..utils.encoding import canonical_json, hex_to_bytes, scalar_to_hex

__all__ = [
    "hash_message",
    "ensure_low_s",
    "sign_message",
    "verify_signature",
    "recover_public_key",
    "parse_der_signature",
    "encode_der_signature",
]

logger = logging.getLogger(__name__)

N = SECP256K1_ORDER


def hash_message(message: Any) -> bytes:
    """
    Hash a message with the Platarium domain separator.

    The message is serialized with :func:`canonical_json` so that equal
    messages hash equally regardless of key order.

    Args:
        message: JSON-compatible value (dict, list, str, number, ...)

    Returns:
        32-byte SHA-256 digest

    Raises:
        PlatariumError: INVALID_ARGUMENT if the message cannot be serialized
    """
    payload = DOMAIN_SEPARATOR + canonical_json(message)
    return hashlib.sha256(payload.encode("utf-8")).digest()


def ensure_low_s(r: int, s: int, recovery_id: int = 0) -> Tuple[int, int, int]:
    """
    Normalize a signature to low-S form.

    Negating S mirrors the nonce point, so the recovery id parity flips
    with it.

    Returns:
        Tuple of (r, s, recovery_id) with s <= n/2
    """
    if s > HALF_ORDER:
        return r, N - s, recovery_id ^ 1
    return r, s, recovery_id


def sign_message(
    private_key: Union[PrivateKey, bytes, str],
    message: Any
) -> SignedMessage:
    """
    Sign a message with RFC 6979 deterministic ECDSA.

    Args:
        private_key: PrivateKey, 32 raw bytes or 64-char hex (no bundle prefix)
        message: JSON-compatible message

    Returns:
        SignedMessage with low-S r/s, compressed public key, DER and
        compact (r || s || recovery id) encodings

    Raises:
        PlatariumError: If the key or message is invalid
    """
    key = private_key if isinstance(private_key, PrivateKey) else PrivateKey(private_key)
    digest = hash_message(message)

    raw = key.sign_recoverable(digest)
    r = int.from_bytes(raw[:32], "big")
    s = int.from_bytes(raw[32:64], "big")
    r, s, recovery_id = ensure_low_s(r, s, raw[64])

    r_hex = scalar_to_hex(r)
    s_hex = scalar_to_hex(s)

    return SignedMessage(
        hash=HexStr(digest.hex()),
        r=HexStr(r_hex),
        s=HexStr(s_hex),
        pub=key.public_key(compressed=True).hex(),
        der=HexStr(encode_der_signature(r, s).hex()),
        compact=HexStr(r_hex + s_hex + f"{recovery_id:02x}"),
        recovery_id=recovery_id,
    )


def verify_signature(message: Any, signature_hex: str, public_key_hex: str) -> bool:
    """
    Verify a DER signature over a message.

    Never raises: malformed messages, signatures or keys all yield False.

    Args:
        message: Original message
        signature_hex: DER-encoded signature as hex
        public_key_hex: Compressed or uncompressed public key as hex

    Returns:
        True if signature is valid
    """
    try:
        digest = hash_message(message)
        r, s = parse_der_signature(hex_to_bytes(signature_hex))
        public_key = PublicKey(public_key_hex)
        return public_key.verify(encode_der_signature(r, s), digest)
    except Exception as e:
        logger.debug("Signature rejected: %s", e)
        return False


def recover_public_key(message: Any, compact_hex: str) -> HexStr:
    """
    Recover the compressed public key from a compact signature.

    Args:
        message: Original message
        compact_hex: r || s || recovery id, 65 bytes as hex

    Returns:
        Compressed public key hex

    Raises:
        PlatariumError: If the signature is malformed or unrecoverable
    """
    data = hex_to_bytes(compact_hex)
    if len(data) != 65:
        raise PlatariumError(
            ErrorKind.INVALID_KEY_FORMAT,
            f"Compact signature must be 65 bytes, got {len(data)}"
        )
    if data[64] > 3:
        raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, f"Invalid recovery id: {data[64]}")
    return PublicKey.recover(data, hash_message(message)).hex()


def parse_der_signature(signature: bytes) -> Tuple[int, int]:
    """
    Parse strict DER-encoded signature.

    Args:
        signature: DER-encoded signature, no sighash byte

    Returns:
        Tuple of (r, s)

    Raises:
        PlatariumError: If signature format is invalid
    """
    try:
        if len(signature) < 8 or len(signature) > 72:
            raise ValueError("bad length")

        if signature[0] != 0x30:
            raise ValueError("missing sequence tag")

        if signature[1] + 2 != len(signature):
            raise ValueError("incorrect length")

        r, offset = _read_der_integer(signature, 2)
        s, offset = _read_der_integer(signature, offset)

        if offset != len(signature):
            raise ValueError("trailing bytes")

    except (IndexError, ValueError) as e:
        raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, f"Invalid DER signature: {e}") from e

    if not (0 < r < N and 0 < s < N):
        raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Invalid DER signature: value out of range")

    return r, s


def encode_der_signature(r: int, s: int) -> bytes:
    """
    Encode signature as DER.

    Args:
        r: Signature r value
        s: Signature s value

    Returns:
        DER-encoded signature
    """
    if r <= 0 or s <= 0:
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "Signature values must be positive")

    sequence = _encode_der_integer(r) + _encode_der_integer(s)
    return b"\x30" + bytes([len(sequence)]) + sequence


def _encode_der_integer(value: int) -> bytes:
    value_bytes = value.to_bytes((value.bit_length() + 7) // 8, "big")
    if value_bytes[0] & 0x80:
        value_bytes = b"\x00" + value_bytes
    return b"\x02" + bytes([len(value_bytes)]) + value_bytes


def _read_der_integer(data: bytes, offset: int) -> Tuple[int, int]:
    if data[offset] != 0x02:
        raise ValueError("missing integer tag")

    length = data[offset + 1]
    if length == 0 or length > 33:
        raise ValueError("bad integer length")

    value = data[offset + 2:offset + 2 + length]
    if len(value) != length:
        raise ValueError("truncated integer")
    if value[0] & 0x80:
        raise ValueError("negative integer")
    if length > 1 and value[0] == 0 and not value[1] & 0x80:
        raise ValueError("non-minimal integer")

    return int.from_bytes(value, "big"), offset + 2 + length
