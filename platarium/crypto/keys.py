"""Key management for Platarium."""

import secrets
from typing import NamedTuple, Union

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..constants import CHARACTER_SET, COMPANION_CODE_LENGTH
from ..exceptions import ErrorKind, PlatariumError
from ..types.common import HexStr, PrivateKeyBytes, PublicKeyBytes
from ..utils.encoding import scalar_to_hex
from ..utils.validation import validate_private_key, validate_public_key

__all__ = [
    "PrivateKey",
    "PublicKey",
    "KeyPair",
    "derive_key_pair",
    "random_alphanumeric",
]


class PrivateKey:
    """
    secp256k1 private key wrapper.

    Handles public key derivation, hex export and recoverable signing.
    """

    def __init__(self, key: Union[bytes, bytearray, str, "PrivateKey"]) -> None:
        """
        Initialize private key.

        Args:
            key: Private key as 32 bytes, 64-char hex string, or another PrivateKey

        Raises:
            PlatariumError: If key format is invalid or outside the curve order
        """
        if isinstance(key, PrivateKey):
            self._secret = key._secret
            self._key = key._key
            return

        self._secret = PrivateKeyBytes(validate_private_key(key))
        self._key = SecpPrivateKey(self._secret)

    @classmethod
    def create(cls) -> "PrivateKey":
        """
        Create new random private key.

        Returns:
            New PrivateKey instance
        """
        while True:
            key_bytes = secrets.token_bytes(32)
            try:
                return cls(key_bytes)
            except PlatariumError:
                # Zero or >= n, astronomically rare
                continue

    @property
    def secret(self) -> PrivateKeyBytes:
        """Get private key as bytes."""
        return self._secret

    def hex(self) -> HexStr:
        """Get private key as 64-character hex string."""
        return HexStr(scalar_to_hex(self._secret))

    def public_key(self, compressed: bool = True) -> "PublicKey":
        """
        Get corresponding public key.

        Args:
            compressed: Return compressed format

        Returns:
            PublicKey instance
        """
        serialized = self._key.public_key.format(compressed=compressed)
        return PublicKey(serialized)

    def sign_recoverable(self, message_hash: bytes) -> bytes:
        """
        Create recoverable RFC 6979 signature.

        Args:
            message_hash: 32-byte hash to sign

        Returns:
            65 bytes: r (32) || s (32) || recovery id (1)

        Raises:
            PlatariumError: If signing fails
        """
        if len(message_hash) != 32:
            raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "Message hash must be 32 bytes")

        try:
            return self._key.sign_recoverable(bytes(message_hash), hasher=None)
        except Exception as e:
            raise PlatariumError(
                ErrorKind.INVALID_KEY_FORMAT,
                f"Recoverable signing failed: {e}"
            ) from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrivateKey):
            return False
        return self._secret == other._secret

    def __repr__(self) -> str:
        # Show first and last 4 chars of hex only
        hex_str = self.hex()
        return f"PrivateKey({hex_str[:4]}...{hex_str[-4:]})"


class PublicKey:
    """secp256k1 public key wrapper."""

    def __init__(self, key: Union[bytes, bytearray, str, "PublicKey"]) -> None:
        """
        Initialize public key.

        Args:
            key: Public key as bytes, hex string, or another PublicKey

        Raises:
            PlatariumError: If key format is invalid or not on the curve
        """
        if isinstance(key, PublicKey):
            self._key = key._key
            return

        key_bytes = validate_public_key(key)
        try:
            self._key = SecpPublicKey(key_bytes)
        except ValueError as e:
            raise PlatariumError(ErrorKind.INVALID_KEY_FORMAT, "Point is not on secp256k1") from e

    @classmethod
    def recover(cls, signature: bytes, message_hash: bytes) -> "PublicKey":
        """
        Recover the signer's key from a 65-byte recoverable signature.

        Raises:
            PlatariumError: If the signature cannot be recovered
        """
        try:
            recovered = SecpPublicKey.from_signature_and_message(
                bytes(signature), bytes(message_hash), hasher=None
            )
        except Exception as e:
            raise PlatariumError(
                ErrorKind.INVALID_KEY_FORMAT,
                f"Public key recovery failed: {e}"
            ) from e
        return cls(recovered.format(compressed=True))

    @property
    def point(self) -> PublicKeyBytes:
        """Compressed SEC1 encoding."""
        return PublicKeyBytes(self._key.format(compressed=True))

    def hex(self, compressed: bool = True) -> HexStr:
        """Get public key as hex string."""
        return HexStr(self._key.format(compressed=compressed).hex())

    def verify(self, signature: bytes, message_hash: bytes) -> bool:
        """
        Verify signature.

        Args:
            signature: DER-encoded signature
            message_hash: 32-byte message hash

        Returns:
            True if signature is valid
        """
        if len(message_hash) != 32:
            return False

        try:
            return self._key.verify(bytes(signature), bytes(message_hash), hasher=None)
        except Exception:
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self.point == other.point

    def __repr__(self) -> str:
        return f"PublicKey({self.hex()})"


class KeyPair(NamedTuple):
    """Hex-encoded private scalar and compressed public key."""

    private_key_hex: HexStr
    public_key_hex: HexStr


def derive_key_pair(seed: Union[bytes, bytearray]) -> KeyPair:
    """
    Interpret a 32-byte seed directly as a secp256k1 private scalar.

    No modular reduction is applied; a seed outside [1, n-1] is rejected.

    Raises:
        PlatariumError: INVALID_KEY_FORMAT if the seed is not a usable scalar
    """
    key = PrivateKey(bytes(seed))
    return KeyPair(key.hex(), key.public_key(compressed=True).hex())


def random_alphanumeric(length: int = COMPANION_CODE_LENGTH, alphabet: str = CHARACTER_SET) -> str:
    """
    Draw ``length`` characters uniformly from ``alphabet``.

    Each position uses :func:`secrets.randbelow`, so there is no modulo bias.

    Raises:
        PlatariumError: INVALID_ARGUMENT for a non-positive or non-integer
            length, or an empty alphabet
    """
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "length must be a positive integer")
    if not isinstance(alphabet, str) or len(alphabet) == 0:
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "alphabet must be a non-empty string")

    return "".join(alphabet[secrets.randbelow(len(alphabet))] for _ in range(length))
