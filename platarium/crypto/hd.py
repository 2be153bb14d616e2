"""Hierarchical Deterministic key derivation for Platarium."""

import hashlib
import hmac
import logging
from typing import Optional, Union

from ..constants import HARDENED_OFFSET, SECP256K1_ORDER
from ..crypto.keys import PrivateKey
from ..exceptions import ErrorKind, PlatariumError

__all__ = ["HDNode", "parse_path"]

logger = logging.getLogger(__name__)

N = SECP256K1_ORDER


def parse_path(path: str) -> list[int]:
    """
    Parse a BIP32 path like m/44'/60'/0'/0/0 into child indexes.

    Hardened components use a ``'`` or ``h`` suffix.

    Raises:
        PlatariumError: INVALID_ARGUMENT for malformed paths
    """
    if not isinstance(path, str):
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "Derivation path must be a string")

    parts = path.strip().split("/")
    if parts[0] not in ("m", "M"):
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, f"Derivation path must start with 'm': {path!r}")

    indexes = []
    for component in parts[1:]:
        hardened = component.endswith("'") or component.endswith("h")
        digits = component[:-1] if hardened else component
        if not (digits.isascii() and digits.isdigit()):
            raise PlatariumError(ErrorKind.INVALID_ARGUMENT, f"Invalid path component: {component!r}")
        index = int(digits)
        if index >= HARDENED_OFFSET:
            raise PlatariumError(ErrorKind.INVALID_ARGUMENT, f"Path component out of range: {component!r}")
        indexes.append(index + HARDENED_OFFSET if hardened else index)
    return indexes


class HDNode:
    """HD wallet node (BIP32), private derivation only."""

    def __init__(
        self,
        private_key: Optional[Union[bytes, bytearray]],
        public_key: bytes,
        chain_code: Union[bytes, bytearray],
        depth: int = 0,
        index: int = 0
    ):
        self.private_key = bytearray(private_key) if private_key is not None else None
        self.public_key = public_key
        self.chain_code = bytearray(chain_code)
        self.depth = depth
        self.index = index

    @classmethod
    def from_seed(cls, seed: Union[bytes, bytearray]) -> "HDNode":
        """Create master node from seed."""
        if len(seed) < 16 or len(seed) > 64:
            raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "Seed must be between 16 and 64 bytes")

        h = bytearray(hmac.new(b"Bitcoin seed", bytes(seed), hashlib.sha512).digest())
        try:
            key_int = int.from_bytes(h[:32], "big")
            if key_int == 0 or key_int >= N:
                raise PlatariumError(ErrorKind.MISSING_KEY_MATERIAL, "Invalid master key")

            public_key = PrivateKey(bytes(h[:32])).public_key(compressed=True).point
            return cls(private_key=h[:32], public_key=public_key, chain_code=h[32:])
        finally:
            h[:] = bytes(len(h))

    def derive(self, index: int) -> "HDNode":
        """Derive child node."""
        if self.private_key is None:
            raise PlatariumError(ErrorKind.MISSING_KEY_MATERIAL, "Cannot derive without private key")

        if index >= HARDENED_OFFSET:
            data = b"\x00" + bytes(self.private_key) + index.to_bytes(4, "big")
        else:
            data = self.public_key + index.to_bytes(4, "big")

        h = bytearray(hmac.new(bytes(self.chain_code), data, hashlib.sha512).digest())
        try:
            child_key_int = int.from_bytes(h[:32], "big")
            parent_key_int = int.from_bytes(self.private_key, "big")
            child_private_int = (parent_key_int + child_key_int) % N

            # BIP32: invalid child, proceed with the next index
            if child_key_int >= N or child_private_int == 0:
                logger.debug("Skipping invalid child index %d", index)
                return self.derive(index + 1)

            child_private_key = child_private_int.to_bytes(32, "big")
            child_public_key = PrivateKey(child_private_key).public_key(compressed=True).point

            return HDNode(
                private_key=child_private_key,
                public_key=child_public_key,
                chain_code=h[32:],
                depth=self.depth + 1,
                index=index
            )
        finally:
            h[:] = bytes(len(h))

    def derive_path(self, path: str) -> "HDNode":
        """Derive using BIP32 path like m/44'/60'/0'/0/0."""
        node = self
        for index in parse_path(path):
            child = node.derive(index)
            if node is not self:
                node.wipe()
            node = child
        return node

    def wipe(self) -> None:
        """Zero private key and chain code buffers."""
        if self.private_key is not None:
            self.private_key[:] = bytes(len(self.private_key))
        self.chain_code[:] = bytes(len(self.chain_code))

    def get_private_key(self) -> PrivateKey:
        """Get private key object."""
        if self.private_key is None:
            raise PlatariumError(ErrorKind.MISSING_KEY_MATERIAL, "This is a public-only node")
        return PrivateKey(bytes(self.private_key))
