"""Common type definitions for Platarium."""

from typing import NewType

__all__ = [
    "HexStr",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "DerivationPath",
]

HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""33 or 65 byte public key."""

DerivationPath = NewType("DerivationPath", str)
"""BIP32 path such as m/44'/60'/0'/0/0."""
