"""Type definitions for Platarium."""

from .common import HexStr, PrivateKeyBytes, PublicKeyBytes, DerivationPath
from .identity import DerivationPaths, IdentityBundle, SignedMessage

__all__ = [
    "HexStr",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "DerivationPath",
    "DerivationPaths",
    "IdentityBundle",
    "SignedMessage",
]
