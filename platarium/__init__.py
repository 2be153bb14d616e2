"""
Platarium key derivation library

Derives a cryptographically bound pair of secp256k1 keys from one BIP39
mnemonic plus a companion code: an account key on a BIP44 path and a
signature key reachable only through HKDF over the master seed. Also
signs and verifies domain-separated messages with those keys.
"""

from .crypto import (
    KeyGenerator,
    PrivateKey,
    PublicKey,
    derive_signature_seed,
    random_alphanumeric,
    recover_public_key,
    sign_message,
    verify_correlation,
    verify_signature,
)
from .exceptions import ErrorKind, PlatariumError
from .logger import EventLogger, configure_logging
from .types import IdentityBundle, SignedMessage
from .utils.encoding import scalar_to_hex

__version__ = "1.0.0"
__author__ = "Platarium"

__all__ = [
    # Identity
    "KeyGenerator",
    "IdentityBundle",
    "verify_correlation",
    "derive_signature_seed",

    # Signing
    "sign_message",
    "verify_signature",
    "recover_public_key",
    "SignedMessage",

    # Keys
    "PrivateKey",
    "PublicKey",

    # Utilities
    "scalar_to_hex",
    "random_alphanumeric",

    # Errors and logging
    "ErrorKind",
    "PlatariumError",
    "EventLogger",
    "configure_logging",
]
