"""Cryptographic primitives for Platarium."""

from ..crypto.keys import PrivateKey, PublicKey, KeyPair, derive_key_pair, random_alphanumeric
from ..crypto.bip39 import SecretSource, generate_mnemonic, validate_mnemonic, mnemonic_to_seed
from ..crypto.hd import HDNode
from ..crypto.kdf import derive_signature_seed
from ..crypto.correlation import verify_correlation
from ..crypto.generator import KeyGenerator, account_path
from ..crypto.signature import (
    hash_message,
    ensure_low_s,
    sign_message,
    verify_signature,
    recover_public_key,
    parse_der_signature,
    encode_der_signature,
)

__all__ = [
    # Keys
    "PrivateKey",
    "PublicKey",
    "KeyPair",
    "derive_key_pair",
    "random_alphanumeric",

    # Mnemonics and derivation
    "SecretSource",
    "generate_mnemonic",
    "validate_mnemonic",
    "mnemonic_to_seed",
    "HDNode",
    "derive_signature_seed",
    "verify_correlation",
    "KeyGenerator",
    "account_path",

    # Signatures
    "hash_message",
    "ensure_low_s",
    "sign_message",
    "verify_signature",
    "recover_public_key",
    "parse_der_signature",
    "encode_der_signature",
]
