"""Constants for the Platarium key derivation library."""

__all__ = [
    "HKDF_SALT",
    "HKDF_INFO",
    "SIGNATURE_SEED_LENGTH",
    "CHARACTER_SET",
    "COMPANION_CODE_LENGTH",
    "SOURCE_COMPANION_LENGTH",
    "MNEMONIC_STRENGTH",
    "MNEMONIC_LANGUAGE",
    "MAX_SEED_INDEX",
    "HARDENED_OFFSET",
    "DEFAULT_PATH_TEMPLATE",
    "SIGNATURE_PATH_TAG",
    "PUBLIC_KEY_PREFIX",
    "PRIVATE_KEY_PREFIX",
    "SIGNATURE_KEY_PREFIX",
    "DOMAIN_SEPARATOR",
    "SECP256K1_ORDER",
    "HALF_ORDER",
    "SCALAR_HEX_LENGTH",
]

# HKDF defaults shared by generation and verification
HKDF_SALT = b"Platarium-HKDF-Salt"
HKDF_INFO = b"Platarium-HKDF"
SIGNATURE_SEED_LENGTH = 32

# Companion code alphabet
CHARACTER_SET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
COMPANION_CODE_LENGTH = 10
SOURCE_COMPANION_LENGTH = 12

# BIP39
MNEMONIC_STRENGTH = 256
MNEMONIC_LANGUAGE = "english"

# BIP32 / BIP44
MAX_SEED_INDEX = 2**31 - 1
HARDENED_OFFSET = 0x80000000
DEFAULT_PATH_TEMPLATE = "m/44'/60'/0'/0/{index}"
SIGNATURE_PATH_TAG = "HKDF-derived"

# Output field prefixes
PUBLIC_KEY_PREFIX = "Px"
PRIVATE_KEY_PREFIX = "PSx"
SIGNATURE_KEY_PREFIX = "Sx"

# Message signing
DOMAIN_SEPARATOR = "PlatariumSignature:"

# secp256k1
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
HALF_ORDER = SECP256K1_ORDER // 2
SCALAR_HEX_LENGTH = 64
