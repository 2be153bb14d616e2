"""Identity and signature result types."""

from dataclasses import dataclass
from typing import Any, Dict

from ..constants import PRIVATE_KEY_PREFIX, PUBLIC_KEY_PREFIX, SIGNATURE_KEY_PREFIX
from ..types.common import DerivationPath, HexStr
from ..utils.validation import strip_key_prefix

__all__ = [
    "DerivationPaths",
    "IdentityBundle",
    "SignedMessage",
]


@dataclass(frozen=True)
class DerivationPaths:
    """Where each key of an identity came from."""

    main_path: DerivationPath
    signature_path: str

    def to_dict(self) -> Dict[str, str]:
        return {"mainPath": self.main_path, "signaturePath": self.signature_path}


@dataclass(frozen=True)
class IdentityBundle:
    """
    Result of generating or restoring an identity.

    Key fields carry distinct type prefixes (``Px`` public key, ``PSx``
    account private key, ``Sx`` signature key) so one key class cannot be
    passed off as another.
    """

    mnemonic: str
    companion_code: str
    derivation_paths: DerivationPaths
    public_key: str
    private_key: str
    signature_key: str

    def account_public_key(self) -> HexStr:
        """Compressed account public key without its prefix."""
        return strip_key_prefix(self.public_key, PUBLIC_KEY_PREFIX, length=66)

    def account_private_key(self) -> HexStr:
        """Account private key without its prefix."""
        return strip_key_prefix(self.private_key, PRIVATE_KEY_PREFIX)

    def signature_private_key(self) -> HexStr:
        """Signature private key without its prefix."""
        return strip_key_prefix(self.signature_key, SIGNATURE_KEY_PREFIX)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the external bundle shape."""
        return {
            "mnemonic": self.mnemonic,
            "companionCode": self.companion_code,
            "derivationPaths": self.derivation_paths.to_dict(),
            "publicKey": self.public_key,
            "privateKey": self.private_key,
            "signatureKey": self.signature_key,
        }

    def __repr__(self) -> str:
        # Secrets stay out of tracebacks and log lines
        return (
            f"IdentityBundle(main_path={self.derivation_paths.main_path!r}, "
            f"public_key={self.public_key!r})"
        )


@dataclass(frozen=True)
class SignedMessage:
    """Signature over a domain-separated message hash."""

    hash: HexStr
    r: HexStr
    s: HexStr
    pub: HexStr
    der: HexStr
    compact: HexStr
    recovery_id: int

    def to_dict(self) -> Dict[str, str]:
        return {
            "hash": self.hash,
            "r": self.r,
            "s": self.s,
            "pub": self.pub,
            "der": self.der,
            "compact": self.compact,
        }
