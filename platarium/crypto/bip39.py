"""BIP39 mnemonic handling for Platarium."""

from typing import Optional, Tuple

from mnemonic import Mnemonic

from ..constants import (
    CHARACTER_SET,
    MNEMONIC_LANGUAGE,
    MNEMONIC_STRENGTH,
    SOURCE_COMPANION_LENGTH,
)
from ..exceptions import ErrorKind, PlatariumError
from ..crypto.keys import random_alphanumeric

__all__ = [
    "SecretSource",
    "generate_mnemonic",
    "validate_mnemonic",
    "mnemonic_to_seed",
]


class SecretSource:
    """Supplies fresh mnemonics with an independent companion string."""

    def __init__(
        self,
        strength: int = MNEMONIC_STRENGTH,
        language: str = MNEMONIC_LANGUAGE,
        companion_length: int = SOURCE_COMPANION_LENGTH,
        character_set: str = CHARACTER_SET
    ) -> None:
        if strength not in (128, 160, 192, 224, 256):
            raise PlatariumError(
                ErrorKind.INVALID_ARGUMENT,
                "Strength must be 128, 160, 192, 224, or 256"
            )
        self.strength = strength
        self.companion_length = companion_length
        self.character_set = character_set
        self._mnemo = Mnemonic(language)

    def new_mnemonic_and_companion(self) -> Tuple[str, str]:
        """Return a checksum-valid mnemonic and a random companion string."""
        mnemonic = self._mnemo.generate(strength=self.strength)
        companion = random_alphanumeric(self.companion_length, self.character_set)
        return mnemonic, companion


def generate_mnemonic(strength: int = MNEMONIC_STRENGTH, language: str = MNEMONIC_LANGUAGE) -> str:
    """Generate BIP39 mnemonic phrase."""
    if strength not in (128, 160, 192, 224, 256):
        raise PlatariumError(
            ErrorKind.INVALID_ARGUMENT,
            "Strength must be 128, 160, 192, 224, or 256"
        )
    return Mnemonic(language).generate(strength=strength)


def validate_mnemonic(mnemonic: object, language: Optional[str] = None) -> bool:
    """Check BIP39 word list membership and checksum."""
    if not isinstance(mnemonic, str) or not mnemonic.strip():
        return False
    return Mnemonic(language or MNEMONIC_LANGUAGE).check(mnemonic)


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> bytes:
    """Convert mnemonic to 64-byte seed using PBKDF2-HMAC-SHA512."""
    if not isinstance(passphrase, str):
        raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "Passphrase must be a string")
    mnemonic = " ".join(mnemonic.split())
    return Mnemonic.to_seed(mnemonic, passphrase)
