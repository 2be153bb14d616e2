"""Correlation check between account and signature keys."""

import hmac
from typing import Optional, Union

from ..constants import HKDF_INFO, HKDF_SALT
from ..crypto.kdf import derive_signature_seed
from ..crypto.keys import derive_key_pair
from ..exceptions import ErrorKind, PlatariumError
from ..logger import EventLogger
from ..utils.memory import SecretBuffer
from ..utils.validation import is_valid_scalar_hex

__all__ = ["verify_correlation"]


def verify_correlation(
    private_key_hex: str,
    signature_key_hex: str,
    master_seed: Union[bytes, bytearray],
    hkdf_salt: bytes = HKDF_SALT,
    hkdf_info: bytes = HKDF_INFO,
    event_logger: Optional[EventLogger] = None
) -> bool:
    """
    Check that a signature key was derived from ``master_seed``.

    The signature key is recomputed through HKDF and compared to the claim.
    The account key is only format-checked: re-deriving it would mean
    walking the whole BIP32 tree again.

    Args:
        private_key_hex: Claimed account private key (64 hex chars)
        signature_key_hex: Claimed signature private key (64 hex chars)
        master_seed: BIP39 master seed both keys should come from
        hkdf_salt: Salt used when the signature key was derived
        hkdf_info: Info used when the signature key was derived
        event_logger: Logger collaborator

    Returns:
        True if the recomputed signature key equals the claimed one

    Raises:
        PlatariumError: INVALID_ARGUMENT for an empty seed,
            INVALID_KEY_FORMAT for malformed key strings
    """
    event_logger = event_logger or EventLogger(__name__)
    try:
        if not isinstance(master_seed, (bytes, bytearray)) or len(master_seed) == 0:
            raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "master_seed must be non-empty bytes")

        if not (is_valid_scalar_hex(private_key_hex) and is_valid_scalar_hex(signature_key_hex)):
            raise PlatariumError(
                ErrorKind.INVALID_KEY_FORMAT,
                "Invalid format of private keys for verification"
            )

        with SecretBuffer(derive_signature_seed(master_seed, hkdf_salt, hkdf_info)) as seed:
            derived_hex = derive_key_pair(seed.view).private_key_hex

        is_match = hmac.compare_digest(
            derived_hex.lower().encode("ascii"),
            signature_key_hex.lower().encode("ascii")
        )
        event_logger.log_info(
            "Correlation check completed",
            {"match": is_match},
            "verify_correlation"
        )
        return is_match

    except Exception as e:
        event_logger.log_error("verify_correlation", {"error": str(e)})
        raise
