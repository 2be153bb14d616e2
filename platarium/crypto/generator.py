"""Identity generation and restoration (BIP32 account key + HKDF signature key)."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, Tuple

from ..constants import (
    COMPANION_CODE_LENGTH,
    DEFAULT_PATH_TEMPLATE,
    HKDF_INFO,
    HKDF_SALT,
    PRIVATE_KEY_PREFIX,
    PUBLIC_KEY_PREFIX,
    SIGNATURE_KEY_PREFIX,
    SIGNATURE_PATH_TAG,
)
from ..crypto.bip39 import SecretSource, mnemonic_to_seed, validate_mnemonic
from ..crypto.correlation import verify_correlation
from ..crypto.hd import HDNode
from ..crypto.kdf import derive_signature_seed
from ..crypto.keys import PrivateKey, derive_key_pair, random_alphanumeric
from ..exceptions import ErrorKind, PlatariumError
from ..logger import EventLogger, utc_timestamp
from ..types.common import DerivationPath
from ..types.identity import DerivationPaths, IdentityBundle
from ..utils.memory import SecretBuffer
from ..utils.validation import (
    validate_custom_path,
    validate_non_empty_bytes,
    validate_seed_index,
)

__all__ = ["KeyGenerator", "account_path"]

logger = logging.getLogger(__name__)


class MnemonicSource(Protocol):
    def new_mnemonic_and_companion(self) -> Tuple[str, str]: ...


def account_path(index: int) -> DerivationPath:
    """Default BIP44 account path for a seed index."""
    return DerivationPath(DEFAULT_PATH_TEMPLATE.format(index=index))


class KeyGenerator:
    """
    Derives a correlated pair of secp256k1 keys from one mnemonic.

    The account key sits on a BIP44 path under the master seed. The
    signature key comes from HKDF over the same master seed and cannot be
    reached from the account key. Both are released only after the
    correlation check passes.

    Example:
        >>> generator = KeyGenerator(seed_index=0)
        >>> identity = generator.generate_identity()
        >>> restored = generator.restore_identity(identity.mnemonic, identity.companion_code)
        >>> restored.signature_key == identity.signature_key
        True
    """

    def __init__(
        self,
        seed_index: int = 0,
        hkdf_salt: bytes = HKDF_SALT,
        hkdf_info: bytes = HKDF_INFO,
        custom_path: Optional[str] = None,
        secret_source: Optional[MnemonicSource] = None,
        event_logger: Optional[EventLogger] = None,
        log_success: bool = True
    ) -> None:
        """
        Initialize generator.

        Args:
            seed_index: BIP44 address index, 0 <= seed_index < 2^31 - 1
            hkdf_salt: HKDF salt for the signature key
            hkdf_info: HKDF info for the signature key
            custom_path: Explicit derivation path overriding the index
            secret_source: Supplier of fresh mnemonics
            event_logger: Logger collaborator
            log_success: Emit an info record after each successful call

        Raises:
            PlatariumError: INVALID_ARGUMENT for any malformed parameter
        """
        self.seed_index = validate_seed_index(seed_index)
        self.hkdf_salt = validate_non_empty_bytes(hkdf_salt, "hkdf_salt")
        self.hkdf_info = validate_non_empty_bytes(hkdf_info, "hkdf_info")
        self.custom_path = validate_custom_path(custom_path)
        self._secret_source = secret_source or SecretSource()
        self._events = event_logger or EventLogger(f"{__name__}.{self.__class__.__name__}")
        self._log_success = log_success

    def generate_identity(self) -> IdentityBundle:
        """
        Create a new mnemonic and derive both keys from it.

        Returns:
            IdentityBundle with a fresh 10-character companion code

        Raises:
            PlatariumError: If the generated mnemonic fails its checksum or
                any derivation step fails
        """
        with self._operation("generate_identity", self.seed_index):
            mnemonic, _ = self._secret_source.new_mnemonic_and_companion()
            if not validate_mnemonic(mnemonic):
                raise PlatariumError(
                    ErrorKind.INVALID_MNEMONIC,
                    "Generated mnemonic is not valid according to BIP39"
                )

            companion_code = random_alphanumeric(COMPANION_CODE_LENGTH)
            bundle = self._build_identity(mnemonic, companion_code, self.seed_index, self.custom_path)

        self._record_success("generate_identity", "Successful key generation", bundle)
        return bundle

    def restore_identity(
        self,
        mnemonic: str,
        companion_code: str,
        seed_index: Optional[int] = None,
        custom_path: Optional[str] = None
    ) -> IdentityBundle:
        """
        Re-derive an identity from its mnemonic and companion code.

        Args:
            mnemonic: BIP39 phrase
            companion_code: Companion code issued with the identity
            seed_index: Index override, defaults to the generator's
            custom_path: Path override, defaults to the generator's

        Returns:
            IdentityBundle identical to the one originally generated with
            the same index, path, salt and info

        Raises:
            PlatariumError: INVALID_MNEMONIC if the phrase fails its checksum
        """
        index = self.seed_index if seed_index is None else seed_index
        with self._operation("restore_identity", index):
            index = validate_seed_index(index)
            path = validate_custom_path(self.custom_path if custom_path is None else custom_path)
            if not isinstance(companion_code, str):
                raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "companion_code must be a string")
            if not validate_mnemonic(mnemonic):
                raise PlatariumError(
                    ErrorKind.INVALID_MNEMONIC,
                    "Provided mnemonic is not valid according to BIP39"
                )

            bundle = self._build_identity(mnemonic, companion_code, index, path)

        self._record_success("restore_identity", "Successful key restoration", bundle)
        return bundle

    def _build_identity(
        self,
        mnemonic: str,
        companion_code: str,
        seed_index: int,
        custom_path: Optional[str]
    ) -> IdentityBundle:
        main_path = DerivationPath(custom_path) if custom_path else account_path(seed_index)
        logger.debug("Deriving identity keys on %s", main_path)

        with SecretBuffer(mnemonic_to_seed(mnemonic, companion_code)) as master_seed:
            account_key = self._derive_account_key(master_seed, main_path)

            with SecretBuffer(
                derive_signature_seed(master_seed.view, self.hkdf_salt, self.hkdf_info)
            ) as signature_seed:
                signature_pair = derive_key_pair(signature_seed.view)

            is_valid = verify_correlation(
                account_key.hex(),
                signature_pair.private_key_hex,
                master_seed.view,
                self.hkdf_salt,
                self.hkdf_info,
                event_logger=self._events
            )
            if not is_valid:
                raise PlatariumError(
                    ErrorKind.CORRELATION_FAILURE,
                    "Key correlation verification failed"
                )

        return IdentityBundle(
            mnemonic=mnemonic,
            companion_code=companion_code,
            derivation_paths=DerivationPaths(
                main_path=main_path,
                signature_path=SIGNATURE_PATH_TAG
            ),
            public_key=f"{PUBLIC_KEY_PREFIX}{account_key.public_key(compressed=True).hex()}",
            private_key=f"{PRIVATE_KEY_PREFIX}{account_key.hex()}",
            signature_key=f"{SIGNATURE_KEY_PREFIX}{signature_pair.private_key_hex}",
        )

    @staticmethod
    def _derive_account_key(master_seed: SecretBuffer, path: str) -> PrivateKey:
        """Walk the BIP32 tree and wipe every node buffer touched."""
        root = HDNode.from_seed(master_seed.view)
        node: Optional[HDNode] = None
        try:
            node = root.derive_path(path)
            if node.private_key is None:
                raise PlatariumError(
                    ErrorKind.MISSING_KEY_MATERIAL,
                    "Private key is missing in derived node"
                )
            return node.get_private_key()
        finally:
            root.wipe()
            if node is not None:
                node.wipe()

    @contextmanager
    def _operation(self, name: str, seed_index: object) -> Iterator[None]:
        """Log and annotate any failure, then re-raise it unchanged."""
        try:
            yield
        except Exception as e:
            details = {
                "operation": name,
                "timestamp": utc_timestamp(),
                "seed_index": seed_index,
                "error_type": type(e).__name__,
                "error": str(e),
            }
            if isinstance(e, PlatariumError):
                e.context.update(
                    operation=name,
                    timestamp=details["timestamp"],
                    seed_index=seed_index,
                )
                details["kind"] = e.kind.value
            self._events.log_error(f"KeyGenerator.{name}", details)
            raise

    def _record_success(self, operation: str, message: str, bundle: IdentityBundle) -> None:
        if not self._log_success:
            return
        self._events.log_info(
            message,
            {
                "seed_index": self.seed_index,
                "main_path": bundle.derivation_paths.main_path,
                "time": utc_timestamp(),
            },
            f"KeyGenerator.{operation}"
        )

    def __repr__(self) -> str:
        return (
            f"KeyGenerator(seed_index={self.seed_index}, "
            f"custom_path={self.custom_path!r})"
        )
