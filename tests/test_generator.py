import logging
import re

import pytest

from platarium.constants import HKDF_INFO, HKDF_SALT, MAX_SEED_INDEX
from platarium.crypto import generator as generator_module
from platarium.crypto.bip39 import mnemonic_to_seed, validate_mnemonic
from platarium.crypto.correlation import verify_correlation
from platarium.crypto.generator import KeyGenerator, account_path
from platarium.crypto.hd import HDNode
from platarium.exceptions import ErrorKind, PlatariumError
from platarium.utils.memory import SecretBuffer


class FixedSource:
    def __init__(self, mnemonic):
        self.mnemonic = mnemonic

    def new_mnemonic_and_companion(self):
        return self.mnemonic, "IGNOREDCODE1"


def test_generated_bundle_shape():
    bundle = KeyGenerator(0).generate_identity()
    data = bundle.to_dict()

    assert set(data) == {
        "mnemonic", "companionCode", "derivationPaths",
        "publicKey", "privateKey", "signatureKey",
    }
    assert validate_mnemonic(data["mnemonic"])
    assert len(data["mnemonic"].split()) == 24
    assert re.fullmatch(r"[A-Z0-9]{10}", data["companionCode"])
    assert data["derivationPaths"] == {
        "mainPath": "m/44'/60'/0'/0/0",
        "signaturePath": "HKDF-derived",
    }
    assert re.fullmatch(r"Px0[23][0-9a-f]{64}", data["publicKey"])
    assert re.fullmatch(r"PSx[0-9a-f]{64}", data["privateKey"])
    assert re.fullmatch(r"Sx[0-9a-f]{64}", data["signatureKey"])


def test_generated_keys_correlate():
    generator = KeyGenerator(0)
    bundle = generator.generate_identity()
    seed = mnemonic_to_seed(bundle.mnemonic, bundle.companion_code)

    assert verify_correlation(
        bundle.account_private_key(),
        bundle.signature_private_key(),
        seed,
        generator.hkdf_salt,
        generator.hkdf_info,
    )
    assert bundle.account_private_key() != bundle.signature_private_key()


def test_custom_path_is_used_verbatim():
    custom_path = "m/44'/60'/1'/0/0"
    bundle = KeyGenerator(0, HKDF_SALT, HKDF_INFO, custom_path).generate_identity()
    assert bundle.derivation_paths.main_path == custom_path


def test_restore_reproduces_generated_keys():
    generator = KeyGenerator(0)
    generated = generator.generate_identity()
    restored = generator.restore_identity(
        generated.mnemonic,
        generated.companion_code,
        0,
        generated.derivation_paths.main_path,
    )
    assert restored.public_key == generated.public_key
    assert restored.private_key == generated.private_key
    assert restored.signature_key == generated.signature_key


def test_restore_is_deterministic(test_mnemonic, test_companion):
    first = KeyGenerator(3).restore_identity(test_mnemonic, test_companion)
    second = KeyGenerator().restore_identity(test_mnemonic, test_companion, seed_index=3)
    assert first == second
    assert first.derivation_paths.main_path == "m/44'/60'/0'/0/3"


def test_index_and_path_change_account_key_only(test_mnemonic, test_companion):
    generator = KeyGenerator(0)
    base = generator.restore_identity(test_mnemonic, test_companion)
    other_index = generator.restore_identity(test_mnemonic, test_companion, seed_index=1)
    other_path = generator.restore_identity(test_mnemonic, test_companion, custom_path="m/44'/60'/1'/0/0")

    assert base.private_key != other_index.private_key
    assert base.private_key != other_path.private_key
    assert base.signature_key == other_index.signature_key == other_path.signature_key


def test_salt_and_info_change_signature_key_only(test_mnemonic, test_companion):
    base = KeyGenerator().restore_identity(test_mnemonic, test_companion)
    salted = KeyGenerator(hkdf_salt=b"tenant-a").restore_identity(test_mnemonic, test_companion)
    assert base.private_key == salted.private_key
    assert base.signature_key != salted.signature_key


def test_companion_code_changes_every_key(test_mnemonic):
    first = KeyGenerator().restore_identity(test_mnemonic, "AAAAAAAAAA")
    second = KeyGenerator().restore_identity(test_mnemonic, "BBBBBBBBBB")
    assert first.private_key != second.private_key
    assert first.signature_key != second.signature_key


def test_account_path_default():
    assert account_path(0) == "m/44'/60'/0'/0/0"
    assert account_path(42) == "m/44'/60'/0'/0/42"


@pytest.mark.parametrize("kwargs", [
    {"seed_index": -1},
    {"seed_index": MAX_SEED_INDEX},
    {"seed_index": 1.5},
    {"hkdf_salt": b""},
    {"hkdf_info": b""},
    {"hkdf_salt": "salt"},
    {"custom_path": 44},
])
def test_constructor_validation(kwargs):
    with pytest.raises(PlatariumError) as exc:
        KeyGenerator(**kwargs)
    assert exc.value.kind is ErrorKind.INVALID_ARGUMENT


def test_restore_rejects_invalid_mnemonic(test_mnemonic, test_companion):
    bad = test_mnemonic.replace("about", "abandon")
    with pytest.raises(PlatariumError) as exc:
        KeyGenerator().restore_identity(bad, test_companion)
    assert exc.value.kind is ErrorKind.INVALID_MNEMONIC
    assert exc.value.context["operation"] == "restore_identity"


def test_restore_rejects_bad_arguments(test_mnemonic, test_companion):
    generator = KeyGenerator()
    with pytest.raises(PlatariumError):
        generator.restore_identity(test_mnemonic, 1234)
    with pytest.raises(PlatariumError):
        generator.restore_identity(test_mnemonic, test_companion, seed_index=-5)
    with pytest.raises(PlatariumError):
        generator.restore_identity(test_mnemonic, test_companion, custom_path="x/0")


def test_generate_rejects_invalid_source_mnemonic(caplog):
    caplog.set_level(logging.ERROR, logger="platarium")
    generator = KeyGenerator(7, secret_source=FixedSource("invalid words here"))

    with pytest.raises(PlatariumError) as exc:
        generator.generate_identity()

    assert exc.value.kind is ErrorKind.INVALID_MNEMONIC
    assert exc.value.context["operation"] == "generate_identity"
    assert exc.value.context["seed_index"] == 7
    assert "timestamp" in exc.value.context
    assert "KeyGenerator.generate_identity" in caplog.text


def test_generate_uses_fresh_companion_code(test_mnemonic):
    bundle = KeyGenerator(secret_source=FixedSource(test_mnemonic)).generate_identity()
    assert bundle.mnemonic == test_mnemonic
    assert bundle.companion_code != "IGNOREDCODE1"
    assert len(bundle.companion_code) == 10


def test_correlation_failure_is_fatal(monkeypatch, test_mnemonic, test_companion):
    monkeypatch.setattr(generator_module, "verify_correlation", lambda *args, **kwargs: False)
    with pytest.raises(PlatariumError) as exc:
        KeyGenerator().restore_identity(test_mnemonic, test_companion)
    assert exc.value.kind is ErrorKind.CORRELATION_FAILURE


def test_missing_private_key_is_reported(monkeypatch, test_mnemonic, test_companion):
    public_only = HDNode(None, b"\x02" + b"\x11" * 32, b"\x00" * 32)
    monkeypatch.setattr(HDNode, "derive_path", lambda self, path: public_only)
    with pytest.raises(PlatariumError) as exc:
        KeyGenerator().restore_identity(test_mnemonic, test_companion)
    assert exc.value.kind is ErrorKind.MISSING_KEY_MATERIAL


def _track_buffers(monkeypatch):
    created = []

    class TrackingBuffer(SecretBuffer):
        def __init__(self, data):
            super().__init__(data)
            created.append(self)

    monkeypatch.setattr(generator_module, "SecretBuffer", TrackingBuffer)
    return created


def test_seeds_wiped_after_success(monkeypatch, test_mnemonic, test_companion):
    created = _track_buffers(monkeypatch)
    KeyGenerator().restore_identity(test_mnemonic, test_companion)
    assert len(created) == 2
    assert all(buffer.wiped for buffer in created)


def test_seeds_wiped_after_failure(monkeypatch, test_mnemonic, test_companion):
    created = _track_buffers(monkeypatch)
    monkeypatch.setattr(generator_module, "verify_correlation", lambda *args, **kwargs: False)
    with pytest.raises(PlatariumError):
        KeyGenerator().restore_identity(test_mnemonic, test_companion)
    assert created
    assert all(buffer.wiped for buffer in created)


def test_success_logging_omits_secrets(caplog, test_mnemonic, test_companion):
    caplog.set_level(logging.INFO, logger="platarium")
    bundle = KeyGenerator().restore_identity(test_mnemonic, test_companion)

    assert "Successful key restoration" in caplog.text
    for secret in (test_mnemonic, test_companion, bundle.private_key[3:], bundle.signature_key[2:]):
        assert secret not in caplog.text


def test_success_logging_can_be_disabled(caplog, test_mnemonic, test_companion):
    caplog.set_level(logging.INFO, logger="platarium")
    KeyGenerator(log_success=False).restore_identity(test_mnemonic, test_companion)
    assert "Successful key restoration" not in caplog.text


def test_bundle_repr_hides_secrets(test_mnemonic, test_companion):
    bundle = KeyGenerator().restore_identity(test_mnemonic, test_companion)
    text = repr(bundle)
    assert test_mnemonic not in text
    assert bundle.private_key not in text
