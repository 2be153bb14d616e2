import pytest

from platarium.constants import HALF_ORDER, SECP256K1_ORDER
from platarium.crypto.generator import KeyGenerator
from platarium.crypto.keys import PrivateKey
from platarium.crypto.signature import (
    encode_der_signature,
    ensure_low_s,
    hash_message,
    parse_der_signature,
    recover_public_key,
    sign_message,
    verify_signature,
)
from platarium.exceptions import ErrorKind, PlatariumError

MESSAGE = {"data": "Hello, Platarium!"}


@pytest.fixture
def account_key(test_mnemonic, test_companion):
    bundle = KeyGenerator(log_success=False).restore_identity(test_mnemonic, test_companion)
    return PrivateKey(bundle.account_private_key())


def test_sign_test_payload(account_key):
    signed = sign_message(account_key, MESSAGE)
    assert len(signed.hash) == 64
    assert signed.hash == hash_message(MESSAGE).hex()
    assert len(signed.r) == 64 and len(signed.s) == 64
    assert signed.pub == account_key.public_key().hex()
    assert signed.der and signed.compact
    assert set(signed.to_dict()) == {"hash", "r", "s", "pub", "der", "compact"}


def test_sign_is_deterministic(account_key):
    assert sign_message(account_key, MESSAGE) == sign_message(account_key.hex(), MESSAGE)


def test_round_trip_and_tamper(account_key):
    signed = sign_message(account_key, MESSAGE)
    assert verify_signature(MESSAGE, signed.der, signed.pub)
    assert not verify_signature({"data": "Hello, Platarium?"}, signed.der, signed.pub)

    der = bytearray(bytes.fromhex(signed.der))
    der[-1] ^= 0x01
    assert not verify_signature(MESSAGE, der.hex(), signed.pub)

    other = PrivateKey.create().public_key().hex()
    assert not verify_signature(MESSAGE, signed.der, other)


def test_verify_never_raises_on_garbage(account_key):
    signed = sign_message(account_key, MESSAGE)
    assert verify_signature(MESSAGE, "zz", signed.pub) is False
    assert verify_signature(MESSAGE, "", signed.pub) is False
    assert verify_signature(MESSAGE, None, signed.pub) is False
    assert verify_signature(MESSAGE, signed.der, "02abcd") is False
    assert verify_signature(MESSAGE, signed.compact, signed.pub) is False
    assert verify_signature({"bad": object()}, signed.der, signed.pub) is False


def test_signatures_are_low_s(account_key):
    for i in range(20):
        signed = sign_message(account_key, {"n": i})
        assert int(signed.s, 16) <= HALF_ORDER
        assert int(signed.r, 16) < SECP256K1_ORDER


def test_ensure_low_s_flips_high_s():
    high = SECP256K1_ORDER - 5
    assert ensure_low_s(7, high, 0) == (7, 5, 1)
    assert ensure_low_s(7, 5, 1) == (7, 5, 1)


def test_hash_is_canonical():
    assert hash_message({"a": 1, "b": [1, 2]}) == hash_message({"b": [1, 2], "a": 1})
    assert hash_message({"a": 1}) == hash_message({"a": 1.0})
    assert hash_message({"a": 1}) != hash_message({"a": "1"})
    with pytest.raises(PlatariumError) as exc:
        hash_message({"a": float("inf")})
    assert exc.value.kind is ErrorKind.INVALID_ARGUMENT


def test_compact_carries_true_recovery_id(account_key):
    for i in range(10):
        message = {"n": i}
        signed = sign_message(account_key, message)
        assert len(signed.compact) == 130
        assert signed.compact == signed.r + signed.s + f"{signed.recovery_id:02x}"
        assert recover_public_key(message, signed.compact) == signed.pub


def test_recover_rejects_malformed(account_key):
    signed = sign_message(account_key, MESSAGE)
    with pytest.raises(PlatariumError):
        recover_public_key(MESSAGE, signed.compact[:-2])
    with pytest.raises(PlatariumError):
        recover_public_key(MESSAGE, signed.compact[:-2] + "07")


def test_sign_rejects_prefixed_bundle_keys(test_mnemonic, test_companion):
    bundle = KeyGenerator(log_success=False).restore_identity(test_mnemonic, test_companion)
    with pytest.raises(PlatariumError) as exc:
        sign_message(bundle.private_key, MESSAGE)
    assert exc.value.kind is ErrorKind.INVALID_KEY_FORMAT
    signed = sign_message(bundle.signature_private_key(), MESSAGE)
    assert verify_signature(MESSAGE, signed.der, signed.pub)


def test_der_codec():
    der = encode_der_signature(1, 2)
    assert der.hex() == "3006020101020102"
    assert parse_der_signature(der) == (1, 2)

    high = encode_der_signature(0x80, 0xFF)
    assert high.hex() == "300802020080020200ff"
    assert parse_der_signature(high) == (0x80, 0xFF)


@pytest.mark.parametrize("bad", [
    "3006020101020102" + "00",   # trailing byte
    "3106020101020102",          # wrong sequence tag
    "3007020101020102",          # wrong total length
    "3006030101020102",          # wrong integer tag
    "3007020200010201" + "02",   # non-minimal r
    "3006020181020102",          # negative r
    "3006020100020102",          # zero r
    "300402000200",              # empty integers
])
def test_der_parse_rejects(bad):
    with pytest.raises(PlatariumError) as exc:
        parse_der_signature(bytes.fromhex(bad))
    assert exc.value.kind is ErrorKind.INVALID_KEY_FORMAT


def test_integral_float_message_verifies_as_integer(account_key):
    signed = sign_message(account_key, {"amount": 1.0})
    assert verify_signature({"amount": 1}, signed.der, signed.pub)
