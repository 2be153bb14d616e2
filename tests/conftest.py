import pytest

from platarium.crypto.bip39 import mnemonic_to_seed

TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)
TEST_COMPANION = "TESTCODE12"


@pytest.fixture
def test_mnemonic():
    return TEST_MNEMONIC


@pytest.fixture
def test_companion():
    return TEST_COMPANION


@pytest.fixture
def master_seed():
    return mnemonic_to_seed(TEST_MNEMONIC, TEST_COMPANION)
