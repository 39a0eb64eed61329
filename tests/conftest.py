"""Shared fixtures: a published 1024-bit test key and freshly generated pairs."""
import pytest

from provenance.common.protocol import PublicKey
from provenance.crypto import keygen

from tests.vectors import FIXED_E, FIXED_N, FIXED_PRIVATE_KEY_PEM


@pytest.fixture
def fixed_private_pem() -> bytes:
    return FIXED_PRIVATE_KEY_PEM


@pytest.fixture
def fixed_public_key() -> PublicKey:
    return PublicKey.from_numbers(FIXED_N, FIXED_E)


@pytest.fixture(scope="session")
def keypair():
    """Freshly generated 1024-bit pair, shared by the whole session."""
    return keygen.generate(1024)


@pytest.fixture(scope="session")
def other_keypair():
    return keygen.generate(1024)
