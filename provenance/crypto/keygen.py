"""RSA key-pair generation (e = 65537) with raw public components and PEM private key."""
import logging
import os

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from dotenv import load_dotenv

from provenance.common.protocol import KeyPair, PublicKey
from provenance.crypto.errors import KeyGenerationError

load_dotenv()

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 0x10001
DEFAULT_KEY_BITS = 1024


def default_key_bits() -> int:
    """Modulus size from PROVENANCE_KEY_BITS, falling back to 1024."""
    value = os.getenv("PROVENANCE_KEY_BITS", str(DEFAULT_KEY_BITS))
    try:
        return int(value)
    except ValueError as e:
        raise KeyGenerationError(f"PROVENANCE_KEY_BITS is not an integer: {value!r}") from e


def generate(modulus_bits: int = None) -> KeyPair:
    """
    Generate a fresh RSA key pair.

    Prime search and the private exponent are delegated to the
    cryptography library; the public exponent is always 65537.

    Args:
        modulus_bits: Modulus size in bits (default: PROVENANCE_KEY_BITS or 1024)

    Returns:
        KeyPair with public {n, e} bytes and a PEM RSA private key

    Raises:
        KeyGenerationError: If the size is rejected or key assembly fails
    """
    if modulus_bits is None:
        modulus_bits = default_key_bits()
    if isinstance(modulus_bits, bool) or not isinstance(modulus_bits, int):
        raise KeyGenerationError(f"modulus size must be an integer, got {modulus_bits!r}")

    logger.info("Generating %d-bit RSA key pair", modulus_bits)
    try:
        private_key = rsa.generate_private_key(
            public_exponent=PUBLIC_EXPONENT,
            key_size=modulus_bits,
            backend=default_backend()
        )
        pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyGenerationError(f"cannot generate {modulus_bits}-bit RSA key: {e}") from e

    numbers = private_key.public_key().public_numbers()
    public = PublicKey.from_numbers(numbers.n, numbers.e)
    logger.debug("Generated key with %d-byte modulus", public.size)
    return KeyPair(public=public, private=pem)
