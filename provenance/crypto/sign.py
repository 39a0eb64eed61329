"""RSA-SHA256 sign/verify over an explicit EMSA-PKCS1-v1_5 block and raw RSA transforms."""
import logging
from collections.abc import Mapping

from cryptography.hazmat.primitives import constant_time
from cryptography.hazmat.primitives.asymmetric import rsa

from provenance.common.protocol import PublicKey
from provenance.common.utils import byte_length, bytes_to_int, i2osp
from provenance.crypto import emsa
from provenance.crypto.errors import EncodingTooSmall, KeyFormatError
from provenance.crypto.keys import load_private_key

logger = logging.getLogger(__name__)


def rsasp1(private_numbers: rsa.RSAPrivateNumbers, c: int) -> int:
    """
    Raw private-key transform s = c^d mod n (no padding).

    Uses the CRT parameters and checks the result against the public
    exponent, falling back to the plain exponentiation on mismatch.
    """
    public_numbers = private_numbers.public_numbers
    n = public_numbers.n
    if not 0 <= c < n:
        raise ValueError("message representative out of range")

    p, q = private_numbers.p, private_numbers.q
    m1 = pow(c, private_numbers.dmp1, p)
    m2 = pow(c, private_numbers.dmq1, q)
    h = (private_numbers.iqmp * (m1 - m2)) % p
    s = m2 + h * q

    if pow(s, public_numbers.e, n) != c:
        logger.warning("CRT result failed the public-exponent check, recomputing")
        s = pow(c, private_numbers.d, n)
    return s


def rsavp1(public_numbers: rsa.RSAPublicNumbers, s: int) -> int:
    """Raw public-key transform m = s^e mod n (no padding)."""
    if not 0 <= s < public_numbers.n:
        raise ValueError("signature representative out of range")
    return pow(s, public_numbers.e, public_numbers.n)


def _public_numbers(public_key) -> rsa.RSAPublicNumbers:
    """Build named-field public numbers from a PublicKey or {n, e} mapping."""
    if isinstance(public_key, PublicKey):
        n_bytes, e_bytes = public_key.n, public_key.e
    elif isinstance(public_key, Mapping):
        try:
            n_bytes, e_bytes = public_key["n"], public_key["e"]
        except KeyError as e:
            raise KeyFormatError(f"public key is missing component {e}") from e
    else:
        raise KeyFormatError(
            f"public key must be a PublicKey or {{n, e}} mapping, got {type(public_key).__name__}"
        )

    if not isinstance(n_bytes, (bytes, bytearray)) or not isinstance(e_bytes, (bytes, bytearray)):
        raise KeyFormatError("public key components must be bytes")

    n = bytes_to_int(n_bytes)
    e = bytes_to_int(e_bytes)
    if n == 0 or e == 0:
        raise KeyFormatError("public key modulus and exponent must be non-zero")
    return rsa.RSAPublicNumbers(e=e, n=n)


def message_representative(message: bytes, n: int) -> int:
    """
    EMSA block for a modulus, as an integer below n.

    Raises:
        EncodingTooSmall: If the block does not fit, or its integer is not below n
    """
    k = byte_length(n)
    c = bytes_to_int(emsa.encode(message, k))
    if c >= n:
        # Only reachable when the modulus' top byte is 0x01.
        raise EncodingTooSmall(k, emsa.MIN_ENCODED_LENGTH)
    return c


def sign_rsa_sha256(message: bytes, private_key_pem) -> bytes:
    """
    Sign a message with RSA-SHA256 (RSASSA-PKCS1-v1_5).

    Args:
        message: Message bytes to sign
        private_key_pem: RSA private key in PEM format

    Returns:
        Signature of exactly k bytes (k = modulus byte length)

    Raises:
        KeyFormatError: If the key cannot be parsed or is not RSA
        EncodingTooSmall: If the modulus cannot hold the EMSA block
    """
    private_numbers = load_private_key(private_key_pem).private_numbers()
    n = private_numbers.public_numbers.n
    k = byte_length(n)

    c = message_representative(message, n)
    signature = i2osp(rsasp1(private_numbers, c), k)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("sig(%d): %s", len(signature), signature.hex())
    return signature


def verify_rsa_sha256(message: bytes, signature: bytes, public_key) -> bool:
    """
    Verify an RSA-SHA256 (RSASSA-PKCS1-v1_5) signature.

    A wrong signature, wrong key, tampered message or a signature whose
    length differs from the modulus length all yield False.

    Args:
        message: Original message bytes
        signature: Signature to verify
        public_key: PublicKey or {"n": bytes, "e": bytes}

    Returns:
        True if the recovered block equals the expected EMSA block

    Raises:
        KeyFormatError: If the public key components are missing or malformed
        EncodingTooSmall: If the modulus cannot hold the EMSA block
    """
    public_numbers = _public_numbers(public_key)
    k = byte_length(public_numbers.n)
    if k < emsa.MIN_ENCODED_LENGTH:
        raise EncodingTooSmall(k, emsa.MIN_ENCODED_LENGTH)

    if not isinstance(signature, (bytes, bytearray)):
        logger.debug("Signature is %s, not bytes", type(signature).__name__)
        return False
    if len(signature) != k:
        logger.debug("Signature length %d does not match modulus length %d", len(signature), k)
        return False

    s = bytes_to_int(signature)
    if s >= public_numbers.n:
        logger.debug("Signature representative out of range")
        return False

    recovered = i2osp(rsavp1(public_numbers, s), k)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("rsig(%d): %s", len(recovered), recovered.hex())

    expected = emsa.encode(message, k)
    return constant_time.bytes_eq(recovered, expected)
