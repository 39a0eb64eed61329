"""RSA key loading and public-key formats: PEM, SubjectPublicKeyInfo, magic key, fingerprint."""
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from provenance.common.protocol import PublicKey
from provenance.common.utils import b64url_d, b64url_e
from provenance.crypto.errors import KeyFormatError


def _as_bytes(pem) -> bytes:
    if isinstance(pem, str):
        return pem.encode('ascii')
    if isinstance(pem, (bytes, bytearray, memoryview)):
        return bytes(pem)
    raise KeyFormatError(f"key must be bytes or str, got {type(pem).__name__}")


def load_private_key(private_key_pem) -> rsa.RSAPrivateKey:
    """
    Load an unencrypted RSA private key from PEM.

    Accepts both "RSA PRIVATE KEY" (PKCS#1) and "PRIVATE KEY" (PKCS#8) blocks.

    Args:
        private_key_pem: Private key in PEM format (bytes or str)

    Returns:
        RSA private key object

    Raises:
        KeyFormatError: If the PEM cannot be parsed or is not an RSA key
    """
    try:
        private_key = serialization.load_pem_private_key(
            _as_bytes(private_key_pem),
            password=None,
            backend=default_backend()
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyFormatError(f"cannot read private key: {e}") from e

    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise KeyFormatError(
            f"expected an RSA private key, got {type(private_key).__name__}"
        )
    return private_key


def public_key_from_private(private_key_pem) -> PublicKey:
    """Extract {n, e} from a PEM RSA private key."""
    numbers = load_private_key(private_key_pem).public_key().public_numbers()
    return PublicKey.from_numbers(numbers.n, numbers.e)


def public_key_from_pem(public_key_pem) -> PublicKey:
    """
    Load {n, e} from a SubjectPublicKeyInfo ("PUBLIC KEY") PEM.

    Raises:
        KeyFormatError: If the PEM cannot be parsed or is not an RSA key
    """
    try:
        public_key = serialization.load_pem_public_key(
            _as_bytes(public_key_pem),
            backend=default_backend()
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyFormatError(f"cannot read public key: {e}") from e

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise KeyFormatError(
            f"expected an RSA public key, got {type(public_key).__name__}"
        )
    numbers = public_key.public_numbers()
    return PublicKey.from_numbers(numbers.n, numbers.e)


def _to_library_key(public_key: PublicKey) -> rsa.RSAPublicKey:
    try:
        return rsa.RSAPublicNumbers(
            e=public_key.exponent, n=public_key.modulus
        ).public_key(default_backend())
    except ValueError as e:
        raise KeyFormatError(f"invalid RSA public key: {e}") from e


def public_key_to_pem(public_key: PublicKey) -> bytes:
    """Encode {n, e} as a SubjectPublicKeyInfo PEM."""
    return _to_library_key(public_key).public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    )


def key_fingerprint(public_key: PublicKey) -> str:
    """
    Get SHA-256 fingerprint of a public key.

    Returns:
        Hex SHA-256 of the DER SubjectPublicKeyInfo
    """
    der = _to_library_key(public_key).public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    )
    digest = hashes.Hash(hashes.SHA256(), backend=default_backend())
    digest.update(der)
    return digest.finalize().hex()


def to_magic_key(public_key: PublicKey) -> str:
    """Encode as the Salmon magic key string RSA.<b64url n>.<b64url e>."""
    return f"RSA.{b64url_e(public_key.n)}.{b64url_e(public_key.e)}"


def from_magic_key(magic_key: str) -> PublicKey:
    """
    Parse a Salmon magic key string.

    Raises:
        KeyFormatError: If the string is not RSA.<n>.<e> with valid base64url,
            non-zero parts
    """
    parts = magic_key.strip().split(".")
    if len(parts) != 3 or parts[0] != "RSA" or not parts[1] or not parts[2]:
        raise KeyFormatError("magic key must look like RSA.<modulus>.<exponent>")
    try:
        n = b64url_d(parts[1])
        e = b64url_d(parts[2])
    except ValueError as exc:
        raise KeyFormatError(f"magic key is not valid base64url: {exc}") from exc
    n, e = n.lstrip(b"\x00"), e.lstrip(b"\x00")
    if not n or not e:
        raise KeyFormatError("magic key modulus and exponent must be non-zero")
    return PublicKey(n=n, e=e)
