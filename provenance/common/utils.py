"""Helper signatures: b64e, b64d, b64url_e, b64url_d, int_to_bytes, bytes_to_int, i2osp, sha256_digest."""
import base64
import hashlib


def b64e(b: bytes) -> str:
    """Encode bytes to base64 string."""
    return base64.b64encode(b).decode('ascii')


def b64d(s: str) -> bytes:
    """Decode base64 string to bytes."""
    return base64.b64decode(s, validate=True)


def b64url_e(b: bytes) -> str:
    """Encode bytes to unpadded base64url string."""
    return base64.urlsafe_b64encode(b).rstrip(b'=').decode('ascii')


def b64url_d(s: str) -> bytes:
    """
    Decode base64url string, padded or not.

    Raises:
        binascii.Error: On characters outside the base64url alphabet
    """
    return base64.b64decode(s + "=" * (-len(s) % 4), altchars=b"-_", validate=True)


def int_to_bytes(value: int) -> bytes:
    """
    Minimal big-endian encoding of a non-negative integer.

    Zero encodes to an empty byte string.
    """
    if value < 0:
        raise ValueError("cannot encode a negative integer")
    return value.to_bytes((value.bit_length() + 7) // 8, byteorder='big')


def bytes_to_int(data: bytes) -> int:
    """Interpret big-endian bytes as an unsigned integer (OS2IP)."""
    return int.from_bytes(data, byteorder='big')


def i2osp(value: int, length: int) -> bytes:
    """
    Encode an integer as exactly `length` big-endian bytes, left-padded with zeros.

    Raises:
        ValueError: If the integer does not fit in `length` bytes
    """
    if value < 0 or value >= 256 ** length:
        raise ValueError(f"integer too large to encode in {length} bytes")
    return value.to_bytes(length, byteorder='big')


def byte_length(value: int) -> int:
    """Number of bytes needed to hold `value` (k for a modulus)."""
    return (value.bit_length() + 7) // 8


def sha256_digest(data: bytes) -> bytes:
    """Compute SHA-256 and return the raw 32-byte digest."""
    return hashlib.sha256(data).digest()
