"""EMSA-PKCS1-v1_5 encoding for SHA-256 (RFC 8017, section 9.2)."""
import logging

from provenance.common.utils import sha256_digest
from provenance.crypto.errors import EncodingTooSmall

logger = logging.getLogger(__name__)


# DER DigestInfo header for SHA-256:
# SEQUENCE { SEQUENCE { OID 2.16.840.1.101.3.4.2.1, NULL }, OCTET STRING (32) }
SHA256_DIGEST_INFO_PREFIX = bytes([
    0x30, 0x31, 0x30, 0x0D, 0x06, 0x09, 0x60, 0x86,
    0x48, 0x01, 0x65, 0x03, 0x04, 0x02, 0x01, 0x05,
    0x00, 0x04, 0x20,
])
SHA256_DIGEST_LENGTH = 32
T_LENGTH = len(SHA256_DIGEST_INFO_PREFIX) + SHA256_DIGEST_LENGTH

# 0x00 0x01 ... 0x00
FIXED_OVERHEAD = 3
MIN_PADDING_LENGTH = 8
MIN_ENCODED_LENGTH = T_LENGTH + FIXED_OVERHEAD + MIN_PADDING_LENGTH


def digest_info(message: bytes) -> bytes:
    """
    Build T = DigestInfo(SHA-256, SHA256(message)).

    Args:
        message: Arbitrary bytes (hashed, never decoded)

    Returns:
        51-byte DER DigestInfo
    """
    return SHA256_DIGEST_INFO_PREFIX + sha256_digest(message)


def encode(message: bytes, k: int) -> bytes:
    """
    Encode a message as 0x00 || 0x01 || PS || 0x00 || T.

    PS is 0xFF repeated k - len(T) - 3 times and must be at least 8 bytes.

    Args:
        message: Message to encode (any length, including empty)
        k: Intended encoded length in bytes (modulus byte length)

    Returns:
        EMSA block of exactly k bytes

    Raises:
        EncodingTooSmall: If k cannot hold T plus the minimum padding
        TypeError: If message is not bytes-like
    """
    if not isinstance(message, (bytes, bytearray, memoryview)):
        raise TypeError("message must be bytes")

    ps_length = k - T_LENGTH - FIXED_OVERHEAD
    if ps_length < MIN_PADDING_LENGTH:
        raise EncodingTooSmall(k, MIN_ENCODED_LENGTH)

    block = b'\x00\x01' + b'\xff' * ps_length + b'\x00' + digest_info(bytes(message))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("emsa(%d): %s", len(block), block.hex())
    return block
