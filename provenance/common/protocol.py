"""Pydantic models: PublicKey, KeyPair, public_key and signature documents."""
from typing import Literal

from pydantic import BaseModel, ConfigDict

from provenance.common.utils import (
    b64url_d, b64url_e, byte_length, bytes_to_int, int_to_bytes
)


class PublicKey(BaseModel):
    """RSA public key as minimal big-endian modulus and exponent bytes."""
    model_config = ConfigDict(frozen=True)

    n: bytes
    e: bytes

    @classmethod
    def from_numbers(cls, n: int, e: int) -> "PublicKey":
        return cls(n=int_to_bytes(n), e=int_to_bytes(e))

    @property
    def modulus(self) -> int:
        return bytes_to_int(self.n)

    @property
    def exponent(self) -> int:
        return bytes_to_int(self.e)

    @property
    def size(self) -> int:
        """Modulus length in bytes (k)."""
        return byte_length(self.modulus)


class KeyPair(BaseModel):
    """Public components plus the PEM-encoded RSA private key."""
    model_config = ConfigDict(frozen=True)

    public: PublicKey
    private: bytes

    def as_dict(self) -> dict:
        """Plain {public: {n, e}, private} mapping."""
        return {
            "public": {"n": self.public.n, "e": self.public.e},
            "private": self.private,
        }


class PublicKeyMsg(BaseModel):
    """Public key document written next to a private key."""
    type: Literal["public_key"] = "public_key"
    n: str  # base64url, unpadded
    e: str  # base64url, unpadded

    @classmethod
    def from_key(cls, key: PublicKey) -> "PublicKeyMsg":
        return cls(n=b64url_e(key.n), e=b64url_e(key.e))

    def to_key(self) -> PublicKey:
        return PublicKey(n=b64url_d(self.n), e=b64url_d(self.e))


class SignatureMsg(BaseModel):
    """Detached signature document."""
    type: Literal["signature"] = "signature"
    alg: Literal["RS256"] = "RS256"
    sig: str  # base64
    key_fingerprint: str = ""  # hex SHA-256 of SubjectPublicKeyInfo DER
