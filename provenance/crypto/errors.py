"""Exception taxonomy for key generation, key parsing and EMSA encoding."""


class ProvenanceError(Exception):
    """Base class for all signing-layer failures."""
    pass


class KeyGenerationError(ProvenanceError):
    """Prime search or key assembly failed. Never retried internally."""
    pass


class KeyFormatError(ProvenanceError, ValueError):
    """Key bytes could not be parsed as an RSA key, or are not RSA."""
    pass


class EncodingTooSmall(ProvenanceError, ValueError):
    """The modulus is too short to hold the EMSA-PKCS1-v1_5 block."""

    def __init__(self, k: int, minimum: int):
        self.k = k
        self.minimum = minimum
        super().__init__(
            f"intended encoded message length {k} is too short "
            f"(need at least {minimum} bytes)"
        )
