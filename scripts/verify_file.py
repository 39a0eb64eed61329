"""Verify a detached RSA-SHA256 signature document against a public key document."""
import argparse
import logging
import os
import sys

from provenance.common.protocol import PublicKeyMsg, SignatureMsg
from provenance.common.utils import b64d
from provenance.crypto.errors import ProvenanceError
from provenance.crypto.sign import verify_rsa_sha256


def verify_file(path: str, sig_path: str, pub_path: str) -> bool:
    """
    Verify a file's signature.

    Args:
        path: Signed file
        sig_path: SignatureMsg JSON
        pub_path: PublicKeyMsg JSON

    Returns:
        True if the signature is valid, False otherwise
    """
    with open(path, "rb") as f:
        payload = f.read()
    with open(sig_path, "rb") as f:
        sig_msg = SignatureMsg.model_validate_json(f.read())
    with open(pub_path, "rb") as f:
        public_key = PublicKeyMsg.model_validate_json(f.read()).to_key()

    return verify_rsa_sha256(payload, b64d(sig_msg.sig), public_key)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Verify an RSA-SHA256 file signature")
    parser.add_argument("file", help="Signed file")
    parser.add_argument(
        "--sig",
        required=True,
        help="Path to signature JSON (from sign_file)"
    )
    parser.add_argument(
        "--pub",
        required=True,
        help="Path to public key JSON (from gen_keypair)"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())

    try:
        valid = verify_file(args.file, args.sig, args.pub)
    except (ProvenanceError, ValueError, OSError) as e:
        # ValueError covers pydantic ValidationError, binascii.Error and UnicodeDecodeError
        print(f"[!] Verification error: {e}")
        return 2

    if valid:
        print(f"[+] Signature is VALID")
        return 0
    print(f"[!] Signature is INVALID")
    return 1


if __name__ == "__main__":
    sys.exit(main())
