"""Sign a file with RSA-SHA256 and emit a detached signature document."""
import argparse
import logging
import os
import sys

from provenance.common.protocol import SignatureMsg
from provenance.common.utils import b64e
from provenance.crypto.errors import ProvenanceError
from provenance.crypto.keys import key_fingerprint, public_key_from_private
from provenance.crypto.sign import sign_rsa_sha256


def sign_file(path: str, key_path: str) -> SignatureMsg:
    """
    Sign the raw bytes of a file.

    Args:
        path: File to sign
        key_path: PEM RSA private key

    Returns:
        SignatureMsg with base64 signature and signer key fingerprint
    """
    with open(path, "rb") as f:
        payload = f.read()
    with open(key_path, "rb") as f:
        private_key = f.read()

    signature = sign_rsa_sha256(payload, private_key)
    return SignatureMsg(
        sig=b64e(signature),
        key_fingerprint=key_fingerprint(public_key_from_private(private_key)),
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Sign a file with RSA-SHA256")
    parser.add_argument("file", help="File to sign")
    parser.add_argument(
        "--key",
        required=True,
        help="Path to PEM RSA private key"
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Write signature JSON here (default: print to stdout)"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())

    try:
        msg = sign_file(args.file, args.key)
    except ProvenanceError as e:
        print(f"[!] Signing failed: {e}")
        return 1

    document = msg.model_dump_json(indent=2)
    if args.out:
        with open(args.out, "w") as f:
            f.write(document)
        print(f"[+] Signature saved to {args.out}")
    else:
        print(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
