"""Generate an RSA key pair (e = 65537): PEM private key + {n, e} public key document."""
import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from provenance.common.protocol import PublicKeyMsg
from provenance.crypto import keygen
from provenance.crypto.errors import ProvenanceError
from provenance.crypto.keys import key_fingerprint, to_magic_key

load_dotenv()


def generate_keypair(name: str, output_dir: str = None, key_size: int = None) -> tuple[str, str]:
    """
    Generate a key pair and save it to disk.

    Args:
        name: File name prefix (e.g., "alice")
        output_dir: Directory to save keys (default: PROVENANCE_KEYS_DIR or "keys")
        key_size: RSA modulus size in bits (default: PROVENANCE_KEY_BITS or 1024)

    Returns:
        (private_key_path, public_key_path)
    """
    output_dir = output_dir or os.getenv("PROVENANCE_KEYS_DIR", "keys")
    os.makedirs(output_dir, exist_ok=True)

    bits = key_size if key_size is not None else keygen.default_key_bits()
    print(f"[*] Generating {bits}-bit RSA key pair...")
    pair = keygen.generate(bits)

    key_path = os.path.join(output_dir, f"{name}-key.pem")
    pub_path = os.path.join(output_dir, f"{name}-pub.json")

    print(f"[*] Saving private key to {key_path}")
    with open(key_path, "wb") as f:
        f.write(pair.private)

    print(f"[*] Saving public key to {pub_path}")
    with open(pub_path, "w") as f:
        f.write(PublicKeyMsg.from_key(pair.public).model_dump_json(indent=2))

    print(f"\n[+] Key pair generated successfully!")
    print(f"    Private Key: {key_path}")
    print(f"    Public Key:  {pub_path}")
    print(f"    Magic Key:   {to_magic_key(pair.public)}")
    print(f"    Fingerprint: {key_fingerprint(pair.public)}")
    print(f"\n[!] WARNING: Keep {name}-key.pem secure and do NOT commit to git!")
    return key_path, pub_path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate RSA key pair for RSA-SHA256 signing")
    parser.add_argument(
        "--name",
        default="signer",
        help="File name prefix (default: signer)"
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Output directory (default: $PROVENANCE_KEYS_DIR or keys)"
    )
    parser.add_argument(
        "--bits",
        type=int,
        default=None,
        help="RSA modulus size in bits (default: $PROVENANCE_KEY_BITS or 1024)"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())

    try:
        generate_keypair(args.name, args.out, args.bits)
    except ProvenanceError as e:
        print(f"[!] Key generation failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
