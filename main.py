#!/usr/bin/env python3
"""
QUIC Initial Keys - Main Entry Point

Prints the packet protection key, IV and header protection key that protect
QUIC Initial packets for a given Destination Connection ID.

Usage:
    python main.py [options] dcid

Examples:
    # Client and server keys for the draft-14 test vector
    python main.py 8394c8f03e515708

    # Client keys only, QUIC version 1 (RFC 9001 Appendix A)
    python main.py 8394c8f03e515708 --version v1 --role client

    # Only the key lines, no banner
    python main.py 8394c8f03e515708 -q
"""

import argparse
import logging
import sys

from quic.constants import CIPHER_SUITES, INITIAL_PARAMETERS, DEFAULT_CIPHER_SUITE, DEFAULT_INITIAL_PARAMETERS
from quic.crypto import Role, KeyMaterial, derive
from quic.errors import KeyDerivationError


def print_key_material(role: Role, km: KeyMaterial):
    """Print one direction's key material in hex."""
    print(f"\n    === {role.value} Initial ===")
    for name, value in km.hex().items():
        print(f"    {name:<4} {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Derive QUIC Initial packet protection keys from a connection ID",
    )

    parser.add_argument(
        "dcid",
        help="Original Destination Connection ID in hex (may be empty: \"\")"
    )

    parser.add_argument(
        "-r", "--role",
        choices=["client", "server", "both"],
        default="both",
        help="Endpoint whose keys to print (default: both)"
    )

    parser.add_argument(
        "-V", "--version",
        dest="quic_version",
        choices=sorted(INITIAL_PARAMETERS),
        default=DEFAULT_INITIAL_PARAMETERS.name,
        help=f"QUIC version salt and labels (default: {DEFAULT_INITIAL_PARAMETERS.name})"
    )

    parser.add_argument(
        "-s", "--suite",
        choices=sorted(CIPHER_SUITES),
        default=DEFAULT_CIPHER_SUITE.name,
        help=f"Cipher suite giving key lengths (default: {DEFAULT_CIPHER_SUITE.name})"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Disable banner output"
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        dcid = bytes.fromhex(args.dcid)
    except ValueError:
        parser.error(f"dcid is not valid hex: {args.dcid!r}")

    params = INITIAL_PARAMETERS[args.quic_version]
    suite = CIPHER_SUITES[args.suite]
    roles = [Role.CLIENT, Role.SERVER] if args.role == "both" else [Role(args.role)]

    if not args.quiet:
        print(f"QUIC Initial Keys - version {params.name} (0x{params.version:08x}), {suite.name}")
        print(f"DCID: {dcid.hex() or '(empty)'} ({len(dcid)} bytes)")

    try:
        results = [(role, derive(dcid, role, suite, params)) for role in roles]
    except KeyDerivationError as e:
        parser.error(str(e))

    for role, km in results:
        print_key_material(role, km)

    return 0


if __name__ == "__main__":
    sys.exit(main())
