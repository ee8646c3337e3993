"""
HKDF Functions for QUIC Initial Key Derivation (RFC 5869, RFC 8446, RFC 9001)
"""

import hmac
import struct
from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDFExpand

from ..constants import MAX_HKDF_CONTEXT_LENGTH, MAX_HKDF_LABEL_LENGTH, MAX_HKDF_OUTPUT_LENGTH
from ..errors import LabelEncodingError


HASH_ALGORITHMS = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
}

TLS13_LABEL_PREFIX = b"tls13 "

BytesLike = Union[bytes, bytearray, memoryview]


def hkdf_extract(salt: BytesLike, ikm: BytesLike, hash_name: str = "sha256") -> bytes:
    """
    HKDF-Extract (RFC 5869 Section 2.2).

    Args:
        salt: Salt value (optional, can be zero-length)
        ikm: Input keying material (can be zero-length)
        hash_name: Hash function name ("sha256" or "sha384")

    Returns:
        bytes: Pseudorandom key (hash length bytes)
    """
    return hmac.new(bytes(salt), bytes(ikm), hash_name).digest()


def hkdf_expand(prk: BytesLike, info: bytes, length: int, hash_name: str = "sha256") -> bytes:
    """
    HKDF-Expand (RFC 5869 Section 2.3).

    Errors from the cryptography backend (for example a length beyond
    255 * hash length) are raised unchanged.
    """
    hkdf = HKDFExpand(
        algorithm=HASH_ALGORITHMS[hash_name](),
        length=length,
        info=info,
    )
    return hkdf.derive(bytes(prk))


def build_hkdf_label(length: int, label: Union[bytes, str], context: bytes = b"",
                     prefix: bytes = TLS13_LABEL_PREFIX) -> bytes:
    """
    Build the HkdfLabel structure used as HKDF-Expand info.

    HkdfLabel structure:
        uint16 length
        opaque label<7..255> = prefix + Label
        opaque context<0..255>

    Args:
        length: Output length of the expansion the label is for
        label: ASCII label (without prefix)
        context: Context (empty for Initial keys)
        prefix: Label prefix ("tls13 " since draft-17, "quic " before)

    Returns:
        bytes: Encoded HkdfLabel

    Raises:
        LabelEncodingError: If a field does not fit its length prefix or length is not positive
    """
    if isinstance(label, str):
        if not label.isascii():
            raise LabelEncodingError("label must be ASCII")
        label = label.encode("ascii")
    if isinstance(length, bool) or not isinstance(length, int):
        raise LabelEncodingError(f"output length must be an int, got {length!r}")
    if not 0 < length <= MAX_HKDF_OUTPUT_LENGTH:
        raise LabelEncodingError(f"output length {length} must be between 1 and {MAX_HKDF_OUTPUT_LENGTH}")

    full_label = bytes(prefix) + bytes(label)
    if not full_label.isascii():
        raise LabelEncodingError("label must be ASCII")
    if len(full_label) > MAX_HKDF_LABEL_LENGTH:
        raise LabelEncodingError(
            f"label is {len(full_label)} bytes, at most {MAX_HKDF_LABEL_LENGTH} allowed")
    if len(context) > MAX_HKDF_CONTEXT_LENGTH:
        raise LabelEncodingError(
            f"context is {len(context)} bytes, at most {MAX_HKDF_CONTEXT_LENGTH} allowed")

    hkdf_label = struct.pack(">H", length)  # length (2 bytes)
    hkdf_label += struct.pack("B", len(full_label)) + full_label  # label
    hkdf_label += struct.pack("B", len(context)) + bytes(context)  # context
    return hkdf_label


def hkdf_expand_label(secret: BytesLike, label: Union[bytes, str], context: bytes, length: int,
                      prefix: bytes = TLS13_LABEL_PREFIX, hash_name: str = "sha256") -> bytes:
    """
    HKDF-Expand-Label as defined in TLS 1.3 (RFC 8446 Section 7.1).

    Args:
        secret: The secret to expand
        label: The label (without prefix)
        context: Context (usually transcript hash or empty)
        length: Desired output length
        prefix: Label prefix
        hash_name: Hash function name

    Returns:
        bytes: Derived key material
    """
    info = build_hkdf_label(length, label, context, prefix)
    return hkdf_expand(secret, info, length, hash_name)
