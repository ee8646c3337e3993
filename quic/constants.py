"""
QUIC Initial Packet Protection Constants (RFC 9001, RFC 9369, draft-ietf-quic-tls)
"""

from dataclasses import dataclass
from typing import Dict, Union

from .errors import InvalidCipherSuiteError, UnsupportedVersionError


# Connection IDs are at most 20 bytes (RFC 9000 Section 17.2)
MAX_CONNECTION_ID_LENGTH = 20

# HkdfLabel length fields: uint16 length, opaque label<7..255>, opaque context<0..255>
MAX_HKDF_OUTPUT_LENGTH = 0xFFFF
MAX_HKDF_LABEL_LENGTH = 255
MAX_HKDF_CONTEXT_LENGTH = 255

# HKDF-Expand can produce at most 255 blocks of hash output (RFC 5869 Section 2.3)
MAX_HKDF_EXPAND_BLOCKS = 255

# Digest sizes of the hash functions usable by a cipher suite
HASH_LENGTHS = {
    "sha256": 32,
    "sha384": 48,
}


@dataclass(frozen=True)
class InitialParameters:
    """
    Fixed inputs to Initial key derivation for one QUIC version.

    The salt and every label are published constants that change only with
    the wire version, so they are grouped here and passed to the key
    schedule as a single value.
    """
    name: str
    version: int
    salt: bytes
    label_prefix: bytes
    client_label: bytes = b"client in"
    server_label: bytes = b"server in"
    key_label: bytes = b"quic key"
    iv_label: bytes = b"quic iv"
    hp_label: bytes = b"quic hp"


# draft-13 and draft-14 share a salt. Labels carry a "quic " prefix and the
# header protection key is still called the packet number ("pn") key.
QUIC_DRAFT_13 = InitialParameters(
    name="draft-13",
    version=0xFF00000D,
    salt=bytes.fromhex("9c108f98520a5c5c32968e950e8a2c5fe06d6c38"),
    label_prefix=b"quic ",
    key_label=b"key",
    iv_label=b"iv",
    hp_label=b"pn",
)

QUIC_DRAFT_14 = InitialParameters(
    name="draft-14",
    version=0xFF00000E,
    salt=bytes.fromhex("9c108f98520a5c5c32968e950e8a2c5fe06d6c38"),
    label_prefix=b"quic ",
    key_label=b"key",
    iv_label=b"iv",
    hp_label=b"pn",
)

QUIC_DRAFT_29 = InitialParameters(
    name="draft-29",
    version=0xFF00001D,
    salt=bytes.fromhex("afbfec289993d24c9e9786f19c6111e04390a899"),
    label_prefix=b"tls13 ",
)

# QUIC Version 1 (RFC 9001 Section 5.2)
QUIC_V1 = InitialParameters(
    name="v1",
    version=0x00000001,
    salt=bytes.fromhex("38762cf7f55934b34d179ae6a4c80cadccbb7f0a"),
    label_prefix=b"tls13 ",
)

# QUIC Version 2 (RFC 9369 Section 3.3)
QUIC_V2 = InitialParameters(
    name="v2",
    version=0x6B3343CF,
    salt=bytes.fromhex("0dede3def700a6db819381be6e269dcbf9bd2ed9"),
    label_prefix=b"tls13 ",
    key_label=b"quicv2 key",
    iv_label=b"quicv2 iv",
    hp_label=b"quicv2 hp",
)

INITIAL_PARAMETERS = {
    params.name: params
    for params in (QUIC_DRAFT_13, QUIC_DRAFT_14, QUIC_DRAFT_29, QUIC_V1, QUIC_V2)
}

DEFAULT_INITIAL_PARAMETERS = QUIC_DRAFT_14


@dataclass(frozen=True)
class CipherSuite:
    """Output lengths and hash function of a negotiated TLS 1.3 cipher suite."""
    name: str
    key_length: int
    iv_length: int
    hp_key_length: int
    hash_name: str = "sha256"

    @property
    def hash_length(self) -> int:
        return HASH_LENGTHS[self.hash_name]

    def validate(self) -> None:
        """
        Check that every output length can be produced by HKDF-Expand.

        Raises:
            InvalidCipherSuiteError: On an unknown hash or an unusable length
        """
        if self.hash_name not in HASH_LENGTHS:
            raise InvalidCipherSuiteError(f"{self.name}: unsupported hash {self.hash_name!r}")

        max_length = min(MAX_HKDF_EXPAND_BLOCKS * self.hash_length, MAX_HKDF_OUTPUT_LENGTH)
        for name in ("key_length", "iv_length", "hp_key_length"):
            length = getattr(self, name)
            if isinstance(length, bool) or not isinstance(length, int):
                raise InvalidCipherSuiteError(f"{self.name}: {name} must be an int, got {length!r}")
            if not 0 < length <= max_length:
                raise InvalidCipherSuiteError(
                    f"{self.name}: {name} is {length}, must be between 1 and {max_length}")


TLS_AES_128_GCM_SHA256 = CipherSuite("TLS_AES_128_GCM_SHA256", 16, 12, 16, "sha256")
TLS_AES_256_GCM_SHA384 = CipherSuite("TLS_AES_256_GCM_SHA384", 32, 12, 32, "sha384")
TLS_CHACHA20_POLY1305_SHA256 = CipherSuite("TLS_CHACHA20_POLY1305_SHA256", 32, 12, 32, "sha256")

CIPHER_SUITES = {
    suite.name: suite
    for suite in (TLS_AES_128_GCM_SHA256, TLS_AES_256_GCM_SHA384, TLS_CHACHA20_POLY1305_SHA256)
}

# Initial packets are always protected with AES-128-GCM
DEFAULT_CIPHER_SUITE = TLS_AES_128_GCM_SHA256


def get_initial_parameters(version: Union[int, str]) -> InitialParameters:
    """
    Look up Initial parameters by wire version number or name.

    Args:
        version: Version number (e.g. 0x00000001) or name (e.g. "v1")

    Returns:
        InitialParameters: The parameters for that version

    Raises:
        UnsupportedVersionError: If the version is not known
    """
    if isinstance(version, str):
        params = INITIAL_PARAMETERS.get(version)
    else:
        params = _PARAMETERS_BY_VERSION.get(version)
    if params is None:
        raise UnsupportedVersionError(f"unsupported QUIC version: {version!r}")
    return params


_PARAMETERS_BY_VERSION: Dict[int, InitialParameters] = {
    params.version: params for params in INITIAL_PARAMETERS.values()
}
