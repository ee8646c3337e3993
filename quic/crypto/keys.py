"""
QUIC Initial Key Derivation (RFC 9001 Section 5.2)

Initial keys are derived from the client's first Destination Connection ID:

    initial_secret = HKDF-Extract(initial_salt, dcid)
    client_initial_secret = HKDF-Expand-Label(initial_secret, "client in", "", Hash.length)
    server_initial_secret = HKDF-Expand-Label(initial_secret, "server in", "", Hash.length)
    key = HKDF-Expand-Label(direction_secret, key_label, "", key_length)
    iv  = HKDF-Expand-Label(direction_secret, iv_label, "", iv_length)
    hp  = HKDF-Expand-Label(direction_secret, hp_label, "", hp_key_length)

The salt and labels come from InitialParameters, the lengths and hash from
CipherSuite. Every function here is pure and safe to call from many threads.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .hkdf import hkdf_extract, hkdf_expand_label, BytesLike
from .zeroize import wipe_bytes_like
from ..constants import (
    CipherSuite, InitialParameters, DEFAULT_CIPHER_SUITE, DEFAULT_INITIAL_PARAMETERS,
    HASH_LENGTHS, MAX_CONNECTION_ID_LENGTH,
)
from ..errors import InvalidCipherSuiteError, InvalidConnectionIdError

logger = logging.getLogger(__name__)


class Role(Enum):
    """Endpoint whose Initial packets the keys protect."""
    CLIENT = "client"
    SERVER = "server"


@dataclass(frozen=True)
class KeyMaterial:
    """Packet protection key, IV and header protection key for one direction."""
    key: bytes = field(repr=False)
    iv: bytes = field(repr=False)
    hp: bytes = field(repr=False)  # Header protection key ("pn" key before draft-17)

    def hex(self) -> Dict[str, str]:
        """Hex form of each field, for display."""
        return {"key": self.key.hex(), "iv": self.iv.hex(), "hp": self.hp.hex()}


@dataclass(frozen=True)
class InitialKeys:
    """Client and server Initial key material for one connection."""
    client: KeyMaterial
    server: KeyMaterial

    def for_role(self, role: Role) -> KeyMaterial:
        return self.client if role is Role.CLIENT else self.server


def validate_cipher_suite(suite: CipherSuite) -> None:
    """
    Check that every output length of a suite can be produced by HKDF-Expand.

    Raises:
        InvalidCipherSuiteError: On an unknown hash or an unusable length
    """
    suite.validate()


def _check_hash(hash_name: str) -> None:
    if hash_name not in HASH_LENGTHS:
        raise InvalidCipherSuiteError(f"unsupported hash {hash_name!r}")


def _check_connection_id(dcid: BytesLike) -> bytes:
    if not isinstance(dcid, (bytes, bytearray, memoryview)):
        raise InvalidConnectionIdError(
            f"connection ID must be bytes-like, got {type(dcid).__name__}")
    dcid = bytes(dcid)
    if len(dcid) > MAX_CONNECTION_ID_LENGTH:
        raise InvalidConnectionIdError(
            f"connection ID is {len(dcid)} bytes, at most {MAX_CONNECTION_ID_LENGTH} allowed")
    return dcid


def derive_initial_secret(dcid: BytesLike,
                          params: InitialParameters = DEFAULT_INITIAL_PARAMETERS,
                          hash_name: str = "sha256") -> bytearray:
    """
    Extract the Initial secret from the Destination Connection ID.

    Args:
        dcid: Original Destination Connection ID chosen by the client (0-20 bytes)
        params: Salt and labels of the QUIC version in use
        hash_name: Hash function of the cipher suite

    Returns:
        bytearray: Initial secret (hash length bytes), owned by the caller
    """
    _check_hash(hash_name)
    dcid = _check_connection_id(dcid)
    return bytearray(hkdf_extract(params.salt, dcid, hash_name))


def derive_direction_secret(initial_secret: BytesLike, role: Role,
                            params: InitialParameters = DEFAULT_INITIAL_PARAMETERS,
                            hash_name: str = "sha256") -> bytearray:
    """
    Expand the Initial secret into the client or server Initial secret.

    This is the only step where the two endpoints' derivations differ.
    """
    _check_hash(hash_name)
    label = params.client_label if role is Role.CLIENT else params.server_label
    return bytearray(hkdf_expand_label(
        initial_secret, label, b"", HASH_LENGTHS[hash_name],
        prefix=params.label_prefix, hash_name=hash_name,
    ))


def derive_key_material(direction_secret: BytesLike,
                        params: InitialParameters = DEFAULT_INITIAL_PARAMETERS,
                        suite: CipherSuite = DEFAULT_CIPHER_SUITE) -> KeyMaterial:
    """
    Derive the key, IV and header protection key from a direction secret.

    Args:
        direction_secret: Client or server Initial secret
        params: Salt and labels of the QUIC version in use
        suite: Cipher suite giving output lengths and hash

    Returns:
        KeyMaterial: Fields of exactly the suite's lengths
    """
    validate_cipher_suite(suite)

    def expand(label: bytes, length: int) -> bytes:
        return hkdf_expand_label(direction_secret, label, b"", length,
                                 prefix=params.label_prefix, hash_name=suite.hash_name)

    return KeyMaterial(
        key=expand(params.key_label, suite.key_length),
        iv=expand(params.iv_label, suite.iv_length),
        hp=expand(params.hp_label, suite.hp_key_length),
    )


def derive(dcid: BytesLike, role: Role,
           suite: CipherSuite = DEFAULT_CIPHER_SUITE,
           params: InitialParameters = DEFAULT_INITIAL_PARAMETERS) -> KeyMaterial:
    """
    Derive Initial key material for one endpoint.

    Args:
        dcid: Original Destination Connection ID chosen by the client
        role: Endpoint whose packets the keys protect
        suite: Cipher suite giving output lengths and hash
        params: Salt and labels of the QUIC version in use

    Returns:
        KeyMaterial: {key, iv, hp}

    Raises:
        InvalidConnectionIdError: If dcid is not bytes-like or too long
        InvalidCipherSuiteError: If the suite cannot be expanded to
        LabelEncodingError: If a label of params does not fit an HkdfLabel
    """
    validate_cipher_suite(suite)
    dcid = _check_connection_id(dcid)

    logger.debug("Deriving %s Initial keys: version=%s suite=%s dcid=%s (%d bytes)",
                 role.value, params.name, suite.name, dcid.hex(), len(dcid))

    initial_secret = derive_initial_secret(dcid, params, suite.hash_name)
    try:
        direction_secret = derive_direction_secret(initial_secret, role, params, suite.hash_name)
    finally:
        wipe_bytes_like(initial_secret)
    try:
        return derive_key_material(direction_secret, params, suite)
    finally:
        wipe_bytes_like(direction_secret)


def derive_initial_keys(dcid: BytesLike,
                        suite: CipherSuite = DEFAULT_CIPHER_SUITE,
                        params: InitialParameters = DEFAULT_INITIAL_PARAMETERS) -> InitialKeys:
    """
    Derive client and server Initial key material for one connection.

    Returns:
        InitialKeys: {client, server}
    """
    return InitialKeys(
        client=derive(dcid, Role.CLIENT, suite, params),
        server=derive(dcid, Role.SERVER, suite, params),
    )


class KeyGenerator:
    """
    Initial key generator bound to one endpoint role.

    Usage:
        keygen = KeyGenerator(Role.CLIENT)
        km = keygen.generate(dcid)
    """

    def __init__(self, role: Role,
                 params: InitialParameters = DEFAULT_INITIAL_PARAMETERS,
                 suite: CipherSuite = DEFAULT_CIPHER_SUITE):
        validate_cipher_suite(suite)
        self.role = role
        self.params = params
        self.suite = suite

    def generate(self, dcid: BytesLike) -> KeyMaterial:
        """Derive key material for this generator's role from dcid."""
        return derive(dcid, self.role, self.suite, self.params)
