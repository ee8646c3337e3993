"""
Tests for versioned Initial parameters and cipher suites.
"""

import pytest

from quic.constants import (
    CIPHER_SUITES, CipherSuite, DEFAULT_CIPHER_SUITE, DEFAULT_INITIAL_PARAMETERS, INITIAL_PARAMETERS,
    QUIC_DRAFT_14, QUIC_V1, QUIC_V2, get_initial_parameters,
)
from quic.crypto.hkdf import build_hkdf_label
from quic.errors import InvalidCipherSuiteError, UnsupportedVersionError


@pytest.mark.parametrize("version,expected", [
    (0xFF00000E, QUIC_DRAFT_14),
    ("draft-14", QUIC_DRAFT_14),
    (0x00000001, QUIC_V1),
    ("v1", QUIC_V1),
    (0x6B3343CF, QUIC_V2),
])
def test_get_initial_parameters(version, expected):
    assert get_initial_parameters(version) is expected


@pytest.mark.parametrize("version", [0, 0xFF000020, "v3", "draft-12"])
def test_unsupported_version(version):
    with pytest.raises(UnsupportedVersionError):
        get_initial_parameters(version)


def test_defaults():
    assert DEFAULT_INITIAL_PARAMETERS is QUIC_DRAFT_14
    assert DEFAULT_INITIAL_PARAMETERS.hp_label == b"pn"
    assert (DEFAULT_CIPHER_SUITE.key_length, DEFAULT_CIPHER_SUITE.iv_length,
            DEFAULT_CIPHER_SUITE.hp_key_length, DEFAULT_CIPHER_SUITE.hash_length) == (16, 12, 16, 32)


def test_salts_are_20_bytes():
    for params in INITIAL_PARAMETERS.values():
        assert len(params.salt) == 20


@pytest.mark.parametrize("params", list(INITIAL_PARAMETERS.values()), ids=lambda p: p.name)
def test_labels_encode(params):
    for label in (params.client_label, params.server_label,
                  params.key_label, params.iv_label, params.hp_label):
        build_hkdf_label(32, label, prefix=params.label_prefix)


def test_version_numbers_unique():
    versions = [params.version for params in INITIAL_PARAMETERS.values()]
    assert len(versions) == len(set(versions))


def test_suite_hash_lengths():
    assert CIPHER_SUITES["TLS_AES_256_GCM_SHA384"].hash_length == 48
    assert CIPHER_SUITES["TLS_CHACHA20_POLY1305_SHA256"].hash_length == 32


@pytest.mark.parametrize("suite", list(CIPHER_SUITES.values()), ids=lambda s: s.name)
def test_shipped_suites_validate(suite):
    suite.validate()


@pytest.mark.parametrize("suite", [
    CipherSuite("zero-iv", 16, 0, 16),
    CipherSuite("bool-key", True, 12, 16),
    CipherSuite("too-long-key", 255 * 32 + 1, 12, 16),
    CipherSuite("sha1", 16, 12, 16, "sha1"),
])
def test_cipher_suite_validate_rejects(suite):
    with pytest.raises(InvalidCipherSuiteError):
        suite.validate()
