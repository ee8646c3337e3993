"""
QUIC Initial Key Derivation

Provides:
- HKDF functions and HkdfLabel construction
- Initial secret, direction secret and key material derivation
- Best-effort wiping of intermediate secrets
"""

from .hkdf import build_hkdf_label, hkdf_extract, hkdf_expand, hkdf_expand_label
from .keys import (
    Role,
    KeyMaterial,
    InitialKeys,
    KeyGenerator,
    validate_cipher_suite,
    derive_initial_secret,
    derive_direction_secret,
    derive_key_material,
    derive,
    derive_initial_keys,
)
from .zeroize import wipe_bytes_like
