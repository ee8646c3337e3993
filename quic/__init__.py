"""
QUIC Initial Packet Protection Keys

This package derives the keys that protect QUIC Initial packets:
- Versioned Initial salts and labels, cipher suite lengths
- HKDF-Extract / HKDF-Expand-Label
- Client and server key, IV and header protection key
"""

from .constants import *
from .errors import (
    KeyDerivationError,
    LabelEncodingError,
    InvalidCipherSuiteError,
    InvalidConnectionIdError,
    UnsupportedVersionError,
)
from .crypto import Role, KeyMaterial, InitialKeys, KeyGenerator, derive, derive_initial_keys
