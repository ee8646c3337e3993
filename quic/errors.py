"""
QUIC Initial Key Derivation Errors

Every failure is raised to the caller. There is no partial or fallback key
material: if a derivation raises, no keys were produced.
"""


class KeyDerivationError(Exception):
    """Base class for Initial key derivation failures."""


class LabelEncodingError(KeyDerivationError, ValueError):
    """An HkdfLabel field does not fit its length prefix."""


class InvalidCipherSuiteError(KeyDerivationError, ValueError):
    """Cipher suite lengths or hash cannot be used for expansion."""


class InvalidConnectionIdError(KeyDerivationError, ValueError):
    """Connection ID is not bytes-like or is longer than 20 bytes."""


class UnsupportedVersionError(KeyDerivationError, ValueError):
    """No Initial salt and labels are known for the requested version."""
