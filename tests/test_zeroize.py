"""
Tests for best-effort buffer wiping.
"""

from quic.crypto.zeroize import wipe_bytes_like


def test_wipe_bytearray():
    buf = bytearray(b"secret key material")
    wipe_bytes_like(buf)
    assert buf == bytearray(19)


def test_wipe_writable_memoryview():
    backing = bytearray(range(1, 17))
    wipe_bytes_like(memoryview(backing))
    assert backing == bytearray(16)


def test_wipe_multibyte_memoryview():
    backing = bytearray(range(1, 9))
    wipe_bytes_like(memoryview(backing).cast("H"))
    assert backing == bytearray(8)


def test_bytes_untouched():
    buf = b"immutable"
    wipe_bytes_like(buf)
    assert buf == b"immutable"


def test_readonly_memoryview_untouched():
    view = memoryview(b"readonly")
    wipe_bytes_like(view)
    assert view.tobytes() == b"readonly"


def test_none_is_ignored():
    wipe_bytes_like(None)


def test_wipe_strided_memoryview():
    backing = bytearray(range(1, 9))
    wipe_bytes_like(memoryview(backing)[::2])
    assert backing == bytearray([0, 2, 0, 4, 0, 6, 0, 8])
