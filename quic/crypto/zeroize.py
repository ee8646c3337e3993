"""
Best-effort wiping of secret buffers.

bytes objects are immutable and cannot be cleared, so secrets that are only
needed inside one derivation are kept in bytearrays and wiped here once the
next stage has consumed them.
"""

from typing import Union


def wipe_bytes_like(buf: Union[bytes, bytearray, memoryview, None]) -> None:
    """
    Overwrite a mutable buffer with zeros in place.

    bytearray, contiguous writable memoryview and one-dimensional strided
    writable memoryview (e.g. memoryview(buf)[::2]) are cleared. Immutable,
    read-only and multi-dimensional strided buffers are left as they are.
    """
    if isinstance(buf, bytearray):
        buf[:] = bytes(len(buf))
    elif isinstance(buf, memoryview) and not buf.readonly:
        if buf.c_contiguous:
            view = buf.cast("B")
            view[:] = bytes(len(view))
        elif buf.ndim == 1:
            # Strided views cannot be cast, clear item by item
            zero = b"\x00" if buf.format == "c" else 0
            for i in range(len(buf)):
                buf[i] = zero
