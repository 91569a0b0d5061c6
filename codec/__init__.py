"""Byte string codecs."""

from core.errors import InvalidArgument

BYTES_LIKE = (bytes, bytearray, memoryview)


def require_bytes(value, name):
    """Immutable copy of a bytes-like value; ints, strings and None are rejected."""
    if not isinstance(value, BYTES_LIKE):
        raise InvalidArgument(
            f"{name} must be bytes-like, got {type(value).__name__}",
            context={"type": type(value).__name__},
        )
    return bytes(value)
