"""
KSUID generation.

Time-sortable, globally unique IDs without coordination. A Generator holds
only its payload supplier and clock, so one instance can be shared across
threads as long as the supplier itself is thread-safe.
"""

import math
import os
import threading
from datetime import datetime, timezone

from codec import BYTES_LIKE
from core.errors import InvalidArgument
from core.ksuid import EPOCH, PAYLOAD_BYTES, Ksuid
from internal.logging import get_logger


def _urandom_payload():
    return os.urandom(PAYLOAD_BYTES)


def _utc_now():
    return datetime.now(timezone.utc)


class Generator:
    """Produce KSUIDs from a clock and a payload supplier."""

    __slots__ = ("_payload_supplier", "_clock")

    def __init__(self, payload_supplier=None, clock=None):
        """
        payload_supplier: callable returning PAYLOAD_BYTES bytes, os.urandom by default.
        clock: callable returning an aware datetime, UTC now by default.

        The supplier is checked once here; anything but PAYLOAD_BYTES
        bytes raises InvalidArgument.
        """
        payload_supplier = payload_supplier or _urandom_payload
        sample = payload_supplier()
        if not isinstance(sample, BYTES_LIKE) or len(sample) != PAYLOAD_BYTES:
            raise InvalidArgument(
                f"payload supplier must supply byte arrays of length {PAYLOAD_BYTES}",
                expected=PAYLOAD_BYTES,
                actual=len(sample) if isinstance(sample, BYTES_LIKE) else type(sample).__name__,
            )
        self._payload_supplier = payload_supplier
        self._clock = clock or _utc_now
        get_logger("generator").debug("KSUID generator ready", supplier=getattr(payload_supplier, "__name__", repr(payload_supplier)))

    @classmethod
    def from_random(cls, rng, clock=None):
        """Generator drawing payloads from a random.Random instance."""
        return cls(lambda: rng.randbytes(PAYLOAD_BYTES), clock=clock)

    def new_ksuid(self, at=None):
        """New KSUID for `at` (default: clock()), truncated to whole seconds."""
        if at is None:
            at = self._clock()
        timestamp = math.floor(at.timestamp()) - EPOCH
        return Ksuid.from_parts(timestamp, self._payload_supplier())


_default = None
_default_lock = threading.Lock()


def default_generator():
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Generator()
    return _default


def new_ksuid():
    """New KSUID with a cryptographically strong random payload."""
    return default_generator().new_ksuid()


def generate_ksuid():
    """Generate a 29-character sortable unique ID."""
    return str(new_ksuid())
