"""
KSUID - K-Sortable Unique Identifier, 40-bit timestamp variant.

Layout: 5 bytes timestamp + 16 bytes payload = 21 bytes, rendered as a
29 char base62 string. Timestamps are seconds since the Unix epoch.
"""

import functools
from datetime import timezone

from codec import base62, hex as hexcodec, require_bytes
from core.errors import InvalidArgument
from utils.timestamp import format_clock_time, to_datetime

EPOCH = 0
TIMESTAMP_BYTES = 5
PAYLOAD_BYTES = 16
TOTAL_BYTES = TIMESTAMP_BYTES + PAYLOAD_BYTES
MAX_TIMESTAMP = (1 << (8 * TIMESTAMP_BYTES)) - 1

# Width of 21 bytes of 0xFF in base62
STRING_LENGTH = 29

# Upstream big-integer stripping may drop one leading zero byte
MIN_BYTES = TOTAL_BYTES - 1

INSPECT_FORMAT = (
    "REPRESENTATION:\n"
    "\n"
    "  String: {string}\n"
    "     Raw: {raw}\n"
    "\n"
    "COMPONENTS:\n"
    "\n"
    "       Time: {time}\n"
    "  Timestamp: {timestamp}\n"
    "    Payload: {payload}\n"
)


@functools.total_ordering
class Ksuid:
    """
    Immutable KSUID value.

    Build instances with from_bytes(), from_string() or from_parts(), or
    with a core.generator.Generator. Instances order by timestamp, then
    by payload as unsigned bytes.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw):
        if len(raw) != TOTAL_BYTES:
            raise InvalidArgument(
                f"ksuid is not expected length of {TOTAL_BYTES} bytes",
                expected=TOTAL_BYTES,
                actual=len(raw),
            )
        object.__setattr__(self, "_raw", bytes(raw))

    @classmethod
    def from_bytes(cls, data):
        """Build from 20 or 21 raw bytes, left-padding a stripped leading zero."""
        data = require_bytes(data, "ksuid bytes")
        if not MIN_BYTES <= len(data) <= TOTAL_BYTES:
            raise InvalidArgument(
                f"ksuid is not expected length of {TOTAL_BYTES} ({MIN_BYTES}-{TOTAL_BYTES}) bytes",
                expected=TOTAL_BYTES,
                actual=len(data),
            )
        return cls(data.rjust(TOTAL_BYTES, b"\x00"))

    @classmethod
    def from_string(cls, text):
        """Parse a base62 KSUID string."""
        data = base62.decode(text)
        # Canonical width fixes the byte length, so small values pad back out
        if len(text) == STRING_LENGTH and len(data) < MIN_BYTES:
            data = data.rjust(TOTAL_BYTES, b"\x00")
        return cls.from_bytes(data)

    @classmethod
    def from_parts(cls, timestamp, payload):
        """Build from a timestamp in seconds since EPOCH and a 16 byte payload."""
        payload = require_bytes(payload, "payload")
        if len(payload) != PAYLOAD_BYTES:
            raise InvalidArgument(
                f"payload is not expected length of {PAYLOAD_BYTES} bytes",
                expected=PAYLOAD_BYTES,
                actual=len(payload),
            )
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise InvalidArgument(f"timestamp must be an integer, got {type(timestamp).__name__}")
        if not 0 <= timestamp <= MAX_TIMESTAMP:
            raise InvalidArgument(
                f"timestamp {timestamp} does not fit in {TIMESTAMP_BYTES} bytes (0-{MAX_TIMESTAMP})",
                actual=timestamp,
            )
        return cls(timestamp.to_bytes(TIMESTAMP_BYTES, byteorder="big") + payload)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self).from_bytes, (self._raw,))

    @property
    def timestamp(self):
        return int.from_bytes(self._raw[:TIMESTAMP_BYTES], byteorder="big")

    @property
    def payload(self):
        return self._raw[TIMESTAMP_BYTES:]

    @property
    def payload_hex(self):
        """Payload as uppercase hex, e.g. B5A1CD34B5F99D1154FB6853345C9735."""
        return hexcodec.encode(self.payload)

    @property
    def raw(self):
        """All 21 bytes as uppercase hex."""
        return hexcodec.encode(self._raw)

    @property
    def instant(self):
        """Timestamp as an aware UTC datetime; raises ValueError past year 9999, use time() to render those."""
        return to_datetime(self.timestamp + EPOCH, timezone.utc)

    def to_bytes(self):
        return self._raw

    def time(self, tz=None):
        """Wall-clock time, e.g. '2017-10-09 21:00:47 -0700 PDT'. tz=None is local."""
        return format_clock_time(self.timestamp + EPOCH, tz)

    def inspect(self, tz=None):
        """Multi-line diagnostic block of representations and components."""
        return INSPECT_FORMAT.format(
            string=str(self),
            raw=self.raw,
            time=self.time(tz),
            timestamp=self.timestamp,
            payload=self.payload_hex,
        )

    def _key(self):
        return (self.timestamp, self.payload)

    def __bytes__(self):
        return self._raw

    def __str__(self):
        return base62.encode(self._raw, STRING_LENGTH)

    def __repr__(self):
        return f"{type(self).__name__}(string={str(self)!r}, timestamp={self.timestamp}, payload={self.payload_hex!r})"

    def __eq__(self, other):
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self._raw == other._raw

    def __lt__(self, other):
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._raw)
