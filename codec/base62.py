"""
Base62 codec over big-endian byte strings.

Digits are ordered 0-9, A-Z, a-z so that the lexicographic order of
equal-length encodings matches the numeric order of the bytes.
"""

from codec import require_bytes
from core.errors import InvalidArgument

BASE = 62
ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
ZERO = ALPHABET[0]

_DIGITS = {char: index for index, char in enumerate(ALPHABET)}


def index_of(char):
    """Digit value of a base62 character."""
    try:
        return _DIGITS[char]
    except KeyError:
        raise InvalidArgument(f"Invalid base62 character: {char!r}", context={"character": char}) from None


def encode(data, min_length=0):
    """
    Encode bytes as a base62 string, left-padded with '0' to min_length.

    Padding never truncates: a min_length shorter than the natural
    encoding is ignored. Empty input encodes to the empty string.
    """
    data = require_bytes(data, "data")
    if not data:
        return ZERO * min_length

    n = int.from_bytes(data, byteorder="big")
    if n == 0:
        return ZERO.rjust(min_length, ZERO)

    chars = []
    while n > 0:
        n, remainder = divmod(n, BASE)
        chars.append(ALPHABET[remainder])

    return "".join(reversed(chars)).rjust(min_length, ZERO)


def decode(text):
    """
    Decode a base62 string to the minimal big-endian byte string.

    Leading zero bytes are not restored; zero decodes to a single 0x00.
    """
    if not text:
        raise InvalidArgument("Cannot decode empty base62 string")

    n = 0
    for char in text:
        n = n * BASE + index_of(char)

    length = max(1, (n.bit_length() + 7) // 8)
    return n.to_bytes(length, byteorder="big")
