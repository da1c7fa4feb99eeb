# pstr Character Classes
#
# ASCII-only character tests and byte coercion helpers.

from .errors import CharError

NUL: int = 0

# C isspace() set: space, \t, \n, \v, \f, \r
WHITESPACE: bytes = b" \t\n\v\f\r"


def isspace(c: int) -> bool:
    return c in WHITESPACE


def to_byte(c) -> int:
    """Coerce a character argument to an int in 0..255.

    Accepts an int or a length-1 bytes-like object.
    """
    if isinstance(c, int) and not isinstance(c, bool):
        if 0 <= c <= 0xFF:
            return c
        raise CharError(f"character out of byte range: {c}")
    if isinstance(c, (bytes, bytearray, memoryview)):
        if len(c) == 1:
            return bytes(c)[0]
        raise CharError(f"expected a single byte, got {len(c)} bytes")
    raise TypeError(f"character must be int or bytes, not {type(c).__name__}")
