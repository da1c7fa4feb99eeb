# pstr String Library
#
# Bounds-checked string operations on fixed-capacity, NUL-terminated
# byte buffers. The caller owns every buffer; nothing here allocates a
# buffer or changes its length.
#
# Destination buffers are bytearray or writable memoryview objects.
# Source strings are any bytes-like object; their logical string ends at
# the first NUL, or at the end of the object if it holds none.
#
# Mutators return True on success. On failure they return False and the
# destination is left byte-for-byte as it was. Misuse (bad capacity,
# unterminated buffer, bad character) raises a PstrError subclass.

from .chars import NUL, isspace, to_byte
from .errors import CapacityError, UnterminatedError
from .log import get_logger
from .memory import memcpy, memmove

log = get_logger(__name__)

INT64_MIN: int = -(1 << 63)
INT64_MAX: int = (1 << 63) - 1
# "-9223372036854775808" without the terminator
INT64_MAX_DIGITS: int = 20

__all__ = [
    "INT64_MIN", "INT64_MAX", "INT64_MAX_DIGITS",
    "pstr_is_valid", "pstr_len", "pstr_is_empty", "pstr_eq",
    "pstr_starts_with_char", "pstr_starts_with",
    "pstr_ends_with_char", "pstr_ends_with",
    "pstr_copy", "pstr_copy_n", "pstr_cat", "pstr_vcat",
    "pstr_split_on_first_occurrence", "pstr_clear",
    "pstr_slice_from", "pstr_slice_to", "pstr_slice",
    "pstr_ltrim", "pstr_rtrim", "pstr_trim",
    "pstr_ltrim_char", "pstr_rtrim_char", "pstr_trim_char",
    "pstr_from_int64",
]

# ============================================================================
# Internal helpers
# ============================================================================

def _find_nul(buf, limit: int) -> int:
    """Index of the first NUL in buf[:limit], or -1."""
    if isinstance(buf, memoryview):
        return buf[:limit].tobytes().find(NUL)
    return buf.find(NUL, 0, limit)


def _as_source(s) -> bytes:
    if not isinstance(s, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected a bytes-like string, not {type(s).__name__}")
    data = bytes(s)
    end = data.find(NUL)
    if end < 0:
        return data
    return data[:end]


def _check_capacity(buf, capacity: int):
    if capacity < 0 or capacity > len(buf):
        raise CapacityError(f"capacity {capacity} invalid for buffer of "
                            f"{len(buf)} bytes")


def _string_length(buf) -> int:
    # In-place operations need the terminator inside the buffer itself
    n = _find_nul(buf, len(buf))
    if n < 0:
        raise UnterminatedError(f"no terminator within {len(buf)} bytes")
    return n


def _write_string(dest, data: bytes, offset: int = 0):
    memcpy(dest, data, len(data), dst_offset=offset)
    dest[offset + len(data)] = NUL

# ============================================================================
# Validity and queries
# ============================================================================

def pstr_is_valid(buf, declared_size: int) -> bool:
    """True if a terminator occurs within the first declared_size bytes."""
    if declared_size <= 0:
        return False
    limit = min(declared_size, len(buf))
    return _find_nul(buf, limit) >= 0


def pstr_len(s) -> int:
    return len(_as_source(s))


def pstr_is_empty(s) -> bool:
    return pstr_len(s) == 0


def pstr_eq(a, b) -> bool:
    return _as_source(a) == _as_source(b)


def pstr_starts_with_char(s, c) -> bool:
    c = to_byte(c)
    data = _as_source(s)
    # NUL never matches, so an empty string starts with nothing
    if c == NUL or not data:
        return False
    return data[0] == c


def pstr_starts_with(s, prefix) -> bool:
    data = _as_source(s)
    needle = _as_source(prefix)
    if not needle or len(needle) > len(data):
        return False
    return data[:len(needle)] == needle


def pstr_ends_with_char(s, c) -> bool:
    c = to_byte(c)
    data = _as_source(s)
    if c == NUL or not data:
        return False
    return data[-1] == c


def pstr_ends_with(s, suffix) -> bool:
    data = _as_source(s)
    needle = _as_source(suffix)
    if not needle or len(needle) > len(data):
        return False
    return data[len(data) - len(needle):] == needle

# ============================================================================
# Copy and concatenate
# ============================================================================

def pstr_copy(dest, dest_capacity: int, src) -> bool:
    """Copy src into dest if it fits with its terminator."""
    _check_capacity(dest, dest_capacity)
    data = _as_source(src)
    if len(data) + 1 > dest_capacity:
        log.debug("copy: %d bytes do not fit capacity %d",
                  len(data) + 1, dest_capacity)
        return False
    _write_string(dest, data)
    return True


def pstr_copy_n(dest, dest_capacity: int, src, n: int) -> bool:
    """Copy at most n bytes of src into dest.

    Fails when n bytes plus a terminator would not fit, even if src is
    shorter than n.
    """
    _check_capacity(dest, dest_capacity)
    if n < 0:
        raise ValueError(f"byte count must be non-negative, got {n}")
    if n + 1 > dest_capacity:
        log.debug("copy_n: %d bytes do not fit capacity %d",
                  n + 1, dest_capacity)
        return False
    data = _as_source(src)
    _write_string(dest, data[:n])
    return True


def pstr_cat(dest, dest_capacity: int, src) -> bool:
    """Append src to the string in dest."""
    return pstr_vcat(dest, dest_capacity, src)


def pstr_vcat(dest, dest_capacity: int, *srcs) -> bool:
    """Append each of srcs, in order, to the string in dest.

    A None argument ends the list; it and anything after it are ignored.
    The combined length is checked before anything is written, so on
    failure dest is untouched.
    """
    _check_capacity(dest, dest_capacity)
    dest_len = _find_nul(dest, dest_capacity)
    if dest_len < 0:
        raise UnterminatedError(f"no terminator within capacity {dest_capacity}")

    parts = []
    for src in srcs:
        if src is None:
            break
        parts.append(_as_source(src))
    tail = b"".join(parts)

    if dest_len + len(tail) + 1 > dest_capacity:
        log.debug("cat: %d + %d bytes do not fit capacity %d",
                  dest_len, len(tail) + 1, dest_capacity)
        return False
    _write_string(dest, tail, dest_len)
    return True

# ============================================================================
# Split
# ============================================================================

def pstr_split_on_first_occurrence(src, part1, part1_capacity: int,
                                   part2, part2_capacity: int,
                                   separator) -> bool:
    """Split src around the first separator into part1 and part2.

    The separator itself lands in neither part. Nothing is written
    unless both parts fit.
    """
    _check_capacity(part1, part1_capacity)
    _check_capacity(part2, part2_capacity)
    sep = to_byte(separator)
    data = _as_source(src)
    if not data:
        log.debug("split: empty source")
        return False

    pos = data.find(sep)
    if pos < 0:
        log.debug("split: separator %r not found", bytes((sep,)))
        return False

    head = data[:pos]
    rest = data[pos + 1:]
    if len(head) + 1 > part1_capacity or len(rest) + 1 > part2_capacity:
        log.debug("split: parts of %d and %d bytes do not fit %d and %d",
                  len(head) + 1, len(rest) + 1, part1_capacity, part2_capacity)
        return False

    _write_string(part1, head)
    _write_string(part2, rest)
    return True

# ============================================================================
# Clear and slice
# ============================================================================

def pstr_clear(buf):
    if len(buf) == 0:
        raise CapacityError("buffer has no room for a terminator")
    buf[0] = NUL


def pstr_slice_from(buf, start: int) -> bool:
    """Drop the first start bytes; start must index an existing byte."""
    n = _string_length(buf)
    if start < 0 or start >= n:
        log.debug("slice_from: start %d out of range for length %d", start, n)
        return False
    # Move the terminator along with the text
    memmove(buf, buf, n - start + 1, 0, start)
    return True


def pstr_slice_to(buf, end: int) -> bool:
    """Keep the first end bytes; end must be below the current length."""
    n = _string_length(buf)
    if end < 0 or end >= n:
        log.debug("slice_to: end %d out of range for length %d", end, n)
        return False
    buf[end] = NUL
    return True


def pstr_slice(buf, start: int, end: int) -> bool:
    """Keep the half-open range [start, end), re-anchored at offset 0."""
    n = _string_length(buf)
    if start < 0 or end <= start or end > n:
        log.debug("slice: range [%d, %d) invalid for length %d", start, end, n)
        return False
    memmove(buf, buf, end - start, 0, start)
    buf[end - start] = NUL
    return True

# ============================================================================
# Trim
# ============================================================================

def _ltrim_where(buf, match):
    n = _string_length(buf)
    i = 0
    while i < n and match(buf[i]):
        i = i + 1
    if i > 0:
        memmove(buf, buf, n - i + 1, 0, i)


def _rtrim_where(buf, match):
    n = _string_length(buf)
    end = n
    while end > 0 and match(buf[end - 1]):
        end = end - 1
    if end < n:
        buf[end] = NUL


def pstr_ltrim(buf):
    _ltrim_where(buf, isspace)


def pstr_rtrim(buf):
    _rtrim_where(buf, isspace)


def pstr_trim(buf):
    # Right first so the left shift moves fewer bytes
    _rtrim_where(buf, isspace)
    _ltrim_where(buf, isspace)


def pstr_ltrim_char(buf, c):
    target = to_byte(c)
    _ltrim_where(buf, lambda b: b == target)


def pstr_rtrim_char(buf, c):
    target = to_byte(c)
    _rtrim_where(buf, lambda b: b == target)


def pstr_trim_char(buf, c):
    target = to_byte(c)
    _rtrim_where(buf, lambda b: b == target)
    _ltrim_where(buf, lambda b: b == target)

# ============================================================================
# Integer rendering
# ============================================================================

def pstr_from_int64(dest, dest_capacity: int, value: int) -> tuple[bool, int]:
    """Render a signed 64-bit integer in base 10.

    Returns (ok, length). On failure dest is untouched and length is 0.
    Raises OverflowError if value is outside the signed 64-bit range.
    """
    _check_capacity(dest, dest_capacity)
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"expected int, not {type(value).__name__}")
    if value < INT64_MIN or value > INT64_MAX:
        raise OverflowError(f"{value} does not fit in a signed 64-bit integer")

    text = b"%d" % value
    if len(text) + 1 > dest_capacity:
        log.debug("from_int64: %d bytes do not fit capacity %d",
                  len(text) + 1, dest_capacity)
        return False, 0
    _write_string(dest, text)
    return True, len(text)
