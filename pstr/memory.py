# pstr Memory Operations
#
# Byte-level fills, copies and comparisons over caller-owned buffers.
# Buffers are bytearray or writable memoryview objects; nothing here
# allocates a buffer or changes its length.


def _check_span(buf, offset: int, size: int):
    if offset < 0 or size < 0 or offset + size > len(buf):
        raise IndexError(f"{size} bytes at offset {offset} out of range "
                         f"for buffer of {len(buf)} bytes")


def memset(dst, val: int, size: int, offset: int = 0):
    _check_span(dst, offset, size)
    dst[offset:offset + size] = bytes((val,)) * size


def memcpy(dst, src, size: int, dst_offset: int = 0, src_offset: int = 0):
    # Regions must not overlap; use memmove for shifts within one buffer
    _check_span(dst, dst_offset, size)
    _check_span(src, src_offset, size)
    dst[dst_offset:dst_offset + size] = src[src_offset:src_offset + size]


def memmove(dst, src, size: int, dst_offset: int = 0, src_offset: int = 0):
    _check_span(dst, dst_offset, size)
    _check_span(src, src_offset, size)
    # Snapshot the source first so overlapping regions copy correctly
    chunk = bytes(src[src_offset:src_offset + size])
    dst[dst_offset:dst_offset + size] = chunk


def memcmp(a, b, size: int) -> int:
    """Compare the first size bytes of a and b.

    Returns 0 if equal, otherwise the difference of the first
    mismatching bytes.
    """
    _check_span(a, 0, size)
    _check_span(b, 0, size)
    i = 0
    while i < size:
        if a[i] != b[i]:
            return a[i] - b[i]
        i = i + 1
    return 0
