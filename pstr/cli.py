#!/usr/bin/env python3
"""
pstr CLI - run bounded string operations on literal input

Usage:
    pstr copy "hello" --capacity 6
    pstr cat "hi" " there" --capacity 9
    pstr split "key=value" = --capacity1 8 --capacity2 8
    pstr slice ",,hello!" --start 2
    pstr trim "  padded  "
    pstr from-int -5 --capacity 16

Each command builds a zero-filled buffer, runs one operation and prints
the buffer with NUL bytes shown as \\0. Text arguments accept the escapes
\\0 \\n \\t \\r \\\\ and \\xNN.

Exit codes:
    0 - Operation succeeded
    1 - Operation failed (result does not fit, index out of range, ...)
    2 - Usage error
"""

import argparse
import sys
from typing import Optional

from . import __version__
from .errors import PstrError
from .log import get_logger, log_init, log_parse_level
from .string import (
    pstr_copy, pstr_copy_n, pstr_vcat, pstr_split_on_first_occurrence,
    pstr_slice, pstr_slice_from, pstr_slice_to,
    pstr_trim, pstr_ltrim, pstr_rtrim,
    pstr_trim_char, pstr_ltrim_char, pstr_rtrim_char,
    pstr_from_int64, pstr_is_valid, pstr_len,
)

log = get_logger(__name__)

_ESCAPES = {"0": 0, "n": 0x0A, "t": 0x09, "r": 0x0D, "\\": 0x5C}


def decode_escapes(text: str) -> bytes:
    """Turn a command-line argument into raw bytes."""
    out = bytearray()
    raw = text.encode("utf-8")
    i = 0
    while i < len(raw):
        b = raw[i]
        if b != 0x5C or i + 1 >= len(raw):
            out.append(b)
            i = i + 1
            continue
        nxt = chr(raw[i + 1])
        if nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
            i = i + 2
        elif nxt == "x" and i + 4 <= len(raw):
            out.append(int(raw[i + 2:i + 4].decode("ascii", "replace"), 16))
            i = i + 4
        else:
            out.append(b)
            i = i + 1
    return bytes(out)


def format_buffer(buf) -> str:
    """Render every byte of buf, showing NUL as \\0."""
    parts = []
    for b in bytes(buf):
        if b == 0:
            parts.append("\\0")
        elif b == 0x5C:
            parts.append("\\\\")
        elif 0x20 <= b <= 0x7E:
            parts.append(chr(b))
        elif b == 0x0A:
            parts.append("\\n")
        elif b == 0x09:
            parts.append("\\t")
        else:
            parts.append(f"\\x{b:02x}")
    return "".join(parts)


def _report(ok: bool, *buffers) -> int:
    for buf in buffers:
        print(format_buffer(buf))
    if not ok:
        print("failed", file=sys.stderr)
        return 1
    return 0


def _capacity(args: argparse.Namespace, content: bytes) -> int:
    if args.capacity is not None:
        return args.capacity
    return pstr_len(content) + 1


def cmd_copy(args: argparse.Namespace) -> int:
    src = decode_escapes(args.text)
    capacity = _capacity(args, src)
    dest = bytearray(capacity)
    if args.n is not None:
        ok = pstr_copy_n(dest, capacity, src, args.n)
    else:
        ok = pstr_copy(dest, capacity, src)
    return _report(ok, dest)


def cmd_cat(args: argparse.Namespace) -> int:
    initial = decode_escapes(args.initial)
    srcs = [decode_escapes(t) for t in args.texts]
    capacity = args.capacity
    if capacity is None:
        capacity = pstr_len(initial) + sum(pstr_len(s) for s in srcs) + 1
    dest = bytearray(capacity)
    if not pstr_copy(dest, capacity, initial):
        print(f"Error: initial text does not fit capacity {capacity}",
              file=sys.stderr)
        return 2
    ok = pstr_vcat(dest, capacity, *srcs)
    return _report(ok, dest)


def cmd_split(args: argparse.Namespace) -> int:
    src = decode_escapes(args.text)
    sep = decode_escapes(args.separator)
    cap1 = args.capacity1 if args.capacity1 is not None else pstr_len(src) + 1
    cap2 = args.capacity2 if args.capacity2 is not None else pstr_len(src) + 1
    part1 = bytearray(cap1)
    part2 = bytearray(cap2)
    ok = pstr_split_on_first_occurrence(src, part1, cap1, part2, cap2, sep)
    return _report(ok, part1, part2)


def cmd_slice(args: argparse.Namespace) -> int:
    src = decode_escapes(args.text)
    buf = bytearray(_capacity(args, src))
    if not pstr_copy(buf, len(buf), src):
        print(f"Error: text does not fit capacity {len(buf)}", file=sys.stderr)
        return 2
    if args.start is None and args.end is None:
        print("Error: give --start, --end or both", file=sys.stderr)
        return 2
    if args.end is None:
        ok = pstr_slice_from(buf, args.start)
    elif args.start is None:
        ok = pstr_slice_to(buf, args.end)
    else:
        ok = pstr_slice(buf, args.start, args.end)
    return _report(ok, buf)


def cmd_trim(args: argparse.Namespace) -> int:
    src = decode_escapes(args.text)
    buf = bytearray(pstr_len(src) + 1)
    pstr_copy(buf, len(buf), src)
    if args.char is not None:
        c = decode_escapes(args.char)
        trim = {"both": pstr_trim_char, "left": pstr_ltrim_char,
                "right": pstr_rtrim_char}[args.side]
        trim(buf, c)
    else:
        trim = {"both": pstr_trim, "left": pstr_ltrim,
                "right": pstr_rtrim}[args.side]
        trim(buf)
    return _report(True, buf)


def cmd_from_int(args: argparse.Namespace) -> int:
    dest = bytearray(args.capacity)
    ok, length = pstr_from_int64(dest, args.capacity, args.value)
    status = _report(ok, dest)
    if ok:
        print(f"length: {length}")
    return status


def cmd_valid(args: argparse.Namespace) -> int:
    data = decode_escapes(args.text)
    size = args.size if args.size is not None else len(data)
    if pstr_is_valid(data, size):
        print("valid")
        return 0
    print("invalid")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pstr",
        description="pstr - bounded string operations on fixed-size buffers"
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None,
                        help="DEBUG, INFO, WARN, ERROR or FATAL "
                             "(default: $PSTR_LOG_LEVEL or WARN)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    copy_parser = subparsers.add_parser("copy", help="Copy text into a buffer")
    copy_parser.add_argument("text")
    copy_parser.add_argument("--capacity", type=int,
                             help="Buffer capacity (default: fits text)")
    copy_parser.add_argument("-n", type=int, help="Copy at most N bytes")
    copy_parser.set_defaults(func=cmd_copy)

    cat_parser = subparsers.add_parser("cat", help="Append texts to a string")
    cat_parser.add_argument("initial", help="Initial buffer content")
    cat_parser.add_argument("texts", nargs="+", help="Texts to append")
    cat_parser.add_argument("--capacity", type=int)
    cat_parser.set_defaults(func=cmd_cat)

    split_parser = subparsers.add_parser(
        "split", help="Split on the first occurrence of a separator")
    split_parser.add_argument("text")
    split_parser.add_argument("separator", help="Single-byte separator")
    split_parser.add_argument("--capacity1", type=int)
    split_parser.add_argument("--capacity2", type=int)
    split_parser.set_defaults(func=cmd_split)

    slice_parser = subparsers.add_parser("slice", help="Slice a string in place")
    slice_parser.add_argument("text")
    slice_parser.add_argument("--start", type=int)
    slice_parser.add_argument("--end", type=int)
    slice_parser.add_argument("--capacity", type=int)
    slice_parser.set_defaults(func=cmd_slice)

    trim_parser = subparsers.add_parser("trim", help="Trim a string in place")
    trim_parser.add_argument("text")
    trim_parser.add_argument("--char", help="Trim this byte instead of whitespace")
    trim_parser.add_argument("--side", choices=["both", "left", "right"],
                             default="both")
    trim_parser.set_defaults(func=cmd_trim)

    int_parser = subparsers.add_parser("from-int", help="Render a 64-bit integer")
    int_parser.add_argument("value", type=int)
    int_parser.add_argument("--capacity", type=int, default=21)
    int_parser.set_defaults(func=cmd_from_int)

    valid_parser = subparsers.add_parser(
        "valid", help="Check for a terminator within a declared size")
    valid_parser.add_argument("text")
    valid_parser.add_argument("--size", type=int)
    valid_parser.set_defaults(func=cmd_valid)

    return parser


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = None
    if args.log_level is not None:
        level = log_parse_level(args.log_level)
        if level < 0:
            parser.error(f"unknown log level: {args.log_level}")
    log_init(level)

    try:
        return args.func(args)
    except (PstrError, OverflowError, ValueError) as e:
        log.debug("command %s raised", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
