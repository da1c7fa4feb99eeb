"""Tests for the pstr command line."""

import os
import sys

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from pstr.cli import decode_escapes, format_buffer, main
from pstr.log import log_deinit


@pytest.fixture(autouse=True)
def _detach_console_logging():
    yield
    log_deinit()


def run(capsys, *argv):
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_decode_escapes():
    assert decode_escapes("hi\\0there") == b"hi\0there"
    assert decode_escapes("a\\tb\\n") == b"a\tb\n"
    assert decode_escapes("\\x41\\\\") == b"A\\"
    assert decode_escapes("trailing\\") == b"trailing\\"


def test_format_buffer():
    assert format_buffer(bytearray(b"he\0\x01\\")) == "he\\0\\x01\\\\"


def test_copy_fits(capsys):
    code, out, _ = run(capsys, "copy", "hello", "--capacity", "6")
    assert code == 0
    assert out == "hello\\0\n"


def test_copy_too_long_fails(capsys):
    code, out, err = run(capsys, "copy", "hello!", "--capacity", "6")
    assert code == 1
    assert out == "\\0\\0\\0\\0\\0\\0\n"
    assert "failed" in err


def test_copy_n(capsys):
    code, out, _ = run(capsys, "copy", "hey", "-n", "2", "--capacity", "6")
    assert code == 0
    assert out == "he\\0\\0\\0\\0\n"


def test_cat(capsys):
    code, out, _ = run(capsys, "cat", "hi", " there", " dear", " pal!!")
    assert code == 0
    assert out == "hi there dear pal!!\\0\n"

    code, out, _ = run(capsys, "cat", "hi", "12345", "--capacity", "6")
    assert code == 1
    assert out == "hi\\0\\0\\0\\0\n"


def test_split(capsys):
    code, out, _ = run(capsys, "split", "hello,,there", ",",
                       "--capacity1", "6", "--capacity2", "7")
    assert code == 0
    assert out == "hello\\0\n,there\\0\n"


def test_slice_variants(capsys):
    code, out, _ = run(capsys, "slice", ",,hello!", "--start", "2")
    assert code == 0
    assert out.startswith("hello!\\0")

    code, out, _ = run(capsys, "slice", "hello", "--end", "2")
    assert code == 0
    assert out.startswith("he\\0")

    code, _, _ = run(capsys, "slice", "hi there", "--start", "1", "--end", "9")
    assert code == 1

    code, _, err = run(capsys, "slice", "hello")
    assert code == 2
    assert "--start" in err


def test_trim(capsys):
    code, out, _ = run(capsys, "trim", " \\thello\\n")
    assert code == 0
    assert out.startswith("hello\\0")

    code, out, _ = run(capsys, "trim", "22hello2", "--char", "2", "--side", "left")
    assert out.startswith("hello2\\0")


def test_from_int(capsys):
    code, out, _ = run(capsys, "from-int", "-5", "--capacity", "16")
    assert code == 0
    assert out.splitlines()[-1] == "length: 2"
    assert out.startswith("-5\\0")

    code, _, _ = run(capsys, "from-int", "9223372036854775807", "--capacity", "16")
    assert code == 1


def test_from_int_out_of_range_is_usage_error(capsys):
    code, _, err = run(capsys, "from-int", "9223372036854775808")
    assert code == 2
    assert "Error:" in err


def test_valid(capsys):
    code, out, _ = run(capsys, "valid", "hello\\0", "--size", "6")
    assert code == 0
    assert out == "valid\n"

    code, out, _ = run(capsys, "valid", "hello", "--size", "5")
    assert code == 1
    assert out == "invalid\n"


def test_bad_separator_is_usage_error(capsys):
    code, _, err = run(capsys, "split", "a=b", "==")
    assert code == 2
    assert "single byte" in err


def test_debug_logging_to_stderr(capsys):
    code, _, err = run(capsys, "--log-level", "debug", "copy", "hello!",
                       "--capacity", "6")
    assert code == 1
    assert "[DEBUG] pstr.string: copy:" in err


def test_unknown_log_level(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--log-level", "loud", "copy", "x"])
    assert exc.value.code == 2
