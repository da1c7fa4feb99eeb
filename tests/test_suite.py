"""Runs the console acceptance suite under pytest."""

import os
import sys

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from tests import harness
from tests.pstr_suite import GROUPS, main


def test_acceptance_suite_passes(capsys):
    code = main(["--no-color"])
    out, _ = capsys.readouterr()
    assert code == 0, out
    assert harness.get_failed() == 0
    assert harness.get_passed() == harness.get_total()
    assert "All tests passed!" in out
    assert "[FAIL]" not in out


def test_every_group_reports(capsys):
    main(["--no-color"])
    out, _ = capsys.readouterr()
    for group in GROUPS:
        name = group.__name__[len("test_"):]
        assert f"--- {name}() ---" in out


def test_pattern_selects_groups(capsys):
    main(["--no-color", "slice"])
    out, _ = capsys.readouterr()
    assert "--- pstr_slice() ---" in out
    assert "--- pstr_copy() ---" not in out
    assert harness.get_total() == 10


def test_harness_counts_failures(capsys):
    harness.reset_counters()
    harness.Colors.disable()
    harness.run_test("passes", True)
    harness.run_test("fails", False)
    code = harness.print_results()
    out, _ = capsys.readouterr()
    assert code == 1
    assert harness.get_passed() == 1
    assert harness.get_failed() == 1
    assert "[FAIL] fails" in out
    assert "Some tests failed." in out
    harness.reset_counters()
