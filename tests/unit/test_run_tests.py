"""Unit tests for the argument handling of tests/run_tests.py."""

import importlib.util
from pathlib import Path

import pytest

RUN_TESTS = Path(__file__).parent.parent / "run_tests.py"


@pytest.fixture
def run_tests():
    spec = importlib.util.spec_from_file_location("runfx_run_tests", RUN_TESTS)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def parse(run_tests, monkeypatch, *argv: str) -> list[str]:
    """Parse `argv` the way main() does and return the pytest arguments."""
    captured: dict[str, list[str]] = {}
    monkeypatch.setattr("sys.argv", ["run_tests.py", *argv])
    monkeypatch.setattr(run_tests.pytest, "main", lambda args: captured.setdefault("args", args))
    monkeypatch.setattr(run_tests.os, "chdir", lambda path: None)
    with pytest.raises(SystemExit):
        run_tests.main()
    return captured["args"]


def test_unit_and_functional_flags(run_tests, monkeypatch):
    """Test that --unit and --functional select their directories."""
    assert parse(run_tests, monkeypatch, "--unit")[0] == "tests/unit"
    assert parse(run_tests, monkeypatch, "--functional")[0] == "tests/functional"
    assert parse(run_tests, monkeypatch, "--doctests")[0] == "src/runfx"


def test_default_runs_everything(run_tests, monkeypatch):
    """Test that without selection flags both tests and doctests run."""
    args = parse(run_tests, monkeypatch)
    assert args[:2] == ["tests/", "src/runfx"]
    assert "-q" in args


def test_module_coverage_and_debug_logging(run_tests, monkeypatch):
    """Test that module selection, coverage and debug logging are forwarded."""
    args = parse(run_tests, monkeypatch, "-m", "sequence", "--coverage", "--log-debug")
    assert args[0] == "tests/unit/test_sequence.py"
    assert "--cov=runfx" in args
    assert "--log-cli-level=DEBUG" in args
