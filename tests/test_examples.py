from __future__ import annotations

import runpy
from pathlib import Path

import pytest

import nshassert
from nshassert import Mode

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


@pytest.mark.skipif(
    nshassert.MODE is Mode.DISABLED, reason="assertions disabled by environment"
)
def test_basic_usage_example(capsys):
    runpy.run_path(str(EXAMPLES_DIR / "basic_usage.py"), run_name="__main__")

    out = capsys.readouterr().out
    assert "New balance: 80.5" in out
    assert "Assertion failed at basic_usage.py:" in out
    assert "Message: insufficient funds" in out
    assert "[amount]: 25.0" in out
    assert "Source context:" in out
    assert "Message: withdrawal must be positive" in out


def test_benchmark_example_imports():
    namespace = runpy.run_path(str(EXAMPLES_DIR / "success_path_benchmark.py"))
    assert callable(namespace["main"])
