from __future__ import annotations

import sys

import pytest

from nshassert._locate import UNKNOWN_CALL_SITE, CallSite, locate


def _inner(skip: int) -> CallSite:
    return locate(skip)


def test_locate_self():
    line = sys._getframe().f_lineno + 1
    site = locate(0)
    assert site.filename == __file__ or site.filename.endswith("test_locate.py")
    assert site.lineno == line
    assert site.ok
    assert site.module_globals is globals()


def test_locate_skips_frames():
    line = sys._getframe().f_lineno + 1
    site = _inner(1)
    assert site.lineno == line
    assert _inner(0).lineno == _inner.__code__.co_firstlineno + 1


def test_locate_past_stack_root():
    site = locate(100_000)
    assert site == UNKNOWN_CALL_SITE
    assert not site.ok
    assert site.filename == ""
    assert site.lineno == 0


def test_locate_rejects_negative():
    with pytest.raises(ValueError):
        locate(-1)
