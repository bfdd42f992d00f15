from __future__ import annotations

import pytest

from nshassert import AssertionFailure


def test_render():
    err = AssertionFailure(
        "test message",
        "test_file.py",
        42,
        "    41 | def test_example():\n"
        "→   42 |     assert_(False, 'test message')\n"
        "    43 | ",
    )

    rendered = err.render()
    assert rendered.startswith("Assertion failed at test_file.py:42\n")
    assert "Message: test message\n" in rendered
    assert "Source context:\n" in rendered
    assert "→   42" in rendered
    assert str(err) == rendered


def test_render_without_location():
    err = AssertionFailure("no location")
    assert err.render() == (
        "Assertion failed (caller location unavailable)\nMessage: no location\n"
    )


def test_render_without_source():
    err = AssertionFailure("msg", "file.py", 7)
    assert err.render() == "Assertion failed at file.py:7\nMessage: msg\n"


def test_fields_are_read_only():
    err = AssertionFailure("msg", "file.py", 7, "ctx", path="/src/file.py")
    assert (err.message, err.file, err.line, err.source_context, err.path) == (
        "msg",
        "file.py",
        7,
        "ctx",
        "/src/file.py",
    )
    with pytest.raises(AttributeError):
        err.message = "changed"  # type: ignore[misc]


def test_not_an_exception():
    assert issubclass(AssertionFailure, BaseException)
    assert not issubclass(AssertionFailure, Exception)
