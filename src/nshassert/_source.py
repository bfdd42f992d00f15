from __future__ import annotations

import linecache
import logging
import tokenize
from collections.abc import Iterable, Mapping
from typing import Any, Final

log = logging.getLogger(__name__)

TARGET_MARKER: Final = "→ "
_PLAIN_MARKER: Final = "  "


def _render_line(lineno: int, text: str, target: int) -> str:
    marker = TARGET_MARKER if lineno == target else _PLAIN_MARKER
    text = text.rstrip("\r\n")
    return f"{marker}{lineno:4d} | {text}"


def _window(lines: Iterable[str], start: int, end: int, target: int) -> list[str]:
    rendered: list[str] = []
    for lineno, text in enumerate(lines, start=1):
        if lineno > end:
            break
        if lineno >= start:
            rendered.append(_render_line(lineno, text, target))
    return rendered


def _source_encoding(filename: str) -> str:
    """Encoding declared by the file's BOM or PEP 263 coding cookie, else UTF-8."""
    with open(filename, "rb") as raw:
        try:
            encoding, _ = tokenize.detect_encoding(raw.readline)
        except SyntaxError:
            return "utf-8"
    return encoding


def read_source_context(
    filename: str,
    line: int,
    context_lines: int,
    module_globals: Mapping[str, Any] | None = None,
) -> str:
    """
    Render the lines of `filename` around `line`.

    The window is `[max(1, line - context_lines), line + context_lines]`,
    clipped to the end of the file. The target line is marked with
    `TARGET_MARKER`. The file is decoded using its BOM or coding cookie, like
    Python's own tracebacks, and scanned only up to the end of the window.

    If the file cannot be opened, the source is looked up through
    `linecache` with `module_globals`, which covers modules whose loader
    serves source that is not on disk. This never raises; any failure to
    read yields an empty string.

    Args:
        filename: Path of the source file.
        line: 1-based line number to center on.
        context_lines: Lines to show on each side of `line`.
        module_globals: Globals of the module that owns `filename`, if known.
    """
    if not filename or line < 1 or context_lines < 0:
        return ""

    start = max(1, line - context_lines)
    end = line + context_lines

    try:
        with open(filename, encoding=_source_encoding(filename), errors="replace") as f:
            rendered = _window(f, start, end, line)
    except (OSError, ValueError) as e:
        log.debug(f"Could not open {filename!r} for source context: {e}")
        try:
            cached = linecache.getlines(filename, module_globals)
        except Exception as e:
            log.debug(f"linecache lookup failed for {filename!r}: {e}")
            return ""
        rendered = _window(cached, start, end, line)

    return "\n".join(rendered)
