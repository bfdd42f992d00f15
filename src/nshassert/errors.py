from __future__ import annotations

from typing_extensions import override


class AssertionFailure(BaseException):
    """
    Raised when an invariant checked by `nshassert` does not hold.

    This derives from `BaseException` so that `except Exception:` handlers
    do not swallow it; catch it explicitly at the boundary that should
    decide what to do with a broken invariant.

    Attributes:
        message: The user message followed by the rendered value block.
        file: Base name of the file containing the failing call, or "".
        line: Line of the failing call, or 0.
        source_context: Source lines around the failing call, or "".
        path: Full path of the file containing the failing call, or "".
    """

    def __init__(
        self,
        message: str,
        file: str = "",
        line: int = 0,
        source_context: str = "",
        *,
        path: str = "",
    ):
        super().__init__(message, file, line, source_context)
        self._message = message
        self._file = file
        self._line = line
        self._source_context = source_context
        self._path = path

    @property
    def message(self) -> str:
        return self._message

    @property
    def file(self) -> str:
        return self._file

    @property
    def line(self) -> int:
        return self._line

    @property
    def source_context(self) -> str:
        return self._source_context

    @property
    def path(self) -> str:
        return self._path

    def render(self) -> str:
        parts: list[str] = []
        if self._file:
            parts.append(f"Assertion failed at {self._file}:{self._line}\n")
        else:
            parts.append("Assertion failed (caller location unavailable)\n")
        parts.append(f"Message: {self._message}\n")
        if self._source_context:
            parts.append("Source context:\n")
            parts.append(self._source_context)
        return "".join(parts)

    @override
    def __str__(self) -> str:
        return self.render()

    @override
    def __repr__(self) -> str:
        return (
            f"AssertionFailure(message={self._message!r}, file={self._file!r}, "
            f"line={self._line!r})"
        )
