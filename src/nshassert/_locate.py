from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any, NamedTuple

log = logging.getLogger(__name__)


class CallSite(NamedTuple):
    filename: str
    lineno: int
    module_globals: Mapping[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return bool(self.filename) and self.lineno > 0


UNKNOWN_CALL_SITE = CallSite("", 0)


def locate(skip_frames: int) -> CallSite:
    """
    Resolve the source location `skip_frames` frames above the caller of `locate`.

    `locate(0)` names the function that called `locate`, `locate(1)` its
    caller, and so on. Callers must pass exactly the number of library
    frames sitting between them and the user's code; this function never
    guesses.

    Returns `UNKNOWN_CALL_SITE` when the stack is not that deep.
    """
    if skip_frames < 0:
        raise ValueError(f"skip_frames must be non-negative, got {skip_frames}")

    try:
        frame = sys._getframe(skip_frames + 1)
    except ValueError:
        log.debug(f"Call stack is shallower than {skip_frames} frames.")
        return UNKNOWN_CALL_SITE

    try:
        return CallSite(frame.f_code.co_filename, frame.f_lineno or 0, frame.f_globals)
    finally:
        del frame
