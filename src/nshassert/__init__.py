from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from ._assert import AssertRuntime as AssertRuntime
from ._assert import build_runtime as build_runtime
from .config import DEFAULT_POLICY as DEFAULT_POLICY
from .config import Mode as Mode
from .config import Policy as Policy
from .config import PolicyStore as PolicyStore
from .errors import AssertionFailure as AssertionFailure

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = "unknown"

# The mode is chosen once, here; later environment changes have no effect.
_runtime = build_runtime()
MODE: Mode = _runtime.mode
assert_ = _runtime.assert_
debug_assert = _runtime.debug_assert
set_policy = _runtime.set_policy
override_policy = _runtime.override_policy
policy = _runtime.policy
