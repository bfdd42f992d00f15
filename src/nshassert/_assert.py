from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Final, NoReturn, TypeAlias

from typing_extensions import override

from ._format import format_values, pair_values
from ._locate import locate
from ._source import read_source_context
from .config import Mode, Policy, PolicyStore, mode_from_env, policy_from_env
from .errors import AssertionFailure

log = logging.getLogger(__name__)

Condition: TypeAlias = bool | Callable[[], bool]

# Frames between `locate` and user code, counted from `_fail`:
#  1. `_fail` itself
#  2. the entry point that called `_fail`
_ASSERT_SKIP: Final = 2
_DEBUG_ASSERT_SKIP: Final = 2


def _fail(
    store: PolicyStore,
    message: str,
    values: tuple[Any, ...],
    named: Mapping[str, Any],
    *,
    skip: int,
) -> NoReturn:
    """Build the failure for a violated invariant and raise it."""
    __tracebackhide__ = True

    site = locate(skip)
    message = f"{message}{format_values(pair_values(values, named))}"

    policy = store.get()
    source_context = ""
    if policy["include_source"] and site.ok:
        source_context = read_source_context(
            site.filename,
            site.lineno,
            policy["context_lines"],
            site.module_globals,
        )
    if site.ok:
        log.debug(f"Assertion failed at {site.filename}:{site.lineno}")
    else:
        log.debug("Assertion failed; caller location unavailable.")

    raise AssertionFailure(
        message,
        os.path.basename(site.filename),
        site.lineno,
        source_context,
        path=site.filename,
    )


class AssertRuntime:
    """
    Entry points for one mode, bound to one `PolicyStore`.

    The mode is fixed when the runtime is built; `build_runtime` picks the
    subclass, so inactive entry points are plain no-op methods rather than
    checks of a flag on every call.
    """

    mode: Mode = Mode.STANDARD

    def __init__(self, store: PolicyStore):
        self.store = store

    def assert_(
        self, condition: Condition, message: str, /, *values: Any, **named: Any
    ) -> None:
        """
        Raise `AssertionFailure` if `condition` is false.

        Args:
            condition: The invariant, or a zero-argument callable returning it.
            message: Description of the violated invariant.
            *values: Alternating labels and values to show on failure.
                An unpaired trailing label is shown with `(MISSING)`.
            **named: Further labelled values, shown after `values`.

        Examples:
            assert_(user is not None, "user must be loaded", "user_id", user_id)
        """
        __tracebackhide__ = True
        # Fast path: no introspection or formatting unless the check fails.
        if condition is True:
            return
        if callable(condition):
            condition = condition()
        if condition:
            return
        _fail(self.store, message, values, named, skip=_ASSERT_SKIP)

    def debug_assert(
        self, condition: Condition, message: str, /, *values: Any, **named: Any
    ) -> None:
        """
        Development-only `assert_`; a no-op unless the runtime is in DEVELOPMENT mode.

        The arguments are still evaluated by Python before the call. Pass a
        callable as `condition` to avoid evaluating an expensive check when
        development mode is off.
        """

    def set_policy(self, policy: Mapping[str, Any]) -> None:
        """Replace the process-wide policy wholesale."""
        self.store.replace(policy)

    @contextlib.contextmanager
    def override_policy(self, policy: Mapping[str, Any]) -> Iterator[Policy]:
        """Temporarily replace the policy for the current context."""
        with self.store.override(policy) as resolved:
            yield resolved

    def policy(self) -> Policy:
        return self.store.get()

    @override
    def __repr__(self) -> str:
        return f"<{type(self).__name__} mode={self.mode.value}>"


class _DevelopmentRuntime(AssertRuntime):
    mode = Mode.DEVELOPMENT

    @override
    def debug_assert(
        self, condition: Condition, message: str, /, *values: Any, **named: Any
    ) -> None:
        __tracebackhide__ = True
        if condition is True:
            return
        if callable(condition):
            condition = condition()
        if condition:
            return
        _fail(self.store, message, values, named, skip=_DEBUG_ASSERT_SKIP)


class _DisabledRuntime(AssertRuntime):
    mode = Mode.DISABLED

    @override
    def assert_(
        self, condition: Condition, message: str, /, *values: Any, **named: Any
    ) -> None:
        pass

    @override
    def set_policy(self, policy: Mapping[str, Any]) -> None:
        pass

    @override
    @contextlib.contextmanager
    def override_policy(self, policy: Mapping[str, Any]) -> Iterator[Policy]:
        yield self.store.get()


_RUNTIMES: Final[dict[Mode, type[AssertRuntime]]] = {
    Mode.DISABLED: _DisabledRuntime,
    Mode.STANDARD: AssertRuntime,
    Mode.DEVELOPMENT: _DevelopmentRuntime,
}


def build_runtime(
    mode: Mode | None = None,
    *,
    store: PolicyStore | None = None,
) -> AssertRuntime:
    """
    Build the entry points for `mode`.

    Args:
        mode: Mode to build. Defaults to the mode selected by the environment.
        store: Policy owner. Defaults to a new store seeded from the environment.
    """
    if mode is None:
        mode = mode_from_env()
        if mode is Mode.DISABLED:
            log.warning(
                "Assertions are disabled due to the environment variable NSHASSERT_DISABLE."
            )
    if store is None:
        store = PolicyStore(policy_from_env())
    return _RUNTIMES[mode](store)
