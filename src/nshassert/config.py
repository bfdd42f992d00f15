from __future__ import annotations

import enum
import json
import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, Final, TypedDict

from typing_extensions import override as override_

log = logging.getLogger(__name__)


class Policy(TypedDict, total=False):
    """Diagnostic verbosity for failing assertions."""

    include_source: bool
    """Attach the source lines around the failing call. Default: True."""

    context_lines: int
    """Lines shown above and below the failing line. Default: 5."""


DEFAULT_POLICY: Final = MappingProxyType(Policy(include_source=True, context_lines=5))

CONFIG_ENV_KEY: Final = "NSHASSERT_CONFIG"
DISABLE_ENV_KEY: Final = "NSHASSERT_DISABLE"
DEBUG_ENV_KEY: Final = "NSHASSERT_DEBUG"

_TRUTHY: Final = frozenset({"1", "true", "yes", "on"})
_FALSY: Final = frozenset({"0", "false", "no", "off"})


class Mode(enum.Enum):
    """Which entry points are live for the lifetime of the process."""

    DISABLED = "disabled"
    """Every entry point, including policy mutation, is a no-op."""

    STANDARD = "standard"
    """`assert_` is active, `debug_assert` is a no-op."""

    DEVELOPMENT = "development"
    """Both `assert_` and `debug_assert` are active."""


def _parse_env_bool(value: str) -> bool | None:
    """Parse environment variable as boolean. Unrecognized values yield None."""
    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return None


def resolve_policy(policy: Mapping[str, Any]) -> Policy:
    """
    Validate `policy` and fill in defaults for absent keys.

    The result never shares state with the previous policy: a replacement
    that omits a key gets the default for it, not the old value.
    """
    if not isinstance(policy, Mapping):
        raise TypeError(f"Policy must be a mapping, got {type(policy).__name__}")

    unknown = set(policy) - set(DEFAULT_POLICY)
    if unknown:
        raise ValueError(f"Unknown policy keys: {sorted(unknown)}")

    include_source = policy.get("include_source", DEFAULT_POLICY["include_source"])
    if not isinstance(include_source, bool):
        raise ValueError(
            f"include_source must be a bool, got {include_source!r}"
        )

    context_lines = policy.get("context_lines", DEFAULT_POLICY["context_lines"])
    if (
        isinstance(context_lines, bool)
        or not isinstance(context_lines, int)
        or context_lines < 0
    ):
        raise ValueError(
            f"context_lines must be a non-negative int, got {context_lines!r}"
        )

    return Policy(include_source=include_source, context_lines=context_lines)


def _parse_pair(key: str, value: str) -> tuple[str, Any] | None:
    if key == "include_source":
        if (parsed := _parse_env_bool(value)) is None:
            return None
        return key, parsed
    if key == "context_lines":
        try:
            return key, int(value)
        except ValueError:
            return None
    return None


def policy_from_env(env_key: str = CONFIG_ENV_KEY) -> Policy:
    """
    Parse the initial policy from the environment.

    Supports:
    1. JSON: NSHASSERT_CONFIG='{"include_source": false, "context_lines": 3}'
    2. Comma-separated: NSHASSERT_CONFIG='include_source=0,context_lines=3'

    Anything that cannot be parsed is logged and ignored, falling back to
    the defaults.
    """
    env_value = os.environ.get(env_key, "").strip()
    if not env_value:
        return Policy(**DEFAULT_POLICY)

    raw: dict[str, Any] = {}
    if env_value.startswith("{"):
        try:
            parsed = json.loads(env_value)
        except json.JSONDecodeError:
            log.warning(f"Ignoring {env_key}: value is not valid JSON.")
            return Policy(**DEFAULT_POLICY)
        if isinstance(parsed, dict):
            raw = parsed
    else:
        for pair in env_value.split(","):
            if "=" not in pair:
                log.warning(f"Ignoring malformed entry {pair!r} in {env_key}.")
                continue
            key, value = pair.split("=", 1)
            if (item := _parse_pair(key.strip(), value.strip())) is None:
                log.warning(f"Ignoring malformed entry {pair!r} in {env_key}.")
                continue
            raw[item[0]] = item[1]

    try:
        return resolve_policy(raw)
    except ValueError as e:
        log.warning(f"Ignoring {env_key}: {e}")
        return Policy(**DEFAULT_POLICY)


def mode_from_env() -> Mode:
    """
    Select the process mode from the environment.

    NSHASSERT_DISABLE=1 strips every entry point; NSHASSERT_DEBUG=1 turns on
    the development-only entry point. Disabling wins over debugging.
    """
    if _parse_env_bool(os.environ.get(DISABLE_ENV_KEY, "")):
        return Mode.DISABLED
    if _parse_env_bool(os.environ.get(DEBUG_ENV_KEY, "")):
        return Mode.DEVELOPMENT
    return Mode.STANDARD


# Per-context overrides for every store, keyed by store. Never mutated in
# place; `override` sets a new mapping and resets it on exit.
_OVERRIDES: ContextVar[Mapping[PolicyStore, Policy]] = ContextVar(
    "nshassert.policy_overrides", default=MappingProxyType({})
)


class PolicyStore:
    """
    Owner of the process-wide policy.

    `replace` swaps the global policy wholesale (last writer wins, no
    locking). `override` layers a replacement on top for the current
    thread or async context only. Policies handed out are copies, so
    editing one in place changes nothing; use `replace` or `override`.
    """

    __slots__ = ("_policy",)

    def __init__(self, policy: Mapping[str, Any] | None = None):
        self._policy = resolve_policy(policy if policy is not None else {})

    def get(self) -> Policy:
        """Return a copy of the effective policy for the current context."""
        return Policy(**_OVERRIDES.get().get(self, self._policy))

    def replace(self, policy: Mapping[str, Any]) -> None:
        """Replace the process-wide policy."""
        self._policy = resolve_policy(policy)

    @contextmanager
    def override(self, policy: Mapping[str, Any]) -> Iterator[Policy]:
        """Temporarily replace the policy within the current context."""
        resolved = resolve_policy(policy)
        token = _OVERRIDES.set({**_OVERRIDES.get(), self: resolved})
        try:
            yield Policy(**resolved)
        finally:
            _OVERRIDES.reset(token)

    @override_
    def __repr__(self) -> str:
        return f"<PolicyStore {self.get()!r}>"
