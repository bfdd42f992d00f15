from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

import wadler_lindig as wl
from typing_extensions import override

_HEADER: Final = "\n\nRelevant values:\n"
_WIDTH: Final = 80


class _Missing:
    """Placeholder for the value of a trailing label with no partner."""

    __slots__ = ()

    @override
    def __repr__(self) -> str:
        return "(MISSING)"


MISSING: Final = _Missing()


def pair_values(
    values: Sequence[Any],
    named: Mapping[str, Any] | None = None,
) -> list[tuple[Any, Any]]:
    """
    Group alternating `label, value, label, value, ...` into pairs.

    An odd trailing label is kept and paired with `MISSING`. Keyword values
    follow the positional ones in their given order.
    """
    values = list(values)
    if len(values) % 2 != 0:
        values.append(MISSING)

    pairs = list(zip(values[::2], values[1::2]))
    if named:
        pairs.extend(named.items())
    return pairs


def format_value(value: Any) -> str:
    if value is MISSING:
        return repr(MISSING)
    return wl.pformat(value, width=_WIDTH)


def format_values(pairs: Sequence[tuple[Any, Any]]) -> str:
    if not pairs:
        return ""

    lines = [_HEADER]
    for label, value in pairs:
        rendered = format_value(value).replace("\n", "\n    ")
        lines.append(f"  [{label}]: {rendered}\n")
    return "".join(lines)
