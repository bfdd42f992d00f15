#!/usr/bin/env python3
"""
Measure the cost of checks that pass.

Compares a bare `if` against `assert_` and `debug_assert`, with and without
labelled values, so regressions on the success path are easy to spot.
"""

from __future__ import annotations

import timeit

from nshassert import Mode, PolicyStore, build_runtime

NUMBER = 1_000_000


def bench(label: str, stmt: str, namespace: dict) -> None:
    seconds = min(timeit.repeat(stmt, globals=namespace, number=NUMBER, repeat=5))
    print(f"{label:<40} {seconds / NUMBER * 1e9:8.1f} ns/call")


def main():
    standard = build_runtime(Mode.STANDARD, store=PolicyStore())
    development = build_runtime(Mode.DEVELOPMENT, store=PolicyStore())
    disabled = build_runtime(Mode.DISABLED, store=PolicyStore())
    namespace = {
        "standard": standard,
        "development": development,
        "disabled": disabled,
        "x": 42,
    }

    bench("bare if", "if not x: raise RuntimeError", namespace)
    bench("assert_ (standard)", "standard.assert_(x > 0, 'x positive')", namespace)
    bench(
        "assert_ with values (standard)",
        "standard.assert_(x > 0, 'x positive', 'x', x)",
        namespace,
    )
    bench(
        "assert_ lazy condition (standard)",
        "standard.assert_(lambda: x > 0, 'x positive')",
        namespace,
    )
    bench("debug_assert (standard, no-op)", "standard.debug_assert(x > 0, 'x')", namespace)
    bench("debug_assert (development)", "development.debug_assert(x > 0, 'x')", namespace)
    bench("assert_ (disabled)", "disabled.assert_(x > 0, 'x positive')", namespace)


if __name__ == "__main__":
    main()
