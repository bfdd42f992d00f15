#!/usr/bin/env python3
"""
Example demonstrating nshassert invariant checks.

Run with the default environment to see a failing `assert_` with labelled
values and source context. Set NSHASSERT_DEBUG=1 to also activate
`debug_assert`, or NSHASSERT_DISABLE=1 to strip every check.
"""

from __future__ import annotations

import nshassert
from nshassert import AssertionFailure


def withdraw(balance: float, amount: float) -> float:
    nshassert.assert_(amount > 0, "withdrawal must be positive", "amount", amount)
    # Only checked in development mode; the lambda is never called otherwise.
    nshassert.debug_assert(lambda: balance >= 0, "balance went negative", balance=balance)

    new_balance = balance - amount
    nshassert.assert_(
        new_balance >= 0,
        "insufficient funds",
        "balance",
        balance,
        "amount",
        amount,
    )
    return new_balance


def passing_example():
    print("=== Passing checks ===")
    print(f"Mode: {nshassert.MODE.value}")
    print(f"New balance: {withdraw(100.5, 20.0)}")


def failing_example():
    print("\n=== Failing check ===")
    try:
        withdraw(10.0, 25.0)
    except AssertionFailure as e:
        print(e)


def policy_example():
    print("\n=== Without source context ===")
    with nshassert.override_policy({"include_source": False}):
        try:
            withdraw(10.0, -1.0)
        except AssertionFailure as e:
            print(e)


if __name__ == "__main__":
    passing_example()
    failing_example()
    policy_example()
