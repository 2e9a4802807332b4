"""
Ordered fallback strategies.

Selector resolution, coordinate lookup and input dispatch all follow the same
shape: try the most trustworthy method first, fall through to cruder ones.
A strategy returns a value on success or None when it could not resolve;
exceptions listed in ``tolerate`` count as "could not resolve" too.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

logger = logging.getLogger("mcp.chrome_control.strategies")

A = TypeVar("A")
R = TypeVar("R")


@dataclass(slots=True, frozen=True)
class Strategy(Generic[A, R]):
    name: str
    run: Callable[[A], R | None]


@dataclass(slots=True)
class Outcome(Generic[R]):
    name: str
    value: R
    # (strategy name, error text) for every strategy that raised before success.
    failures: list[tuple[str, str]] = field(default_factory=list)


def first_success(
    strategies: Sequence[Strategy[A, R]],
    attempt: A,
    *,
    tolerate: tuple[type[BaseException], ...] = (),
    failures: list[tuple[str, str]] | None = None,
) -> Outcome[R] | None:
    """Run strategies in order and return the first non-None result.

    Tolerated errors are recorded in ``failures`` (a fresh list unless the
    caller passes one to inspect after an all-failed run).
    """
    if failures is None:
        failures = []
    for strategy in strategies:
        try:
            value = strategy.run(attempt)
        except tolerate as exc:
            logger.debug("strategy_failed name=%s err=%s", strategy.name, exc)
            failures.append((strategy.name, str(exc)))
            continue
        if value is not None:
            return Outcome(name=strategy.name, value=value, failures=failures)
    return None
