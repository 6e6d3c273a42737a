"""Bounded, order-preserving thread-pool map used for batch classification.

``p_map(items, fn, concurrency=N)`` runs at most ``N`` calls of ``fn`` at once
and returns the results in input order. Work is submitted through a sliding
window so a long input is never fully queued up front.

Errors
------
- ``stop_on_error=True`` (default): the first failure is re-raised as-is and
  queued work that has not started yet is cancelled.
- ``stop_on_error=False``: every item is attempted and all failures are
  raised together as an ``ExceptionGroup``.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import TypeVar

InT = TypeVar("InT")
OutT = TypeVar("OutT")

MAX_WORKERS_ENV_VAR = "LEDGER_CLASSIFIER_MAX_WORKERS"
DEFAULT_MAX_WORKERS = 8
MAX_WORKERS_CAP = 32


def default_concurrency() -> int:
    """Worker count from ``LEDGER_CLASSIFIER_MAX_WORKERS``, clamped to ``[1, 32]``.

    Unset or non-numeric values fall back to 8.
    """

    raw = os.getenv(MAX_WORKERS_ENV_VAR, "").strip()
    try:
        value = int(raw) if raw else DEFAULT_MAX_WORKERS
    except ValueError:
        value = DEFAULT_MAX_WORKERS
    return max(1, min(MAX_WORKERS_CAP, value))


def p_map(
    iterable: Iterable[InT],
    mapper: Callable[[InT], OutT],
    *,
    concurrency: int,
    stop_on_error: bool = True,
) -> list[OutT]:
    """Map ``iterable`` through ``mapper`` with at most ``concurrency`` calls in flight."""

    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise ValueError("concurrency must be a positive integer")

    pending = enumerate(iterable)
    results: dict[int, OutT] = {}
    errors: list[Exception] = []
    in_flight: dict[Future[OutT], int] = {}
    total = 0

    with ThreadPoolExecutor(max_workers=concurrency) as pool:

        def top_up() -> None:
            nonlocal total
            while len(in_flight) < concurrency:
                nxt = next(pending, None)
                if nxt is None:
                    return
                idx, item = nxt
                in_flight[pool.submit(mapper, item)] = idx
                total += 1

        top_up()
        while in_flight:
            done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
            for fut in done:
                idx = in_flight.pop(fut)
                exc = fut.exception()
                if exc is None:
                    results[idx] = fut.result()
                    continue
                if stop_on_error:
                    for other in in_flight:
                        other.cancel()
                    pool.shutdown(wait=False, cancel_futures=True)
                    raise exc
                errors.append(exc)  # type: ignore[arg-type]
            top_up()

    if errors:
        raise ExceptionGroup("p_map: one or more mapper calls failed", errors)
    return [results[i] for i in range(total)]


__all__ = [
    "MAX_WORKERS_ENV_VAR",
    "DEFAULT_MAX_WORKERS",
    "MAX_WORKERS_CAP",
    "default_concurrency",
    "p_map",
]
