"""Concurrency combinators: ``all``, ``race`` and ``all_settled``.

None of them cancel the inputs they no longer need.  Losing or late inputs
keep running; their outcomes are read (so asyncio does not report them as
unhandled) and then discarded.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from .unified_error import UnifiedError, normalize
from .wrapped import (
    WrappedFuture,
    adopt,
    cancel_host,
    fulfill_host,
    reject_host,
    wrap,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Fulfilled(Generic[T]):
    value: T


@dataclass(frozen=True)
class Rejected:
    error: UnifiedError


Outcome = Union[Fulfilled[T], Rejected]


def _sources(
    futures: Iterable[WrappedFuture[T] | Awaitable[T]],
) -> tuple[list[asyncio.Future[T]], asyncio.Future[Any]]:
    sources = [wrap(f).host for f in futures]
    loop = sources[0].get_loop() if sources else asyncio.get_running_loop()
    return sources, loop.create_future()


def all(
    futures: Iterable[WrappedFuture[T] | Awaitable[T]],
) -> WrappedFuture[list[T]]:
    """Join every input, preserving input order in the result list.

    Rejects with the first rejection to arrive.  An empty input fulfills
    with ``[]`` immediately.
    """
    sources, result = _sources(futures)
    if not sources:
        fulfill_host(result, [])
        return WrappedFuture(result)

    values: list[Any] = [None] * len(sources)
    remaining = len(sources)

    def _on_settle(index: int, settled: asyncio.Future[T]) -> None:
        nonlocal remaining
        if settled.cancelled():
            cancel_host(result)
            return
        exc = settled.exception()
        if result.done():
            return
        if exc is not None:
            reject_host(result, exc)
            return
        values[index] = settled.result()
        remaining -= 1
        if remaining == 0:
            fulfill_host(result, values)

    for index, source in enumerate(sources):
        source.add_done_callback(functools.partial(_on_settle, index))
    return WrappedFuture(result)


def race(
    futures: Iterable[WrappedFuture[T] | Awaitable[T]],
) -> WrappedFuture[T]:
    """Settle like whichever input settles first.

    Ties follow asyncio's callback order.  An empty input never settles.
    """
    sources, result = _sources(futures)

    def _on_settle(settled: asyncio.Future[T]) -> None:
        if not settled.cancelled():
            settled.exception()
        if result.done():
            return
        adopt(result, settled)

    for source in sources:
        source.add_done_callback(_on_settle)
    return WrappedFuture(result)


def all_settled(
    futures: Iterable[WrappedFuture[T] | Awaitable[T]],
) -> WrappedFuture[list[Outcome[T]]]:
    """Wait for every input and report each outcome in input order.

    Never rejects.  A cancelled input is reported as a ``Rejected`` holding
    a ``HostFailure`` for ``CancelledError``.
    """
    sources, result = _sources(futures)
    if not sources:
        fulfill_host(result, [])
        return WrappedFuture(result)

    outcomes: list[Any] = [None] * len(sources)
    remaining = len(sources)

    def _on_settle(index: int, settled: asyncio.Future[T]) -> None:
        nonlocal remaining
        if settled.cancelled():
            outcomes[index] = Rejected(normalize(asyncio.CancelledError()))
        else:
            exc = settled.exception()
            if exc is not None:
                outcomes[index] = Rejected(normalize(exc))
            else:
                outcomes[index] = Fulfilled(settled.result())
        remaining -= 1
        if remaining == 0:
            fulfill_host(result, outcomes)

    for index, source in enumerate(sources):
        source.add_done_callback(functools.partial(_on_settle, index))
    return WrappedFuture(result)
