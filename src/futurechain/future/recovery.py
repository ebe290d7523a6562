"""Recovery & cleanup combinators: ``catch`` and ``finally_``."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Callable, TypeVar

from .unified_error import UnifiedError, normalize
from .wrapped import (
    WrappedFuture,
    adopt,
    cancel_host,
    capture_failure,
    derive,
    fulfill_host,
    require_callable,
)

T = TypeVar("T")
R = TypeVar("R")


def catch(
    future: WrappedFuture[T] | Awaitable[T],
    handler: Callable[[UnifiedError], R],
) -> WrappedFuture[T | R]:
    """Recover from a rejection.

    ``handler`` receives the normalized error and its return value fulfills
    the result.  A fulfilled input passes through unchanged.  To keep the
    chain rejected, raise from the handler (``raise err.to_exception()``
    rethrows the original failure).
    """
    require_callable(handler, "catch")
    source, result = derive(future)

    def _on_settle(settled: asyncio.Future[T]) -> None:
        if settled.cancelled():
            cancel_host(result)
            return
        exc = settled.exception()
        if exc is None:
            fulfill_host(result, settled.result())
            return
        try:
            value = handler(normalize(exc))
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as raised:
            capture_failure(result, raised, "catch")
            return
        fulfill_host(result, value)

    source.add_done_callback(_on_settle)
    return WrappedFuture(result)


def finally_(
    future: WrappedFuture[T] | Awaitable[T],
    side_effect: Callable[[], object],
) -> WrappedFuture[T]:
    """Run ``side_effect`` once on settlement and pass the outcome through.

    If ``side_effect`` raises, its error replaces the original outcome.
    """
    require_callable(side_effect, "finally")
    source, result = derive(future)

    def _on_settle(settled: asyncio.Future[T]) -> None:
        try:
            side_effect()
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as raised:
            if not settled.cancelled():
                settled.exception()  # discarded outcome counts as handled
            capture_failure(result, raised, "finally")
            return
        adopt(result, settled)

    source.add_done_callback(_on_settle)
    return WrappedFuture(result)
