"""Transform combinators: ``map`` (non-flattening) and ``then`` (one level).

The two are kept as separate operations with different callback types so
the flatten-or-not decision is made by the caller's choice of combinator,
never by inspecting what the callback returned:

* ``map(fut, f)`` stores ``f``'s return value as-is.  If ``f`` returns a
  future, the result fulfills *with that future object*.
* ``then(fut, f)`` requires ``f`` to return a future (or any awaitable) and
  adopts its settlement.  Exactly one level is collapsed: if that inner
  future fulfills with yet another future, the result holds it unflattened.

Rejections of the input pass through both untouched and the callback is not
called.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any, Callable, TypeVar

from .wrapped import (
    WrappedFuture,
    adopt,
    cancel_host,
    capture_failure,
    derive,
    fulfill_host,
    reject_host,
    require_callable,
    wrap,
)

T = TypeVar("T")
U = TypeVar("U")


def map(
    future: WrappedFuture[T] | Awaitable[T],
    f: Callable[[T], U],
) -> WrappedFuture[U]:
    """Apply ``f`` to the fulfilled value without flattening."""
    require_callable(f, "map")
    source, result = derive(future)

    def _on_settle(settled: asyncio.Future[T]) -> None:
        if settled.cancelled():
            cancel_host(result)
            return
        exc = settled.exception()
        if exc is not None:
            reject_host(result, exc)
            return
        try:
            value = f(settled.result())
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as raised:
            capture_failure(result, raised, "map")
            return
        fulfill_host(result, value)

    source.add_done_callback(_on_settle)
    return WrappedFuture(result)


def then(
    future: WrappedFuture[T] | Awaitable[T],
    f: Callable[[T], WrappedFuture[U] | Awaitable[U]],
) -> WrappedFuture[U]:
    """Chain ``f`` and adopt the settlement of the future it returns.

    A non-awaitable return value rejects the result with a ``HostFailure``
    carrying ``ChainTypeError``.
    """
    require_callable(f, "then")
    source, result = derive(future)
    loop = source.get_loop()

    def _on_settle(settled: asyncio.Future[T]) -> None:
        if settled.cancelled():
            cancel_host(result)
            return
        exc = settled.exception()
        if exc is not None:
            reject_host(result, exc)
            return
        try:
            inner = wrap(f(settled.result()), loop=loop)
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as raised:
            capture_failure(result, raised, "then")
            return
        inner.host.add_done_callback(_adopt_inner)

    def _adopt_inner(inner: asyncio.Future[Any]) -> None:
        adopt(result, inner)

    source.add_done_callback(_on_settle)
    return WrappedFuture(result)
