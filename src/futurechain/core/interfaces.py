"""Protocol interfaces for futurechain.

The host future is consumed only through the ``HostFuture`` protocol, so the
combinators are written against "attach a callback that fires on
settlement" and nothing else.  ``asyncio.Future`` satisfies it.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


# ---------------------------------------------------------------------------
# Host future
# ---------------------------------------------------------------------------

@runtime_checkable
class HostFuture(Protocol[T_co]):
    """Native settle-once future with deferred done callbacks."""

    def add_done_callback(self, fn: Callable[[Any], object], /) -> None: ...

    def done(self) -> bool: ...

    def cancelled(self) -> bool: ...

    def result(self) -> T_co: ...

    def exception(self) -> BaseException | None: ...

    def get_loop(self) -> asyncio.AbstractEventLoop: ...
