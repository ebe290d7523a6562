"""Settlement core: the WrappedFuture handle and its constructors.

A ``WrappedFuture`` owns nothing but a reference to one host
``asyncio.Future``; all settlement state lives in the host.  The helpers at
the bottom of this module (``fulfill_host``, ``reject_host``, ``adopt``,
``capture_failure``) are the only places the combinators write to a host
future, so the "settle at most once" and "normalize every raise" rules are
enforced in one spot.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Generator
from typing import Any, Callable, Generic, TypeVar

from futurechain.core.enums import SettlementState
from futurechain.core.errors import ChainTypeError
from futurechain.core.interfaces import HostFuture
from futurechain.observability.logger import chain_extra

from .unified_error import UnifiedError, normalize, to_exception

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

Resolve = Callable[[T], None]
Reject = Callable[[object], None]
Executor = Callable[[Resolve[T], Reject], object]


class WrappedFuture(Generic[T]):
    """Typed handle around exactly one host future.

    Awaitable, so it can be used anywhere asyncio expects a future::

        value = await resolve(1).map(lambda n: n + 1)
    """

    __slots__ = ("_host",)

    def __init__(self, host: asyncio.Future[T]) -> None:
        self._host = host

    @property
    def host(self) -> asyncio.Future[T]:
        """The underlying asyncio future."""
        return self._host

    @property
    def state(self) -> SettlementState:
        """Snapshot of the settlement state.

        Inspecting a rejected future marks its exception as retrieved, so
        asyncio will no longer report it as unhandled.
        """
        host = self._host
        if not host.done():
            return SettlementState.PENDING
        if host.cancelled():
            return SettlementState.CANCELLED
        if host.exception() is not None:
            return SettlementState.REJECTED
        return SettlementState.FULFILLED

    def __await__(self) -> Generator[Any, None, T]:
        return self._host.__await__()

    def __repr__(self) -> str:
        return f"<WrappedFuture {self.state.value}>"

    # ------------------------------------------------------------------
    # Fluent combinators
    # ------------------------------------------------------------------

    def map(self, f: Callable[[T], U]) -> WrappedFuture[U]:
        from .transform import map as _map

        return _map(self, f)

    def then(
        self, f: Callable[[T], WrappedFuture[U] | Awaitable[U]]
    ) -> WrappedFuture[U]:
        from .transform import then as _then

        return _then(self, f)

    def catch(self, handler: Callable[[UnifiedError], R]) -> WrappedFuture[T | R]:
        from .recovery import catch as _catch

        return _catch(self, handler)

    def finally_(self, side_effect: Callable[[], object]) -> WrappedFuture[T]:
        from .recovery import finally_ as _finally

        return _finally(self, side_effect)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def _loop_for(
    loop: asyncio.AbstractEventLoop | None,
) -> asyncio.AbstractEventLoop:
    return loop if loop is not None else asyncio.get_running_loop()


def make(
    executor: Executor[T],
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> WrappedFuture[T]:
    """Create a future settled by ``executor(resolve, reject)``.

    The executor runs synchronously, exactly once.  Only the first call to
    ``resolve``/``reject`` has an effect.  A raise inside the executor
    rejects the future unless it was already settled.
    """
    require_callable(executor, "make")
    host: asyncio.Future[T] = _loop_for(loop).create_future()

    def _resolve(value: T) -> None:
        fulfill_host(host, value)

    def _reject(error: object) -> None:
        reject_host(host, error)

    try:
        executor(_resolve, _reject)
    except (KeyboardInterrupt, SystemExit):
        raise
    except BaseException as exc:
        capture_failure(host, exc, "make")
    return WrappedFuture(host)


def resolve(
    value: T,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> WrappedFuture[T]:
    """Already-fulfilled future holding ``value`` verbatim (never flattened)."""
    host: asyncio.Future[T] = _loop_for(loop).create_future()
    host.set_result(value)
    return WrappedFuture(host)


def reject(
    error: object,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> WrappedFuture[Any]:
    """Already-rejected future.

    ``error`` may be an exception, a ``UnifiedError`` variant or any other
    value; ``catch`` handlers see ``normalize(error)``.
    """
    host: asyncio.Future[Any] = _loop_for(loop).create_future()
    host.set_exception(to_exception(error))
    return WrappedFuture(host)


def wrap(
    obj: WrappedFuture[T] | Awaitable[T],
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> WrappedFuture[T]:
    """Adopt a native future or awaitable as a ``WrappedFuture``.

    Coroutines and other awaitables are scheduled with
    ``asyncio.ensure_future``.

    Raises:
        ChainTypeError: ``obj`` is not awaitable.
    """
    if isinstance(obj, WrappedFuture):
        return obj
    if asyncio.isfuture(obj):
        return WrappedFuture(obj)
    if inspect.isawaitable(obj):
        return WrappedFuture(asyncio.ensure_future(obj, loop=loop))
    raise ChainTypeError(
        "expected a WrappedFuture, asyncio future or awaitable, "
        f"got {type(obj).__name__}"
    )


def delay(
    seconds: float,
    value: T | None = None,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> WrappedFuture[T | None]:
    """Future fulfilled with ``value`` after ``seconds``."""
    running = _loop_for(loop)

    def _executor(res: Resolve[T | None], _rej: Reject) -> None:
        running.call_later(seconds, res, value)

    return make(_executor, loop=running)


# ---------------------------------------------------------------------------
# Host settlement helpers (shared by every combinator)
# ---------------------------------------------------------------------------

def require_callable(fn: object, combinator: str) -> None:
    if not callable(fn):
        raise ChainTypeError(
            f"{combinator} expects a callable, got {type(fn).__name__}"
        )


def derive(
    future: WrappedFuture[Any] | Awaitable[Any],
) -> tuple[asyncio.Future[Any], asyncio.Future[Any]]:
    """Return ``(source_host, result_host)`` for a new combinator result."""
    source = wrap(future).host
    return source, source.get_loop().create_future()


def fulfill_host(host: asyncio.Future[Any], value: Any) -> None:
    if host.done():
        logger.debug(
            "Dropping fulfillment: future already settled",
            extra=chain_extra(),
        )
        return
    host.set_result(value)


def reject_host(host: asyncio.Future[Any], error: object) -> None:
    if host.done():
        logger.debug(
            "Dropping rejection: future already settled",
            extra=chain_extra(),
        )
        return
    host.set_exception(to_exception(error))


def cancel_host(host: asyncio.Future[Any]) -> None:
    if not host.done():
        host.cancel()


def adopt(target: asyncio.Future[Any], source: HostFuture[Any]) -> None:
    """Settle ``target`` exactly like the already-settled ``source``."""
    if source.cancelled():
        cancel_host(target)
        return
    exc = source.exception()
    if exc is not None:
        reject_host(target, exc)
    else:
        fulfill_host(target, source.result())


def capture_failure(
    host: asyncio.Future[Any], exc: BaseException, combinator: str
) -> None:
    """Turn a raise inside a combinator callback into a rejection."""
    if logger.isEnabledFor(logging.DEBUG):
        kind = normalize(exc).kind.value
        logger.debug(
            "%s callback raised %s; rejecting with %s failure",
            combinator,
            type(exc).__name__,
            kind,
            extra=chain_extra(combinator=combinator, failure_kind=kind),
        )
    reject_host(host, exc)
