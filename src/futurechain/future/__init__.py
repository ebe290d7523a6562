"""Typed combinators over asyncio futures."""

from futurechain.future.concurrency import Fulfilled, Outcome, Rejected, all, all_settled, race
from futurechain.future.recovery import catch, finally_
from futurechain.future.transform import map, then
from futurechain.future.unified_error import (
    DomainFailure,
    HostFailure,
    UnifiedError,
    UnknownFailure,
    is_unified_error,
    normalize,
)
from futurechain.future.wrapped import WrappedFuture, delay, make, reject, resolve, wrap

__all__ = [
    # Settlement core
    "WrappedFuture",
    "make",
    "resolve",
    "reject",
    "wrap",
    "delay",
    # Transform
    "map",
    "then",
    # Recovery & cleanup
    "catch",
    "finally_",
    # Concurrency
    "all",
    "race",
    "all_settled",
    "Fulfilled",
    "Rejected",
    "Outcome",
    # Unified error
    "UnifiedError",
    "DomainFailure",
    "HostFailure",
    "UnknownFailure",
    "normalize",
    "is_unified_error",
]
