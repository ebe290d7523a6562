"""futurechain: typed combinators and unified errors for asyncio futures.

Typical use::

    import futurechain as fc

    async def main():
        value = await (
            fc.resolve(1)
            .then(lambda n: fc.resolve(n + 1))
            .map(lambda n: n * 10)
            .catch(lambda err: -1)
        )
"""

from futurechain.core.enums import FailureKind, SettlementState
from futurechain.core.errors import (
    CarriedFailure,
    ChainTypeError,
    ConfigError,
    DomainError,
    FutureChainError,
    NonExceptionRejection,
)
from futurechain.future import (
    DomainFailure,
    Fulfilled,
    HostFailure,
    Outcome,
    Rejected,
    UnifiedError,
    UnknownFailure,
    WrappedFuture,
    all,
    all_settled,
    catch,
    delay,
    finally_,
    is_unified_error,
    make,
    map,
    normalize,
    race,
    reject,
    resolve,
    then,
    wrap,
)

__all__ = [
    "WrappedFuture",
    "make",
    "resolve",
    "reject",
    "wrap",
    "delay",
    "map",
    "then",
    "catch",
    "finally_",
    "all",
    "race",
    "all_settled",
    "Fulfilled",
    "Rejected",
    "Outcome",
    "UnifiedError",
    "DomainFailure",
    "HostFailure",
    "UnknownFailure",
    "normalize",
    "is_unified_error",
    "SettlementState",
    "FailureKind",
    "FutureChainError",
    "ConfigError",
    "ChainTypeError",
    "NonExceptionRejection",
    "CarriedFailure",
    "DomainError",
]
