"""Custom exception hierarchy for futurechain."""

from __future__ import annotations

from typing import Any


class FutureChainError(Exception):
    """Base exception for all futurechain library errors."""


# --- Configuration ---
class ConfigError(FutureChainError):
    """Invalid or missing configuration."""


# --- Chaining ---
class ChainTypeError(FutureChainError, TypeError):
    """A value of the wrong shape was handed to a combinator.

    Raised when a ``then`` callback returns something that is not awaitable,
    when ``wrap`` receives a non-awaitable, or when a callback is not
    callable.  Classified as a ``HostFailure`` like any other ``TypeError``.
    """


class NonExceptionRejection(FutureChainError):
    """Carrier for a rejection value that is not an exception.

    asyncio futures can only hold exceptions, so ``reject("boom")`` stores
    the raw value here.  Normalization unwraps it back into an
    ``UnknownFailure``.
    """

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Future rejected with non-exception value: {value!r}")


class CarriedFailure(FutureChainError):
    """Carrier for an already-normalized failure with no exception behind it.

    Used when a ``HostFailure`` was built by hand (no original exception);
    normalization returns the carried variant unchanged.
    """

    def __init__(self, failure: Any) -> None:
        self.failure = failure
        super().__init__(str(failure))


# --- User-level ---
class DomainError(Exception):
    """Base class for structured, caller-raised exceptions.

    Subclass it to declare failures that recovery handlers should be able to
    match on::

        class NotFound(DomainError):
            pass

        raise NotFound(data={"id": 42})

    ``tag`` defaults to the class name.  Two domain errors are equal when
    they share class, tag and data.
    """

    def __init__(
        self,
        message: str = "",
        *,
        tag: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        self.tag = tag or type(self).__name__
        self.data = dict(data or {})
        super().__init__(message or self.tag)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.tag == other.tag
            and self.data == other.data
            and self.args == other.args
        )

    def __hash__(self) -> int:
        return hash((type(self), self.tag, self.args))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tag={self.tag!r}, data={self.data!r})"
