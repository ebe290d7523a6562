"""Unified error representation.

Every failure that can reach a recovery callback is normalized into exactly
one of three frozen variants:

* ``DomainFailure``: a structured ``DomainError`` raised by user code.
* ``HostFailure``: any other Python exception, exposed only through its type
  name, message and (optionally) a formatted traceback.
* ``UnknownFailure``: a rejection value that is not an exception at all.

Classification is by type only and is the same whether the failure was
raised synchronously inside a callback or surfaced from a rejected host
future.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import Any, Union

from futurechain.core.config import get_settings
from futurechain.core.enums import FailureKind
from futurechain.core.errors import CarriedFailure, DomainError, NonExceptionRejection


@dataclass(frozen=True)
class DomainFailure:
    """A caller-raised structured exception."""

    payload: DomainError

    @property
    def kind(self) -> FailureKind:
        return FailureKind.DOMAIN

    @property
    def tag(self) -> str:
        return self.payload.tag

    @property
    def data(self) -> dict[str, Any]:
        return self.payload.data

    def to_exception(self) -> BaseException:
        return self.payload


@dataclass(frozen=True)
class HostFailure:
    """An opaque host-originated failure.

    Only ``name`` and ``message`` take part in equality.  The
    original exception is kept so ``to_exception`` can re-raise it as-is.
    """

    name: str
    message: str
    stack: str | None = field(default=None, compare=False)
    _exception: BaseException | None = field(
        default=None, compare=False, repr=False,
    )

    @property
    def kind(self) -> FailureKind:
        return FailureKind.HOST

    def to_exception(self) -> BaseException:
        if self._exception is not None:
            return self._exception
        return CarriedFailure(self)


@dataclass(frozen=True)
class UnknownFailure:
    """A rejection value matching neither exception shape, kept verbatim."""

    value: Any

    @property
    def kind(self) -> FailureKind:
        return FailureKind.UNKNOWN

    def to_exception(self) -> BaseException:
        return NonExceptionRejection(self.value)


UnifiedError = Union[DomainFailure, HostFailure, UnknownFailure]

_VARIANTS = (DomainFailure, HostFailure, UnknownFailure)


def is_unified_error(value: object) -> bool:
    return isinstance(value, _VARIANTS)


def _format_stack(exc: BaseException) -> str | None:
    config = get_settings().errors
    if not config.capture_stack or exc.__traceback__ is None:
        return None
    return "".join(
        traceback.format_exception(
            type(exc), exc, exc.__traceback__, limit=config.max_stack_frames,
        )
    )


def host_failure_from(exc: BaseException) -> HostFailure:
    """Build a ``HostFailure`` from any exception object."""
    return HostFailure(
        name=type(exc).__name__,
        message=str(exc),
        stack=_format_stack(exc),
        _exception=exc,
    )


def normalize(value: object) -> UnifiedError:
    """Classify any failure value into a ``UnifiedError`` variant.

    Already-normalized values are returned unchanged, so the function is
    idempotent.
    """
    if isinstance(value, _VARIANTS):
        return value
    if isinstance(value, CarriedFailure):
        return value.failure
    if isinstance(value, NonExceptionRejection):
        return UnknownFailure(value.value)
    if isinstance(value, DomainError):
        return DomainFailure(value)
    if isinstance(value, BaseException):
        return host_failure_from(value)
    return UnknownFailure(value)


def to_exception(value: object) -> BaseException:
    """Inverse of ``normalize``: the exception a host future should carry.

    ``StopIteration`` cannot be stored in an asyncio future, so it is
    replaced by a ``RuntimeError`` chained from it.
    """
    if isinstance(value, _VARIANTS):
        exc = value.to_exception()
    elif isinstance(value, BaseException):
        exc = value
    else:
        exc = NonExceptionRejection(value)

    if isinstance(exc, StopIteration):
        replacement = RuntimeError("callback raised StopIteration")
        replacement.__cause__ = exc
        return replacement
    return exc
