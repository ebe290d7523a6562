"""Shared fixtures for the futurechain test suite."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from futurechain.core.config import reset_settings
from futurechain.future.wrapped import Reject, Resolve, WrappedFuture, make


# ---------------------------------------------------------------------------
# Settings isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _fresh_settings():
    """Every test starts from environment-derived settings."""
    reset_settings()
    yield
    reset_settings()


# ---------------------------------------------------------------------------
# Future helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def settle_later() -> Callable[..., WrappedFuture]:
    """Factory: a future fulfilled with ``value`` after ``seconds``.

    ``on_settle`` runs just before fulfillment, so tests can record
    completion order.
    """

    def _factory(
        seconds: float,
        value: object = None,
        on_settle: Callable[[], object] | None = None,
    ) -> WrappedFuture:
        loop = asyncio.get_running_loop()

        def _executor(res: Resolve, _rej: Reject) -> None:
            def _fire() -> None:
                res(on_settle() if on_settle is not None else value)

            loop.call_later(seconds, _fire)

        return make(_executor)

    return _factory


@pytest.fixture
def fail_later() -> Callable[..., WrappedFuture]:
    """Factory: a future rejected with ``error`` after ``seconds``."""

    def _factory(seconds: float, error: object) -> WrappedFuture:
        loop = asyncio.get_running_loop()

        def _executor(_res: Resolve, rej: Reject) -> None:
            loop.call_later(seconds, rej, error)

        return make(_executor)

    return _factory
